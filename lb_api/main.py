from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lb_api.api.routers.bin_distribution import router as bin_distribution_router
from lb_api.api.routers.liquidity_parameters import router as liquidity_parameters_router
from lb_api.api.routers.pair_details import router as pair_details_router
from lb_api.shared.config import get_settings


settings = get_settings()
logging.getLogger("lb_api").setLevel(settings.log_level)

app = FastAPI(title="LB Liquidity API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(bin_distribution_router)
app.include_router(liquidity_parameters_router)
app.include_router(pair_details_router)


@app.get("/health")
def health():
    return {"status": "ok"}
