from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from lb_api.api.deps import get_plan_bin_distribution_use_case
from lb_api.api.schemas.bin_distribution import BinDistributionRequest, BinDistributionResponse
from lb_api.application.dto.bin_distribution import PlanBinDistributionInput
from lb_api.application.use_cases.plan_bin_distribution import PlanBinDistributionUseCase
from lb_api.domain.exceptions import (
    InvalidBinCountError,
    InvalidPrecisionError,
    InvalidStrategyError,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/v1/bin-distribution", response_model=BinDistributionResponse)
def plan_bin_distribution(
    req: BinDistributionRequest,
    use_case: PlanBinDistributionUseCase = Depends(get_plan_bin_distribution_use_case),
):
    try:
        result = use_case.execute(
            PlanBinDistributionInput(
                strategy=req.strategy,
                num_bins=req.num_bins,
                precision=req.precision,
            )
        )
    except (InvalidBinCountError, InvalidStrategyError, InvalidPrecisionError) as exc:
        logger.warning(
            "bin_distribution_router: invalid_input strategy=%s num_bins=%s detail=%s",
            req.strategy,
            req.num_bins,
            exc,
        )
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return BinDistributionResponse(
        strategy=result.strategy,
        num_bins=result.num_bins,
        precision=str(result.precision),
        delta_ids=result.delta_ids,
        distribution_x=[str(value) for value in result.distribution_x],
        distribution_y=[str(value) for value in result.distribution_y],
    )
