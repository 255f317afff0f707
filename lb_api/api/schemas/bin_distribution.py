from __future__ import annotations

from pydantic import BaseModel, Field

from lb_api.domain.entities.bin_plan import PRECISION


MAX_NUM_BINS = 1000


class BinDistributionRequest(BaseModel):
    strategy: str = Field(
        ...,
        description="uniform, bell_curve ou u_shape (aceita spot, curve e bidask).",
    )
    num_bins: int = Field(..., le=MAX_NUM_BINS, strict=True, description="Quantidade de bins (ex: 10).")
    precision: int = Field(PRECISION, ge=0, description="Escala de ponto fixo (default 1e18).")


class BinDistributionResponse(BaseModel):
    strategy: str
    num_bins: int
    precision: str
    delta_ids: list[int]
    distribution_x: list[str] = Field(..., description="Pesos do tokenX como string (uint256).")
    distribution_y: list[str] = Field(..., description="Pesos do tokenY como string (uint256).")
