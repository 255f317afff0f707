from __future__ import annotations

from pydantic import BaseModel, Field


class BinReservesResponse(BaseModel):
    bin_id: int
    reserve_x: str = Field(..., description="Reserva do tokenX no bin (uint128 como string).")
    reserve_y: str = Field(..., description="Reserva do tokenY no bin (uint128 como string).")
    is_active: bool


class PairDetailsResponse(BaseModel):
    pair_address: str
    reserve_x: str
    reserve_y: str
    active_id: int
    bin_step: int
    bins: list[BinReservesResponse]
