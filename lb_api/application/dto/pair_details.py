from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GetPairDetailsInput:
    pair_address: str
    num_bins: int | None = None


@dataclass(frozen=True)
class BinReservesOutput:
    bin_id: int
    reserve_x: int
    reserve_y: int
    is_active: bool


@dataclass(frozen=True)
class GetPairDetailsOutput:
    pair_address: str
    reserve_x: int
    reserve_y: int
    active_id: int
    bin_step: int
    bins: list[BinReservesOutput]
