from __future__ import annotations

from dataclasses import dataclass

from lb_api.domain.entities.bin_plan import PRECISION


@dataclass(frozen=True)
class PlanBinDistributionInput:
    strategy: str
    num_bins: int
    precision: int = PRECISION


@dataclass(frozen=True)
class PlanBinDistributionOutput:
    strategy: str
    num_bins: int
    precision: int
    delta_ids: list[int]
    distribution_x: list[int]
    distribution_y: list[int]
