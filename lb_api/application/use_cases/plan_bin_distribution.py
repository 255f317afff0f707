from __future__ import annotations

from lb_api.application.dto.bin_distribution import (
    PlanBinDistributionInput,
    PlanBinDistributionOutput,
)
from lb_api.domain.entities.bin_plan import Strategy
from lb_api.domain.services.bin_distribution import plan


class PlanBinDistributionUseCase:
    def execute(self, command: PlanBinDistributionInput) -> PlanBinDistributionOutput:
        strategy = Strategy.parse(command.strategy)
        result = plan(strategy, command.num_bins, command.precision)
        return PlanBinDistributionOutput(
            strategy=strategy.value,
            num_bins=result.num_bins,
            precision=command.precision,
            delta_ids=list(result.delta_ids),
            distribution_x=list(result.weight_x),
            distribution_y=list(result.weight_y),
        )
