from __future__ import annotations

import pytest

from lb_api.application.dto.bin_distribution import PlanBinDistributionInput
from lb_api.application.use_cases.plan_bin_distribution import PlanBinDistributionUseCase
from lb_api.domain.entities.bin_plan import PRECISION
from lb_api.domain.exceptions import InvalidBinCountError, InvalidStrategyError


def test_plan_use_case_returns_lists_in_canonical_strategy_name():
    output = PlanBinDistributionUseCase().execute(
        PlanBinDistributionInput(strategy="bidask", num_bins=10)
    )

    assert output.strategy == "u_shape"
    assert output.num_bins == 10
    assert output.precision == PRECISION
    assert output.delta_ids == [-5, -4, -3, -2, -1, 0, 1, 2, 3, 4]
    assert sum(output.distribution_x) == PRECISION
    assert sum(output.distribution_y) == PRECISION


def test_plan_use_case_propagates_domain_errors():
    use_case = PlanBinDistributionUseCase()

    with pytest.raises(InvalidBinCountError):
        use_case.execute(PlanBinDistributionInput(strategy="uniform", num_bins=-3))
    with pytest.raises(InvalidStrategyError):
        use_case.execute(PlanBinDistributionInput(strategy="spiral", num_bins=10))
