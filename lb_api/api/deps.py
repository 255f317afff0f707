from __future__ import annotations

from functools import lru_cache

from lb_api.application.ports.pair_state_port import PairStatePort
from lb_api.application.use_cases.build_liquidity_parameters import (
    BuildLiquidityParametersUseCase,
    LiquidityDefaults,
)
from lb_api.application.use_cases.get_pair_details import GetPairDetailsUseCase
from lb_api.application.use_cases.plan_bin_distribution import PlanBinDistributionUseCase
from lb_api.infrastructure.clients.lb_pair_rpc_client import (
    LBPairRpcClient,
    LBPairRpcClientSettings,
)
from lb_api.infrastructure.clients.pair_state_provider import RpcPairStateAdapter
from lb_api.shared.config import get_settings


@lru_cache(maxsize=1)
def _get_lb_pair_rpc_client() -> LBPairRpcClient | None:
    settings = get_settings()
    if not settings.rpc_url:
        return None
    return LBPairRpcClient(
        LBPairRpcClientSettings(
            rpc_url=settings.rpc_url,
            timeout_seconds=settings.rpc_timeout_seconds,
            max_retries=settings.rpc_max_retries,
            min_interval_ms=settings.rpc_min_interval_ms,
        )
    )


def _get_pair_state_port() -> PairStatePort | None:
    client = _get_lb_pair_rpc_client()
    if client is None:
        return None
    return RpcPairStateAdapter(client)


def get_plan_bin_distribution_use_case() -> PlanBinDistributionUseCase:
    return PlanBinDistributionUseCase()


def get_build_liquidity_parameters_use_case() -> BuildLiquidityParametersUseCase:
    settings = get_settings()
    return BuildLiquidityParametersUseCase(
        pair_state_port=_get_pair_state_port(),
        defaults=LiquidityDefaults(
            num_bins=settings.default_num_bins,
            id_slippage=settings.default_id_slippage,
            slippage_bps=settings.default_slippage_bps,
            deadline_seconds=settings.deadline_seconds,
        ),
    )


def get_pair_details_use_case() -> GetPairDetailsUseCase:
    settings = get_settings()
    return GetPairDetailsUseCase(
        pair_state_port=_get_pair_state_port(),
        default_num_bins=settings.pair_bins_window,
    )
