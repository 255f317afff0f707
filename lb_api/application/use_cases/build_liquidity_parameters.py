from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Callable

from lb_api.application.dto.liquidity_parameters import (
    BuildLiquidityParametersInput,
    BuildLiquidityParametersOutput,
    TokenAmountInput,
)
from lb_api.application.ports.pair_state_port import PairStatePort
from lb_api.domain.entities.bin_plan import Strategy
from lb_api.domain.entities.liquidity_parameters import TokenAmount
from lb_api.domain.entities.pair import PairState
from lb_api.domain.exceptions import (
    LiquidityParametersInputError,
    PairNotFoundError,
    PairStateLookupError,
    TokenOrderError,
)
from lb_api.domain.services.bin_distribution import plan
from lb_api.domain.services.liquidity_parameters import (
    DEFAULT_DEADLINE_SECONDS,
    DEFAULT_ID_SLIPPAGE,
    DEFAULT_SLIPPAGE_BPS,
    build_add_liquidity_parameters,
)
from lb_api.domain.services.token_order import normalize_address, resolve_token_order


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiquidityDefaults:
    num_bins: int = 10
    id_slippage: int = DEFAULT_ID_SLIPPAGE
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS
    deadline_seconds: int = DEFAULT_DEADLINE_SECONDS


class BuildLiquidityParametersUseCase:
    def __init__(
        self,
        *,
        pair_state_port: PairStatePort | None,
        defaults: LiquidityDefaults | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self._pair_state_port = pair_state_port
        self._defaults = defaults or LiquidityDefaults()
        self._clock = clock

    def execute(self, command: BuildLiquidityParametersInput) -> BuildLiquidityParametersOutput:
        strategy = Strategy.parse(command.strategy)
        num_bins = command.num_bins if command.num_bins is not None else self._defaults.num_bins

        pair_address: str | None = None
        pair_state: PairState | None = None
        if command.pair_address:
            pair_address = self._normalize_pair_address(command.pair_address)
            pair_state = self._load_pair_state(pair_address)

        bin_step = self._resolve_bin_step(command.bin_step, pair_state)
        active_id = pair_state.active_id if pair_state is not None else command.active_id

        order = resolve_token_order(
            _to_token_amount(command.token_a),
            _to_token_amount(command.token_b),
            contract_token_x=pair_state.token_x if pair_state is not None else None,
            contract_token_y=pair_state.token_y if pair_state is not None else None,
        )
        bin_plan = plan(strategy, num_bins)

        params = build_add_liquidity_parameters(
            order=order,
            bin_plan=bin_plan,
            bin_step=bin_step,
            recipient=command.recipient,
            refund_to=command.refund_to,
            active_id=active_id,
            id_slippage=(
                command.id_slippage if command.id_slippage is not None else self._defaults.id_slippage
            ),
            slippage_bps=(
                command.slippage_bps
                if command.slippage_bps is not None
                else self._defaults.slippage_bps
            ),
            deadline_seconds=self._defaults.deadline_seconds,
            now=int(self._clock()),
        )

        logger.info(
            "build_liquidity_parameters: built pair=%s strategy=%s num_bins=%s swapped=%s active_id=%s bin_step=%s",
            pair_address,
            strategy.value,
            num_bins,
            order.swapped,
            params.active_id_desired,
            params.bin_step,
        )

        return BuildLiquidityParametersOutput(
            pair_address=pair_address,
            swapped_pair=order.swapped,
            strategy=strategy.value,
            token_x=params.token_x,
            token_y=params.token_y,
            bin_step=params.bin_step,
            amount_x=params.amount_x,
            amount_y=params.amount_y,
            amount_x_min=params.amount_x_min,
            amount_y_min=params.amount_y_min,
            active_id_desired=params.active_id_desired,
            id_slippage=params.id_slippage,
            delta_ids=list(params.delta_ids),
            distribution_x=list(params.distribution_x),
            distribution_y=list(params.distribution_y),
            to=params.to,
            refund_to=params.refund_to,
            deadline=params.deadline,
        )

    def _normalize_pair_address(self, pair_address: str) -> str:
        try:
            return normalize_address(pair_address, field_name="pair_address")
        except TokenOrderError as exc:
            raise LiquidityParametersInputError(str(exc)) from exc

    def _load_pair_state(self, pair_address: str) -> PairState:
        if self._pair_state_port is None:
            raise PairStateLookupError("Pair state reader is not configured (LB_RPC_URL).")
        state = self._pair_state_port.get_pair_state(pair_address=pair_address)
        if state is None:
            raise PairNotFoundError("Pair not found.")
        return state

    @staticmethod
    def _resolve_bin_step(requested: int | None, pair_state: PairState | None) -> int:
        if pair_state is None:
            if requested is None:
                raise LiquidityParametersInputError("bin_step is required when pair_address is not provided.")
            return requested
        if requested is not None and requested != pair_state.bin_step:
            raise LiquidityParametersInputError(
                f"bin_step {requested} does not match the pair bin_step {pair_state.bin_step}."
            )
        return pair_state.bin_step


def _to_token_amount(token: TokenAmountInput) -> TokenAmount:
    return TokenAmount(address=token.address, decimals=token.decimals, amount=token.amount)
