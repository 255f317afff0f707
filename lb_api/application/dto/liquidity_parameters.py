from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class TokenAmountInput:
    address: str
    decimals: int
    amount: Decimal


@dataclass(frozen=True)
class BuildLiquidityParametersInput:
    token_a: TokenAmountInput
    token_b: TokenAmountInput
    strategy: str
    recipient: str
    num_bins: int | None = None
    bin_step: int | None = None
    pair_address: str | None = None
    active_id: int | None = None
    id_slippage: int | None = None
    slippage_bps: int | None = None
    refund_to: str | None = None


@dataclass(frozen=True)
class BuildLiquidityParametersOutput:
    pair_address: str | None
    swapped_pair: bool
    strategy: str
    token_x: str
    token_y: str
    bin_step: int
    amount_x: int
    amount_y: int
    amount_x_min: int
    amount_y_min: int
    active_id_desired: int
    id_slippage: int
    delta_ids: list[int]
    distribution_x: list[int]
    distribution_y: list[int]
    to: str
    refund_to: str
    deadline: int
