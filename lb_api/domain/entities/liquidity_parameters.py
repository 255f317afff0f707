from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class TokenAmount:
    address: str
    decimals: int
    amount: Decimal


@dataclass(frozen=True)
class ResolvedTokenOrder:
    token_x: TokenAmount
    token_y: TokenAmount
    swapped: bool


@dataclass(frozen=True)
class AddLiquidityParameters:
    token_x: str
    token_y: str
    bin_step: int
    amount_x: int
    amount_y: int
    amount_x_min: int
    amount_y_min: int
    active_id_desired: int
    id_slippage: int
    delta_ids: tuple[int, ...]
    distribution_x: tuple[int, ...]
    distribution_y: tuple[int, ...]
    to: str
    refund_to: str
    deadline: int
