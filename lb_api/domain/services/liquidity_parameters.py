from __future__ import annotations

import time
from decimal import ROUND_DOWN, Decimal, localcontext

from lb_api.domain.entities.bin_plan import BinPlan
from lb_api.domain.entities.liquidity_parameters import AddLiquidityParameters, ResolvedTokenOrder
from lb_api.domain.entities.pair import DEFAULT_ACTIVE_ID, MAX_BIN_ID
from lb_api.domain.exceptions import LiquidityParametersInputError, TokenOrderError
from lb_api.domain.services.token_order import normalize_address


BPS_DENOMINATOR = 10_000
DEFAULT_SLIPPAGE_BPS = 500
DEFAULT_ID_SLIPPAGE = 100
DEFAULT_DEADLINE_SECONDS = 1200
MAX_TOKEN_DECIMALS = 255
MAX_UINT256 = 2**256 - 1
MAX_UINT256_DIGITS = len(str(MAX_UINT256))
MAX_BIN_STEP = 2**16 - 1


def to_base_units(amount: Decimal, decimals: int) -> int:
    if decimals < 0 or decimals > MAX_TOKEN_DECIMALS:
        raise LiquidityParametersInputError(f"decimals must be between 0 and {MAX_TOKEN_DECIMALS}.")
    if not amount.is_finite():
        raise LiquidityParametersInputError("amount must be a finite number.")
    if amount < 0:
        raise LiquidityParametersInputError("amount must not be negative.")
    if amount and amount.adjusted() + decimals >= MAX_UINT256_DIGITS:
        raise LiquidityParametersInputError("amount does not fit in uint256 base units.")
    with localcontext() as ctx:
        parts = amount.as_tuple()
        ctx.prec = len(parts.digits) + max(parts.exponent, 0) + decimals + 2
        scaled = amount.scaleb(decimals).quantize(Decimal("1"), rounding=ROUND_DOWN)
    units = int(scaled)
    if units > MAX_UINT256:
        raise LiquidityParametersInputError("amount does not fit in uint256 base units.")
    return units


def apply_slippage(amount: int, slippage_bps: int) -> int:
    if slippage_bps < 0 or slippage_bps > BPS_DENOMINATOR:
        raise LiquidityParametersInputError(
            f"slippage_bps must be between 0 and {BPS_DENOMINATOR}."
        )
    return amount * (BPS_DENOMINATOR - slippage_bps) // BPS_DENOMINATOR


def build_add_liquidity_parameters(
    *,
    order: ResolvedTokenOrder,
    bin_plan: BinPlan,
    bin_step: int,
    recipient: str,
    refund_to: str | None = None,
    active_id: int | None = None,
    id_slippage: int = DEFAULT_ID_SLIPPAGE,
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS,
    deadline_seconds: int = DEFAULT_DEADLINE_SECONDS,
    now: int | None = None,
) -> AddLiquidityParameters:
    if bin_step <= 0 or bin_step > MAX_BIN_STEP:
        raise LiquidityParametersInputError(f"bin_step must be between 1 and {MAX_BIN_STEP}.")
    if id_slippage < 0:
        raise LiquidityParametersInputError("id_slippage must not be negative.")
    if deadline_seconds <= 0:
        raise LiquidityParametersInputError("deadline_seconds must be positive.")
    active_id_desired = DEFAULT_ACTIVE_ID if active_id is None else active_id
    _validate_bin_window(active_id_desired, bin_plan)

    try:
        to = normalize_address(recipient, field_name="recipient")
        refund = normalize_address(refund_to, field_name="refund_to") if refund_to else to
    except TokenOrderError as exc:
        raise LiquidityParametersInputError(str(exc)) from exc

    amount_x = to_base_units(order.token_x.amount, order.token_x.decimals)
    amount_y = to_base_units(order.token_y.amount, order.token_y.decimals)
    issued_at = int(time.time()) if now is None else now

    return AddLiquidityParameters(
        token_x=order.token_x.address.strip().lower(),
        token_y=order.token_y.address.strip().lower(),
        bin_step=bin_step,
        amount_x=amount_x,
        amount_y=amount_y,
        amount_x_min=apply_slippage(amount_x, slippage_bps),
        amount_y_min=apply_slippage(amount_y, slippage_bps),
        active_id_desired=active_id_desired,
        id_slippage=id_slippage,
        delta_ids=bin_plan.delta_ids,
        distribution_x=bin_plan.weight_x,
        distribution_y=bin_plan.weight_y,
        to=to,
        refund_to=refund,
        deadline=issued_at + deadline_seconds,
    )


def _validate_bin_window(active_id: int, bin_plan: BinPlan) -> None:
    # activeIdDesired e activeIdDesired + deltaId precisam caber em uint24.
    if active_id < 0 or active_id > MAX_BIN_ID:
        raise LiquidityParametersInputError(f"active_id must be between 0 and {MAX_BIN_ID}.")
    if not bin_plan.delta_ids:
        return
    lowest = active_id + min(bin_plan.delta_ids)
    highest = active_id + max(bin_plan.delta_ids)
    if lowest < 0 or highest > MAX_BIN_ID:
        raise LiquidityParametersInputError(
            f"bin range {lowest}..{highest} falls outside 0..{MAX_BIN_ID} for active_id {active_id}."
        )
