from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from fractions import Fraction

from lb_api.domain.entities.bin_plan import PRECISION, BinPlan, Strategy
from lb_api.domain.exceptions import InvalidBinCountError, InvalidPrecisionError


logger = logging.getLogger(__name__)


U_SHAPE_FLOOR = 0.1


def plan(
    strategy: Strategy | str,
    num_bins: int,
    precision: int = PRECISION,
) -> BinPlan:
    """Distribui `precision` entre os bins de cada lado (X acima, Y abaixo do bin ativo).

    O bin ativo (delta_id == 0) fica em `num_bins // 2`, ou seja, para `num_bins`
    par o bin ativo e o do meio superior: 10 bins -> delta_ids -5..4.

    Cada lado e normalizado separadamente com aritmetica racional exata e o resto
    do truncamento vai para o bin ativo daquele lado (ou, se o bin ativo nao tiver
    peso naquele lado, para o primeiro bin com peso).
    """
    strategy = Strategy.parse(strategy)
    _validate_num_bins(num_bins)
    _validate_precision(precision)

    active_index = num_bins // 2
    delta_ids = bin_delta_ids(num_bins)
    side_x, side_y = split_sides(delta_ids, raw_weights(strategy, num_bins))
    weight_x = normalize_side(side_x, precision, active_index=active_index)
    weight_y = normalize_side(side_y, precision, active_index=active_index)

    logger.debug(
        "bin_distribution: planned strategy=%s num_bins=%s precision=%s sum_x=%s sum_y=%s",
        strategy.value,
        num_bins,
        precision,
        sum(weight_x),
        sum(weight_y),
    )
    return BinPlan(delta_ids=delta_ids, weight_x=weight_x, weight_y=weight_y)


def bin_delta_ids(num_bins: int) -> tuple[int, ...]:
    _validate_num_bins(num_bins)
    center_index = num_bins // 2
    return tuple(i - center_index for i in range(num_bins))


def raw_weights(strategy: Strategy | str, num_bins: int) -> list[float]:
    strategy = Strategy.parse(strategy)
    _validate_num_bins(num_bins)

    if strategy is Strategy.UNIFORM:
        return [1.0] * num_bins

    if strategy is Strategy.BELL_CURVE:
        center = num_bins / 2
        sigma = num_bins / 4
        return [math.exp(-((i - center) ** 2) / (2 * sigma * sigma)) for i in range(num_bins)]

    if strategy is Strategy.U_SHAPE:
        half_span = (num_bins - 1) / 2
        weights = []
        for i in range(num_bins):
            offset = (i - half_span) / half_span if half_span > 0 else 0.0
            weights.append(offset * offset + U_SHAPE_FLOOR)
        return weights

    raise AssertionError(f"Unhandled strategy: {strategy!r}")


def split_sides(
    delta_ids: Sequence[int],
    weights: Sequence[float],
) -> tuple[list[Fraction], list[Fraction]]:
    if len(delta_ids) != len(weights):
        raise ValueError("delta_ids and weights must have the same length.")

    side_x: list[Fraction] = []
    side_y: list[Fraction] = []
    for delta_id, weight in zip(delta_ids, weights):
        exact = Fraction(weight)
        if delta_id < 0:
            side_x.append(Fraction(0))
            side_y.append(exact)
        elif delta_id > 0:
            side_x.append(exact)
            side_y.append(Fraction(0))
        else:
            side_x.append(exact / 2)
            side_y.append(exact / 2)
    return side_x, side_y


def normalize_side(
    weights: Sequence[Fraction],
    precision: int,
    *,
    active_index: int,
) -> tuple[int, ...]:
    total = sum(weights, Fraction(0))
    if total <= 0:
        return (0,) * len(weights)

    scaled = [math.floor(weight * precision / total) for weight in weights]
    remainder = precision - sum(scaled)
    if remainder:
        target = _residual_index(weights, active_index=active_index)
        scaled[target] += remainder
    return tuple(scaled)


def _residual_index(weights: Sequence[Fraction], *, active_index: int) -> int:
    if 0 <= active_index < len(weights) and weights[active_index] > 0:
        return active_index
    for idx, weight in enumerate(weights):
        if weight > 0:
            return idx
    raise ValueError("side has no positive weight.")


def _validate_num_bins(num_bins: int) -> None:
    if isinstance(num_bins, bool) or not isinstance(num_bins, int):
        raise InvalidBinCountError(f"num_bins must be a positive integer, got {num_bins!r}.")
    if num_bins <= 0:
        raise InvalidBinCountError(f"num_bins must be a positive integer, got {num_bins}.")


def _validate_precision(precision: int) -> None:
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise InvalidPrecisionError(f"precision must be a non-negative integer, got {precision!r}.")
