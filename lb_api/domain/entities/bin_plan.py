from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from lb_api.domain.exceptions import InvalidStrategyError


# Mesmo PRECISION de LiquidityConfigurations.sol (1e18).
PRECISION = 10**18


_STRATEGY_ALIASES = {
    "uniform": "uniform",
    "spot": "uniform",
    "bell_curve": "bell_curve",
    "bellcurve": "bell_curve",
    "curve": "bell_curve",
    "u_shape": "u_shape",
    "ushape": "u_shape",
    "bidask": "u_shape",
    "bid_ask": "u_shape",
}


class Strategy(Enum):
    UNIFORM = "uniform"
    BELL_CURVE = "bell_curve"
    U_SHAPE = "u_shape"

    @classmethod
    def parse(cls, value: Strategy | str) -> Strategy:
        if isinstance(value, Strategy):
            return value
        if not isinstance(value, str):
            raise InvalidStrategyError(f"Unknown strategy: {value!r}.")
        key = value.strip().lower().replace("-", "_").replace(" ", "_")
        canonical = _STRATEGY_ALIASES.get(key)
        if canonical is None:
            raise InvalidStrategyError(f"Unknown strategy: {value!r}.")
        return cls(canonical)


@dataclass(frozen=True)
class BinPlan:
    delta_ids: tuple[int, ...]
    weight_x: tuple[int, ...]
    weight_y: tuple[int, ...]

    @property
    def num_bins(self) -> int:
        return len(self.delta_ids)

    @property
    def active_index(self) -> int:
        return self.delta_ids.index(0)
