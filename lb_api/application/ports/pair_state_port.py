from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from lb_api.domain.entities.pair import BinReserves, PairReserves, PairState


class PairStatePort(Protocol):
    def get_pair_state(self, *, pair_address: str) -> PairState | None:
        ...

    def get_pair_reserves(self, *, pair_address: str) -> PairReserves | None:
        ...

    def get_bins(self, *, pair_address: str, bin_ids: Sequence[int]) -> list[BinReserves]:
        ...
