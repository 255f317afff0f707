from __future__ import annotations

from dataclasses import dataclass


# Id do bin com preco 1 no Liquidity Book (2^23).
DEFAULT_ACTIVE_ID = 8388608
# Ids de bin sao uint24 no contrato.
MAX_BIN_ID = 2**24 - 1


@dataclass(frozen=True)
class PairState:
    pair_address: str
    token_x: str
    token_y: str
    active_id: int
    bin_step: int


@dataclass(frozen=True)
class PairReserves:
    pair_address: str
    reserve_x: int
    reserve_y: int
    active_id: int
    bin_step: int


@dataclass(frozen=True)
class BinReserves:
    bin_id: int
    reserve_x: int
    reserve_y: int
