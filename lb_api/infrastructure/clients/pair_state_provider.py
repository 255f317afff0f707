from __future__ import annotations

from collections.abc import Sequence

from lb_api.application.ports.pair_state_port import PairStatePort
from lb_api.domain.entities.pair import BinReserves, PairReserves, PairState
from lb_api.domain.exceptions import PairStateLookupError
from lb_api.infrastructure.clients.lb_pair_rpc_client import LBPairRpcClient, LBPairRpcError


class RpcPairStateAdapter(PairStatePort):
    def __init__(self, client: LBPairRpcClient):
        self._client = client

    def get_pair_state(self, *, pair_address: str) -> PairState | None:
        try:
            snapshot = self._client.fetch_pair(pair_address=pair_address)
        except LBPairRpcError as exc:
            raise PairStateLookupError(str(exc)) from exc
        if snapshot is None:
            return None
        return PairState(
            pair_address=snapshot.pair_address,
            token_x=snapshot.token_x,
            token_y=snapshot.token_y,
            active_id=snapshot.active_id,
            bin_step=snapshot.bin_step,
        )

    def get_pair_reserves(self, *, pair_address: str) -> PairReserves | None:
        try:
            snapshot = self._client.fetch_reserves(pair_address=pair_address)
        except LBPairRpcError as exc:
            raise PairStateLookupError(str(exc)) from exc
        if snapshot is None:
            return None
        return PairReserves(
            pair_address=snapshot.pair_address,
            reserve_x=snapshot.reserve_x,
            reserve_y=snapshot.reserve_y,
            active_id=snapshot.active_id,
            bin_step=snapshot.bin_step,
        )

    def get_bins(self, *, pair_address: str, bin_ids: Sequence[int]) -> list[BinReserves]:
        try:
            snapshots = self._client.fetch_bins(pair_address=pair_address, bin_ids=bin_ids)
        except LBPairRpcError as exc:
            raise PairStateLookupError(str(exc)) from exc
        return [
            BinReserves(bin_id=item.bin_id, reserve_x=item.reserve_x, reserve_y=item.reserve_y)
            for item in snapshots
        ]
