from __future__ import annotations

import logging

from lb_api.application.dto.pair_details import (
    BinReservesOutput,
    GetPairDetailsInput,
    GetPairDetailsOutput,
)
from lb_api.application.ports.pair_state_port import PairStatePort
from lb_api.domain.entities.pair import MAX_BIN_ID
from lb_api.domain.exceptions import (
    InvalidPairAddressError,
    PairNotFoundError,
    PairStateLookupError,
    TokenOrderError,
)
from lb_api.domain.services.bin_distribution import bin_delta_ids
from lb_api.domain.services.token_order import normalize_address


logger = logging.getLogger(__name__)


DEFAULT_BINS_WINDOW = 50


class GetPairDetailsUseCase:
    """Reservas do par e reservas por bin numa janela centrada no bin ativo.

    A janela usa os mesmos offsets do planejador (`active_id + delta_id`), entao
    `num_bins` par deixa um bin a mais abaixo do ativo. Ids fora de uint24 sao
    descartados.
    """

    def __init__(
        self,
        *,
        pair_state_port: PairStatePort | None,
        default_num_bins: int = DEFAULT_BINS_WINDOW,
    ):
        self._pair_state_port = pair_state_port
        self._default_num_bins = default_num_bins

    def execute(self, command: GetPairDetailsInput) -> GetPairDetailsOutput:
        num_bins = command.num_bins if command.num_bins is not None else self._default_num_bins
        offsets = bin_delta_ids(num_bins)

        try:
            pair_address = normalize_address(command.pair_address, field_name="pair_address")
        except TokenOrderError as exc:
            raise InvalidPairAddressError(str(exc)) from exc

        if self._pair_state_port is None:
            raise PairStateLookupError("Pair state reader is not configured (LB_RPC_URL).")
        reserves = self._pair_state_port.get_pair_reserves(pair_address=pair_address)
        if reserves is None:
            raise PairNotFoundError("Pair not found.")

        bin_ids = [
            reserves.active_id + offset
            for offset in offsets
            if 0 <= reserves.active_id + offset <= MAX_BIN_ID
        ]
        bins = self._pair_state_port.get_bins(pair_address=pair_address, bin_ids=bin_ids)

        logger.info(
            "get_pair_details: loaded pair=%s active_id=%s bin_step=%s bins=%s",
            pair_address,
            reserves.active_id,
            reserves.bin_step,
            len(bins),
        )

        return GetPairDetailsOutput(
            pair_address=pair_address,
            reserve_x=reserves.reserve_x,
            reserve_y=reserves.reserve_y,
            active_id=reserves.active_id,
            bin_step=reserves.bin_step,
            bins=[
                BinReservesOutput(
                    bin_id=item.bin_id,
                    reserve_x=item.reserve_x,
                    reserve_y=item.reserve_y,
                    is_active=item.bin_id == reserves.active_id,
                )
                for item in bins
            ],
        )
