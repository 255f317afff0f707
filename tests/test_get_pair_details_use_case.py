from __future__ import annotations

import unittest

from lb_api.application.dto.pair_details import GetPairDetailsInput
from lb_api.application.use_cases.get_pair_details import GetPairDetailsUseCase
from lb_api.domain.entities.pair import MAX_BIN_ID, BinReserves, PairReserves
from lb_api.domain.exceptions import (
    InvalidBinCountError,
    InvalidPairAddressError,
    PairNotFoundError,
    PairStateLookupError,
)


PAIR = "0x" + "c" * 40


class FakePairReservesPort:
    def __init__(self, reserves: PairReserves | None):
        self._reserves = reserves
        self.bin_requests: list[list[int]] = []

    def get_pair_reserves(self, *, pair_address: str) -> PairReserves | None:
        _ = pair_address
        return self._reserves

    def get_bins(self, *, pair_address: str, bin_ids) -> list[BinReserves]:
        _ = pair_address
        ids = list(bin_ids)
        self.bin_requests.append(ids)
        return [BinReserves(bin_id=bin_id, reserve_x=bin_id % 7, reserve_y=bin_id % 5) for bin_id in ids]


def _reserves(active_id: int = 8_388_608) -> PairReserves:
    return PairReserves(
        pair_address=PAIR,
        reserve_x=5 * 10**18,
        reserve_y=12_500 * 10**6,
        active_id=active_id,
        bin_step=20,
    )


class GetPairDetailsUseCaseTests(unittest.TestCase):
    def test_window_is_centered_on_active_bin(self):
        port = FakePairReservesPort(_reserves())
        use_case = GetPairDetailsUseCase(pair_state_port=port)

        result = use_case.execute(GetPairDetailsInput(pair_address=PAIR.upper().replace("0X", "0x"), num_bins=4))

        self.assertEqual(port.bin_requests, [[8_388_606, 8_388_607, 8_388_608, 8_388_609]])
        self.assertEqual(result.pair_address, PAIR)
        self.assertEqual(result.reserve_x, 5 * 10**18)
        self.assertEqual(result.active_id, 8_388_608)
        self.assertEqual(result.bin_step, 20)
        self.assertEqual([item.is_active for item in result.bins], [False, False, True, False])

    def test_default_window_size(self):
        port = FakePairReservesPort(_reserves())

        result = GetPairDetailsUseCase(pair_state_port=port, default_num_bins=7).execute(
            GetPairDetailsInput(pair_address=PAIR)
        )

        self.assertEqual(len(result.bins), 7)
        self.assertEqual(result.bins[3].bin_id, 8_388_608)

    def test_window_is_clipped_to_uint24_range(self):
        low = FakePairReservesPort(_reserves(active_id=1))
        GetPairDetailsUseCase(pair_state_port=low).execute(GetPairDetailsInput(pair_address=PAIR, num_bins=6))
        self.assertEqual(low.bin_requests, [[0, 1, 2, 3]])

        high = FakePairReservesPort(_reserves(active_id=MAX_BIN_ID))
        GetPairDetailsUseCase(pair_state_port=high).execute(GetPairDetailsInput(pair_address=PAIR, num_bins=4))
        self.assertEqual(high.bin_requests, [[MAX_BIN_ID - 2, MAX_BIN_ID - 1, MAX_BIN_ID]])

    def test_missing_pair_raises_not_found(self):
        use_case = GetPairDetailsUseCase(pair_state_port=FakePairReservesPort(None))

        with self.assertRaises(PairNotFoundError):
            use_case.execute(GetPairDetailsInput(pair_address=PAIR))

    def test_without_reader_raises_lookup_error(self):
        with self.assertRaises(PairStateLookupError):
            GetPairDetailsUseCase(pair_state_port=None).execute(GetPairDetailsInput(pair_address=PAIR))

    def test_invalid_inputs(self):
        use_case = GetPairDetailsUseCase(pair_state_port=FakePairReservesPort(_reserves()))

        with self.assertRaises(InvalidPairAddressError):
            use_case.execute(GetPairDetailsInput(pair_address="0x1234"))
        with self.assertRaises(InvalidBinCountError):
            use_case.execute(GetPairDetailsInput(pair_address=PAIR, num_bins=0))
