from __future__ import annotations

from decimal import Decimal
import unittest

from lb_api.application.dto.liquidity_parameters import (
    BuildLiquidityParametersInput,
    TokenAmountInput,
)
from lb_api.application.use_cases.build_liquidity_parameters import (
    BuildLiquidityParametersUseCase,
    LiquidityDefaults,
)
from lb_api.domain.entities.bin_plan import PRECISION
from lb_api.domain.entities.pair import DEFAULT_ACTIVE_ID, PairState
from lb_api.domain.exceptions import (
    InvalidBinCountError,
    InvalidStrategyError,
    LiquidityParametersInputError,
    PairNotFoundError,
    PairStateLookupError,
)


WETH = "0x" + "b" * 40
USDC = "0x" + "a" * 40
PAIR = "0x" + "c" * 40
RECIPIENT = "0x" + "9" * 40


class FakePairStatePort:
    def __init__(self, state: PairState | None):
        self._state = state
        self.calls: list[str] = []

    def get_pair_state(self, *, pair_address: str) -> PairState | None:
        self.calls.append(pair_address)
        return self._state


def _pair_state(**overrides) -> PairState:
    payload = {
        "pair_address": PAIR,
        "token_x": WETH,
        "token_y": USDC,
        "active_id": 8_112_000,
        "bin_step": 15,
    }
    payload.update(overrides)
    return PairState(**payload)


class BuildLiquidityParametersUseCaseTests(unittest.TestCase):
    def _base_input(self, **overrides) -> BuildLiquidityParametersInput:
        payload = {
            "token_a": TokenAmountInput(address=WETH, decimals=18, amount=Decimal("1")),
            "token_b": TokenAmountInput(address=USDC, decimals=6, amount=Decimal("2500")),
            "strategy": "curve",
            "recipient": RECIPIENT,
            "bin_step": 25,
        }
        payload.update(overrides)
        return BuildLiquidityParametersInput(**payload)

    def _use_case(self, port=None, **defaults) -> BuildLiquidityParametersUseCase:
        return BuildLiquidityParametersUseCase(
            pair_state_port=port,
            defaults=LiquidityDefaults(**defaults),
            clock=lambda: 1_000.0,
        )

    def test_without_pair_sorts_tokens_by_address(self):
        result = self._use_case().execute(self._base_input())

        self.assertIsNone(result.pair_address)
        self.assertTrue(result.swapped_pair)
        self.assertEqual(result.token_x, USDC)
        self.assertEqual(result.token_y, WETH)
        self.assertEqual(result.amount_x, 2_500_000_000)
        self.assertEqual(result.amount_y, 10**18)
        self.assertEqual(result.bin_step, 25)
        self.assertEqual(result.active_id_desired, DEFAULT_ACTIVE_ID)
        self.assertEqual(result.strategy, "bell_curve")
        self.assertEqual(result.delta_ids, list(range(-5, 5)))
        self.assertEqual(result.deadline, 2_200)
        self.assertEqual(sum(result.distribution_x), PRECISION)
        self.assertEqual(sum(result.distribution_y), PRECISION)

    def test_with_pair_uses_contract_order_and_active_id(self):
        port = FakePairStatePort(_pair_state())

        result = self._use_case(port).execute(
            self._base_input(pair_address=PAIR.upper().replace("0X", "0x"), bin_step=None)
        )

        self.assertEqual(port.calls, [PAIR])
        self.assertEqual(result.pair_address, PAIR)
        self.assertFalse(result.swapped_pair)
        self.assertEqual(result.token_x, WETH)
        self.assertEqual(result.amount_x, 10**18)
        self.assertEqual(result.active_id_desired, 8_112_000)
        self.assertEqual(result.bin_step, 15)

    def test_configured_defaults_are_applied(self):
        result = self._use_case(num_bins=4, id_slippage=7, slippage_bps=1000, deadline_seconds=30).execute(
            self._base_input()
        )

        self.assertEqual(result.delta_ids, [-2, -1, 0, 1])
        self.assertEqual(result.id_slippage, 7)
        self.assertEqual(result.amount_x_min, 2_250_000_000)
        self.assertEqual(result.deadline, 1_030)

    def test_missing_pair_raises_not_found(self):
        with self.assertRaises(PairNotFoundError):
            self._use_case(FakePairStatePort(None)).execute(self._base_input(pair_address=PAIR))

    def test_pair_without_reader_raises_lookup_error(self):
        with self.assertRaises(PairStateLookupError):
            self._use_case(None).execute(self._base_input(pair_address=PAIR))

    def test_bin_step_mismatch_is_rejected(self):
        port = FakePairStatePort(_pair_state(bin_step=15))
        with self.assertRaises(LiquidityParametersInputError):
            self._use_case(port).execute(self._base_input(pair_address=PAIR, bin_step=25))

    def test_bin_step_required_without_pair(self):
        with self.assertRaises(LiquidityParametersInputError):
            self._use_case().execute(self._base_input(bin_step=None))

    def test_malformed_pair_address_is_rejected(self):
        with self.assertRaises(LiquidityParametersInputError):
            self._use_case(FakePairStatePort(_pair_state())).execute(
                self._base_input(pair_address="pair")
            )

    def test_planner_errors_propagate(self):
        with self.assertRaises(InvalidBinCountError):
            self._use_case().execute(self._base_input(num_bins=0))
        with self.assertRaises(InvalidStrategyError):
            self._use_case().execute(self._base_input(strategy="zigzag"))


if __name__ == "__main__":
    unittest.main()
