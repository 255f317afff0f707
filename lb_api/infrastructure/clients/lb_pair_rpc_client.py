from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
import itertools
import logging
from threading import Lock
import time

import httpx


logger = logging.getLogger(__name__)


# Seletores (keccak256 da assinatura, 4 bytes) das views do LBPair.
GET_TOKEN_X_SELECTOR = "0x05e8746d"
GET_TOKEN_Y_SELECTOR = "0xda10610c"
GET_ACTIVE_ID_SELECTOR = "0xdbe65edc"
GET_BIN_STEP_SELECTOR = "0x17f11ecc"
GET_RESERVES_AND_ID_SELECTOR = "0x1b05b83e"
GET_BIN_SELECTOR = "0x0abe9688"

WORD_HEX_LENGTH = 64
MAX_UINT24 = 2**24 - 1
RETRY_BASE_DELAY_SECONDS = 0.25


class LBPairRpcError(RuntimeError):
    pass


class LBPairCallRevertedError(LBPairRpcError):
    """O no respondeu com um objeto `error` do JSON-RPC (ex: execution reverted).

    E uma resposta deterministica do no: repetir a chamada nao muda o resultado.
    """


@dataclass(frozen=True)
class LBPairRpcClientSettings:
    rpc_url: str
    timeout_seconds: float
    max_retries: int
    min_interval_ms: int


@dataclass(frozen=True)
class LBPairSnapshot:
    pair_address: str
    token_x: str
    token_y: str
    active_id: int
    bin_step: int


@dataclass(frozen=True)
class LBPairReservesSnapshot:
    pair_address: str
    reserve_x: int
    reserve_y: int
    active_id: int
    bin_step: int


@dataclass(frozen=True)
class LBBinSnapshot:
    bin_id: int
    reserve_x: int
    reserve_y: int


class LBPairRpcClient:
    def __init__(
        self,
        settings: LBPairRpcClientSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport
        self._lock = Lock()
        self._last_request_at = 0.0
        self._ids = itertools.count(1)

    def fetch_pair(self, *, pair_address: str) -> LBPairSnapshot | None:
        pair_id = pair_address.strip().lower()

        raw_token_x = self._first_pair_read(pair_id, GET_TOKEN_X_SELECTOR)
        if raw_token_x is None:
            return None
        raw_token_y = self._eth_call(to=pair_id, data=GET_TOKEN_Y_SELECTOR)
        raw_active_id = self._eth_call(to=pair_id, data=GET_ACTIVE_ID_SELECTOR)
        raw_bin_step = self._eth_call(to=pair_id, data=GET_BIN_STEP_SELECTOR)
        if raw_token_y is None or raw_active_id is None or raw_bin_step is None:
            raise LBPairRpcError(f"Incomplete LBPair state for {pair_id}.")

        snapshot = LBPairSnapshot(
            pair_address=pair_id,
            token_x=decode_address(raw_token_x),
            token_y=decode_address(raw_token_y),
            active_id=decode_uint(raw_active_id),
            bin_step=decode_uint(raw_bin_step),
        )
        logger.info(
            "lb_pair_rpc_client: fetched_pair pair=%s token_x=%s token_y=%s active_id=%s bin_step=%s",
            pair_id,
            snapshot.token_x,
            snapshot.token_y,
            snapshot.active_id,
            snapshot.bin_step,
        )
        return snapshot

    def fetch_reserves(self, *, pair_address: str) -> LBPairReservesSnapshot | None:
        """Le `getReservesAndId()` e `getBinStep()` do par.

        Retorna None quando o endereco nao tem codigo ou a chamada reverte.
        """
        pair_id = pair_address.strip().lower()

        raw_reserves = self._first_pair_read(pair_id, GET_RESERVES_AND_ID_SELECTOR)
        if raw_reserves is None:
            return None
        raw_bin_step = self._eth_call(to=pair_id, data=GET_BIN_STEP_SELECTOR)
        if raw_bin_step is None:
            raise LBPairRpcError(f"Incomplete LBPair reserves for {pair_id}.")

        reserve_x, reserve_y, active_id = decode_words(raw_reserves, 3)
        snapshot = LBPairReservesSnapshot(
            pair_address=pair_id,
            reserve_x=reserve_x,
            reserve_y=reserve_y,
            active_id=active_id,
            bin_step=decode_uint(raw_bin_step),
        )
        logger.info(
            "lb_pair_rpc_client: fetched_reserves pair=%s active_id=%s bin_step=%s",
            pair_id,
            snapshot.active_id,
            snapshot.bin_step,
        )
        return snapshot

    def fetch_bins(self, *, pair_address: str, bin_ids: Sequence[int]) -> list[LBBinSnapshot]:
        """Le `getBin(id)` para cada id. Bin que reverte ou volta vazio conta como reserva zero."""
        pair_id = pair_address.strip().lower()

        bins: list[LBBinSnapshot] = []
        empty = 0
        for bin_id in bin_ids:
            try:
                raw = self._eth_call(to=pair_id, data=encode_get_bin(bin_id))
            except LBPairCallRevertedError as exc:
                logger.debug("lb_pair_rpc_client: bin_reverted pair=%s bin_id=%s error=%s", pair_id, bin_id, exc)
                raw = None
            if raw is None:
                empty += 1
                bins.append(LBBinSnapshot(bin_id=bin_id, reserve_x=0, reserve_y=0))
                continue
            reserve_x, reserve_y = decode_words(raw, 2)
            bins.append(LBBinSnapshot(bin_id=bin_id, reserve_x=reserve_x, reserve_y=reserve_y))

        logger.info(
            "lb_pair_rpc_client: fetched_bins pair=%s count=%s empty=%s",
            pair_id,
            len(bins),
            empty,
        )
        return bins

    def _first_pair_read(self, pair_id: str, selector: str) -> str | None:
        # Primeira leitura do par: sem codigo ou com revert significa par inexistente.
        try:
            raw = self._eth_call(to=pair_id, data=selector)
        except LBPairCallRevertedError as exc:
            logger.info("lb_pair_rpc_client: pair_call_reverted pair=%s selector=%s error=%s", pair_id, selector, exc)
            return None
        if raw is None:
            logger.info("lb_pair_rpc_client: pair_without_code pair=%s", pair_id)
        return raw

    def _eth_call(self, *, to: str, data: str) -> str | None:
        result = self._post_rpc(
            method="eth_call",
            params=[{"to": to, "data": data}, "latest"],
        )
        if not isinstance(result, str) or not result.startswith("0x"):
            raise LBPairRpcError(f"Unexpected eth_call result: {result!r}")
        if result == "0x":
            return None
        return result

    def _post_rpc(self, *, method: str, params: list) -> object:
        if not self._settings.rpc_url:
            raise LBPairRpcError("RPC url is not configured.")

        payload = self._send_with_backoff(method=method, params=params)

        error = payload.get("error") if isinstance(payload, dict) else None
        if error:
            if isinstance(error, dict):
                raise LBPairCallRevertedError(f"{error.get('message', error)} (code={error.get('code')})")
            raise LBPairCallRevertedError(str(error))
        if not isinstance(payload, dict) or "result" not in payload:
            raise LBPairRpcError("JSON-RPC response without result.")
        return payload["result"]

    def _send_with_backoff(self, *, method: str, params: list) -> object:
        """Repete apenas falhas de transporte (rede, timeout, status HTTP de erro, corpo nao-JSON).

        Um `error` do JSON-RPC chega aqui como resposta HTTP valida e nao e repetido.
        """
        attempts = max(1, self._settings.max_retries)
        delays = _backoff_delays(RETRY_BASE_DELAY_SECONDS)
        attempt = 1

        while True:
            try:
                return self._send(method=method, params=params)
            except (httpx.HTTPError, ValueError) as exc:
                if attempt >= attempts:
                    raise LBPairRpcError(
                        f"JSON-RPC {method} failed after {attempts} attempt(s): {exc}"
                    ) from exc
                delay = next(delays)
                logger.warning(
                    "lb_pair_rpc_client: rpc_retry method=%s attempt=%s/%s delay=%.2fs error=%s",
                    method,
                    attempt,
                    attempts,
                    delay,
                    exc,
                )
                time.sleep(delay)
                attempt += 1

    def _send(self, *, method: str, params: list) -> object:
        self._wait_for_slot()
        with httpx.Client(
            timeout=self._settings.timeout_seconds,
            transport=self._transport,
        ) as client:
            response = client.post(
                self._settings.rpc_url,
                json={
                    "jsonrpc": "2.0",
                    "id": next(self._ids),
                    "method": method,
                    "params": params,
                },
            )
            response.raise_for_status()
            return response.json()

    def _wait_for_slot(self) -> None:
        interval = self._settings.min_interval_ms / 1000.0
        if interval <= 0:
            return

        with self._lock:
            wait = self._last_request_at + interval - time.monotonic()
            if wait > 0:
                time.sleep(wait)
            self._last_request_at = time.monotonic()


def _backoff_delays(base: float) -> Iterator[float]:
    delay = base
    while True:
        yield delay
        delay *= 2


def encode_get_bin(bin_id: int) -> str:
    if bin_id < 0 or bin_id > MAX_UINT24:
        raise LBPairRpcError(f"bin id out of uint24 range: {bin_id}")
    return GET_BIN_SELECTOR + format(bin_id, f"0{WORD_HEX_LENGTH}x")


def decode_words(raw: str, count: int) -> list[int]:
    body = raw[2:] if raw.startswith("0x") else raw
    if len(body) < count * WORD_HEX_LENGTH:
        raise LBPairRpcError(f"Expected {count} ABI words, got {len(body)} hex chars.")
    return [
        int(body[i * WORD_HEX_LENGTH:(i + 1) * WORD_HEX_LENGTH], 16)
        for i in range(count)
    ]


def decode_uint(raw: str) -> int:
    body = raw[2:] if raw.startswith("0x") else raw
    if not body:
        raise LBPairRpcError("Empty uint word.")
    return int(body[:WORD_HEX_LENGTH], 16)


def decode_address(raw: str) -> str:
    body = raw[2:] if raw.startswith("0x") else raw
    if len(body) < WORD_HEX_LENGTH:
        raise LBPairRpcError(f"Address word too short: {raw!r}")
    return "0x" + body[24:WORD_HEX_LENGTH].lower()
