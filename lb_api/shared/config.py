from __future__ import annotations

import json
import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _json_list(name: str, default: list) -> list:
    value = _env(name)
    if not value:
        return list(default)
    parsed = json.loads(value)
    if not isinstance(parsed, list):
        raise ValueError(f"{name} must be a JSON list.")
    return parsed


@dataclass(frozen=True)
class Settings:
    rpc_url: str
    rpc_timeout_seconds: float
    rpc_max_retries: int
    rpc_min_interval_ms: int
    default_num_bins: int
    default_id_slippage: int
    default_slippage_bps: int
    deadline_seconds: int
    pair_bins_window: int
    cors_allow_origins: list
    log_level: str


def get_settings() -> Settings:
    return Settings(
        rpc_url=_env("LB_RPC_URL", ""),
        rpc_timeout_seconds=float(_env("LB_RPC_TIMEOUT_SECONDS", "10")),
        rpc_max_retries=int(_env("LB_RPC_MAX_RETRIES", "3")),
        rpc_min_interval_ms=int(_env("LB_RPC_MIN_INTERVAL_MS", "0")),
        default_num_bins=int(_env("LB_DEFAULT_NUM_BINS", "10")),
        default_id_slippage=int(_env("LB_DEFAULT_ID_SLIPPAGE", "100")),
        default_slippage_bps=int(_env("LB_DEFAULT_SLIPPAGE_BPS", "500")),
        deadline_seconds=int(_env("LB_DEADLINE_SECONDS", "1200")),
        pair_bins_window=int(_env("LB_PAIR_BINS_WINDOW", "50")),
        cors_allow_origins=_json_list("CORS_ALLOW_ORIGINS", ["*"]),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
