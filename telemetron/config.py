"""Configuration helpers for Telemetron."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict


def _env(key: str, default: str) -> str:
    value = os.getenv(key)
    return value if value else default


def _env_int(key: str, default: int) -> int:
    try:
        return int(_env(key, str(default)))
    except ValueError:
        return default


def _env_float(key: str, default: float) -> float:
    try:
        return float(_env(key, str(default)))
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    raw = _env(key, str(default)).lower()
    if raw in {"1", "true", "t", "yes", "y"}:
        return True
    if raw in {"0", "false", "f", "no", "n"}:
        return False
    return default


@dataclass(slots=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass(slots=True)
class SimulationConfig:
    enable_mock_data: bool = True
    activity_interval: float = 5.0


@dataclass(slots=True)
class AppConfig:
    log_level: str = "info"
    cache_ttl_seconds: int = 0
    server: ServerConfig = field(default_factory=ServerConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    extras: Dict[str, Any] = field(default_factory=dict)


def load_config() -> AppConfig:
    server = ServerConfig(
        host=_env("SERVER_HOST", "0.0.0.0"),
        port=_env_int("SERVER_PORT", 8080),
    )
    interval = _env_float("AGENT_ACTIVITY_INTERVAL_SECONDS", 5.0)
    simulation = SimulationConfig(
        enable_mock_data=_env_bool("ENABLE_MOCK_DATA", True),
        activity_interval=interval if interval > 0 else 5.0,
    )
    extras = {
        "instance_id": _env("TELEMETRON_INSTANCE_ID", "telemetron-local"),
        "environment": _env("TELEMETRON_ENVIRONMENT", "development"),
    }
    return AppConfig(
        log_level=_env("LOG_LEVEL", "info").lower(),
        cache_ttl_seconds=max(0, _env_int("CACHE_TTL_SECONDS", 0)),
        server=server,
        simulation=simulation,
        extras=extras,
    )
