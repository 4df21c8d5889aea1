"""Logging configuration for Telemetron.

``debug`` gets a human-readable line format; every other level writes one
JSON object per line. Components never reach for a global logger: bootstrap
calls :func:`setup_logging` once and hands the returned loggers to the
stores and the service.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict


class JsonFormatter(logging.Formatter):
    """Formats records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        data = {
            "timestamp": datetime.now(timezone.utc).replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


@dataclass(slots=True)
class LoggerConfig:
    level: str = "info"
    fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(name: str) -> int:
    resolved = logging.getLevelName(str(name).upper())
    if isinstance(resolved, str):  # unknown name returns string
        return logging.INFO
    return resolved


def setup_logging(config: LoggerConfig | None = None) -> Dict[str, logging.Logger]:
    cfg = config or LoggerConfig()
    level = resolve_level(cfg.level)
    handler = logging.StreamHandler(sys.stderr)
    if level <= logging.DEBUG:
        handler.setFormatter(logging.Formatter(cfg.fmt))
    else:
        handler.setFormatter(JsonFormatter())
    logging.basicConfig(level=level, handlers=[handler], force=True)
    return {
        "telemetron": logging.getLogger("telemetron"),
        "agents": logging.getLogger("telemetron.stores.agents"),
        "workloads": logging.getLogger("telemetron.stores.workloads"),
        "queues": logging.getLogger("telemetron.stores.queues"),
        "litellm": logging.getLogger("telemetron.stores.litellm"),
        "system": logging.getLogger("telemetron.system"),
        "api": logging.getLogger("telemetron.api"),
    }
