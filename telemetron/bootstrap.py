"""Bootstrap context for Telemetron."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict

from .caching import StateCache
from .config import AppConfig, load_config
from .logging_setup import LoggerConfig, setup_logging
from .services.system import SystemService
from .stores import (
    MockAgentRepository,
    MockLiteLLMRepository,
    MockQueueRepository,
    MockWorkloadRepository,
    seed_agents,
    seed_litellm,
    seed_queues,
    seed_workloads,
)


@dataclass
class TelemetronContext:
    config: AppConfig
    loggers: Dict[str, logging.Logger]
    service: SystemService
    cache: StateCache

    def shutdown(self) -> None:
        self.service.close()
        self.cache.clear()


def build_service(config: AppConfig, loggers: Dict[str, logging.Logger]) -> SystemService:
    seeded = config.simulation.enable_mock_data
    agents = MockAgentRepository(
        seed_agents() if seeded else [],
        interval=config.simulation.activity_interval,
        logger=loggers["agents"],
    )
    workloads = MockWorkloadRepository(seed_workloads() if seeded else [], logger=loggers["workloads"])
    queues = MockQueueRepository(seed_queues() if seeded else [], logger=loggers["queues"])
    litellm = MockLiteLLMRepository(seed_litellm() if seeded else [], logger=loggers["litellm"])
    return SystemService(agents, workloads, queues, litellm, logger=loggers["system"])


def build_context(config: AppConfig | None = None) -> TelemetronContext:
    config = config or load_config()
    loggers = setup_logging(LoggerConfig(level=config.log_level))
    loggers["telemetron"].info(
        "Starting Telemetron (instance=%s, environment=%s, mock_data=%s)",
        config.extras.get("instance_id"),
        config.extras.get("environment"),
        config.simulation.enable_mock_data,
    )
    service = build_service(config, loggers)
    cache = StateCache(ttl=config.cache_ttl_seconds)
    return TelemetronContext(config=config, loggers=loggers, service=service, cache=cache)
