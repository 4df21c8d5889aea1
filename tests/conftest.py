"""Shared pytest fixtures for Telemetron tests.

Provides seeded in-memory stores, instrumented fake sources and a Flask test
client so test modules can focus on behaviour rather than wiring.
"""

from __future__ import annotations

import logging
from typing import Any, Generator, List

import pytest

from telemetron.caching import StateCache
from telemetron.errors import SourceError
from telemetron.services.system import SystemService
from telemetron.stores import (
    MockAgentRepository,
    MockLiteLLMRepository,
    MockQueueRepository,
    MockWorkloadRepository,
)


# ---------------------------------------------------------------------------
# Fake sources
# ---------------------------------------------------------------------------


class FakeSource:
    """Source that counts calls and optionally fails."""

    def __init__(self, records: List[Any] | None = None, error: Exception | None = None):
        self.records = list(records or [])
        self.error = error
        self.get_all_calls = 0
        self.close_calls = 0

    def get_all(self) -> List[Any]:
        self.get_all_calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)

    def close(self) -> None:
        self.close_calls += 1


class ExplodingCloseSource(FakeSource):
    def close(self) -> None:
        super().close()
        raise RuntimeError("close failed")


def failing(message: str = "backend unavailable") -> FakeSource:
    return FakeSource(error=SourceError(message))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def test_logger() -> logging.Logger:
    return logging.getLogger("telemetron.tests")


@pytest.fixture()
def agent_store(test_logger) -> Generator[MockAgentRepository, None, None]:
    """Seeded agent store with the background timer left off."""
    store = MockAgentRepository(autostart=False, logger=test_logger)
    yield store
    store.close()


@pytest.fixture()
def service(agent_store, test_logger) -> Generator[SystemService, None, None]:
    svc = SystemService(
        agent_store,
        MockWorkloadRepository(),
        MockQueueRepository(),
        MockLiteLLMRepository(),
        logger=test_logger,
    )
    yield svc
    svc.close()


@pytest.fixture()
def make_client():
    """Build a Flask test client around any service."""
    from flask import Flask

    from telemetron.api.routes import create_blueprint

    def _factory(svc, cache: StateCache | None = None):
        app = Flask("telemetron-test")
        app.config["TESTING"] = True
        app.register_blueprint(create_blueprint(svc, cache))
        return app.test_client()

    return _factory


@pytest.fixture()
def client(make_client, service):
    """Flask test client backed by the seeded stores."""
    return make_client(service)
