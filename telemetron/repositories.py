"""Contracts for the four fleet data sources.

Each source hands out a copy of its records from ``get_all`` and releases
background resources in ``close``. A failing source raises
:class:`~telemetron.errors.SourceError` and returns nothing, never a partial
list. The in-memory stand-ins live in :mod:`telemetron.stores`; a real
Kubernetes, queue or LiteLLM backend only has to satisfy the same protocol.
"""

from __future__ import annotations

from typing import List, Protocol

from .models import Agent, LiteLLM, Queue, Workload


class AgentRepository(Protocol):
    def get_all(self) -> List[Agent]:
        ...

    def close(self) -> None:
        ...


class WorkloadRepository(Protocol):
    def get_all(self) -> List[Workload]:
        ...

    def close(self) -> None:
        ...


class QueueRepository(Protocol):
    def get_all(self) -> List[Queue]:
        ...

    def close(self) -> None:
        ...


class LiteLLMRepository(Protocol):
    def get_all(self) -> List[LiteLLM]:
        ...

    def close(self) -> None:
        ...
