"""Aggregation service: one consistent snapshot across all fleet sources."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, List, Tuple

from ..errors import SourceError
from ..models import SystemState
from ..repositories import AgentRepository, LiteLLMRepository, QueueRepository, WorkloadRepository

LOGGER = logging.getLogger("telemetron.system")

SYSTEM_ID = "system-1"


class SystemService:
    """Reads agents, workloads, queues and LiteLLM telemetry in that order.

    The first failing source aborts the whole query; callers get either a
    complete :class:`SystemState` or a :class:`SourceError`.
    """

    def __init__(
        self,
        agents: AgentRepository,
        workloads: WorkloadRepository,
        queues: QueueRepository,
        litellm: LiteLLMRepository,
        logger: logging.Logger | None = None,
    ):
        self.agents = agents
        self.workloads = workloads
        self.queues = queues
        self.litellm = litellm
        self.logger = logger or LOGGER

    def _sources(self) -> List[Tuple[str, Any]]:
        return [
            ("agents", self.agents),
            ("workloads", self.workloads),
            ("queues", self.queues),
            ("litellm", self.litellm),
        ]

    def _fetch(self, name: str, source: Any) -> list:
        try:
            records = source.get_all()
        except SourceError:
            raise
        except Exception as exc:
            raise SourceError(str(exc) or exc.__class__.__name__, source=name) from exc
        return list(records)

    def get_system_state(self) -> SystemState:
        agents = self._fetch("agents", self.agents)
        workloads = self._fetch("workloads", self.workloads)
        queues = self._fetch("queues", self.queues)
        litellm = self._fetch("litellm", self.litellm)

        state = SystemState(
            id=SYSTEM_ID,
            agents=agents,
            workload=workloads,
            queues=queues,
            litellm=litellm,
        )
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                "Snapshot: agents=%d workloads=%d queues=%d models=%d",
                len(agents),
                len(workloads),
                len(queues),
                len(litellm),
            )
            orphans = find_orphan_workloads(state)
            if orphans:
                self.logger.debug("Workloads without a matching agent: %s", ", ".join(orphans))
        return state

    def close(self) -> None:
        for name, source in self._sources():
            if source is None:
                continue
            try:
                source.close()
            except Exception as exc:  # noqa: BLE001
                self.logger.warning("Failed to close %s source: %s", name, exc)


def find_orphan_workloads(state: SystemState) -> List[str]:
    """Deployment names of workloads not backed by exactly one agent."""
    owners = Counter(agent.deployment_name for agent in state.agents)
    return [
        workload.deployment_name
        for workload in state.workload
        if owners.get(workload.deployment_name, 0) != 1
    ]
