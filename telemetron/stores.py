"""In-memory stand-ins for the fleet data sources.

Every store keeps its records behind a :class:`ReadWriteLock` of its own and
hands out deep copies, so nothing a caller does to a returned list reaches
the store. Only :class:`MockAgentRepository` changes over time: a background
:class:`PeriodicTask` rotates task statuses to emulate a live fleet.
"""

from __future__ import annotations

import copy
import logging
import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, List, Sequence

from .models import (
    TASK_STATUSES,
    Activity,
    Agent,
    LiteLLM,
    LiveWorkload,
    Pod,
    Priority,
    Queue,
    QueueTask,
    TaskStatus,
    Workload,
)
from .services.scheduler import PeriodicTask
from .utils import ReadWriteLock, timestamp, timestamp_ago

DEFAULT_ACTIVITY_INTERVAL = 5.0


def seed_agents(now: datetime | None = None) -> List[Agent]:
    updated = timestamp(now)
    return [
        Agent(
            name="agent-1",
            description="Data processing agent",
            max_parallel_invocations=5,
            deployment_name="agent-deployment-1",
            models=["gpt-4", "gpt-3.5-turbo"],
            activity=Activity(
                active_task_ids=[
                    TaskStatus(id="task-1", status="running"),
                    TaskStatus(id="task-2", status="pending"),
                ],
                updated_at=updated,
            ),
        ),
        Agent(
            name="agent-2",
            description="Analytics agent",
            max_parallel_invocations=3,
            deployment_name="agent-deployment-2",
            models=["gpt-4"],
            activity=Activity(
                active_task_ids=[TaskStatus(id="task-3", status="running")],
                updated_at=updated,
            ),
        ),
    ]


def seed_workloads(now: datetime | None = None) -> List[Workload]:
    return [
        Workload(
            deployment_name="agent-deployment-1",
            max_pods=10,
            pod_max_ram="2Gi",
            pod_max_cpu="1000m",
            live=LiveWorkload(active_pods=3, updated_at=timestamp(now)),
            pods=[
                Pod(pod_id="pod-1", cpu=0.5, memory=1024, status="running"),
                Pod(pod_id="pod-2", cpu=0.3, memory=512, status="running"),
                Pod(pod_id="pod-3", cpu=0.2, memory=256, status="running"),
            ],
        )
    ]


def seed_queues(now: datetime | None = None) -> List[Queue]:
    now = now or datetime.now(timezone.utc)
    return [
        Queue(
            name="default",
            updated_at=timestamp(now),
            tasks=[
                QueueTask(
                    id="task-1",
                    priority=Priority(level="high"),
                    submitted_at=timestamp_ago(timedelta(minutes=5), now),
                ),
                QueueTask(
                    id="task-2",
                    priority=Priority(level="medium"),
                    submitted_at=timestamp_ago(timedelta(minutes=2), now),
                ),
            ],
        ),
        Queue(
            name="priority",
            updated_at=timestamp(now),
            tasks=[
                QueueTask(
                    id="task-3",
                    priority=Priority(level="high"),
                    submitted_at=timestamp_ago(timedelta(minutes=1), now),
                ),
            ],
        ),
    ]


def seed_litellm() -> List[LiteLLM]:
    return [
        LiteLLM("gpt-4", "openai", 45000, 200, 90000, 3500, "pay-per-request"),
        LiteLLM("gpt-3.5-turbo", "openai", 120000, 3400, 240000, 3500, "pay-per-request"),
        LiteLLM("claude-3-opus", "anthropic", 30000, 150, 80000, 3000, "pay-per-request"),
    ]


class InMemoryRepository:
    """Lock-protected record list shared by all simulated stores.

    Built without records, a store loads its ``seed()``; pass ``[]`` to start
    empty.
    """

    source = "memory"

    def __init__(self, records: Sequence[Any] | None = None, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(f"telemetron.stores.{self.source}")
        self._lock = ReadWriteLock()
        if records is None:
            records = self.seed()
        self._records: List[Any] = copy.deepcopy(list(records))

    def seed(self) -> List[Any]:
        return []

    def get_all(self) -> List[Any]:
        with self._lock.read_locked():
            return copy.deepcopy(self._records)

    def close(self) -> None:
        """Static stores own no background resources."""


class MockWorkloadRepository(InMemoryRepository):
    source = "workloads"

    def seed(self) -> List[Workload]:
        return seed_workloads()

    def get_all(self) -> List[Workload]:
        return super().get_all()


class MockQueueRepository(InMemoryRepository):
    source = "queues"

    def seed(self) -> List[Queue]:
        return seed_queues()

    def get_all(self) -> List[Queue]:
        return super().get_all()


class MockLiteLLMRepository(InMemoryRepository):
    source = "litellm"

    def seed(self) -> List[LiteLLM]:
        return seed_litellm()

    def get_all(self) -> List[LiteLLM]:
        return super().get_all()


class MockAgentRepository(InMemoryRepository):
    """Agent store whose task statuses drift on a timer.

    Each pass sets every active task to ``TASK_STATUSES[int(now) % 4]`` and
    stamps every agent's activity with the same time, all under the write
    lock. ``close`` stops the timer for good; later passes are no-ops.
    """

    source = "agents"

    def __init__(
        self,
        agents: Sequence[Agent] | None = None,
        interval: float = DEFAULT_ACTIVITY_INTERVAL,
        logger: logging.Logger | None = None,
        clock: Callable[[], float] = time.time,
        autostart: bool = True,
    ):
        super().__init__(agents, logger=logger)
        self._clock = clock
        self._closed = False
        self._close_lock = threading.Lock()
        self._revision = 0
        self._task = PeriodicTask("agent-activity", interval, self.tick, logger=self.logger)
        if autostart:
            self._task.start()

    @property
    def revision(self) -> int:
        """Number of mutation passes applied so far."""
        with self._lock.read_locked():
            return self._revision

    @property
    def closed(self) -> bool:
        return self._closed

    def seed(self) -> List[Agent]:
        return seed_agents()

    def get_all(self) -> List[Agent]:
        return super().get_all()

    def get_by_name(self, name: str) -> Agent | None:
        with self._lock.read_locked():
            for agent in self._records:
                if agent.name == name:
                    return copy.deepcopy(agent)
        return None

    def tick(self) -> None:
        if self._closed:
            return
        now = self._clock()
        status = TASK_STATUSES[int(now) % len(TASK_STATUSES)]
        updated = timestamp(datetime.fromtimestamp(now, tz=timezone.utc))
        with self._lock.write_locked():
            if self._closed:
                return
            for agent in self._records:
                for task in agent.activity.active_task_ids:
                    task.status = status
                agent.activity.updated_at = updated
            self._revision += 1
        self.logger.debug("Agent activity pass %d: status=%s", self._revision, status)

    def close(self) -> None:
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self._task.stop()
        self.logger.info("Agent store closed after %d activity passes", self._revision)
