"""Fleet records and the aggregated system snapshot.

Field names double as JSON keys, so ``to_dict()`` output is the wire format
served by ``GET /system/state``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Tuple

TASK_STATUSES = ("running", "pending", "completed", "failed")


@dataclass
class TaskStatus:
    id: str
    status: str


@dataclass
class Activity:
    active_task_ids: List[TaskStatus] = field(default_factory=list)
    updated_at: str = ""


@dataclass
class Agent:
    name: str
    description: str
    max_parallel_invocations: int
    deployment_name: str
    models: List[str] = field(default_factory=list)
    activity: Activity = field(default_factory=Activity)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Agent":
        activity = data.get("activity") or {}
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            max_parallel_invocations=int(data.get("max_parallel_invocations", 0)),
            deployment_name=data.get("deployment_name", ""),
            models=list(data.get("models") or []),
            activity=Activity(
                active_task_ids=[
                    TaskStatus(id=item["id"], status=item["status"])
                    for item in activity.get("active_task_ids") or []
                ],
                updated_at=activity.get("updated_at", ""),
            ),
        )


@dataclass
class Pod:
    pod_id: str
    cpu: float
    memory: int
    status: str


@dataclass
class LiveWorkload:
    active_pods: int = 0
    updated_at: str = ""


@dataclass
class Workload:
    deployment_name: str
    max_pods: int
    pod_max_ram: str
    pod_max_cpu: str
    live: LiveWorkload = field(default_factory=LiveWorkload)
    pods: List[Pod] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Workload":
        live = data.get("live") or {}
        return cls(
            deployment_name=data["deployment_name"],
            max_pods=int(data.get("max_pods", 0)),
            pod_max_ram=data.get("pod_max_ram", ""),
            pod_max_cpu=data.get("pod_max_cpu", ""),
            live=LiveWorkload(
                active_pods=int(live.get("active_pods", 0)),
                updated_at=live.get("updated_at", ""),
            ),
            pods=[
                Pod(
                    pod_id=item["pod_id"],
                    cpu=float(item.get("cpu", 0.0)),
                    memory=int(item.get("memory", 0)),
                    status=item.get("status", ""),
                )
                for item in data.get("pods") or []
            ],
        )


@dataclass
class Priority:
    level: str


@dataclass
class QueueTask:
    id: str
    priority: Priority
    submitted_at: str


@dataclass
class Queue:
    name: str
    updated_at: str
    tasks: List[QueueTask] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Queue":
        return cls(
            name=data["name"],
            updated_at=data.get("updated_at", ""),
            tasks=[
                QueueTask(
                    id=item["id"],
                    priority=Priority(level=(item.get("priority") or {}).get("level", "")),
                    submitted_at=item.get("submitted_at", ""),
                )
                for item in data.get("tasks") or []
            ],
        )


@dataclass
class LiteLLM:
    """Rate-limit telemetry for one model behind the LiteLLM gateway."""

    model: str
    provider: str
    tpm: int
    rpm: int
    tpm_max: int
    rpm_max: int
    payment_type: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LiteLLM":
        return cls(
            model=data["model"],
            provider=data.get("provider", ""),
            tpm=int(data.get("tpm", 0)),
            rpm=int(data.get("rpm", 0)),
            tpm_max=int(data.get("tpm_max", 0)),
            rpm_max=int(data.get("rpm_max", 0)),
            payment_type=data.get("payment_type", ""),
        )


COLLECTIONS = ("agents", "workload", "queues", "litellm")


@dataclass(frozen=True)
class SystemState:
    """Point-in-time aggregate of every source.

    Collections are stored as tuples, so neither fields nor membership can
    change after construction. The records inside are plain dataclasses, but
    they are copies owned by this snapshot; later background activity never
    shows up here.
    """

    id: str
    agents: Tuple[Agent, ...] = ()
    workload: Tuple[Workload, ...] = ()
    queues: Tuple[Queue, ...] = ()
    litellm: Tuple[LiteLLM, ...] = ()

    def __post_init__(self) -> None:
        for name in COLLECTIONS:
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for name in COLLECTIONS:
            data[name] = list(data[name])
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SystemState":
        return cls(
            id=data["id"],
            agents=[Agent.from_dict(item) for item in data.get("agents") or []],
            workload=[Workload.from_dict(item) for item in data.get("workload") or []],
            queues=[Queue.from_dict(item) for item in data.get("queues") or []],
            litellm=[LiteLLM.from_dict(item) for item in data.get("litellm") or []],
        )
