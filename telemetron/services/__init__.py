"""Services built on top of the fleet data sources."""

from .scheduler import PeriodicTask
from .system import SYSTEM_ID, SystemService, find_orphan_workloads

__all__ = ["PeriodicTask", "SYSTEM_ID", "SystemService", "find_orphan_workloads"]
