"""Telemetron: consolidated fleet state for agents, workloads, queues and LiteLLM."""

from .bootstrap import build_context
from .app import create_app

__all__ = ["build_context", "create_app"]
