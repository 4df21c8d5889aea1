"""Short-lived holder for the rendered system state."""

from __future__ import annotations

import threading
import time
from typing import Callable


class StateCache:
    """Keeps the last rendered snapshot body for ``ttl`` seconds.

    ``ttl=0`` turns caching off and every call renders afresh. A render that
    raises stores nothing.
    """

    def __init__(self, ttl: float = 0.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = max(0.0, float(ttl))
        self._clock = clock
        self._lock = threading.Lock()
        self._body: str | None = None
        self._expires = 0.0

    @property
    def enabled(self) -> bool:
        return self.ttl > 0

    def get_or_render(self, render: Callable[[], str]) -> str:
        if not self.enabled:
            return render()
        with self._lock:
            if self._body is not None and self._clock() < self._expires:
                return self._body
            body = render()
            self._body = body
            self._expires = self._clock() + self.ttl
            return body

    def clear(self) -> None:
        with self._lock:
            self._body = None
            self._expires = 0.0
