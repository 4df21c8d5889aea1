"""Background thread that runs one handler at a fixed interval."""

from __future__ import annotations

import logging
import threading
from typing import Callable

LOGGER = logging.getLogger("telemetron.scheduler")


class PeriodicTask:
    """Calls ``handler`` every ``interval`` seconds until stopped.

    The first call happens one interval after ``start``. Handler exceptions
    are logged and the loop keeps going. ``stop`` is terminal and may be
    called any number of times.
    """

    def __init__(
        self,
        name: str,
        interval: float,
        handler: Callable[[], None],
        logger: logging.Logger | None = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.name = name
        self.interval = float(interval)
        self.handler = handler
        self.logger = logger or LOGGER
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self._thread or self._stop.is_set():
                return

            def _loop():
                while not self._stop.wait(self.interval):
                    try:
                        self.handler()
                    except Exception as exc:
                        self.logger.exception("Periodic task %s failed: %s", self.name, exc)

            self._thread = threading.Thread(target=_loop, name=f"periodic-{self.name}", daemon=True)
            self._thread.start()
            self.logger.debug("Periodic task %s started (interval=%.2fs)", self.name, self.interval)

    def stop(self, timeout: float = 2.0) -> None:
        with self._lock:
            if self._stop.is_set():
                return
            self._stop.set()
            thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)
        self.logger.debug("Periodic task %s stopped", self.name)
