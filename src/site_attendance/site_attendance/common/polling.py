from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PollingLoop:
    """Run ``tick`` every ``interval`` seconds on a daemon thread.

    Errors raised by ``tick`` are logged and the loop waits for the next
    interval; there is no retry in between.
    """

    def __init__(self, tick: Callable[[], object], *, interval: float, name: str = "poller"):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._tick = tick
        self._interval = float(interval)
        self._name = name
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> None:
        try:
            self._tick()
        except Exception:
            logger.exception("%s tick failed", self._name)

    def _run(self) -> None:
        # First evaluation happens immediately, then on every interval.
        while not self._stop.is_set():
            self.run_once()
            self._stop.wait(self._interval)

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
