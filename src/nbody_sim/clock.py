# MIT License (see LICENSE)
"""
Fixed-rate tick loop.

TickLoop calls scene.tick() from a background thread at a fixed rate
(60 Hz by default). It is only a physics clock; redrawing is left to the
front end, which pulls scene.frame() on its own cadence.

Missed deadlines are not made up. If a tick takes longer than the
interval, the next one starts right away and the schedule restarts from
there, so a heavy field runs at a lower tick rate instead of bursting.
"""
from __future__ import annotations
import logging
import threading
import time

from .constants import TICK_RATE_HZ
from .scene import Scene

logger = logging.getLogger(__name__)


class TickLoop:
    """
    Background thread driving Scene.tick() at a fixed rate.

    Usage:
        loop = TickLoop(scene)
        loop.start()
        ...
        loop.stop()
    """

    def __init__(self, scene: Scene, rate_hz: float = TICK_RATE_HZ) -> None:
        if rate_hz <= 0:
            raise ValueError(f"rate_hz must be positive, got {rate_hz}")
        self.scene = scene
        self.interval = 1.0 / rate_hz
        self.overruns = 0
        self._stop: threading.Event | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start ticking. Calling start on a running loop is an error."""
        if self.running:
            raise RuntimeError("tick loop already running")
        # one event per run; an earlier thread keeps its own, already set
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop,), name="nbody-tick", daemon=True
        )
        self._thread.start()
        logger.info("tick loop started at %.1f Hz", 1.0 / self.interval)

    def stop(self, timeout: float | None = None) -> None:
        """
        Stop ticking and wait for the in-flight tick to finish.

        If the tick outlasts `timeout` the loop still counts as running,
        and start() keeps refusing until that thread has exited.
        """
        if self._stop is not None:
            self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("tick thread still busy after %.3f s", timeout)
                return
            self._thread = None
        logger.info("tick loop stopped after %d ticks", self.scene.ticks)

    def _run(self, stop: threading.Event) -> None:
        deadline = time.perf_counter()
        while not stop.is_set():
            self.scene.tick()
            deadline += self.interval
            delay = deadline - time.perf_counter()
            if delay < 0:
                self.overruns += 1
                if self.overruns == 1 or self.overruns % 100 == 0:
                    logger.warning(
                        "tick overran its %.1f ms slot by %.1f ms (%d overruns)",
                        1e3 * self.interval, -1e3 * delay, self.overruns,
                    )
                deadline = time.perf_counter()
                continue
            stop.wait(delay)

    def __enter__(self) -> "TickLoop":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
