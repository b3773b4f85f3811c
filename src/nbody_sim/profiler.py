# MIT License (see LICENSE)
"""
Per-phase timing of simulation ticks.

Scene.tick() reports the phases "forces", "integrate" and "merge", and
"tick" for the whole locked section. Tick latency grows with N², so
these numbers are the way to see the frame rate degrade as bodies pile up.

Example:
    profiler = Profiler()
    scene = Scene(store, profiler=profiler)
    scene.tick()
    print(profiler.stats.summary()["forces"]["mean_ms"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """
    Accumulates timing samples for named sections.

    Stores raw timing data and provides summary statistics (count, mean, max).
    """
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        """Record a timing sample (in seconds) for a named section."""
        self.samples.setdefault(name, []).append(dt)

    def last(self, name: str) -> float | None:
        """Most recent sample for a section in seconds, or None if never timed."""
        times = self.samples.get(name)
        return times[-1] if times else None

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Compute summary statistics for all recorded sections.

        Returns:
            Dict mapping section name to stats dict with keys:
            - 'n': sample count
            - 'mean_ms': average time in milliseconds
            - 'max_ms': maximum time in milliseconds
        """
        out = {}
        for name, times in self.samples.items():
            out[name] = {
                "n": len(times),
                "mean_ms": 1e3 * (sum(times) / len(times)),
                "max_ms": 1e3 * max(times),
            }
        return out

    def clear(self) -> None:
        self.samples.clear()


class Profiler:
    """Context-manager based profiler for timing code sections."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Time the enclosed block and record it under `name`.

        The sample is recorded even if the block raises.
        """
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
