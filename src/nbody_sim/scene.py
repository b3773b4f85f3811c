# MIT License (see LICENSE)
"""
The simulation driver.

The Scene wraps a ParticleStore and advances it one tick at a time.
Each tick runs, inside a single exclusive section of the store:
    1. Clear every body's acceleration scratch.
    2. Force field: softened pairwise gravity (may run in parallel).
    3. Integration: semi-implicit Euler with reflective walls.
    4. Merging: absorb overlapping bodies, conserving mass and momentum.

The timestep dt is simulation time. It does not depend on how often
tick() is called; a slow tick simply means fewer ticks per second.

Structure:
    - User creates a ParticleStore (ParticleStore.seeded()).
    - User wraps it in a Scene.
    - An external clock (see clock.TickLoop) calls scene.tick().
    - Renderers call scene.frame() on their own schedule.
"""
from __future__ import annotations
import logging
from contextlib import nullcontext
from dataclasses import dataclass, field

from .collision.merge import MergeEvent, merge_overlapping
from .constants import DT, G, EPSILON, WIDTH, HEIGHT
from .core.forces import ForceField
from .core.integrators import integrate
from .profiler import Profiler
from .store import ParticleStore
from .types import Body, BodyView

logger = logging.getLogger(__name__)


def advance(
    bodies: list[Body],
    force_field: ForceField,
    dt: float = DT,
    width: float = WIDTH,
    height: float = HEIGHT,
    profiler: Profiler | None = None,
) -> list[MergeEvent]:
    """
    Run one tick of the pipeline on a body list.

    The caller must hold exclusive access to `bodies` (see
    ParticleStore.exclusive). Every phase is a no-op on an empty list.

    Returns:
        Merge events of this tick.
    """
    def section(name: str):
        return profiler.section(name) if profiler else nullcontext()

    with section("forces"):
        for b in bodies:
            b.clear_acceleration()
        force_field.apply(bodies)

    # Barrier: the force pass has completed for every body.
    with section("integrate"):
        integrate(bodies, dt, width, height)

    with section("merge"):
        return merge_overlapping(bodies)


@dataclass
class Scene:
    """
    Simulation driver for one ParticleStore.

    Attributes:
        store: The bodies being simulated.
        dt: Simulation time advanced per tick (default 0.1).
        G: Gravitational constant.
        eps: Softening added to the squared distance.
        workers: Threads used by the force pass. 1 runs it inline.
        use_numba: Use the numba force kernel. None defers to the
                   NBODY_SIM_USE_NUMBA environment variable.
        profiler: Optional Profiler instance for timing statistics.
    """
    store: ParticleStore
    dt: float = DT
    G: float = G
    eps: float = EPSILON
    workers: int = 1
    use_numba: bool | None = None
    profiler: Profiler | None = None

    # Internal state
    time: float = 0.0
    ticks: int = 0
    merges: int = 0
    force_field: ForceField = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.force_field = ForceField(
            g=self.G, eps=self.eps, workers=self.workers, numba=self.use_numba
        )

    def tick(self) -> None:
        """
        Advance the simulation by one timestep.

        Holds the store lock for the whole pipeline; snapshot, add and
        reset calls from other threads wait until the tick completes.
        """
        prof = self.profiler
        with prof.section("tick") if prof else nullcontext():
            with self.store.exclusive() as bodies:
                events = advance(
                    bodies,
                    self.force_field,
                    self.dt,
                    self.store.width,
                    self.store.height,
                    prof,
                )
                self.time += self.dt
                self.ticks += 1
                self.merges += len(events)
        if events:
            logger.debug("tick %d: %d merge(s)", self.ticks, len(events))

    def frame(self) -> tuple[float, tuple[BodyView, ...]]:
        """
        Simulation time and body views read in one exclusive section.

        The time always belongs to the same tick as the views.
        """
        with self.store.exclusive() as bodies:
            return self.time, tuple(b.view() for b in bodies)

    def close(self) -> None:
        """Release the force pass worker threads."""
        self.force_field.close()
