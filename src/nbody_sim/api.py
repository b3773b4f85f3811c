# MIT License (see LICENSE)
"""
Functional entry points for front ends.

Thin wrappers over ParticleStore and the tick pipeline, for callers that
prefer plain functions to the Scene object:

    store = init(100, 800, 600, np.random.default_rng(7))
    tick(store)
    add_body(store, 400, 300, 0.0, 0.0, 12.0)
    views = snapshot(store)
    reset(store, 100)
"""
from __future__ import annotations

import numpy as np

from .constants import DT, INITIAL_PARTICLE_COUNT
from .core.forces import ForceField
from .scene import advance
from .store import ParticleStore
from .types import BodyView

_force_field = ForceField(numba=False)


def init(count: int, width: float, height: float, rng: np.random.Generator | None = None) -> ParticleStore:
    """Create a store of `count` random bodies on a width x height plane."""
    return ParticleStore.seeded(count, width, height, rng)


def tick(store: ParticleStore, dt: float = DT) -> None:
    """Advance `store` by one timestep under its exclusive lock."""
    with store.exclusive() as bodies:
        advance(bodies, _force_field, dt, store.width, store.height)


def add_body(store: ParticleStore, x: float, y: float, vx: float, vy: float, mass: float) -> int:
    """Append a body; raises InvalidMass if mass <= 0."""
    return store.add_body(x, y, vx, vy, mass)


def reset(store: ParticleStore, count: int = INITIAL_PARTICLE_COUNT) -> None:
    """Replace every body with `count` fresh random ones."""
    store.reset(count)


def snapshot(store: ParticleStore) -> tuple[BodyView, ...]:
    """Ordered read-only views of all bodies."""
    return store.snapshot()
