# MIT License (see LICENSE)
"""
nbody_sim - A 2D gravitational N-body simulation kernel.

Point masses attract each other with softened Newtonian gravity on a
bounded plane, bounce off its walls and merge when they overlap. All
access to the bodies goes through one exclusive lock, so a renderer and
an input layer can run beside the tick loop.

Main entry points:
    - ParticleStore: The lock-guarded body collection.
    - Scene: The driver running one tick of the pipeline.
    - Body, BodyView: A simulated body and its rendering view.
    - InvalidMass: Raised for bodies whose mass is not finite and positive.

Submodules:
    - core: Force field, parallel-for, integrator, invariants.
    - collision: Overlap detection and merging.
    - renderer: Optional pull-based renderer adapters.
    - interaction: Pointer drag/reset input.
    - clock: Fixed-rate tick loop.
    - config: Run-time configuration.

Example:
    import numpy as np
    from nbody_sim import ParticleStore, Scene

    store = ParticleStore.seeded(100, rng=np.random.default_rng(1))
    scene = Scene(store)
    scene.tick()
    views = store.snapshot()
"""
import logging

from .scene import Scene
from .store import ParticleStore
from .types import Body, BodyView, InvalidMass

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core simulation
    "ParticleStore",
    "Scene",
    # Data model
    "Body",
    "BodyView",
    "InvalidMass",
]
