# MIT License (see LICENSE)
"""
Exclusive-access container for the simulated bodies.

ParticleStore owns the body list and the single lock that guards it.
Every operation that reads or mutates the collection (tick, add, spawn,
reset, snapshot) holds the lock for its whole duration, so a renderer can
never observe a half-finished tick.

There is one lock over the entire collection and no finer locking; a
tick holds it from the force pass through the merge pass.
"""
from __future__ import annotations
import logging
import threading
from contextlib import contextmanager
from typing import Iterator

import numpy as np

from .constants import (
    WIDTH,
    HEIGHT,
    INITIAL_PARTICLE_COUNT,
    MASS_MIN,
    MASS_SPAN,
    VELOCITY_SPAN,
    USER_MASS_MIN,
    USER_MASS_SPAN,
    COLOR_MIN,
    COLOR_MAX,
)
from .types import Body, BodyView, Color, InvalidMass
from .util import all_finite, valid_mass

logger = logging.getLogger(__name__)


def _require_finite(x: float, y: float, vx: float, vy: float) -> None:
    if not all_finite(x, y, vx, vy):
        raise ValueError(
            f"body position and velocity must be finite, got ({x!r}, {y!r}), ({vx!r}, {vy!r})"
        )


class ParticleStore:
    """
    Ordered collection of bodies behind one exclusive lock.

    The list order is the order bodies currently occupy the collection;
    it decides which body survives a merge (the lower index wins).

    Attributes:
        width, height: Plane bounds used when generating bodies.
        rng: Pseudo-random generator used for generated positions,
             velocities, masses and colors. Seed it for reproducible layouts.
    """

    def __init__(
        self,
        width: float = WIDTH,
        height: float = HEIGHT,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else np.random.default_rng()
        self._bodies: list[Body] = []
        self._lock = threading.Lock()
        self._next_id = 1

    @classmethod
    def seeded(
        cls,
        count: int = INITIAL_PARTICLE_COUNT,
        width: float = WIDTH,
        height: float = HEIGHT,
        rng: np.random.Generator | None = None,
    ) -> "ParticleStore":
        """
        Create a store populated with `count` random bodies.

        Args:
            count: Number of bodies to generate.
            width, height: Plane bounds.
            rng: Generator to draw from (a fresh unseeded one if None).

        Returns:
            The populated store.
        """
        store = cls(width=width, height=height, rng=rng)
        store.reset(count)
        return store

    @contextmanager
    def exclusive(self) -> Iterator[list[Body]]:
        """
        Hold the store lock and yield the live body list.

        The yielded list may be mutated in place (the merger removes
        absorbed bodies from it). It must not be used after the block ends.
        """
        with self._lock:
            yield self._bodies

    def _random_color(self) -> Color:
        r, g, b = self.rng.integers(COLOR_MIN, COLOR_MAX, size=3)
        return (int(r), int(g), int(b))

    def _append(self, body: Body) -> int:
        body.id = self._next_id
        self._next_id += 1
        self._bodies.append(body)
        return body.id

    def add_body(
        self,
        x: float,
        y: float,
        vx: float,
        vy: float,
        mass: float,
        color: Color | None = None,
    ) -> int:
        """
        Append a new body.

        Args:
            x, y: Position.
            vx, vy: Velocity.
            mass: Mass, must be finite and > 0.
            color: Display color; drawn at random when omitted.

        Returns:
            The id assigned to the new body.

        Raises:
            InvalidMass: If mass is not finite and strictly positive.
            ValueError: If a coordinate or velocity component is NaN or
                infinite. The store is left unchanged in both cases.
        """
        if not valid_mass(mass):
            raise InvalidMass(mass)
        _require_finite(x, y, vx, vy)
        with self._lock:
            if color is None:
                color = self._random_color()
            body = Body(mass=mass, position=(x, y), velocity=(vx, vy), color=color)
            return self._append(body)

    def spawn(self, x: float, y: float, vx: float, vy: float) -> int:
        """
        Append a user body with a random mass in [10, 20).

        The mass and color are drawn under the lock, since numpy
        generators are not safe to share between threads.
        """
        _require_finite(x, y, vx, vy)
        with self._lock:
            mass = USER_MASS_MIN + self.rng.random() * USER_MASS_SPAN
            body = Body(
                mass=mass,
                position=(x, y),
                velocity=(vx, vy),
                color=self._random_color(),
            )
            body_id = self._append(body)
        logger.debug("spawned body %d at (%.1f, %.1f) mass=%.2f", body_id, x, y, mass)
        return body_id

    def reset(self, count: int = INITIAL_PARTICLE_COUNT, rng: np.random.Generator | None = None) -> None:
        """
        Discard all bodies and generate `count` fresh ones.

        Positions are uniform over the plane, velocities uniform in
        [-1, 1) per axis and masses uniform in [5, 15).

        Args:
            count: Number of bodies to generate.
            rng: Replacement generator; keeps the current one if None.
        """
        with self._lock:
            if rng is not None:
                self.rng = rng
            self._bodies.clear()
            for _ in range(count):
                x = self.rng.random() * self.width
                y = self.rng.random() * self.height
                vx = (self.rng.random() - 0.5) * VELOCITY_SPAN
                vy = (self.rng.random() - 0.5) * VELOCITY_SPAN
                mass = self.rng.random() * MASS_SPAN + MASS_MIN
                body = Body(
                    mass=mass,
                    position=(x, y),
                    velocity=(vx, vy),
                    color=self._random_color(),
                )
                self._append(body)
        logger.info("store reset with %d bodies on %gx%g plane", count, self.width, self.height)

    def size(self) -> int:
        """Current number of live bodies."""
        with self._lock:
            return len(self._bodies)

    def __len__(self) -> int:
        return self.size()

    def snapshot(self) -> tuple[BodyView, ...]:
        """
        Point-in-time ordered views of all bodies, for rendering.

        Taken under the same lock as tick, so it never observes a
        partially updated tick.
        """
        with self._lock:
            return tuple(b.view() for b in self._bodies)
