# MIT License (see LICENSE)
"""
Core type definitions for the N-body simulation.

Defines the fundamental data structures:
- Body: a point mass with position, velocity, acceleration scratch, mass
  and display color. Its radius is derived from mass, never stored.
- BodyView: an immutable per-frame view handed to renderers.
- InvalidMass: rejection of a body whose mass is not finite and positive.

Equations of motion (semi-implicit Euler, see core/integrators.py):
  v ← v + a·dt
  x ← x + v·dt
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .util import f64, radius_for_mass, valid_mass


# RGB triple, each component an int in [0, 255].
Color = tuple[int, int, int]


class InvalidMass(ValueError):
    """Raised when a body is created with a mass that is not finite and strictly positive."""

    def __init__(self, mass: float):
        super().__init__(f"Body mass must be finite and positive, got {mass!r}")
        self.mass = mass


@dataclass(eq=False)
class Body:
    """
    A point mass in the simulated plane.

    Attributes:
        mass: Mass, finite and strictly positive.
        position: Center [x, y] in plane coordinates.
        velocity: Velocity [vx, vy] per unit simulation time.
        color: Display color (RGB). Averaged on merge, no physical effect.
        acceleration: Scratch [ax, ay], recomputed every tick.
        id: Unique identifier assigned by ParticleStore.

    Note:
        Position, velocity and acceleration are converted to float64 numpy
        arrays on init. The radius is a property of mass so a merge can
        never leave it stale.
    """
    mass: float
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    color: Color = (255, 255, 255)

    # Runtime state (not user-specified)
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=np.float64))
    id: int = -1

    def __post_init__(self) -> None:
        """Validate mass and convert vectors to float64 arrays."""
        if not valid_mass(self.mass):
            raise InvalidMass(self.mass)
        self.mass = float(self.mass)
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        self.acceleration = f64(self.acceleration)
        self.color = tuple(int(c) for c in self.color)

    @property
    def radius(self) -> float:
        """Radius derived from mass: ∛m · 2."""
        return radius_for_mass(self.mass)

    @property
    def momentum(self) -> np.ndarray:
        """Linear momentum m·v."""
        return self.mass * self.velocity

    def clear_acceleration(self) -> None:
        """Reset the acceleration scratch to zero for the next force pass."""
        self.acceleration[:] = 0.0

    def view(self) -> "BodyView":
        """Immutable snapshot of the rendered attributes of this body."""
        return BodyView(
            id=self.id,
            x=float(self.position[0]),
            y=float(self.position[1]),
            radius=self.radius,
            color=self.color,
        )


@dataclass(frozen=True)
class BodyView:
    """
    Read-only rendering view of a body at one point in time.

    Attributes:
        id: Identifier of the body the view was taken from.
        x, y: Center position.
        radius: Radius at the time of the snapshot.
        color: RGB display color.
    """
    id: int
    x: float
    y: float
    radius: float
    color: Color
