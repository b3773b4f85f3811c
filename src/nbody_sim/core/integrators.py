# MIT License (see LICENSE)
"""
Time integration with reflective walls.

Bodies are advanced with semi-implicit (symplectic) Euler:
    v(t+dt) = v(t) + a(t)·dt
    x(t+dt) = x(t) + v(t+dt)·dt

The position update uses the already updated velocity. After the move,
each axis is checked against the plane bounds independently: a body past
a wall is placed exactly on the wall and its velocity component on that
axis is negated (a perfectly elastic bounce). A body past a corner is
reflected on both axes in the same step.

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations
from typing import Iterable

from ..constants import WIDTH, HEIGHT
from ..types import Body


def euler_step(body: Body, dt: float) -> None:
    """
    Advance one body by dt using semi-implicit Euler.

    Args:
        body: Body to integrate (modified in-place). Its acceleration must
              already hold this tick's value.
        dt: Timestep in simulation units.
    """
    body.velocity += body.acceleration * dt
    body.position += body.velocity * dt


def reflect_at_walls(body: Body, width: float = WIDTH, height: float = HEIGHT) -> None:
    """
    Clamp a body to [0, width] x [0, height], bouncing off the walls it crossed.
    """
    pos = body.position
    vel = body.velocity
    if pos[0] < 0:
        pos[0] = 0.0
        vel[0] = -vel[0]
    if pos[0] > width:
        pos[0] = width
        vel[0] = -vel[0]
    if pos[1] < 0:
        pos[1] = 0.0
        vel[1] = -vel[1]
    if pos[1] > height:
        pos[1] = height
        vel[1] = -vel[1]


def integrate(bodies: Iterable[Body], dt: float, width: float = WIDTH, height: float = HEIGHT) -> None:
    """Integrate and reflect every body. Each update is local to its body."""
    for b in bodies:
        euler_step(b, dt)
        reflect_at_walls(b, width, height)
