# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and conserved quantities.

Used for verifying simulation correctness. Merges conserve mass and
momentum exactly (up to rounding); gravity is pairwise antisymmetric so
it conserves momentum as long as no body bounces off a wall.
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..types import Body
from ..util import norm2


def total_mass(bodies: Sequence[Body]) -> float:
    """Sum of the masses of all bodies."""
    return float(sum(b.mass for b in bodies))


def linear_momentum(bodies: Sequence[Body]) -> np.ndarray:
    """
    Calculate the total linear momentum of a system.

    P = Σ (m * v)

    Args:
        bodies: Bodies to sum over.

    Returns:
        Total momentum vector [Px, Py].
    """
    p = np.zeros(2, dtype=np.float64)
    for b in bodies:
        p += b.momentum
    return p


def kinetic_energy(bodies: Sequence[Body]) -> float:
    """
    Calculate the total kinetic energy of a system of bodies.

    T = Σ 0.5 * m * v²
    """
    return float(sum(0.5 * b.mass * norm2(b.velocity) for b in bodies))


def center_of_mass(bodies: Sequence[Body]) -> np.ndarray:
    """Mass-weighted mean position. Zero vector for an empty system."""
    m = total_mass(bodies)
    if m == 0.0:
        return np.zeros(2, dtype=np.float64)
    c = np.zeros(2, dtype=np.float64)
    for b in bodies:
        c += b.mass * b.position
    return c / m

