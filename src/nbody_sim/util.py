# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

Small helpers shared by the store, the force field and the merger.
2D vectors are numpy arrays of shape (2,).
"""
from __future__ import annotations
import math
import os

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Allows tuple/list inputs for positions and velocities while keeping
    every body on the same numeric precision.
    """
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector."""
    return float(v[0] * v[0] + v[1] * v[1])


def radius_for_mass(mass: float) -> float:
    """
    Display and collision radius of a body of the given mass.

    r = ∛m · 2, so the visible area grows with m^(2/3).
    """
    return float(np.cbrt(mass) * 2)


def valid_mass(mass: float) -> bool:
    """True for a finite, strictly positive mass. NaN and inf are rejected."""
    return math.isfinite(mass) and mass > 0


def all_finite(*values: float) -> bool:
    """True if every value is a finite number."""
    return all(math.isfinite(v) for v in values)


def use_numba() -> bool:
    """Check if the numba force kernel is enabled via environment variable."""
    return os.environ.get("NBODY_SIM_USE_NUMBA", "0") == "1"
