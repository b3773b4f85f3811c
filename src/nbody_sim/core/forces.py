# MIT License (see LICENSE)
"""
Pairwise gravitational accelerations (the force field).

For every body i the acceleration is accumulated over all j != i:

    dx = x_j - x_i,  dy = y_j - y_i
    d² = dx² + dy² + ε          (flat softening, ε is not squared)
    d  = √d²
    F  = G · m_i · m_j / d²
    a_i += F · (dx, dy) / (d · m_i)

m_i appears in F and again in the divisor. Algebraically it cancels
(a_i = G·m_j·dx / (d·d²)), but the two-step arithmetic is kept exactly as
written so results stay bit-for-bit stable; do not fold it away.

Each row i depends only on the frozen position/mass snapshot and writes
only out[i], so rows can be computed in any order and on any number of
workers. Complexity: O(N²), no tree approximation.

Key concepts:
- snapshot_arrays() freezes positions and masses before the force pass.
- ForceField runs the row kernel over a ParallelFor, or a numba prange
  kernel when enabled (NBODY_SIM_USE_NUMBA=1 or numba=True).
"""
from __future__ import annotations
import math
from functools import lru_cache
from typing import Sequence

import numpy as np

from ..constants import G, EPSILON
from ..types import Body
from ..util import use_numba
from .parallel import ParallelFor


def snapshot_arrays(bodies: Sequence[Body]) -> tuple[np.ndarray, np.ndarray]:
    """
    Copy body positions and masses into read-only arrays.

    Returns:
        Tuple (positions [N, 2], masses [N]), both float64 and not writeable.
    """
    positions = np.array([b.position for b in bodies], dtype=np.float64).reshape(-1, 2)
    masses = np.array([b.mass for b in bodies], dtype=np.float64)
    positions.flags.writeable = False
    masses.flags.writeable = False
    return positions, masses


def _accumulate_rows(
    xs: list[float],
    ys: list[float],
    ms: list[float],
    g: float,
    eps: float,
    out: np.ndarray,
    start: int,
    stop: int,
) -> None:
    """Fill out[start:stop] with the accelerations of bodies start..stop-1."""
    n = len(xs)
    for i in range(start, stop):
        xi = xs[i]
        yi = ys[i]
        mi = ms[i]
        ax = 0.0
        ay = 0.0
        for j in range(n):
            if j == i:
                continue
            dx = xs[j] - xi
            dy = ys[j] - yi
            dist_sq = dx * dx + dy * dy + eps
            dist = math.sqrt(dist_sq)
            force = g * mi * ms[j] / dist_sq
            ax += force * dx / (dist * mi)
            ay += force * dy / (dist * mi)
        out[i, 0] = ax
        out[i, 1] = ay


@lru_cache(maxsize=None)
def _numba_kernel():
    """
    Compile the prange version of the row kernel.

    Raises:
        RuntimeError: If numba is not installed.
    """
    try:
        from numba import njit, prange
    except ImportError as exc:
        raise RuntimeError(
            "numba force kernel requested but numba is not installed "
            "(pip install 'nbody-sim[numba]')"
        ) from exc

    @njit(parallel=True)
    def kernel(positions, masses, g, eps, out):
        n = positions.shape[0]
        for i in prange(n):
            xi = positions[i, 0]
            yi = positions[i, 1]
            mi = masses[i]
            ax = 0.0
            ay = 0.0
            for j in range(n):
                if j == i:
                    continue
                dx = positions[j, 0] - xi
                dy = positions[j, 1] - yi
                dist_sq = dx * dx + dy * dy + eps
                dist = math.sqrt(dist_sq)
                force = g * mi * masses[j] / dist_sq
                ax += force * dx / (dist * mi)
                ay += force * dy / (dist * mi)
            out[i, 0] = ax
            out[i, 1] = ay

    return kernel


def gravitational_accelerations(
    positions: np.ndarray,
    masses: np.ndarray,
    g: float = G,
    eps: float = EPSILON,
    pfor: ParallelFor | None = None,
) -> np.ndarray:
    """
    Compute the softened gravitational acceleration of every body.

    Args:
        positions: Body centers, shape [N, 2].
        masses: Body masses, shape [N], all > 0.
        g: Gravitational constant.
        eps: Softening added to the squared distance.
        pfor: Parallel-for to spread rows over; runs inline if None.

    Returns:
        Accelerations, shape [N, 2].
    """
    n = len(masses)
    out = np.zeros((n, 2), dtype=np.float64)
    if n == 0:
        return out

    xs = positions[:, 0].tolist()
    ys = positions[:, 1].tolist()
    ms = masses.tolist()

    def rows(start: int, stop: int) -> None:
        _accumulate_rows(xs, ys, ms, g, eps, out, start, stop)

    if pfor is None:
        rows(0, n)
    else:
        pfor(n, rows)
    return out


class ForceField:
    """
    Gravity between all bodies, computed from a frozen snapshot.

    Attributes:
        g: Gravitational constant.
        eps: Softening added to the squared distance.
        workers: Threads used for the row kernel (1 = inline).
        numba: Use the numba prange kernel instead of the thread pool.
               Defaults to the NBODY_SIM_USE_NUMBA environment switch.
    """

    def __init__(
        self,
        g: float = G,
        eps: float = EPSILON,
        workers: int = 1,
        numba: bool | None = None,
    ) -> None:
        self.g = g
        self.eps = eps
        self.numba = use_numba() if numba is None else bool(numba)
        self._pfor = ParallelFor(workers)
        self._kernel = _numba_kernel() if self.numba else None

    @property
    def workers(self) -> int:
        return self._pfor.workers

    def accelerations(self, positions: np.ndarray, masses: np.ndarray) -> np.ndarray:
        """Accelerations [N, 2] for the given snapshot."""
        if self._kernel is None:
            return gravitational_accelerations(positions, masses, self.g, self.eps, self._pfor)
        out = np.zeros((len(masses), 2), dtype=np.float64)
        if len(masses):
            self._kernel(positions, masses, self.g, self.eps, out)
        return out

    def apply(self, bodies: Sequence[Body]) -> None:
        """
        Store the acceleration of every body in body.acceleration.

        The snapshot is taken first, so the values written never feed
        back into the computation of other rows.
        """
        if not bodies:
            return
        positions, masses = snapshot_arrays(bodies)
        acc = self.accelerations(positions, masses)
        for body, a in zip(bodies, acc):
            body.acceleration[:] = a

    def close(self) -> None:
        """Release the worker threads."""
        self._pfor.close()
