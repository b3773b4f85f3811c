# MIT License (see LICENSE)
"""
Core physics simulation components.

This subpackage provides:
    - ForceField: softened O(N²) gravity over a frozen snapshot.
    - ParallelFor: thread-pool parallel-for used by the force pass.
    - Integrators: semi-implicit Euler with reflective walls.
    - Invariants: total mass, momentum and kinetic energy.

Typical usage:
    from nbody_sim.core import ForceField, integrate

    field = ForceField(workers=4)
    field.apply(bodies)
    integrate(bodies, dt=0.1)
"""
from .forces import ForceField, gravitational_accelerations, snapshot_arrays
from .integrators import euler_step, integrate, reflect_at_walls
from .invariants import center_of_mass, kinetic_energy, linear_momentum, total_mass
from .parallel import ParallelFor, partition

__all__ = [
    # Forces
    "ForceField",
    "gravitational_accelerations",
    "snapshot_arrays",
    # Integrators
    "euler_step",
    "integrate",
    "reflect_at_walls",
    # Invariants
    "center_of_mass",
    "kinetic_energy",
    "linear_momentum",
    "total_mass",
    # Parallelism
    "ParallelFor",
    "partition",
]
