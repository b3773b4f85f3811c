# MIT License (see LICENSE)
"""
Named constants of the simulated plane.

Units are arbitrary simulation units: plane coordinates, ticks of DT.
These values are part of the public contract; front ends rely on the
plane size and on the ranges used for generated and user-added bodies.
"""
from __future__ import annotations

# Plane size. Positions are clamped to [0, WIDTH] x [0, HEIGHT].
WIDTH: int = 800
HEIGHT: int = 600

# Simulation-time step per tick, independent of the wall-clock tick rate.
DT: float = 0.1

# Gravitational constant.
G: float = 1.0

# Softening term added to the squared distance: r² → r² + ε.
# Note this is ε, not ε²; with ε = 5 the closest effective distance is √5.
EPSILON: float = 5.0

# Body count used at start-up and on every reset.
INITIAL_PARTICLE_COUNT: int = 100

# Generated bodies (init/reset): mass in [5, 15), velocity in [-1, 1).
MASS_MIN: float = 5.0
MASS_SPAN: float = 10.0
VELOCITY_SPAN: float = 2.0

# User-added bodies (pointer drag): mass in [10, 20).
USER_MASS_MIN: float = 10.0
USER_MASS_SPAN: float = 10.0

# Pointer displacement (pixels) to body velocity.
DRAG_VELOCITY_SCALE: float = 0.5

# Display colors: each RGB component in [COLOR_MIN, COLOR_MAX).
COLOR_MIN: int = 55
COLOR_MAX: int = 255

# Nominal external tick cadence (ticks per second of wall time).
TICK_RATE_HZ: float = 60.0
