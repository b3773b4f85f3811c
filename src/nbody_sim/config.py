# MIT License (see LICENSE)
"""
Simulation configuration.

SimulationConfig collects the run-time settings of a simulation: plane
size, physics constants, force-pass parallelism, tick rate, seed and log
level. Defaults are the values in constants.py. Settings can be
overridden from environment variables:

    NBODY_SIM_WORKERS      force-pass thread count (int)
    NBODY_SIM_USE_NUMBA    "1" to use the numba force kernel
    NBODY_SIM_SEED         seed for the body generator (int)
    NBODY_SIM_LOG_LEVEL    logging level name, e.g. "DEBUG"
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping

import numpy as np

from . import constants as const
from .scene import Scene
from .store import ParticleStore

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class SimulationConfig:
    """
    Container for all simulation parameters.

    Attributes:
        width, height: Plane bounds.
        dt: Simulation time per tick.
        g: Gravitational constant.
        eps: Softening added to the squared distance.
        initial_count: Bodies generated at start and on reset.
        workers: Force-pass threads (1 = inline).
        use_numba: Use the numba prange kernel for forces.
        tick_rate_hz: Cadence of the tick loop.
        seed: Generator seed; None draws fresh entropy.
        log_level: Level name used by the example scripts.
    """
    width: float = const.WIDTH
    height: float = const.HEIGHT
    dt: float = const.DT
    g: float = const.G
    eps: float = const.EPSILON
    initial_count: int = const.INITIAL_PARTICLE_COUNT
    workers: int = 1
    use_numba: bool = False
    tick_rate_hz: float = const.TICK_RATE_HZ
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "SimulationConfig":
        """
        Build a config from NBODY_SIM_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ.
            **overrides: Field values that take precedence over the environment.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        values: dict = {}
        if "NBODY_SIM_WORKERS" in env:
            values["workers"] = int(env["NBODY_SIM_WORKERS"])
        if "NBODY_SIM_USE_NUMBA" in env:
            values["use_numba"] = env["NBODY_SIM_USE_NUMBA"] == "1"
        if "NBODY_SIM_SEED" in env:
            values["seed"] = int(env["NBODY_SIM_SEED"])
        if "NBODY_SIM_LOG_LEVEL" in env:
            values["log_level"] = env["NBODY_SIM_LOG_LEVEL"].upper()
        values.update(overrides)
        return replace(cls(), **values)

    def validate(self) -> list[str]:
        """
        Perform sanity checks on configuration parameters.

        Returns:
            List of error messages. Empty list if all checks pass.
        """
        errors = []
        if self.width <= 0 or self.height <= 0:
            errors.append(f"plane size must be positive, got {self.width}x{self.height}")
        if self.dt <= 0:
            errors.append(f"timestep dt must be positive, got {self.dt}")
        if self.eps <= 0:
            errors.append(f"softening eps must be positive, got {self.eps}")
        if self.initial_count < 0:
            errors.append(f"initial_count must be >= 0, got {self.initial_count}")
        if self.workers < 1:
            errors.append(f"workers must be >= 1, got {self.workers}")
        if self.tick_rate_hz <= 0:
            errors.append(f"tick_rate_hz must be positive, got {self.tick_rate_hz}")
        if self.log_level not in _LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {self.log_level!r}")
        return errors

    def build_scene(self) -> Scene:
        """
        Create a seeded store and wrap it in a Scene.

        Raises:
            ValueError: If validate() reports any problem.
        """
        errors = self.validate()
        if errors:
            raise ValueError("invalid simulation config: " + "; ".join(errors))
        store = ParticleStore.seeded(
            self.initial_count,
            self.width,
            self.height,
            np.random.default_rng(self.seed),
        )
        logger.info(
            "scene built: %d bodies, workers=%d, numba=%s, seed=%s",
            self.initial_count, self.workers, self.use_numba, self.seed,
        )
        return Scene(
            store=store,
            dt=self.dt,
            G=self.g,
            eps=self.eps,
            workers=self.workers,
            use_numba=self.use_numba,
        )
