# MIT License (see LICENSE)
"""
Pointer input for interactive front ends.

The front end decodes its own mouse events and forwards plain
coordinates here:
    - Primary button drag: every drag event spawns a body at the pointer,
      moving with 0.5 x the pointer displacement since the last event.
    - Secondary button press: reset the field to the initial body count.
"""
from __future__ import annotations
import logging
from enum import Enum

from .constants import DRAG_VELOCITY_SCALE, INITIAL_PARTICLE_COUNT
from .store import ParticleStore

logger = logging.getLogger(__name__)


class Button(Enum):
    PRIMARY = 1
    SECONDARY = 3


class PointerInput:
    """
    Turns pointer presses and drags into store operations.

    Attributes:
        store: Store receiving the spawned bodies.
        reset_count: Bodies generated on a secondary-button press.
        velocity_scale: Velocity per pixel of drag displacement.
    """

    def __init__(
        self,
        store: ParticleStore,
        reset_count: int = INITIAL_PARTICLE_COUNT,
        velocity_scale: float = DRAG_VELOCITY_SCALE,
    ) -> None:
        self.store = store
        self.reset_count = reset_count
        self.velocity_scale = velocity_scale
        self._anchor: tuple[float, float] | None = None

    @property
    def dragging(self) -> bool:
        return self._anchor is not None

    def press(self, x: float, y: float, button: Button = Button.PRIMARY) -> None:
        """Secondary button resets the field; primary starts a drag at (x, y)."""
        if button is Button.SECONDARY:
            logger.info("pointer reset to %d bodies", self.reset_count)
            self.store.reset(self.reset_count)
            return
        self._anchor = (x, y)

    def drag(self, x: float, y: float) -> int:
        """
        Spawn a body at (x, y) moving with the drag velocity.

        A drag without a preceding press starts from (x, y) itself, so
        the first body is at rest.

        Returns:
            Id of the spawned body.
        """
        px, py = self._anchor if self._anchor is not None else (x, y)
        vx = (x - px) * self.velocity_scale
        vy = (y - py) * self.velocity_scale
        body_id = self.store.spawn(x, y, vx, vy)
        self._anchor = (x, y)
        return body_id

    def release(self) -> None:
        """End the current drag."""
        self._anchor = None
