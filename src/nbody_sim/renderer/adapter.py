# MIT License (see LICENSE)
"""
Renderer adapters for simulation visualization.

Renderers are pull-based: render(scene) takes one snapshot of the store
and draws it. They never hold the store lock while drawing, and they run
on their own schedule independent of the tick loop. The simulation has
no rendering dependency; these adapters are optional.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

from ..types import BodyView

if TYPE_CHECKING:
    from ..scene import Scene


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses implement the drawing methods for a graphics backend
    (pygame, matplotlib, a web canvas...).

    Usage:
        renderer = MyRenderer()
        renderer.render(scene)
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        """
        Begin a new frame for rendering.

        Args:
            time: Simulation time of the scene when the frame was pulled.
        """
        ...

    @abstractmethod
    def draw_body(self, body: BodyView) -> None:
        """Draw one body as a filled disc of body.radius at (body.x, body.y)."""
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def render(self, scene: "Scene") -> int:
        """
        Pull one frame of the scene and draw it.

        The time passed to begin_frame is read in the same exclusive
        section as the views, so both belong to the same tick.

        Returns:
            Number of bodies drawn.
        """
        time, views = scene.frame()
        self.begin_frame(time)
        for view in views:
            self.draw_body(view)
        self.end_frame()
        return len(views)


class DebugRenderer(RendererAdapter):
    """
    Console/text renderer for development and testing.

    Output:
        === Frame t=0.2000 ===
        [1] r=4.31 @ (412.08, 97.33) rgb=(120, 200, 64)
    """

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def begin_frame(self, time: float) -> None:
        self.output.write(f"=== Frame t={time:.4f} ===\n")

    def draw_body(self, body: BodyView) -> None:
        r, g, b = body.color
        self.output.write(
            f"[{body.id}] r={body.radius:.2f} @ ({body.x:.2f}, {body.y:.2f}) rgb=({r}, {g}, {b})\n"
        )

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for timing the snapshot path alone."""

    def begin_frame(self, time: float) -> None:
        pass

    def draw_body(self, body: BodyView) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that buffers frame data for later retrieval.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            scene.tick()
            renderer.render(scene)

        for frame in renderer.frames:
            print(f"t={frame['time']}, bodies={len(frame['bodies'])}")
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, time: float) -> None:
        self._current_frame = {"time": time, "bodies": []}

    def draw_body(self, body: BodyView) -> None:
        if self._current_frame is None:
            return
        self._current_frame["bodies"].append({
            "id": body.id,
            "position": [body.x, body.y],
            "radius": body.radius,
            "color": list(body.color),
        })

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        """Clear all buffered frames."""
        self.frames.clear()
