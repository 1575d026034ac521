# MIT License (see LICENSE)
"""
Renderer adapters for simulation visualization.

This module provides an abstract base class for rendering and concrete
implementations that need no graphics library. The core simulation has
no rendering dependency; renderers only read the state a tick leaves
behind (position, shape and collision flag of each entity).
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

import numpy as np

from ..types import Circle, Entity, Geometry, Square

if TYPE_CHECKING:
    from ..simulation import Simulation

Color = tuple[int, int, int]

WHITE: Color = (255, 255, 255)
RED: Color = (255, 0, 0)


def color_for(colliding: bool) -> Color:
    """Outline color: red while overlapping another shape, white otherwise."""
    return RED if colliding else WHITE


def square_rect(position: np.ndarray, length: float) -> tuple[float, float, float, float]:
    """
    Screen rectangle (left, top, width, height) of a square centred on position.

    Matches the square's bounding box so what is drawn is what collides.
    """
    h = 0.5 * length
    return (float(position[0]) - h, float(position[1]) - h, length, length)


def describe_shape(geometry: Geometry) -> str:
    match geometry:
        case Circle(radius=r):
            return f"Circle r={r:.2f}"
        case Square(length=s):
            return f"Square {s:.2f}"
        case _:
            return f"Shape({type(geometry).__name__})"


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses implement the drawing methods for a graphics backend
    (pygame window, text log, recorder, ...).

    Usage:
        renderer = MyRenderer()
        renderer.begin_frame(sim.tick)
        for shape in sim.shapes():
            renderer.draw_shape(shape.entity, shape.position, shape.geometry, shape.colliding)
        renderer.end_frame()

    Or use the convenience method:
        renderer.render_simulation(sim)
    """

    @abstractmethod
    def begin_frame(self, tick: int) -> None:
        """
        Begin a new frame for rendering.

        Args:
            tick: Number of completed simulation ticks.
        """
        ...

    @abstractmethod
    def draw_shape(
        self,
        entity: Entity,
        position: np.ndarray,
        geometry: Geometry,
        colliding: bool,
    ) -> None:
        """
        Draw a single shape outline.

        Args:
            entity: Handle of the entity being drawn.
            position: Centre of the shape.
            geometry: Circle or Square.
            colliding: Collider flag from the last tick.
        """
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame after all shapes have been drawn."""
        ...

    def render_simulation(self, sim: "Simulation") -> None:
        """
        Convenience method to render every shape in a simulation.

        Args:
            sim: The simulation to render, read after its last tick.
        """
        self.begin_frame(sim.tick)
        for shape in sim.shapes():
            self.draw_shape(shape.entity, shape.position, shape.geometry, shape.colliding)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Console/text renderer for development and testing.

    Example output:
        === Frame tick=3 ===
        [0] Circle r=20.00 @ (100.00, 100.00) colliding
        [1] Square 30.00 @ (400.00, 220.50)
    """

    def __init__(self, output: TextIO | None = None):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
        """
        self.output = output or sys.stdout

    def begin_frame(self, tick: int) -> None:
        self.output.write(f"=== Frame tick={tick} ===\n")

    def draw_shape(self, entity, position, geometry, colliding) -> None:
        line = f"[{entity}] {describe_shape(geometry)} @ ({position[0]:.2f}, {position[1]:.2f})"
        if colliding:
            line += " colliding"
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """
    No-op renderer, for benchmarking the simulation without drawing.
    """

    def begin_frame(self, tick: int) -> None:
        pass

    def draw_shape(self, entity, position, geometry, colliding) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that records frames for later inspection.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            sim.step()
            renderer.render_simulation(sim)

        for frame in renderer.frames:
            print(frame["tick"], len(frame["shapes"]))
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, tick: int) -> None:
        self._current_frame = {
            "tick": tick,
            "shapes": [],
        }

    def draw_shape(self, entity, position, geometry, colliding) -> None:
        if self._current_frame is None:
            return
        self._current_frame["shapes"].append({
            "entity": entity,
            "position": np.asarray(position, dtype=np.float64).tolist(),
            "shape": describe_shape(geometry),
            "color": color_for(colliding),
            "colliding": colliding,
        })

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        """Clear all buffered frames."""
        self.frames.clear()
