# MIT License (see LICENSE)
"""
Axis-aligned bounding boxes.

Every shape in the simulation is reduced to an AABB before it reaches the
broadphase tree. Boxes are closed: two boxes that merely touch along an
edge or at a corner overlap.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from ..types import Circle, Square, Geometry


@dataclass(frozen=True)
class AABB:
    """
    Closed axis-aligned box [min_x, max_x] x [min_y, max_y].
    """
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def overlaps(self, other: AABB) -> bool:
        """
        Closed-interval overlap test on both axes.

        Symmetric and reflexive: a.overlaps(b) == b.overlaps(a) and
        a.overlaps(a) is always True.
        """
        return not (
            self.max_x < other.min_x or other.max_x < self.min_x or
            self.max_y < other.min_y or other.max_y < self.min_y
        )

    def contains(self, other: AABB) -> bool:
        """True if other lies entirely inside this box."""
        return (
            self.min_x <= other.min_x and self.min_y <= other.min_y and
            other.max_x <= self.max_x and other.max_y <= self.max_y
        )

    def union(self, other: AABB) -> AABB:
        """Smallest box enclosing both boxes."""
        return AABB(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def perimeter(self) -> float:
        """
        Box perimeter, the 2D stand-in for surface area in the tree cost
        heuristic.
        """
        return 2.0 * ((self.max_x - self.min_x) + (self.max_y - self.min_y))

    @property
    def center(self) -> tuple[float, float]:
        return (0.5 * (self.min_x + self.max_x), 0.5 * (self.min_y + self.max_y))

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)


def aabb_for_geometry(geometry: Geometry, position: np.ndarray) -> AABB:
    """
    Calculate the world-space AABB of a shape centred at position.

    Shapes carry no rotation, so the box is exact for squares and tight
    for circles:
      Circle(r)  -> [x - r, x + r] x [y - r, y + r]
      Square(s)  -> [x - s/2, x + s/2] x [y - s/2, y + s/2]

    Raises:
        TypeError: For anything that is not a Circle or a Square.
    """
    px, py = float(position[0]), float(position[1])
    match geometry:
        case Circle(radius=r):
            return AABB(px - r, py - r, px + r, py + r)
        case Square(length=s):
            h = 0.5 * s
            return AABB(px - h, py - h, px + h, py + h)
        case _:
            raise TypeError(f"Unknown shape type: {type(geometry)}")
