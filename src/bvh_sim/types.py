# MIT License (see LICENSE)
"""
Component definitions for the shape simulation.

Each entity is a bag of components held by the EntityStore:
- Position: world-space centre of the entity.
- Velocity: constant drift applied every tick (optional).
- Geometry: a Circle or a Square, both centred on the Position.
- Collider: the per-tick "overlapping something" flag.

Geometry is a closed sum type (Circle | Square). Code that needs a
per-shape answer matches on it exhaustively, see collision/aabb.py.
"""
from __future__ import annotations
import math
from dataclasses import dataclass

import numpy as np

from .util import f64, is_finite, readonly


# Entities are dense integer handles assigned by EntityStore.spawn().
Entity = int


# =============================================================================
# Kinematic components
# =============================================================================

def _check_vector(name: str, value) -> np.ndarray:
    vec = f64(value)
    if vec.shape != (2,):
        raise ValueError(f"{name} must be an [x, y] pair, got shape {vec.shape}")
    if not is_finite(vec):
        raise ValueError(f"{name} must be finite, got {vec.tolist()!r}")
    return vec


@dataclass
class Position:
    """
    Centre of an entity in world coordinates.

    Attributes:
        vec: [x, y] as a float64 array. Mutated every tick by the
             integrator when the entity also has a Velocity.
    """
    vec: np.ndarray | tuple[float, float] = (0.0, 0.0)

    def __post_init__(self) -> None:
        self.vec = _check_vector("position", self.vec)


@dataclass(frozen=True)
class Velocity:
    """
    Constant velocity [vx, vy] in world units per unit time.

    Assigned once at spawn and never changed; the backing array is
    read-only so accidental in-place updates fail loudly.
    """
    vec: np.ndarray | tuple[float, float] = (0.0, 0.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "vec", readonly(_check_vector("velocity", self.vec)))


# =============================================================================
# Shape Definitions
# =============================================================================

def _check_size(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")
    return value


@dataclass(frozen=True)
class Circle:
    """
    Circular shape centred on the entity position.

    Attributes:
        radius: Distance from centre to edge. Must be > 0.
    """
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "radius", _check_size("radius", self.radius))


@dataclass(frozen=True)
class Square:
    """
    Axis-aligned square centred on the entity position.

    The square spans position ± length/2 on both axes; the renderer and
    the bounding box use the same convention.

    Attributes:
        length: Side length. Must be > 0.
    """
    length: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "length", _check_size("length", self.length))


# Union type for shape dispatch
Geometry = Circle | Square


# =============================================================================
# Collision state
# =============================================================================

@dataclass
class Collider:
    """
    Marks an entity as a collision reporter.

    Attributes:
        colliding: True when this entity's box overlapped at least one
                   other box during the last tick. Cleared at tick start.
    """
    colliding: bool = False


# Component columns every simulation registers at start-up.
DEFAULT_COMPONENTS: tuple = (Position, Velocity, Geometry, Collider)


@dataclass
class ShapeView:
    """Read-only snapshot of one drawable entity, handed to renderers."""
    entity: Entity
    position: np.ndarray
    geometry: Geometry
    colliding: bool = False
