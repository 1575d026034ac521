# MIT License (see LICENSE)
"""
Random shape spawning for user clicks.

A click at a point becomes an entity with:
    - Position at the clicked point.
    - Velocity with each component uniform in [-speed/2, speed/2).
    - Geometry: Circle with probability circle_probability, else Square,
      sized uniformly from the configured range.
    - Collider starting as not colliding.

Randomness comes from a numpy Generator passed by the caller, so a seeded
generator reproduces the same shapes.
"""
from __future__ import annotations
import math
from dataclasses import dataclass

import numpy as np

from .types import Circle, Collider, Geometry, Position, Square, Velocity


@dataclass(frozen=True)
class SpawnConfig:
    """
    Distribution of randomly spawned shapes.

    Attributes:
        speed: Width of the velocity range; components fall in [-speed/2, speed/2).
        circle_probability: Chance a spawn is a Circle rather than a Square.
        radius_range: (low, high) for circle radii.
        length_range: (low, high) for square side lengths.
    """
    speed: float = 16.0
    circle_probability: float = 0.5
    radius_range: tuple[float, float] = (10.0, 30.0)
    length_range: tuple[float, float] = (20.0, 60.0)

    def __post_init__(self) -> None:
        if not math.isfinite(self.speed) or self.speed < 0:
            raise ValueError(f"speed must be a non-negative finite number, got {self.speed!r}")
        if not 0.0 <= self.circle_probability <= 1.0:
            raise ValueError(
                f"circle_probability must lie in [0, 1], got {self.circle_probability!r}"
            )
        _check_range("radius_range", self.radius_range)
        _check_range("length_range", self.length_range)


def _check_range(name: str, bounds: tuple[float, float]) -> None:
    lo, hi = bounds
    if not (math.isfinite(lo) and math.isfinite(hi)) or lo <= 0 or hi < lo:
        raise ValueError(f"{name} must satisfy 0 < low <= high, got {bounds!r}")


def random_geometry(rng: np.random.Generator, config: SpawnConfig) -> Geometry:
    """Draw a Circle or a Square according to config."""
    if rng.random() < config.circle_probability:
        return Circle(float(rng.uniform(*config.radius_range)))
    return Square(float(rng.uniform(*config.length_range)))


def random_velocity(rng: np.random.Generator, config: SpawnConfig) -> Velocity:
    half = 0.5 * config.speed
    return Velocity(rng.uniform(-half, half, size=2))


def random_components(
    point: tuple[float, float],
    rng: np.random.Generator,
    config: SpawnConfig,
) -> tuple[Position, Velocity, Geometry, Collider]:
    """
    Build the components of a freshly spawned shape at point.

    Returns:
        (Position, Velocity, Geometry, Collider) ready for EntityStore.spawn().
    """
    return (
        Position(point),
        random_velocity(rng, config),
        random_geometry(rng, config),
        Collider(),
    )
