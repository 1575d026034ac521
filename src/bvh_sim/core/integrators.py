# MIT License (see LICENSE)
"""
Fixed-step integrator for drifting shapes.

Shapes carry a constant velocity and no forces, so the equation of motion
reduces to dx/dt = v and a single explicit Euler step is exact:

    x(t + dt) = x(t) + v * dt

The timestep is a fixed constant chosen by the simulation config, never a
measured frame duration, so a run is reproducible regardless of frame rate.
"""
from __future__ import annotations

import numpy as np


def euler_step(position: np.ndarray, velocity: np.ndarray, dt: float) -> None:
    """
    Advance position by velocity * dt (modified in-place).

    No clamping or world bounds are applied.

    Args:
        position: [x, y] float64 array, updated in place.
        velocity: [vx, vy] float64 array.
        dt: Fixed timestep.
    """
    position += velocity * dt
