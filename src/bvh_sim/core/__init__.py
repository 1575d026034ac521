# MIT License (see LICENSE)
"""
Core simulation helpers.

This subpackage provides:
    - Integrators: the fixed-step Euler update used for drifting shapes.
    - Invariants: finiteness checks and collision-state summaries.

Typical usage:
    from bvh_sim.core import euler_step, check_finite

    euler_step(pos.vec, vel.vec, dt=0.05)
    check_finite(store)
"""
from .integrators import euler_step
from .invariants import (
    InvariantError,
    check_finite,
    colliding_entities,
    count_colliding,
)

__all__ = [
    # Integrators
    "euler_step",
    # Invariants
    "InvariantError",
    "check_finite",
    "colliding_entities",
    "count_colliding",
]
