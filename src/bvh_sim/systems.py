# MIT License (see LICENSE)
"""
Per-tick pipeline stages.

Each stage is a plain function over the EntityStore, run in this order:
    1. reset_colliders:       clear every Collider flag.
    2. integrate_velocities:  drift positions by velocity * dt.
    3. build_bvh:             rebuild the broadphase tree from scratch.
    4. detect_collisions:     query the tree and set Collider flags.

Stages 3 and 4 must see the same positions; nothing mutates the store
between them.
"""
from __future__ import annotations

from .collision.aabb import aabb_for_geometry
from .collision.broadphase import build_tree, shape_boxes
from .collision.bvh import BVH
from .core.integrators import euler_step
from .store import EntityStore
from .types import Collider, Geometry, Position, Velocity


def reset_colliders(store: EntityStore) -> None:
    """Set every Collider flag to False so flags never carry over ticks."""
    for _, (collider,) in store.query(Collider):
        collider.colliding = False


def integrate_velocities(store: EntityStore, dt: float) -> None:
    """
    Advance each entity with Position and Velocity by one fixed step.

    Entities without a Velocity are left where they are.
    """
    for _, (pos, vel) in store.query(Position, Velocity):
        euler_step(pos.vec, vel.vec, dt)


def build_bvh(store: EntityStore) -> BVH:
    """
    Build a new tree holding one leaf per (Position, Geometry) entity.

    The previous tick's tree is not reused.
    """
    return build_tree(shape_boxes(store))


def detect_collisions(store: EntityStore, bvh: BVH) -> int:
    """
    Flag every Collider entity whose box overlaps any other box in bvh.

    Each entity's own leaf is always in its query result, so more than one
    hit means at least one other shape overlaps it. Entities with Geometry
    but no Collider still sit in the tree and count as hits for others.

    Returns:
        Number of entities flagged as colliding.
    """
    flagged = 0
    for _, (pos, geometry, collider) in store.query(Position, Geometry, Collider):
        box = aabb_for_geometry(geometry, pos.vec)
        if bvh.count_overlaps(box) > 1:
            collider.colliding = True
            flagged += 1
    return flagged
