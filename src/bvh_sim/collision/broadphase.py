# MIT License (see LICENSE)
"""
Broadphase collision detection using a per-tick bounding volume tree.

Every entity with a Position and a Geometry is reduced to its world-space
AABB, and all boxes are inserted into a fresh BVH. Overlap queries against
the tree then find every box touching a given box without testing all pairs.

Key concepts:
- AABB (Axis-Aligned Bounding Box): Conservative bounding region for a shape.
- The tree is rebuilt from scratch each tick; leaves never move.
- Leaves carry the entity handle, so results can name the overlapping entity.
"""
from __future__ import annotations
from typing import Iterable

from ..store import EntityStore
from ..types import Entity, Geometry, Position
from .aabb import AABB, aabb_for_geometry
from .bvh import BVH


def shape_boxes(store: EntityStore) -> list[tuple[Entity, AABB]]:
    """
    Compute the AABB of every entity that has both Position and Geometry.

    Returns:
        (entity, aabb) in the store's iteration order.
    """
    return [
        (entity, aabb_for_geometry(geometry, pos.vec))
        for entity, (pos, geometry) in store.query(Position, Geometry)
    ]


def build_tree(boxes: Iterable[tuple[Entity, AABB]]) -> BVH:
    """
    Insert every box into a new BVH, in the given order.

    Args:
        boxes: (entity, aabb) items; the entity becomes the leaf payload.
    """
    tree = BVH()
    for entity, aabb in boxes:
        tree.insert(aabb, entity)
    return tree


def brute_force_pairs(boxes: list[tuple[Entity, AABB]]) -> list[tuple[Entity, Entity]]:
    """
    Reference O(n²) overlap search.

    Used to cross-check the tree and as a baseline in benchmarks.

    Returns:
        (a, b) pairs with a before b in the input order.
    """
    out: list[tuple[Entity, Entity]] = []
    for i in range(len(boxes)):
        ea, a = boxes[i]
        for j in range(i + 1, len(boxes)):
            eb, b = boxes[j]
            if a.overlaps(b):
                out.append((ea, eb))
    return out
