# MIT License (see LICENSE)
"""
Broadphase collision detection.

This subpackage provides:
    - AABB: Closed axis-aligned boxes and per-shape box computation.
    - BVH: Dynamic AABB tree with overlap queries.
    - Broadphase helpers: build a tree from an EntityStore and a
      brute-force reference search.

Typical usage:
    from bvh_sim.collision import shape_boxes, build_tree

    boxes = shape_boxes(store)
    tree = build_tree(boxes)
    for entity, box in boxes:
        hits = tree.query(box)   # includes entity itself
"""
from .aabb import AABB, aabb_for_geometry
from .bvh import BVH
from .broadphase import shape_boxes, build_tree, brute_force_pairs

__all__ = [
    # Boxes
    "AABB",
    "aabb_for_geometry",
    # Tree
    "BVH",
    # Broadphase
    "shape_boxes",
    "build_tree",
    "brute_force_pairs",
]
