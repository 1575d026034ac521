# MIT License (see LICENSE)
import numpy as np
from bvh_sim.collision.aabb import AABB
from bvh_sim.collision.broadphase import brute_force_pairs, build_tree
from bvh_sim.collision.bvh import BVH


def random_boxes(n, seed=12345, world=500.0, max_size=30.0):
    rng = np.random.default_rng(seed)
    boxes = []
    for i in range(n):
        x, y = rng.uniform(0, world, size=2)
        w, h = rng.uniform(1.0, max_size, size=2)
        boxes.append((i, AABB(x, y, x + w, y + h)))
    return boxes


def test_empty_tree():
    tree = BVH()
    assert len(tree) == 0
    assert tree.height == -1
    assert tree.root_aabb is None
    assert tree.query(AABB(0, 0, 1, 1)) == []
    assert tree.interfering_pairs() == []
    tree.validate()


def test_single_leaf_finds_itself():
    tree = BVH()
    box = AABB(0, 0, 1, 1)
    tree.insert(box, "only")
    assert tree.height == 0
    assert tree.query(box) == ["only"]
    assert tree.count_overlaps(AABB(5, 5, 6, 6)) == 0


def test_query_matches_brute_force():
    """Every query returns exactly the boxes a linear scan finds."""
    boxes = random_boxes(300)
    tree = build_tree(boxes)
    tree.validate()
    assert len(tree) == 300

    for entity, box in boxes:
        expected = sorted(e for e, other in boxes if other.overlaps(box))
        got = sorted(tree.query(box))
        assert got == expected
        assert entity in got


def test_interfering_pairs_match_brute_force():
    boxes = random_boxes(200, seed=99)
    tree = build_tree(boxes)
    assert tree.interfering_pairs() == brute_force_pairs(boxes)


def test_root_encloses_everything():
    boxes = random_boxes(64, seed=3)
    tree = build_tree(boxes)
    for _, box in boxes:
        assert tree.root_aabb.contains(box)
    assert list(tree.leaves()) == boxes


def test_rotations_keep_height_logarithmic():
    """Inserting boxes along a line would build a chain without rebalancing."""
    tree = BVH()
    n = 256
    for i in range(n):
        tree.insert(AABB(i * 2.0, 0.0, i * 2.0 + 1.0, 1.0), i)
    tree.validate()
    print("height", tree.height)
    assert tree.height < n // 8


def test_duplicate_boxes_all_reported():
    tree = BVH()
    box = AABB(0, 0, 2, 2)
    for i in range(5):
        tree.insert(box, i)
    tree.validate()
    assert sorted(tree.query(box)) == [0, 1, 2, 3, 4]
    assert len(tree.interfering_pairs()) == 10
