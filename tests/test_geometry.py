# MIT License (see LICENSE)
import math

import numpy as np
import pytest
from bvh_sim.collision.aabb import AABB, aabb_for_geometry
from bvh_sim.types import Circle, Position, Square, Velocity


def test_circle_box_spans_radius():
    box = aabb_for_geometry(Circle(20.0), np.array([100.0, 50.0]))
    assert box == AABB(80.0, 30.0, 120.0, 70.0)


def test_square_box_is_centred_on_position():
    """A square's position is its centre, not a corner."""
    box = aabb_for_geometry(Square(40.0), np.array([100.0, 100.0]))
    assert box == AABB(80.0, 80.0, 120.0, 120.0)
    assert box.center == (100.0, 100.0)


def test_box_computation_is_pure():
    pos = np.array([3.5, -2.25])
    shape = Square(7.0)
    first = aabb_for_geometry(shape, pos)
    second = aabb_for_geometry(shape, pos)
    assert first == second
    assert pos.tolist() == [3.5, -2.25]


def test_unknown_shape_rejected():
    with pytest.raises(TypeError):
        aabb_for_geometry("triangle", np.zeros(2))


@pytest.mark.parametrize("size", [0.0, -1.0, math.inf, math.nan])
def test_invalid_sizes_rejected_at_construction(size):
    with pytest.raises(ValueError):
        Circle(size)
    with pytest.raises(ValueError):
        Square(size)


def test_overlap_uses_closed_intervals():
    a = AABB(0.0, 0.0, 1.0, 1.0)
    touching_edge = AABB(1.0, 0.0, 2.0, 1.0)
    touching_corner = AABB(1.0, 1.0, 2.0, 2.0)
    apart = AABB(1.0 + 1e-9, 0.0, 2.0, 1.0)
    assert a.overlaps(touching_edge)
    assert a.overlaps(touching_corner)
    assert not a.overlaps(apart)


def test_overlap_symmetric_and_reflexive():
    rng = np.random.default_rng(7)
    for _ in range(200):
        x0, y0, x1, y1 = rng.uniform(-10, 10, size=4)
        a = AABB(min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1))
        x0, y0, x1, y1 = rng.uniform(-10, 10, size=4)
        b = AABB(min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1))
        assert a.overlaps(a)
        assert a.overlaps(b) == b.overlaps(a)


def test_union_and_perimeter():
    a = AABB(0.0, 0.0, 1.0, 1.0)
    b = AABB(2.0, -1.0, 3.0, 0.5)
    u = a.union(b)
    assert u == AABB(0.0, -1.0, 3.0, 1.0)
    assert u.contains(a) and u.contains(b)
    assert u.perimeter() == pytest.approx(2 * (3.0 + 2.0))


@pytest.mark.parametrize("vec", [(np.nan, 0.0), (0.0, np.inf), (-np.inf, 1.0)])
def test_non_finite_vectors_rejected_at_construction(vec):
    with pytest.raises(ValueError):
        Position(vec)
    with pytest.raises(ValueError):
        Velocity(vec)


@pytest.mark.parametrize("vec", [5.0, (1.0, 2.0, 3.0), ((1.0, 2.0),), ()])
def test_vectors_must_be_pairs(vec):
    with pytest.raises(ValueError):
        Position(vec)
    with pytest.raises(ValueError):
        Velocity(vec)
