# MIT License (see LICENSE)
import io

import numpy as np
from bvh_sim.renderer import BufferedRenderer, DebugRenderer, NullRenderer, RED, WHITE, color_for, square_rect
from bvh_sim.collision.aabb import aabb_for_geometry
from bvh_sim.simulation import Simulation
from bvh_sim.types import Circle, Square


def make_sim():
    sim = Simulation()
    sim.spawn((100.0, 100.0), Circle(20.0))
    sim.spawn((110.0, 100.0), Square(20.0))
    sim.spawn((500.0, 500.0), Square(10.0))
    sim.step()
    return sim


def test_colors():
    assert color_for(True) == RED
    assert color_for(False) == WHITE


def test_square_rect_matches_collision_box():
    """The drawn square covers exactly its bounding box."""
    pos = np.array([50.0, 70.0])
    left, top, w, h = square_rect(pos, 30.0)
    box = aabb_for_geometry(Square(30.0), pos)
    assert (left, top, left + w, top + h) == box.as_tuple()


def test_debug_renderer_output():
    out = io.StringIO()
    DebugRenderer(output=out).render_simulation(make_sim())
    text = out.getvalue()
    print(text)
    lines = text.splitlines()
    assert lines[0] == "=== Frame tick=1 ==="
    assert lines[1] == "[0] Circle r=20.00 @ (100.00, 100.00) colliding"
    assert lines[2] == "[1] Square 20.00 @ (110.00, 100.00) colliding"
    assert lines[3] == "[2] Square 10.00 @ (500.00, 500.00)"


def test_buffered_renderer_records_frames():
    sim = make_sim()
    renderer = BufferedRenderer()
    renderer.render_simulation(sim)
    sim.step()
    renderer.render_simulation(sim)

    assert [f["tick"] for f in renderer.frames] == [1, 2]
    shapes = renderer.frames[0]["shapes"]
    assert [s["entity"] for s in shapes] == [0, 1, 2]
    assert [s["color"] for s in shapes] == [RED, RED, WHITE]
    assert shapes[2]["position"] == [500.0, 500.0]

    renderer.clear()
    assert renderer.frames == []


def test_null_renderer_is_silent():
    NullRenderer().render_simulation(make_sim())
