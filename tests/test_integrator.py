# MIT License (see LICENSE)
import numpy as np
from bvh_sim.core.integrators import euler_step
from bvh_sim.simulation import Simulation
from bvh_sim.config import SimulationConfig
from bvh_sim.types import Circle, Square, Velocity


def test_euler_step_exact():
    pos = np.array([1.25, -3.5])
    vel = np.array([0.1, 7.3])
    expected = pos + vel * 0.05
    euler_step(pos, vel, 0.05)
    assert np.array_equal(pos, expected)


def test_step_moves_by_velocity_times_dt():
    """position' == position + velocity * dt exactly, component-wise."""
    sim = Simulation(config=SimulationConfig(dt=0.05, seed=1))
    for x in range(10):
        sim.spawn_random((x * 37.0, x * 11.0))

    before = {s.entity: s.position.copy() for s in sim.shapes()}
    sim.step()

    for entity, p0 in before.items():
        v = sim.store.get(entity, Velocity).vec
        assert np.array_equal(sim.position(entity), p0 + v * 0.05)


def test_entities_without_velocity_do_not_move():
    sim = Simulation()
    still = sim.spawn((5.0, 6.0), Square(2.0))
    moving = sim.spawn((0.0, 0.0), Circle(1.0), velocity=(1.0, -2.0))
    sim.run(4)
    assert sim.position(still).tolist() == [5.0, 6.0]
    assert np.allclose(sim.position(moving), [0.2, -0.4])


def test_velocity_is_read_only():
    vel = Velocity((1.0, 2.0))
    assert not vel.vec.flags.writeable


def test_same_seed_reproduces_run():
    """Two runs with the same config and seed land on identical positions."""
    def run():
        sim = Simulation(config=SimulationConfig(seed=42))
        for i in range(20):
            sim.spawn_random((i * 10.0, 300.0))
        sim.run(50)
        return [s.position.tolist() for s in sim.shapes()]

    assert run() == run()
