# MIT License (see LICENSE)
"""
bvh_sim - Drifting 2D shapes with broadphase overlap detection.

Click to spawn circles and squares with random velocity; every tick the
shapes drift, a bounding volume tree is rebuilt from their boxes, and each
shape is flagged while its box overlaps another.

Main entry points:
    - Simulation: Owns the entity store and runs the tick pipeline.
    - Circle, Square: Shape definitions.
    - SimulationConfig, SpawnConfig: Tunable parameters.

Submodules:
    - collision: AABBs, the BVH and broadphase helpers.
    - core: Integrator and invariant checks.
    - systems: The per-tick pipeline stages.
    - renderer: Optional visualization adapters.

Example:
    from bvh_sim import Simulation, Circle

    sim = Simulation()
    a = sim.spawn((100, 100), Circle(20))
    b = sim.spawn((110, 100), Circle(20))
    sim.step()
    assert sim.is_colliding(a) and sim.is_colliding(b)
"""
from .simulation import Simulation
from .types import Circle, Square, Geometry, Position, Velocity, Collider
from .config import SimulationConfig
from .spawner import SpawnConfig
from .store import EntityStore

__all__ = [
    # Core simulation
    "Simulation",
    "EntityStore",
    # Components
    "Position",
    "Velocity",
    "Collider",
    # Shapes
    "Circle",
    "Square",
    "Geometry",
    # Configuration
    "SimulationConfig",
    "SpawnConfig",
]
