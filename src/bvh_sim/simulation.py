# MIT License (see LICENSE)
"""
The simulation context and tick loop.

The Simulation owns everything a tick touches:
- The EntityStore with the Position, Velocity, Geometry and Collider columns.
- The configuration (fixed timestep, spawn distribution, seed).
- The broadphase tree built during the most recent tick.

Each call to step() runs one tick, in strict order:
    1. Reset:     clear every Collider flag.
    2. Integrate: drift positions by velocity * dt.
    3. Build:     rebuild the BVH from current positions and shapes.
    4. Query:     flag every Collider entity overlapping another box.

Spawns made between ticks become part of the next tick. The host loop
(window, input, drawing) lives outside this module.

Structure:
    - User creates a Simulation.
    - User adds shapes via spawn() or spawn_random().
    - User calls sim.step() once per frame and renders sim.shapes().
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from .config import SimulationConfig
from .collision.bvh import BVH
from .core.invariants import check_finite
from .profiler import Profiler
from .spawner import random_components
from .store import EntityStore
from .systems import build_bvh, detect_collisions, integrate_velocities, reset_colliders
from .types import (
    DEFAULT_COMPONENTS,
    Collider,
    Entity,
    Geometry,
    Position,
    ShapeView,
    Velocity,
)

logger = logging.getLogger(__name__)


@dataclass
class Simulation:
    """
    Shape drift and overlap simulation.

    Attributes:
        config: Timestep, spawn distribution and seed.
        profiler: Optional Profiler timing each pipeline stage.
        store: Entity storage shared with renderers.
        bvh: Tree built by the last tick (empty before the first tick).
        tick: Number of completed ticks.
        rng: Seeded generator used by spawn_random().
    """
    config: SimulationConfig = field(default_factory=SimulationConfig)
    profiler: Profiler | None = None

    # Internal state
    store: EntityStore = field(default_factory=EntityStore)
    bvh: BVH = field(default_factory=BVH)
    tick: int = 0
    rng: np.random.Generator = field(init=False, repr=False)

    def __post_init__(self) -> None:
        for component_type in DEFAULT_COMPONENTS:
            self.store.register(component_type)
        self.rng = np.random.default_rng(self.config.seed)

    @property
    def dt(self) -> float:
        return self.config.dt

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------

    def spawn(
        self,
        position: tuple[float, float] | np.ndarray,
        geometry: Geometry,
        velocity: tuple[float, float] | np.ndarray | None = None,
        collider: bool = True,
    ) -> Entity:
        """
        Add a shape to the simulation.

        Args:
            position: Centre of the shape.
            geometry: Circle or Square (validated on construction).
            velocity: Constant drift; None for a shape that never moves.
            collider: Whether the entity reports its own overlap state.
                Shapes without a collider still block others.

        Returns:
            The new entity handle.
        """
        components: list = [Position(position), geometry]
        if velocity is not None:
            components.append(Velocity(velocity))
        if collider:
            components.append(Collider())
        entity = self.store.spawn(*components)
        logger.info("Spawned entity %d: %s at %s", entity, geometry, components[0].vec.tolist())
        return entity

    def spawn_random(
        self,
        point: tuple[float, float],
        rng: np.random.Generator | None = None,
    ) -> Entity:
        """
        Spawn a randomly moving Circle or Square at point (a user click).

        Args:
            point: World coordinate of the click.
            rng: Generator to draw from; defaults to the simulation's
                 seeded generator.
        """
        pos, vel, geometry, collider = random_components(
            point, rng or self.rng, self.config.spawn
        )
        entity = self.store.spawn(pos, vel, geometry, collider)
        logger.info(
            "Spawned entity %d: %s at %s moving %s",
            entity, geometry, pos.vec.tolist(), vel.vec.tolist(),
        )
        return entity

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def _run(self, name: str, fn, *args):
        if self.profiler is None:
            return fn(*args)
        with self.profiler.section(name):
            return fn(*args)

    def _check(self) -> None:
        if self.config.check_invariants:
            check_finite(self.store)

    def step(self) -> int:
        """
        Advance the simulation by exactly one tick.

        Raises:
            InvariantError: If integration produced a non-finite position.
                The tick is abandoned and the previous tree is kept.

        Returns:
            Number of entities flagged as colliding this tick.
        """
        self._run("reset", reset_colliders, self.store)
        self._run("integrate", integrate_velocities, self.store, self.config.dt)
        self._check()
        self.bvh = self._run("build", build_bvh, self.store)
        flagged = self._run("query", detect_collisions, self.store, self.bvh)
        self.tick += 1
        logger.debug(
            "tick %d: %d leaves, height %d, %d colliding",
            self.tick, len(self.bvh), self.bvh.height, flagged,
        )
        return flagged

    def run(self, ticks: int) -> None:
        """Run a fixed number of ticks."""
        for _ in range(ticks):
            self.step()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def is_colliding(self, entity: Entity) -> bool:
        """Collider flag of entity as of the last tick."""
        return self.store.get(entity, Collider).colliding

    def position(self, entity: Entity) -> np.ndarray:
        return self.store.get(entity, Position).vec

    def move_to(self, entity: Entity, position: tuple[float, float] | np.ndarray) -> None:
        """Teleport an entity; takes effect on the next tick."""
        self.store.get(entity, Position).vec = Position(position).vec

    def overlapping_pairs(self) -> list[tuple[Entity, Entity]]:
        """
        Entity pairs whose boxes overlapped in the last tick's tree.

        Includes shapes without a Collider.
        """
        return self.bvh.interfering_pairs()

    def shapes(self) -> Iterator[ShapeView]:
        """
        Yield drawable state for every entity with Position and Geometry.

        Entities without a Collider are reported as not colliding.
        """
        store = self.store
        for entity, (pos, geometry) in store.query(Position, Geometry):
            colliding = store.has(entity, Collider) and store.get(entity, Collider).colliding
            yield ShapeView(entity, pos.vec.copy(), geometry, colliding)
