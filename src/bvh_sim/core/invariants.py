# MIT License (see LICENSE)
"""
Invariant checks and collision-state summaries.

The pipeline assumes finite positions. A non-finite position would poison
every bounding box built from it, so the simulation checks after
integration and halts the tick instead of carrying corrupted state forward.
"""
from __future__ import annotations
import logging

from ..store import EntityStore
from ..types import Collider, Entity, Position
from ..util import is_finite

logger = logging.getLogger(__name__)


class InvariantError(ValueError):
    """Raised when simulation state violates a precondition of the pipeline."""

    def __init__(self, entity: Entity, message: str) -> None:
        super().__init__(f"entity {entity}: {message}")
        self.entity = entity


def check_finite(store: EntityStore) -> None:
    """
    Verify that every Position is finite.

    Raises:
        InvariantError: For the first entity with a NaN or infinite coordinate.
    """
    for entity, (pos,) in store.query(Position):
        if not is_finite(pos.vec):
            logger.error("Non-finite position %s on entity %d", pos.vec.tolist(), entity)
            raise InvariantError(entity, f"non-finite position {pos.vec.tolist()}")


def colliding_entities(store: EntityStore) -> list[Entity]:
    """Entities whose Collider flag is currently set, in spawn order."""
    return [e for e, (c,) in store.query(Collider) if c.colliding]


def count_colliding(store: EntityStore) -> int:
    """Number of entities whose Collider flag is currently set."""
    return sum(1 for _, (c,) in store.query(Collider) if c.colliding)
