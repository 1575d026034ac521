# MIT License (see LICENSE)
"""
Column-per-component entity storage.

The EntityStore is the object store the simulation systems read and write:
components are grouped into columns keyed by their registered type, and
queries join columns to yield every entity carrying a given set of
components.

A column key may be a class (Position) or a union of classes
(Circle | Square); a component lands in the first registered column it
is an instance of.

Example:
    store = EntityStore()
    store.register(Position)
    store.register(Velocity)
    e = store.spawn(Position((0, 0)), Velocity((1, 0)))
    for entity, (pos, vel) in store.query(Position, Velocity):
        pos.vec += vel.vec
"""
from __future__ import annotations
import logging
from typing import Any, Iterator

from .types import Entity

logger = logging.getLogger(__name__)


class EntityStore:
    """
    Append-only entity container.

    Entities are dense integer handles starting at 0 and are never
    destroyed, so iteration in spawn order is stable from tick to tick.

    Attributes:
        columns: Mapping of registered component type to {entity: component}.
    """

    def __init__(self) -> None:
        self.columns: dict[Any, dict[Entity, Any]] = {}
        self._next_entity: Entity = 0

    def register(self, component_type: Any) -> None:
        """
        Declare a component column.

        Registering the same type twice is a no-op.
        """
        if component_type not in self.columns:
            self.columns[component_type] = {}
            logger.debug("Registered component column %s", _type_name(component_type))

    def _column_for(self, component: Any) -> dict[Entity, Any]:
        for key, column in self.columns.items():
            if isinstance(component, key):
                return column
        raise TypeError(f"Unregistered component type: {type(component).__name__}")

    def _resolve(self, component_type: Any) -> dict[Entity, Any]:
        try:
            return self.columns[component_type]
        except KeyError:
            raise TypeError(f"Unregistered component type: {_type_name(component_type)}") from None

    def spawn(self, *components: Any) -> Entity:
        """
        Create a new entity carrying the given components.

        Components are validated against the registered columns before
        anything is stored, so a failed spawn leaves the store unchanged.

        Returns:
            The new entity handle.
        """
        targets = [self._column_for(c) for c in components]
        entity = self._next_entity
        self._next_entity += 1
        for column, component in zip(targets, components):
            column[entity] = component
        return entity

    def insert(self, entity: Entity, component: Any) -> None:
        """Attach (or replace) a component on an existing entity."""
        self._check_entity(entity)
        self._column_for(component)[entity] = component

    def get(self, entity: Entity, component_type: Any) -> Any:
        """
        Fetch one component of an entity.

        Raises:
            KeyError: If the entity does not exist or lacks the component.
        """
        self._check_entity(entity)
        column = self._resolve(component_type)
        try:
            return column[entity]
        except KeyError:
            raise KeyError(
                f"Entity {entity} has no {_type_name(component_type)} component"
            ) from None

    def has(self, entity: Entity, component_type: Any) -> bool:
        return entity in self._resolve(component_type)

    def query(self, *component_types: Any) -> Iterator[tuple[Entity, tuple]]:
        """
        Iterate entities carrying all of the requested components.

        Yields:
            (entity, (component, ...)) in spawn order, components in the
            order they were requested.
        """
        if not component_types:
            return
        columns = [self._resolve(t) for t in component_types]
        # Drive the join from the smallest column, then restore spawn order.
        driver = min(columns, key=len)
        for entity in sorted(driver):
            if all(entity in c for c in columns):
                yield entity, tuple(c[entity] for c in columns)

    def entities(self) -> range:
        """All entity handles ever spawned."""
        return range(self._next_entity)

    def _check_entity(self, entity: Entity) -> None:
        if entity not in self:
            raise KeyError(f"Unknown entity: {entity}")

    def __contains__(self, entity: object) -> bool:
        return isinstance(entity, int) and 0 <= entity < self._next_entity

    def __len__(self) -> int:
        return self._next_entity


def _type_name(t: Any) -> str:
    return getattr(t, "__name__", None) or repr(t)
