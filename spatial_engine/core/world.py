"""
World container for entities and systems.

The World owns:
- All entities of a scene
- The systems that run over them each tick
- A component index for fast queries

Usage:
    store = SoundInstanceStore()
    world = World()
    world.add_system(SpacialAudioSystem(store, config=SpacialAudioConfig()))
    world.add_system(InstanceCleanupSystem(store))

    camera = world.create_entity("Camera")
    camera.add(Transform())
    camera.add(AudioReceiver())

    # In the host loop:
    world.update(dt)
"""

from __future__ import annotations

import logging
from typing import Iterator

from spatial_engine.core.component import Component
from spatial_engine.core.entity import Entity
from spatial_engine.core.system import System


class World:
    """
    Container for entities and systems.

    Entities keep insertion order, so queries yield them in the order they
    were added. Destruction is deferred to the end of update().
    """

    def __init__(self):
        self._entities: dict[int, Entity] = {}
        self._entities_to_destroy: list[int] = []

        # component type -> entity ids
        self._component_index: dict[type[Component], set[int]] = {}

        # Sorted by priority, highest first
        self._systems: list[System] = []

    # Entity Management

    def create_entity(self, name: str = "") -> Entity:
        """Create a new entity in this world."""
        entity = Entity(name)
        self._add_entity(entity)
        return entity

    def add_entity(self, entity: Entity) -> Entity:
        """
        Add an existing entity (and its components) to this world.

        Raises:
            ValueError: If the entity is already in this world
        """
        if entity.id in self._entities:
            raise ValueError(f"Entity {entity.id} already in world")

        self._add_entity(entity)
        return entity

    def _add_entity(self, entity: Entity) -> None:
        entity._world = self
        self._entities[entity.id] = entity

        for component in entity.components:
            self._index_component(entity, type(component))

    def destroy_entity(self, entity: Entity | int) -> None:
        """Mark an entity for removal at the end of the current update."""
        entity_id = entity.id if isinstance(entity, Entity) else entity

        if entity_id not in self._entities:
            return

        if entity_id not in self._entities_to_destroy:
            self._entities_to_destroy.append(entity_id)

    def _process_destroyed_entities(self) -> None:
        for entity_id in self._entities_to_destroy:
            entity = self._entities.pop(entity_id, None)
            if entity is None:
                continue

            for component in entity.components:
                self._unindex_component(entity, type(component))

            entity._world = None
            logging.debug(f"Destroyed entity {entity.name}")

        self._entities_to_destroy.clear()

    def get_entity(self, entity_id: int) -> Entity | None:
        return self._entities.get(entity_id)

    @property
    def entities(self) -> Iterator[Entity]:
        return iter(list(self._entities.values()))

    @property
    def entity_count(self) -> int:
        return len(self._entities)

    # Component indexing

    def _index_component(self, entity: Entity, component_type: type[Component]) -> None:
        self._component_index.setdefault(component_type, set()).add(entity.id)

    def _unindex_component(self, entity: Entity, component_type: type[Component]) -> None:
        if component_type in self._component_index:
            self._component_index[component_type].discard(entity.id)

    def _on_component_added(self, entity: Entity, component_type: type[Component]) -> None:
        self._index_component(entity, component_type)

    def _on_component_removed(self, entity: Entity, component_type: type[Component]) -> None:
        self._unindex_component(entity, component_type)

    # Queries

    def get_entities_with(self, *component_types: type[Component]) -> Iterator[Entity]:
        """
        Get all entities that have ALL specified components.

        Yields entities in insertion order.
        """
        if not component_types:
            return iter([])

        candidate_ids: set[int] | None = None
        for comp_type in component_types:
            ids = self._component_index.get(comp_type)
            if not ids:
                return iter([])
            candidate_ids = set(ids) if candidate_ids is None else candidate_ids & ids

        return iter([
            entity for entity_id, entity in list(self._entities.items())
            if entity_id in candidate_ids
        ])

    # System Management

    def add_system(self, system: System) -> None:
        self._systems.append(system)
        self._systems.sort(key=lambda s: -s.priority)
        system.on_add(self)

    def remove_system(self, system: System) -> None:
        if system in self._systems:
            self._systems.remove(system)
            system.on_remove()

    def get_system(self, system_type: type[System]) -> System | None:
        for system in self._systems:
            if isinstance(system, system_type):
                return system
        return None

    @property
    def systems(self) -> list[System]:
        return list(self._systems)

    # Update

    def update(self, dt: float) -> None:
        """Run every enabled system once, then flush destroyed entities."""
        for system in self._systems:
            if system.enabled:
                system.update(dt)

        self._process_destroyed_entities()
