"""
System base class for per-tick processors.

Systems select entities by component combination and run logic over
them once per tick. The spatial audio passes are exposed as Systems so a
host loop can drive them through World.update.

Usage:
    class InstanceCleanupSystem(System):
        required_components = [AudioEmitter]

        def process_entity(self, entity: Entity, dt: float) -> None:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Iterator

from spatial_engine.core.component import Component

if TYPE_CHECKING:
    from spatial_engine.core.entity import Entity
    from spatial_engine.core.world import World


class System(ABC):
    """
    Base class for all systems.

    Override required_components to choose entities and
    process_entity to act on each of them.
    """

    required_components: ClassVar[list[type[Component]]] = []

    # Higher runs earlier
    priority: ClassVar[int] = 0

    enabled: bool = True

    def __init__(self):
        self._world: World | None = None

    @property
    def world(self) -> World:
        """Get the world this system belongs to."""
        if self._world is None:
            raise RuntimeError(f"System {self.__class__.__name__} not attached to world")
        return self._world

    def on_add(self, world: World) -> None:
        self._world = world

    def on_remove(self) -> None:
        self._world = None

    def get_entities(self) -> Iterator[Entity]:
        """Entities that carry every required component."""
        if self._world is None:
            return iter([])

        if not self.required_components:
            return self._world.entities

        return self._world.get_entities_with(*self.required_components)

    def update(self, dt: float) -> None:
        """
        Run one tick.

        Default implementation calls process_entity for each active
        matching entity, bracketed by pre_update/post_update.
        """
        if not self.enabled:
            return

        self.pre_update(dt)

        for entity in self.get_entities():
            if entity.active:
                self.process_entity(entity, dt)

        self.post_update(dt)

    def pre_update(self, dt: float) -> None:
        pass

    def post_update(self, dt: float) -> None:
        pass

    @abstractmethod
    def process_entity(self, entity: Entity, dt: float) -> None:
        """Process a single entity."""

    def __repr__(self) -> str:
        required = ", ".join(c.__name__ for c in self.required_components)
        return f"{self.__class__.__name__}(requires=[{required}])"
