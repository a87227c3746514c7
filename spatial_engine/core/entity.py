"""
Entity class - a container for components.

An entity is a scene object that may carry a Transform plus an
AudioEmitter or AudioReceiver. It has no behavior of its own.

Usage:
    speaker = Entity("Speaker")
    speaker.add(Transform(x=10.0))
    speaker.add(AudioEmitter(range=5.0))

    emitter = speaker.get(AudioEmitter)
    if speaker.has(Transform):
        position = speaker.get(Transform).translation
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, Iterator, TypeVar

from spatial_engine.core.component import Component

if TYPE_CHECKING:
    from spatial_engine.core.world import World


C = TypeVar('C', bound=Component)


class Entity:
    """
    A container for components, identified by a unique id.

    At most one component of each type may be attached.
    """

    _id_counter = itertools.count(1)

    def __init__(self, name: str = ""):
        self._id = next(Entity._id_counter)
        self._name = name or f"Entity_{self._id}"
        self._components: dict[type[Component], Component] = {}
        self._active = True
        self._world: World | None = None

    @property
    def id(self) -> int:
        """Unique entity identifier."""
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def active(self) -> bool:
        """Inactive entities are skipped by systems."""
        return self._active

    @active.setter
    def active(self, value: bool) -> None:
        self._active = value

    @property
    def world(self) -> World | None:
        return self._world

    def add(self, component: C) -> C:
        """
        Attach a component.

        Returns:
            The added component (for chaining)

        Raises:
            ValueError: If the entity already has this component type
        """
        comp_type = type(component)

        if comp_type in self._components:
            raise ValueError(
                f"Entity {self._name} already has component {comp_type.__name__}"
            )

        component._entity_id = self._id
        self._components[comp_type] = component

        if self._world is not None:
            self._world._on_component_added(self, comp_type)

        return component

    def remove(self, component_type: type[C]) -> C | None:
        """Detach a component, returning it or None if it was not attached."""
        component = self._components.pop(component_type, None)

        if component is not None:
            component._entity_id = None
            if self._world is not None:
                self._world._on_component_removed(self, component_type)

        return component  # type: ignore[return-value]

    def get(self, component_type: type[C]) -> C:
        """
        Get a component by type.

        Raises:
            KeyError: If the component is not attached
        """
        if component_type not in self._components:
            raise KeyError(
                f"Entity {self._name} does not have component {component_type.__name__}"
            )
        return self._components[component_type]  # type: ignore[return-value]

    def try_get(self, component_type: type[C]) -> C | None:
        return self._components.get(component_type)  # type: ignore[return-value]

    def has(self, *component_types: type[Component]) -> bool:
        """Check if entity has all specified component types."""
        return all(ct in self._components for ct in component_types)

    @property
    def components(self) -> Iterator[Component]:
        return iter(self._components.values())

    def __repr__(self) -> str:
        components = ", ".join(c.__name__ for c in self._components)
        return f"Entity({self._name}, id={self._id}, components=[{components}])"

    def __hash__(self) -> int:
        return hash(self._id)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Entity):
            return self._id == other._id
        return False
