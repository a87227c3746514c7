"""
Component base class for data-only components.

Components hold scene state (transforms, emitter tunables, receiver
settings) and nothing else. Spatial audio logic lives in plain functions
and the Systems that call them.

Usage:
    class AudioReceiver(Component):
        self_occlusion: float = 0.0
        active: bool = True
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all components.

    Pydantic gives every component:
    - Validation on construction and assignment
    - Typed defaults
    - Cheap deep copies for snapshots

    Do NOT add methods that mutate other entities here.
    """

    model_config = ConfigDict(
        # Handles and numpy-backed helpers are plain Python objects
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra='forbid',
    )

    # Owning entity id, set by Entity.add
    _entity_id: int | None = None

    @property
    def entity_id(self) -> int | None:
        """Id of the entity this component is attached to."""
        return self._entity_id

    def clone(self) -> Component:
        """Create a deep copy of this component."""
        return self.model_copy(deep=True)
