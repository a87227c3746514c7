"""
Core ECS module.

Exports:
- Entity: Component container
- Component: Pydantic component base
- System: Per-tick processor base class
- World: Entity/system container
"""

from spatial_engine.core.component import Component
from spatial_engine.core.entity import Entity
from spatial_engine.core.system import System
from spatial_engine.core.world import World

__all__ = [
    "Component",
    "Entity",
    "System",
    "World",
]
