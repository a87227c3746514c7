"""
Scene components shared by engine systems.

All components are Pydantic models containing only data.
"""

from spatial_engine.components.transform import (
    IDENTITY,
    Transform,
    quat_from_axis_angle,
    quat_mul,
    quat_rotate,
)

__all__ = [
    "IDENTITY",
    "Transform",
    "quat_from_axis_angle",
    "quat_mul",
    "quat_rotate",
]
