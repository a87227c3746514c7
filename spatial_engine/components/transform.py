"""
Transform component - world-space position and orientation in 3D.

Orientation is a unit quaternion stored as (x, y, z, w). Axis
convention is right-handed, Y up: an unrotated transform looks
down -Z with +X on its right.
"""

from __future__ import annotations

import math

import numpy as np
from pydantic import field_validator

from spatial_engine.core.component import Component


Quat = tuple[float, float, float, float]

IDENTITY: Quat = (0.0, 0.0, 0.0, 1.0)

_X = np.array([1.0, 0.0, 0.0])
_Y = np.array([0.0, 1.0, 0.0])
_Z = np.array([0.0, 0.0, 1.0])


def quat_from_axis_angle(axis, angle: float) -> Quat:
    """Quaternion rotating `angle` radians about `axis`."""
    axis = np.asarray(axis, dtype=np.float64)
    axis = axis / np.linalg.norm(axis)
    s = math.sin(angle * 0.5)
    return (float(axis[0] * s), float(axis[1] * s), float(axis[2] * s), math.cos(angle * 0.5))


def quat_mul(a: Quat, b: Quat) -> Quat:
    """Hamilton product a * b (apply b, then a)."""
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return (
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    )


def quat_rotate(q: Quat, v: np.ndarray) -> np.ndarray:
    """Rotate vector v by unit quaternion q."""
    qv = np.array(q[:3], dtype=np.float64)
    t = 2.0 * np.cross(qv, v)
    return v + q[3] * t + np.cross(qv, t)


def quat_from_basis(right: np.ndarray, up: np.ndarray, back: np.ndarray) -> Quat:
    """Quaternion for the rotation matrix with columns (right, up, back)."""
    m00, m10, m20 = right
    m01, m11, m21 = up
    m02, m12, m22 = back

    trace = m00 + m11 + m22
    if trace > 0.0:
        s = math.sqrt(trace + 1.0) * 2.0
        q = ((m21 - m12) / s, (m02 - m20) / s, (m10 - m01) / s, 0.25 * s)
    elif m00 > m11 and m00 > m22:
        s = math.sqrt(1.0 + m00 - m11 - m22) * 2.0
        q = (0.25 * s, (m01 + m10) / s, (m02 + m20) / s, (m21 - m12) / s)
    elif m11 > m22:
        s = math.sqrt(1.0 + m11 - m00 - m22) * 2.0
        q = ((m01 + m10) / s, 0.25 * s, (m12 + m21) / s, (m02 - m20) / s)
    else:
        s = math.sqrt(1.0 + m22 - m00 - m11) * 2.0
        q = ((m02 + m20) / s, (m12 + m21) / s, 0.25 * s, (m10 - m01) / s)
    return tuple(float(c) for c in q)  # type: ignore[return-value]


class Transform(Component):
    """
    Position and orientation in world space.

    Attributes:
        x, y, z: World position
        rotation: Quaternion (x, y, z, w), normalized on assignment

    Direction vectors (forward, back, right, ...) are derived from
    rotation and returned as float64 numpy arrays.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    rotation: Quat = IDENTITY

    @field_validator('rotation')
    @classmethod
    def _normalize_rotation(cls, value: Quat) -> Quat:
        """Direction vectors are only unit length for a unit quaternion."""
        length = math.sqrt(sum(c * c for c in value))
        if length == 0.0 or not math.isfinite(length):
            raise ValueError(f"rotation must be a non-zero finite quaternion, got {value}")
        return tuple(c / length for c in value)  # type: ignore[return-value]

    @classmethod
    def from_xyz(cls, x: float, y: float, z: float) -> Transform:
        return cls(x=x, y=y, z=z)

    @property
    def position(self) -> tuple[float, float, float]:
        """Get position as tuple."""
        return (self.x, self.y, self.z)

    @position.setter
    def position(self, value: tuple[float, float, float]) -> None:
        self.x, self.y, self.z = value

    @property
    def translation(self) -> np.ndarray:
        """Position as a numpy vector."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    # Direction vectors

    @property
    def right(self) -> np.ndarray:
        return quat_rotate(self.rotation, _X)

    @property
    def left(self) -> np.ndarray:
        return -self.right

    @property
    def up(self) -> np.ndarray:
        return quat_rotate(self.rotation, _Y)

    @property
    def down(self) -> np.ndarray:
        return -self.up

    @property
    def back(self) -> np.ndarray:
        return quat_rotate(self.rotation, _Z)

    @property
    def forward(self) -> np.ndarray:
        """Viewing direction (-Z in local space)."""
        return -self.back

    # Mutation helpers

    def move(self, dx: float, dy: float, dz: float = 0.0) -> None:
        """Move by delta."""
        self.x += dx
        self.y += dy
        self.z += dz

    def move_to(self, x: float, y: float, z: float = 0.0) -> None:
        self.x = x
        self.y = y
        self.z = z

    def distance_to(self, other: Transform) -> float:
        """Euclidean distance to another transform."""
        return float(np.linalg.norm(other.translation - self.translation))

    def rotate_axis(self, axis, angle: float) -> None:
        """Rotate around a world-space axis by angle (radians)."""
        self.rotation = quat_mul(quat_from_axis_angle(axis, angle), self.rotation)

    def rotate_y(self, angle: float) -> None:
        """Yaw around world +Y. Positive angles turn left."""
        self.rotate_axis(_Y, angle)

    def look_at(self, target, up=(0.0, 1.0, 0.0)) -> None:
        """
        Rotate so that forward points at target.

        Args:
            target: World-space point to face
            up: Approximate up direction, must not be parallel to the view
        """
        direction = np.asarray(target, dtype=np.float64) - self.translation
        length = np.linalg.norm(direction)
        if length == 0.0:
            return

        back = -direction / length
        right = np.cross(np.asarray(up, dtype=np.float64), back)
        right_len = np.linalg.norm(right)
        if right_len == 0.0:
            return
        right = right / right_len
        true_up = np.cross(back, right)
        self.rotation = quat_from_basis(right, true_up, back)
