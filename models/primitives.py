"""
Shared primitive data types for the maze behavior.

This module provides the basic 3D geometric and color types used throughout
the codebase: world positions, orientations and object colors.
"""

import math
from typing import Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class Vec3(BaseModel):
    """Immutable 3D point/vector in world coordinates.

    Used for positions, offsets, dimensions and gravity. World space is
    right-handed with +y up and -z forward.

    Attributes:
        x: X coordinate (right)
        y: Y coordinate (up)
        z: Z coordinate (back)

    Examples:
        >>> a = Vec3(x=1.0, y=0.0, z=0.0)
        >>> (a * 2).x
        2.0
        >>> a.distance_to(Vec3.zero())
        1.0
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    model_config = ConfigDict(frozen=True)

    @classmethod
    def zero(cls) -> "Vec3":
        return cls(x=0.0, y=0.0, z=0.0)

    @classmethod
    def from_tuple(cls, values) -> "Vec3":
        """Build from any (x, y, z) sequence."""
        x, y, z = values
        return cls(x=x, y=y, z=z)

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(x=self.x - other.x, y=self.y - other.y, z=self.z - other.z)

    def __mul__(self, scalar: float) -> "Vec3":
        return Vec3(x=self.x * scalar, y=self.y * scalar, z=self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Vec3":
        return Vec3(x=-self.x, y=-self.y, z=-self.z)

    def dot(self, other: "Vec3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        return Vec3(
            x=self.y * other.z - self.z * other.y,
            y=self.z * other.x - self.x * other.z,
            z=self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def distance_to(self, other: "Vec3") -> float:
        """Straight-line Euclidean distance to another point."""
        return (self - other).length()

    @property
    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Vec3(x={self.x:.3f}, y={self.y:.3f}, z={self.z:.3f})"


# World basis vectors
VEC3_RIGHT = Vec3(x=1.0, y=0.0, z=0.0)
VEC3_UP = Vec3(x=0.0, y=1.0, z=0.0)
VEC3_FRONT = Vec3(x=0.0, y=0.0, z=-1.0)


class Quat(BaseModel):
    """Immutable orientation quaternion.

    Defaults to the identity rotation. The quaternion is used as-is; callers
    supplying non-unit quaternions get a scaled rotation.

    Examples:
        >>> Quat().front()
        Vec3(x=0.0, y=0.0, z=-1.0)
    """
    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    model_config = ConfigDict(frozen=True)

    @classmethod
    def identity(cls) -> "Quat":
        return cls()

    @classmethod
    def from_axis_angle(cls, axis: Vec3, degrees: float) -> "Quat":
        """Rotation of `degrees` around `axis` (right-hand rule)."""
        length = axis.length()
        if length == 0:
            return cls()
        half = math.radians(degrees) / 2
        s = math.sin(half) / length
        return cls(w=math.cos(half), x=axis.x * s, y=axis.y * s, z=axis.z * s)

    def rotate(self, v: Vec3) -> Vec3:
        """Rotate a vector by this quaternion."""
        q = Vec3(x=self.x, y=self.y, z=self.z)
        t = q.cross(v) * 2.0
        return v + t * self.w + q.cross(t)

    def right(self) -> Vec3:
        return self.rotate(VEC3_RIGHT)

    def up(self) -> Vec3:
        return self.rotate(VEC3_UP)

    def front(self) -> Vec3:
        return self.rotate(VEC3_FRONT)

    def __str__(self) -> str:
        return f"Quat(w={self.w:.3f}, x={self.x:.3f}, y={self.y:.3f}, z={self.z:.3f})"


class Color(BaseModel):
    """Immutable RGB color with validation.

    All color components must be in the range [0, 255] inclusive.

    Examples:
        >>> red = Color(red=255, green=0, blue=0)
    """
    red: int
    green: int
    blue: int

    @field_validator('red', 'green', 'blue')
    @classmethod
    def validate_color_range(cls, v: int) -> int:
        """Validate color components are in valid range [0, 255]."""
        if not 0 <= v <= 255:
            raise ValueError(f'Color component must be in range [0, 255], got {v}')
        return v

    @property
    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"Color(red={self.red}, green={self.green}, blue={self.blue})"
