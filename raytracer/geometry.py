"""Basic geometry: three-component vectors, rays and the package error type."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

EXIT_FAILURE_TECH = 84


class RaytracerError(Exception):
    """Error raised for any failure while building or rendering a scene."""


@dataclass(frozen=True)
class Vector3:
    """An immutable vector or point in 3D space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector3:
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: Vector3) -> float:
        """Return the scalar product with ``other``."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        """Return the vector product with ``other``."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        """Return the Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vector3:
        """Return a unit vector in the same direction; the zero vector stays zero."""
        norm = self.length()
        if norm == 0.0:
            return Vector3()
        return self / norm


@dataclass(frozen=True)
class Ray:
    """A half-line defined by an origin and a direction, normalised on creation."""

    origin: Vector3
    direction: Vector3

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalized())

    def at(self, t: float) -> Vector3:
        """Return the point ``origin + t * direction``."""
        return self.origin + self.direction * t