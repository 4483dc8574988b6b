"""Rotatable solids with an axis: cylinders and cones."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from raytracer.geometry import Ray, RaytracerError, Vector3
from raytracer.shapes import EPSILON, Material, Primitive

_UP = Vector3(0.0, 1.0, 0.0)
_CAP_TOLERANCE = 1e-3


def _rotate(v: Vector3, rotation: Vector3) -> Vector3:
    """Rotate ``v`` by the angles in degrees about X, then Y, then Z."""
    rx, ry, rz = (math.radians(a) for a in rotation)
    x, y, z = v
    y, z = y * math.cos(rx) - z * math.sin(rx), y * math.sin(rx) + z * math.cos(rx)
    x, z = x * math.cos(ry) + z * math.sin(ry), -x * math.sin(ry) + z * math.cos(ry)
    x, y = x * math.cos(rz) - y * math.sin(rz), x * math.sin(rz) + y * math.cos(rz)
    return Vector3(x, y, z)


def _unrotate(v: Vector3, rotation: Vector3) -> Vector3:
    """Undo :func:`_rotate`."""
    rx, ry, rz = (math.radians(-a) for a in rotation)
    x, y, z = v
    x, y = x * math.cos(rz) - y * math.sin(rz), x * math.sin(rz) + y * math.cos(rz)
    x, z = x * math.cos(ry) + z * math.sin(ry), -x * math.sin(ry) + z * math.cos(ry)
    y, z = y * math.cos(rx) - z * math.sin(rx), y * math.sin(rx) + z * math.cos(rx)
    return Vector3(x, y, z)


def _quadratic_roots(a: float, b: float, c: float) -> list[float]:
    if abs(a) < 1e-12:
        return [-c / b] if abs(b) > 1e-12 else []
    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return []
    root = math.sqrt(discriminant)
    return [(-b - root) / (2.0 * a), (-b + root) / (2.0 * a)]


@dataclass
class _AxialSolid(Primitive):
    base_center: Vector3
    radius: float
    height: float
    rotation: Vector3 = field(default_factory=Vector3)
    material: Material = field(default_factory=Material)

    @property
    def infinite(self) -> bool:
        """Whether the solid extends without end along its axis."""
        return math.isinf(self.height)

    @property
    def axis(self) -> Vector3:
        """Unit direction from the base along the solid."""
        return _rotate(_UP, self.rotation).normalized()

    def _to_local(self, point: Vector3) -> Vector3:
        return _unrotate(point - self.base_center, self.rotation)

    def _to_local_direction(self, direction: Vector3) -> Vector3:
        return _unrotate(direction, self.rotation)

    def _to_world_direction(self, direction: Vector3) -> Vector3:
        return _rotate(direction, self.rotation).normalized()

    def _cap_hits(self, origin: Vector3, direction: Vector3, levels: tuple[float, ...]):
        if abs(direction.y) < 1e-12:
            return
        for level in levels:
            t = (level - origin.y) / direction.y
            if t <= EPSILON:
                continue
            px = origin.x + t * direction.x
            pz = origin.z + t * direction.z
            if px * px + pz * pz <= self.radius * self.radius:
                yield t


@dataclass
class Cylinder(_AxialSolid):
    """A cylinder standing on ``base_center``; finite ones are closed by caps."""

    def intersect(self, ray: Ray) -> float | None:
        o = self._to_local(ray.origin)
        d = self._to_local_direction(ray.direction)
        hits: list[float] = []
        a = d.x * d.x + d.z * d.z
        if a > 1e-12:
            b = 2.0 * (o.x * d.x + o.z * d.z)
            c = o.x * o.x + o.z * o.z - self.radius * self.radius
            for t in _quadratic_roots(a, b, c):
                y = o.y + t * d.y
                if t > EPSILON and (self.infinite or 0.0 <= y <= self.height):
                    hits.append(t)
        if not self.infinite:
            hits.extend(self._cap_hits(o, d, (0.0, self.height)))
        return min(hits, default=None)

    def normal_at(self, point: Vector3) -> Vector3:
        p = self._to_local(point)
        if not self.infinite:
            if abs(p.y) < _CAP_TOLERANCE:
                return self._to_world_direction(Vector3(0.0, -1.0, 0.0))
            if abs(p.y - self.height) < _CAP_TOLERANCE:
                return self._to_world_direction(_UP)
        return self._to_world_direction(Vector3(p.x, 0.0, p.z))

    @property
    def center(self) -> Vector3:
        """Halfway along the axis; the base centre for an infinite cylinder."""
        if self.infinite:
            return self.base_center
        return self.base_center + self.axis * (self.height / 2.0)


@dataclass
class Cone(_AxialSolid):
    """A cone with its base disc on ``base_center`` narrowing to an apex.

    A finite cone has its apex ``height`` above the base.  An infinite cone has
    its apex at ``base_center`` and widens by ``radius`` per unit of height.
    """

    def __post_init__(self) -> None:
        if self.height <= 0.0:
            raise RaytracerError("Cone height must be positive")

    @property
    def _slope(self) -> float:
        return self.radius if self.infinite else self.radius / self.height

    @property
    def _apex_level(self) -> float:
        return 0.0 if self.infinite else self.height

    @property
    def apex(self) -> Vector3:
        """The tip of the cone in world space."""
        return self.base_center + self.axis * self._apex_level

    def intersect(self, ray: Ray) -> float | None:
        o = self._to_local(ray.origin)
        d = self._to_local_direction(ray.direction)
        k2 = self._slope * self._slope
        oy = o.y - self._apex_level
        a = d.x * d.x + d.z * d.z - k2 * d.y * d.y
        b = 2.0 * (o.x * d.x + o.z * d.z - k2 * oy * d.y)
        c = o.x * o.x + o.z * o.z - k2 * oy * oy
        hits: list[float] = []
        for t in _quadratic_roots(a, b, c):
            if t <= EPSILON:
                continue
            y = o.y + t * d.y
            if self.infinite:
                if y >= 0.0:
                    hits.append(t)
            elif 0.0 <= y <= self.height:
                hits.append(t)
        if not self.infinite:
            hits.extend(self._cap_hits(o, d, (0.0,)))
        return min(hits, default=None)

    def normal_at(self, point: Vector3) -> Vector3:
        p = self._to_local(point)
        radial = math.hypot(p.x, p.z)
        if not self.infinite and abs(p.y) < _CAP_TOLERANCE and radial <= self.radius:
            return self._to_world_direction(Vector3(0.0, -1.0, 0.0))
        if radial < 1e-9:
            tip = _UP if not self.infinite else Vector3(0.0, -1.0, 0.0)
            return self._to_world_direction(tip)
        lift = self._slope * radial
        if self.infinite:
            lift = -lift
        return self._to_world_direction(Vector3(p.x, lift, p.z))

    @property
    def center(self) -> Vector3:
        """A third of the way from base to apex; the apex for an infinite cone."""
        if self.infinite:
            return self.base_center
        return self.base_center + self.axis * (self.height / 3.0)