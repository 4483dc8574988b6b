"""Colours, materials and the flat or round primitives: sphere, plane, triangle."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from raytracer.geometry import Ray, Vector3

EPSILON = 1e-4


@dataclass(frozen=True)
class Color:
    """An RGB colour with integer channels."""

    r: int = 0
    g: int = 0
    b: int = 0


class MaterialType(Enum):
    """How a material interacts with light."""

    FLAT_COLOR = "flat_color"
    LAMBERTIAN = "lambertian"
    METAL = "metal"
    DIELECTRIC = "dielectric"
    EMISSIVE = "emissive"


@dataclass
class Material:
    """Surface properties of a primitive."""

    type: MaterialType = MaterialType.FLAT_COLOR
    color: Color = field(default_factory=lambda: Color(255, 255, 255))
    roughness: float = 0.0
    metalness: float = 0.0
    reflectivity: float = 0.0
    transparency: float = 0.0
    refractive_index: float = 1.0
    emissive_intensity: float = 0.0


class Primitive(ABC):
    """A renderable shape with a material and a centre point."""

    material: Material
    center: Vector3

    @abstractmethod
    def intersect(self, ray: Ray) -> float | None:
        """Return the distance along ``ray`` to the nearest hit, or None."""

    @abstractmethod
    def normal_at(self, point: Vector3) -> Vector3:
        """Return the unit surface normal at ``point``."""

    @property
    def color(self) -> Color:
        """The colour of the primitive's material."""
        return self.material.color


@dataclass
class Sphere(Primitive):
    """A sphere given by its centre and radius."""

    center: Vector3
    radius: float
    material: Material = field(default_factory=Material)

    def intersect(self, ray: Ray) -> float | None:
        oc = ray.origin - self.center
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = half_b * half_b - c
        if discriminant < 0.0:
            return None
        root = math.sqrt(discriminant)
        for t in (-half_b - root, -half_b + root):
            if t > EPSILON:
                return t
        return None

    def normal_at(self, point: Vector3) -> Vector3:
        return (point - self.center).normalized()


@dataclass
class Plane(Primitive):
    """An infinite plane of points ``p`` with ``normal . p == distance``."""

    normal: Vector3
    distance: float
    material: Material = field(default_factory=Material)

    def intersect(self, ray: Ray) -> float | None:
        denominator = self.normal.dot(ray.direction)
        if abs(denominator) < 1e-9:
            return None
        t = (self.distance - self.normal.dot(ray.origin)) / denominator
        return t if t > EPSILON else None

    def normal_at(self, point: Vector3) -> Vector3:
        return self.normal

    @property
    def center(self) -> Vector3:
        """The point of the plane closest along the normal to the origin."""
        return self.normal * self.distance


@dataclass
class Triangle(Primitive):
    """A triangle given by three vertices, intersected with Möller–Trumbore."""

    a: Vector3
    b: Vector3
    c: Vector3
    material: Material = field(default_factory=Material)
    edge1: Vector3 = field(init=False, repr=False)
    edge2: Vector3 = field(init=False, repr=False)
    normal: Vector3 = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.edge1 = self.b - self.a
        self.edge2 = self.c - self.a
        self.normal = self.edge1.cross(self.edge2).normalized()

    def intersect(self, ray: Ray) -> float | None:
        p = ray.direction.cross(self.edge2)
        det = self.edge1.dot(p)
        if abs(det) < 1e-9:
            return None
        inv_det = 1.0 / det
        s = ray.origin - self.a
        u = s.dot(p) * inv_det
        if u < 0.0 or u > 1.0:
            return None
        q = s.cross(self.edge1)
        v = ray.direction.dot(q) * inv_det
        if v < 0.0 or u + v > 1.0:
            return None
        t = self.edge2.dot(q) * inv_det
        return t if t > EPSILON else None

    def normal_at(self, point: Vector3) -> Vector3:
        return self.normal

    @property
    def center(self) -> Vector3:
        """The centroid of the three vertices."""
        return (self.a + self.b + self.c) / 3.0

    @property
    def base_center(self) -> Vector3:
        """Same as :attr:`center`."""
        return self.center