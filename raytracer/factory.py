"""Functions that build primitives and lights."""

from __future__ import annotations

from raytracer.composite import CompositePrimitive
from raytracer.geometry import Vector3
from raytracer.lights import (
    AmbientLight,
    CompositeLight,
    DirectionalLight,
    Light,
    PointLight,
)
from raytracer.shapes import Material, Plane, Primitive, Sphere, Triangle
from raytracer.solids import Cone, Cylinder
from raytracer.surfaces import TangleCube, Torus


def create_sphere(center: Vector3, radius: float, material: Material) -> Primitive:
    """Build a sphere."""
    return Sphere(center, radius, material)


def create_plane(normal: Vector3, position: float, material: Material) -> Primitive:
    """Build a plane at ``position`` along ``normal``."""
    return Plane(normal, position, material)


def create_cylinder(
    base_center: Vector3,
    radius: float,
    height: float,
    rotation: Vector3,
    material: Material,
) -> Primitive:
    """Build a cylinder."""
    return Cylinder(base_center, radius, height, rotation, material)


def create_cone(
    base_center: Vector3,
    radius: float,
    height: float,
    rotation: Vector3,
    material: Material,
) -> Primitive:
    """Build a cone."""
    return Cone(base_center, radius, height, rotation, material)


def create_triangle(a: Vector3, b: Vector3, c: Vector3, material: Material) -> Primitive:
    """Build a triangle from three vertices."""
    return Triangle(a, b, c, material)


def create_torus(
    center: Vector3,
    major_radius: float,
    minor_radius: float,
    rotation: Vector3,
    material: Material,
) -> Primitive:
    """Build a torus."""
    return Torus(center, major_radius, minor_radius, rotation, material)


def create_tangle_cube(center: Vector3, size: float, material: Material) -> Primitive:
    """Build a tangle cube."""
    return TangleCube(center, size, material)


def create_composite_primitive(material: Material) -> CompositePrimitive:
    """Build an empty group of primitives."""
    return CompositePrimitive(material)


def create_ambient_light(position: Vector3, intensity: float = 0.1) -> Light:
    """Build an ambient light."""
    return AmbientLight(position, intensity)


def create_point_light(position: Vector3, intensity: float = 1.0) -> Light:
    """Build a point light."""
    return PointLight(position, intensity)


def create_directional_light(
    position: Vector3, direction: Vector3, intensity: float = 1.0
) -> Light:
    """Build a directional light."""
    return DirectionalLight(position, direction, intensity)


def create_composite_light() -> CompositeLight:
    """Build an empty group of lights."""
    return CompositeLight()