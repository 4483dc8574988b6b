"""The scene: camera, primitives, lights and ambient intensity."""

from __future__ import annotations

from raytracer.camera import Camera
from raytracer.composite import CompositePrimitive
from raytracer.lights import CompositeLight, Light
from raytracer.shapes import Primitive


class Scene:
    """Everything that is rendered, plus the camera that looks at it.

    Every primitive and light added is kept both in a flat sequence and in a
    root group, so the scene can be traversed either way.
    """

    def __init__(self, camera: Camera | None = None) -> None:
        self.camera: Camera = camera if camera is not None else Camera()
        self.ambient_intensity: float = 0.0
        self._primitives: list[Primitive] = []
        self._lights: list[Light] = []
        self._root_primitive = CompositePrimitive()
        self._root_light = CompositeLight()

    def add_primitive(self, primitive: Primitive) -> None:
        """Add ``primitive`` to the scene and to its root group."""
        self._root_primitive.add_primitive(primitive)
        self._primitives.append(primitive)

    def add_light(self, light: Light) -> None:
        """Add ``light`` to the scene and to its root group."""
        self._root_light.add_light(light)
        self._lights.append(light)

    @property
    def primitives(self) -> tuple[Primitive, ...]:
        """The primitives, in the order they were added."""
        return tuple(self._primitives)

    @property
    def lights(self) -> tuple[Light, ...]:
        """The lights, in the order they were added."""
        return tuple(self._lights)

    @property
    def root_primitive(self) -> CompositePrimitive:
        """The group holding every primitive of the scene."""
        return self._root_primitive

    @property
    def root_light(self) -> CompositeLight:
        """The group holding every light of the scene."""
        return self._root_light