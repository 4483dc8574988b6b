"""Light sources: ambient, point, directional and groups of lights."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from raytracer.geometry import Vector3


class Light(ABC):
    """A light source; every light has an ``intensity`` attribute."""

    intensity: float

    @abstractmethod
    def direction_from(self, point: Vector3) -> Vector3:
        """Return the unit direction from ``point`` towards the light."""


@dataclass
class AmbientLight(Light):
    """Uniform light that reaches every surface."""

    position: Vector3
    intensity: float

    def direction_from(self, point: Vector3) -> Vector3:
        return (self.position - point).normalized()


@dataclass
class PointLight(Light):
    """Light emitted from a single point in all directions."""

    position: Vector3
    intensity: float = 1.0

    def direction_from(self, point: Vector3) -> Vector3:
        return (self.position - point).normalized()


@dataclass
class DirectionalLight(Light):
    """Light with parallel rays, such as the sun; the direction is normalised."""

    position: Vector3
    direction: Vector3
    intensity: float = 1.0

    def __post_init__(self) -> None:
        self.direction = self.direction.normalized()

    def direction_from(self, point: Vector3) -> Vector3:
        return self.direction


@dataclass
class CompositeLight(Light):
    """A group of lights treated as one."""

    lights: list[Light] = field(default_factory=list)
    _current_index: int = field(default=0, init=False, repr=False)

    def __init__(self, lights: Iterable[Light] = ()) -> None:
        self.lights = list(lights)
        self._current_index = 0

    def add_light(self, light: Light) -> None:
        """Append ``light`` to the group."""
        self.lights.append(light)

    def direction_from(self, point: Vector3) -> Vector3:
        """Direction of the selected child light; straight up when empty."""
        if not self.lights:
            return Vector3(0.0, 1.0, 0.0)
        index = 0
        if len(self.lights) > 1:
            index = (self._current_index + 1) % len(self.lights)
        return self.lights[index].direction_from(point)

    @property
    def intensity(self) -> float:
        """Sum of the child intensities, capped at 1."""
        if not self.lights:
            return 0.0
        return min(sum(light.intensity for light in self.lights), 1.0)

    def __len__(self) -> int:
        return len(self.lights)

    def __iter__(self) -> Iterator[Light]:
        return iter(list(self.lights))