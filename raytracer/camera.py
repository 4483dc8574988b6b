"""The camera through which a scene is viewed."""

from __future__ import annotations

from dataclasses import dataclass, field

from raytracer.geometry import Vector3


@dataclass
class Camera:
    """Camera position, rotation in degrees, field of view and image size."""

    position: Vector3 = field(default_factory=Vector3)
    rotation: Vector3 = field(default_factory=Vector3)
    field_of_view: float = 60.0
    width: int = 800
    height: int = 600

    def set_resolution(self, width: int, height: int) -> None:
        """Set the image width and height in pixels."""
        self.width = width
        self.height = height