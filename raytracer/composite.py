"""Groups of primitives that behave as one primitive."""

from __future__ import annotations

from typing import Iterable, Iterator

from raytracer.geometry import Ray, Vector3
from raytracer.shapes import Material, Primitive


class CompositePrimitive(Primitive):
    """A group of primitives; a ray hits the closest member.

    After a hit, the normal and material are those of the member that was hit.
    """

    def __init__(
        self,
        material: Material | None = None,
        primitives: Iterable[Primitive] = (),
    ) -> None:
        self._material = material if material is not None else Material()
        self.primitives: list[Primitive] = list(primitives)
        self._last_hit: Primitive | None = None

    def add_primitive(self, primitive: Primitive) -> None:
        """Append ``primitive`` to the group."""
        self.primitives.append(primitive)

    def intersect(self, ray: Ray) -> float | None:
        closest: float | None = None
        for primitive in self.primitives:
            t = primitive.intersect(ray)
            if t is not None and (closest is None or t < closest):
                closest = t
                self._last_hit = primitive
        return closest

    def normal_at(self, point: Vector3) -> Vector3:
        """Normal of the member last hit; straight up before any hit."""
        if self._last_hit is None:
            return Vector3(0.0, 1.0, 0.0)
        return self._last_hit.normal_at(point)

    @property
    def material(self) -> Material:
        """Material of the member last hit, or the group's own material."""
        if self._last_hit is None:
            return self._material
        return self._last_hit.material

    @property
    def center(self) -> Vector3:
        """Average of the members' centres; the origin when empty."""
        if not self.primitives:
            return Vector3()
        total = Vector3()
        for primitive in self.primitives:
            total = total + primitive.center
        return total / len(self.primitives)

    def __len__(self) -> int:
        return len(self.primitives)

    def __getitem__(self, index: int) -> Primitive:
        return self.primitives[index]

    def __iter__(self) -> Iterator[Primitive]:
        return iter(list(self.primitives))