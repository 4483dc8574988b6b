"""Curved surfaces described by polynomials: the torus and the tangle cube."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from raytracer.geometry import Ray, Vector3
from raytracer.shapes import EPSILON, Material, Primitive
from raytracer.solids import _rotate, _unrotate

_UP = Vector3(0.0, 1.0, 0.0)

# The tangle cube surface lies inside this radius, in units of its size.
_TANGLE_BOUND = 4.0
_TANGLE_STEP = 0.02
_TANGLE_CONSTANT = 11.8
_BISECTION_STEPS = 50


@dataclass
class Torus(Primitive):
    """A torus around ``center`` whose ring lies in the local XZ plane.

    ``major_radius`` is the distance from the centre to the middle of the tube
    and ``minor_radius`` the radius of the tube. ``rotation`` holds angles in
    degrees about X, then Y, then Z.
    """

    center: Vector3
    major_radius: float
    minor_radius: float
    rotation: Vector3 = field(default_factory=Vector3)
    material: Material = field(default_factory=Material)

    def _to_local(self, point: Vector3) -> Vector3:
        return _unrotate(point - self.center, self.rotation)

    def intersect(self, ray: Ray) -> float | None:
        o = self._to_local(ray.origin)
        d = _unrotate(ray.direction, self.rotation)
        r_major2 = self.major_radius * self.major_radius
        r_minor2 = self.minor_radius * self.minor_radius
        dd = d.dot(d)
        f = o.dot(d)
        k = o.dot(o) + r_major2 - r_minor2
        a2 = d.x * d.x + d.z * d.z
        b2 = o.x * d.x + o.z * d.z
        c2 = o.x * o.x + o.z * o.z
        coefficients = [
            dd * dd,
            4.0 * dd * f,
            4.0 * f * f + 2.0 * dd * k - 4.0 * r_major2 * a2,
            4.0 * f * k - 8.0 * r_major2 * b2,
            k * k - 4.0 * r_major2 * c2,
        ]
        polynomial = np.poly1d(coefficients)
        derivative = polynomial.deriv()
        hits = []
        for root in np.roots(coefficients):
            if abs(root.imag) > 1e-6:
                continue
            t = float(root.real)
            for _ in range(3):
                slope = float(derivative(t))
                if slope == 0.0:
                    break
                t -= float(polynomial(t)) / slope
            if t > EPSILON:
                hits.append(t)
        return min(hits, default=None)

    def normal_at(self, point: Vector3) -> Vector3:
        p = self._to_local(point)
        radial = math.hypot(p.x, p.z)
        if radial < 1e-12:
            return _rotate(_UP, self.rotation).normalized()
        ring_point = Vector3(p.x, 0.0, p.z) * (self.major_radius / radial)
        return _rotate((p - ring_point).normalized(), self.rotation).normalized()

    @property
    def base_center(self) -> Vector3:
        """Same as :attr:`center`."""
        return self.center


@dataclass
class TangleCube(Primitive):
    """The implicit surface x⁴ - 5x² + y⁴ - 5y² + z⁴ - 5z² + 11.8 = 0, scaled by ``size``."""

    center: Vector3
    size: float
    material: Material = field(default_factory=Material)

    def _to_local(self, point: Vector3) -> Vector3:
        return (point - self.center) / self.size

    def _equation(self, point: Vector3) -> float:
        x, y, z = self._to_local(point)
        return (
            x ** 4 - 5.0 * x * x
            + y ** 4 - 5.0 * y * y
            + z ** 4 - 5.0 * z * z
            + _TANGLE_CONSTANT
        )

    def _gradient(self, point: Vector3) -> Vector3:
        x, y, z = self._to_local(point)
        return Vector3(
            4.0 * x ** 3 - 10.0 * x,
            4.0 * y ** 3 - 10.0 * y,
            4.0 * z ** 3 - 10.0 * z,
        ).normalized()

    def _bounds(self, ray: Ray) -> tuple[float, float] | None:
        oc = ray.origin - self.center
        radius = _TANGLE_BOUND * abs(self.size)
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - radius * radius
        discriminant = half_b * half_b - c
        if discriminant < 0.0:
            return None
        root = math.sqrt(discriminant)
        far = -half_b + root
        if far <= EPSILON:
            return None
        return max(-half_b - root, EPSILON), far

    def intersect(self, ray: Ray) -> float | None:
        bounds = self._bounds(ray)
        if bounds is None:
            return None
        start, end = bounds
        step = _TANGLE_STEP * abs(self.size)
        t_prev = start
        f_prev = self._equation(ray.at(t_prev))
        if f_prev == 0.0:
            return t_prev
        while t_prev < end:
            t_next = min(t_prev + step, end)
            f_next = self._equation(ray.at(t_next))
            if f_next == 0.0:
                return t_next
            if (f_prev < 0.0) != (f_next < 0.0):
                return self._bisect(ray, t_prev, t_next, f_prev)
            t_prev, f_prev = t_next, f_next
        return None

    def _bisect(self, ray: Ray, low: float, high: float, f_low: float) -> float:
        for _ in range(_BISECTION_STEPS):
            middle = 0.5 * (low + high)
            f_middle = self._equation(ray.at(middle))
            if (f_middle < 0.0) == (f_low < 0.0):
                low, f_low = middle, f_middle
            else:
                high = middle
        return 0.5 * (low + high)

    def normal_at(self, point: Vector3) -> Vector3:
        return self._gradient(point)

    @property
    def base_center(self) -> Vector3:
        """Same as :attr:`center`."""
        return self.center