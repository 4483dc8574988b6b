import math

import pytest

from raytracer.geometry import Ray, RaytracerError, Vector3
from raytracer.shapes import Material
from raytracer.solids import Cone, Cylinder


def close(u: Vector3, v: Vector3, tol: float = 1e-6) -> bool:
    return (u - v).length() < tol


def test_cylinder_side_hit_on_surface():
    cyl = Cylinder(Vector3(), 1.5, 4.0, Vector3(), Material())
    ray = Ray(Vector3(5, 2, 0.4), Vector3(-1, 0, 0))
    t = cyl.intersect(ray)
    assert t is not None
    p = ray.at(t)
    assert math.hypot(p.x, p.z) == pytest.approx(1.5)
    assert p.x > 0
    n = cyl.normal_at(p)
    assert n.length() == pytest.approx(1.0)
    assert n.y == pytest.approx(0.0, abs=1e-9)


def test_cylinder_top_cap_hit():
    cyl = Cylinder(Vector3(1, 0, 1), 1.0, 3.0, Vector3(), Material())
    ray = Ray(Vector3(1.2, 10, 1), Vector3(0, -1, 0))
    t = cyl.intersect(ray)
    assert t is not None
    p = ray.at(t)
    assert p.y == pytest.approx(3.0)
    assert close(cyl.normal_at(p), Vector3(0, 1, 0))


def test_cylinder_above_height_misses_side():
    cyl = Cylinder(Vector3(), 1.0, 2.0, Vector3(), Material())
    assert cyl.intersect(Ray(Vector3(5, 3, 0), Vector3(-1, 0, 0))) is None


def test_infinite_cylinder_has_no_caps():
    cyl = Cylinder(Vector3(), 1.0, math.inf, Vector3(), Material())
    assert cyl.intersect(Ray(Vector3(0, 10, 0), Vector3(0, -1, 0))) is None
    assert cyl.intersect(Ray(Vector3(5, 1000, 0), Vector3(-1, 0, 0))) is not None
    assert cyl.center == cyl.base_center


def test_rotated_cylinder_lies_along_x():
    cyl = Cylinder(Vector3(), 1.0, 10.0, Vector3(0, 0, -90), Material())
    assert close(cyl.axis, Vector3(1, 0, 0))
    ray = Ray(Vector3(5, 5, 0), Vector3(0, -1, 0))
    t = cyl.intersect(ray)
    assert t is not None
    p = ray.at(t)
    assert math.hypot(p.y, p.z) == pytest.approx(1.0)
    assert close(cyl.normal_at(p), Vector3(0, 1, 0))


def test_cylinder_center_is_midpoint():
    cyl = Cylinder(Vector3(2, 0, 0), 1.0, 6.0, Vector3(), Material())
    assert list(cyl.center) == pytest.approx([2.0, 3.0, 0.0], abs=1e-6)


def test_cone_side_hit_on_surface():
    cone = Cone(Vector3(), 2.0, 4.0, Vector3(), Material())
    ray = Ray(Vector3(5, 1, 0), Vector3(-1, 0, 0))
    t = cone.intersect(ray)
    assert t is not None
    p = ray.at(t)
    assert math.hypot(p.x, p.z) == pytest.approx(2.0 * (1 - p.y / 4.0))
    n = cone.normal_at(p)
    assert n.length() == pytest.approx(1.0)
    assert n.x > 0 and n.y > 0


def test_cone_base_cap_hit():
    cone = Cone(Vector3(), 2.0, 4.0, Vector3(), Material())
    ray = Ray(Vector3(0.5, -5, 0), Vector3(0, 1, 0))
    t = cone.intersect(ray)
    assert t is not None
    p = ray.at(t)
    assert p.y == pytest.approx(0.0, abs=1e-9)
    assert close(cone.normal_at(p), -cone.axis)


def test_cone_misses_above_apex_and_beside():
    cone = Cone(Vector3(), 1.0, 2.0, Vector3(), Material())
    assert cone.intersect(Ray(Vector3(5, 3, 0), Vector3(-1, 0, 0))) is None
    assert cone.intersect(Ray(Vector3(5, 1, 5), Vector3(0, 0, -1))) is None


def test_cone_apex_and_center():
    cone = Cone(Vector3(1, 1, 1), 1.0, 3.0, Vector3(), Material())
    assert list(cone.apex) == pytest.approx([1.0, 4.0, 1.0], abs=1e-6)
    assert list(cone.center) == pytest.approx([1.0, 2.0, 1.0], abs=1e-6)


def test_flipped_cone_points_down():
    cone = Cone(Vector3(), 1.0, 2.0, Vector3(180, 0, 0), Material())
    assert cone.apex.y == pytest.approx(-2.0)
    ray = Ray(Vector3(0, -10, 0), Vector3(0, 1, 0))
    t = cone.intersect(ray)
    assert t is not None
    assert close(ray.at(t), cone.apex, 1e-3)


def test_infinite_cone_opens_from_base():
    cone = Cone(Vector3(), 1.0, math.inf, Vector3(), Material())
    assert cone.apex == cone.base_center
    ray = Ray(Vector3(10, 3, 0), Vector3(-1, 0, 0))
    t = cone.intersect(ray)
    assert t is not None
    p = ray.at(t)
    assert math.hypot(p.x, p.z) == pytest.approx(p.y)
    assert cone.normal_at(p).y < 0
    assert cone.intersect(Ray(Vector3(10, -3, 0), Vector3(-1, 0, 0))) is None


def test_cone_rejects_non_positive_height():
    with pytest.raises(RaytracerError):
        Cone(Vector3(), 1.0, 0.0, Vector3(), Material())