import math

import pytest

from raytracer.geometry import Ray, Vector3
from raytracer.shapes import (
    Color,
    Material,
    Plane,
    Primitive,
    Sphere,
    Triangle,
)


def close(u: Vector3, v: Vector3, tol: float = 1e-6) -> bool:
    return (u - v).length() < tol


def test_primitive_color_comes_from_material():
    material = Material(color=Color(10, 20, 30))
    sphere = Sphere(Vector3(), 1.0, material)
    assert sphere.color == Color(10, 20, 30)


def test_primitive_is_abstract():
    with pytest.raises(TypeError):
        Primitive()


def test_sphere_hit_lies_on_surface():
    sphere = Sphere(Vector3(0, 0, 5), 1.5, Material())
    ray = Ray(Vector3(0.3, 0.2, 0), Vector3(0, 0, 1))
    t = sphere.intersect(ray)
    assert t is not None and t > 0
    point = ray.at(t)
    assert (point - sphere.center).length() == pytest.approx(1.5)
    assert point.z < 5


def test_sphere_miss_and_behind():
    sphere = Sphere(Vector3(0, 0, 5), 1.0, Material())
    assert sphere.intersect(Ray(Vector3(0, 3, 0), Vector3(0, 0, 1))) is None
    assert sphere.intersect(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))) is None


def test_sphere_from_inside_hits_far_side():
    sphere = Sphere(Vector3(), 2.0, Material())
    ray = Ray(Vector3(), Vector3(1, 0, 0))
    t = sphere.intersect(ray)
    assert t == pytest.approx(2.0)


def test_sphere_normal_is_unit_and_radial():
    sphere = Sphere(Vector3(1, 1, 1), 2.0, Material())
    n = sphere.normal_at(Vector3(1, 3, 1))
    assert list(n) == pytest.approx([0.0, 1.0, 0.0], abs=1e-6)


def test_plane_hit_satisfies_equation():
    plane = Plane(Vector3(0, 1, 0), -2.0, Material())
    ray = Ray(Vector3(1, 3, 4), Vector3(0.2, -1, 0.1))
    t = plane.intersect(ray)
    assert t is not None
    assert plane.normal.dot(ray.at(t)) == pytest.approx(-2.0)


def test_plane_parallel_and_behind_miss():
    plane = Plane(Vector3(0, 1, 0), 0.0, Material())
    assert plane.intersect(Ray(Vector3(0, 1, 0), Vector3(1, 0, 0))) is None
    assert plane.intersect(Ray(Vector3(0, 1, 0), Vector3(0, 1, 0))) is None


def test_plane_normal_and_center():
    plane = Plane(Vector3(0, 0, 1), 3.0, Material())
    assert plane.normal_at(Vector3(7, 8, 3)) == Vector3(0, 0, 1)
    assert close(plane.center, Vector3(0, 0, 3))


def make_triangle():
    return Triangle(Vector3(0, 0, 0), Vector3(2, 0, 0), Vector3(0, 2, 0), Material())


def test_triangle_hit_point_lies_in_plane():
    tri = make_triangle()
    ray = Ray(Vector3(0.5, 0.5, 3), Vector3(0, 0, -1))
    t = tri.intersect(ray)
    assert t == pytest.approx(3.0)
    point = ray.at(t)
    assert tri.normal.dot(point - tri.a) == pytest.approx(0.0, abs=1e-9)


def test_triangle_miss_outside_edges():
    tri = make_triangle()
    assert tri.intersect(Ray(Vector3(1.5, 1.5, 3), Vector3(0, 0, -1))) is None
    assert tri.intersect(Ray(Vector3(-0.1, 0.5, 3), Vector3(0, 0, -1))) is None


def test_triangle_parallel_ray_misses():
    tri = make_triangle()
    assert tri.intersect(Ray(Vector3(0.5, 0.5, 0), Vector3(1, 0, 0))) is None


def test_triangle_normal_and_centroid():
    tri = make_triangle()
    n = tri.normal_at(Vector3(0.1, 0.1, 0))
    assert n.length() == pytest.approx(1.0)
    assert abs(n.dot(tri.edge1)) < 1e-12 and abs(n.dot(tri.edge2)) < 1e-12
    assert close(tri.center * 3, tri.a + tri.b + tri.c)
    assert tri.base_center == tri.center


def test_hit_distance_is_independent_of_direction_scale():
    sphere = Sphere(Vector3(0, 0, 10), 1.0, Material())
    t1 = sphere.intersect(Ray(Vector3(), Vector3(0, 0, 1)))
    t2 = sphere.intersect(Ray(Vector3(), Vector3(0, 0, 50)))
    assert t1 == pytest.approx(t2)
    assert math.isfinite(t1)