import math

import pytest

from raytracer.geometry import Ray, RaytracerError, Vector3


def test_add_and_sub_round_trip():
    a = Vector3(1.5, -2.0, 3.25)
    b = Vector3(0.5, 4.0, -1.0)
    assert (a + b) - b == a


def test_scalar_multiplication_both_sides():
    v = Vector3(1.0, 2.0, 3.0)
    assert v * 2.0 == 2.0 * v
    assert (v * 2.0) / 2.0 == v


def test_negation():
    v = Vector3(1.0, -2.0, 3.0)
    assert -v + v == Vector3()


def test_dot_is_symmetric():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(-4.0, 0.5, 2.0)
    assert a.dot(b) == pytest.approx(b.dot(a))


def test_cross_is_orthogonal_to_both():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(-4.0, 0.5, 2.0)
    c = a.cross(b)
    assert c.dot(a) == pytest.approx(0.0)
    assert c.dot(b) == pytest.approx(0.0)


def test_cross_of_axes():
    assert Vector3(1, 0, 0).cross(Vector3(0, 1, 0)) == Vector3(0, 0, 1)


def test_cross_is_antisymmetric():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(3.0, -1.0, 0.5)
    assert a.cross(b) == -b.cross(a)


def test_length_matches_dot():
    v = Vector3(2.0, -3.0, 6.0)
    assert v.length() == pytest.approx(math.sqrt(v.dot(v)))


def test_normalized_has_unit_length_and_same_direction():
    v = Vector3(3.0, -7.0, 2.0)
    n = v.normalized()
    assert n.length() == pytest.approx(1.0)
    assert n.cross(v).length() == pytest.approx(0.0)
    assert n.dot(v) > 0


def test_normalized_zero_vector_stays_zero():
    assert Vector3().normalized() == Vector3()


def test_iteration_yields_components():
    assert list(Vector3(1.0, 2.0, 3.0)) == [1.0, 2.0, 3.0]


def test_ray_normalises_direction():
    ray = Ray(Vector3(1, 1, 1), Vector3(0, 0, 5))
    assert ray.direction == Vector3(0, 0, 1)


def test_ray_at_zero_is_origin():
    origin = Vector3(1.0, 2.0, 3.0)
    ray = Ray(origin, Vector3(1.0, 1.0, 0.0))
    assert ray.at(0.0) == origin


def test_ray_at_distance_is_that_far_from_origin():
    origin = Vector3(1.0, 2.0, 3.0)
    ray = Ray(origin, Vector3(2.0, -1.0, 4.0))
    assert (ray.at(5.0) - origin).length() == pytest.approx(5.0)


def test_error_carries_message():
    error = RaytracerError("broken scene")
    assert str(error) == "broken scene"
    assert isinstance(error, Exception)