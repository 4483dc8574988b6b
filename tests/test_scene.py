from raytracer.camera import Camera
from raytracer.composite import CompositePrimitive
from raytracer.geometry import Vector3
from raytracer.lights import CompositeLight, PointLight
from raytracer.scene import Scene
from raytracer.shapes import Material, Sphere


def _sphere(x=0.0):
    return Sphere(Vector3(x, 0.0, 0.0), 1.0, Material())


def test_new_scene_is_empty():
    scene = Scene()
    assert scene.primitives == ()
    assert scene.lights == ()
    assert len(scene.root_primitive) == 0
    assert len(scene.root_light) == 0
    assert scene.ambient_intensity == 0.0


def test_default_camera_matches_camera_defaults():
    scene = Scene()
    assert scene.camera == Camera()


def test_camera_can_be_replaced():
    scene = Scene()
    camera = Camera(position=Vector3(1.0, 2.0, 3.0), field_of_view=70.0)
    scene.camera = camera
    assert scene.camera.position == Vector3(1.0, 2.0, 3.0)
    assert scene.camera.field_of_view == 70.0


def test_add_primitive_goes_to_list_and_root_group():
    scene = Scene()
    first, second = _sphere(0.0), _sphere(5.0)
    scene.add_primitive(first)
    scene.add_primitive(second)
    assert scene.primitives == (first, second)
    assert list(scene.root_primitive) == [first, second]
    assert isinstance(scene.root_primitive, CompositePrimitive)


def test_add_light_goes_to_list_and_root_group():
    scene = Scene()
    light = PointLight(Vector3(0.0, 10.0, 0.0))
    scene.add_light(light)
    assert scene.lights == (light,)
    assert list(scene.root_light) == [light]
    assert isinstance(scene.root_light, CompositeLight)


def test_primitives_view_is_not_writable_into_scene():
    scene = Scene()
    scene.add_primitive(_sphere())
    view = scene.primitives
    assert len(view) == 1
    scene.add_primitive(_sphere(3.0))
    assert len(view) == 1
    assert len(scene.primitives) == 2


def test_ambient_intensity_is_settable():
    scene = Scene()
    scene.ambient_intensity = 0.4
    assert scene.ambient_intensity == 0.4