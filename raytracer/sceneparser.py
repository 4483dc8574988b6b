"""Building a scene from a description in the libconfig text format."""

from __future__ import annotations

from raytracer.camera import Camera
from raytracer.config import ConfigError, Setting, load, loads
from raytracer.factory import (
    create_ambient_light,
    create_cone,
    create_cylinder,
    create_directional_light,
    create_plane,
    create_point_light,
    create_sphere,
    create_tangle_cube,
    create_torus,
    create_triangle,
)
from raytracer.geometry import RaytracerError, Vector3
from raytracer.objparser import load_obj
from raytracer.scene import Scene
from raytracer.shapes import Color, Material, MaterialType

_MATERIAL_TYPES = {
    "flat": MaterialType.FLAT_COLOR,
    "flat_color": MaterialType.FLAT_COLOR,
    "lambertian": MaterialType.LAMBERTIAN,
    "metal": MaterialType.METAL,
    "dielectric": MaterialType.DIELECTRIC,
    "glass": MaterialType.DIELECTRIC,
    "emissive": MaterialType.EMISSIVE,
    "light": MaterialType.EMISSIVE,
}

_MATERIAL_FLOATS = (
    ("roughness", "roughness"),
    ("metalness", "metalness"),
    ("reflectivity", "reflectivity"),
    ("transparency", "transparency"),
    ("refractiveIndex", "refractive_index"),
    ("emissiveIntensity", "emissive_intensity"),
)

_PLANE_NORMALS = {
    "x": Vector3(1.0, 0.0, 0.0),
    "y": Vector3(0.0, 1.0, 0.0),
    "z": Vector3(0.0, 0.0, 1.0),
}

_WHITE = Color(255, 255, 255)


def parse_vector3(setting: Setting) -> Vector3:
    """Read the ``x``, ``y`` and ``z`` members of a group; missing or non-numeric ones are 0."""
    coords: list[float] = []
    try:
        for axis in "xyz":
            value = 0.0
            if setting.exists(axis):
                member = setting[axis]
                if member.type in ("float", "int"):
                    value = float(member.value)  # type: ignore[arg-type]
            coords.append(value)
    except ConfigError as error:
        raise RaytracerError(f"[SceneParser] Error parsing vector3: {error}") from error
    return Vector3(*coords)


def parse_material(setting: Setting, default_color: Color) -> Material:
    """Read the optional ``material`` member of ``setting``."""
    material = Material(color=default_color)
    if not setting.exists("material"):
        return material
    try:
        mat = setting.lookup("material")
        type_name = mat.lookup_value("type", str)
        if type_name in _MATERIAL_TYPES:
            material.type = _MATERIAL_TYPES[type_name]
        for key, attribute in _MATERIAL_FLOATS:
            value = mat.lookup_value(key, float)
            if value is not None:
                setattr(material, attribute, value)
        if mat.exists("color"):
            material.color = _read_color(mat.lookup("color"), default_color)
    except ConfigError as error:
        raise RaytracerError(f"[SceneParser] Error parsing material: {error}") from error
    return material


def _read_color(group: Setting, default: Color) -> Color:
    channels = []
    for name, fallback in zip("rgb", (default.r, default.g, default.b)):
        value = group.lookup_value(name, int)
        channels.append(fallback if value is None else value)
    return Color(*channels)


def _base_color(setting: Setting) -> Color:
    if setting.exists("color"):
        return _read_color(setting.lookup("color"), _WHITE)
    return _WHITE


def _number(setting: Setting, name: str, first: type, second: type) -> float | None:
    value = setting.lookup_value(name, first)
    if value is None:
        value = setting.lookup_value(name, second)
    return None if value is None else float(value)  # type: ignore[arg-type]


def _parse_camera(root: Setting, scene: Scene) -> None:
    try:
        cam = root.lookup("camera")
        position = parse_vector3(cam.lookup("position"))
        rotation = parse_vector3(cam.lookup("rotation"))
        resolution = cam.lookup("resolution")
        width = resolution.lookup_value("width", int)
        height = resolution.lookup_value("height", int) if width is not None else None
        if width is None or height is None:
            raise RaytracerError("Invalid resolution values.")
        fov = cam.lookup_value("fieldOfView", float)
        if fov is None:
            raise RaytracerError("'fieldOfView' missing or invalid.")
    except ConfigError as error:
        raise RaytracerError(f"[SceneParser] Error parsing camera: {error}") from error
    scene.camera = Camera(
        position=position,
        rotation=rotation,
        field_of_view=fov,
        width=width,
        height=height,
    )


def _parse_lights(root: Setting, scene: Scene) -> None:
    if not root.exists("lights"):
        return
    try:
        lights = root.lookup("lights")
        if lights.exists("ambient"):
            ambient = lights.lookup_value("ambient", float)
            if ambient is None:
                raise RaytracerError("'ambient' light value missing or invalid.")
            if not 0.0 <= ambient <= 1.0:
                raise RaytracerError("Ambient light value must be between 0 and 1.")
            scene.add_light(create_ambient_light(Vector3(), ambient))
        if lights.exists("point"):
            for point in lights.lookup("point"):
                scene.add_light(create_point_light(parse_vector3(point)))
        if lights.exists("directional"):
            for entry in lights.lookup("directional"):
                position = parse_vector3(entry.lookup("position"))
                direction = parse_vector3(entry.lookup("direction"))
                scene.add_light(create_directional_light(position, direction))
    except ConfigError as error:
        raise RaytracerError(f"[SceneParser] Error parsing lights: {error}") from error


def _sphere_center(sphere: Setting, index: int) -> Vector3:
    for kind in (int, float):
        values = [sphere.lookup_value(axis, kind) for axis in "xyz"]
        if all(value is not None for value in values):
            return Vector3(*(float(value) for value in values))  # type: ignore[arg-type]
    raise RaytracerError(f"Sphere #{index}: invalid or missing position (x, y, z)")


def _parse_spheres(group: Setting, scene: Scene) -> None:
    for index, sphere in enumerate(group):
        center = _sphere_center(sphere, index)
        if not sphere.exists("r"):
            raise RaytracerError(f"Sphere #{index}: missing 'r' field")
        radius = _number(sphere, "r", int, float)
        if radius is None:
            raise RaytracerError(f"Sphere #{index}: 'r' is neither int nor float")
        material = parse_material(sphere, _base_color(sphere))
        scene.add_primitive(create_sphere(center, radius, material))


def _parse_planes(group: Setting, scene: Scene) -> None:
    for index, plane in enumerate(group):
        axis = plane.lookup_value("axis", str)
        if axis is None:
            raise RaytracerError(f"Plane #{index}: missing 'axis' field")
        letter = axis[0] if axis else "Y"
        position = _number(plane, "position", int, float)
        if position is None:
            raise RaytracerError(f"Plane #{index}: missing 'position' field")
        color = _base_color(plane)
        normal = _PLANE_NORMALS.get(letter.lower())
        if normal is None:
            raise RaytracerError(f"Plane #{index}: invalid axis '{axis}'")
        scene.add_primitive(create_plane(normal, position, parse_material(plane, color)))


def _parse_tangle_cubes(group: Setting, scene: Scene) -> None:
    for index, cube in enumerate(group):
        if not cube.exists("center"):
            raise RaytracerError(f"TangleCube #{index}: missing or invalid 'center' field")
        center = parse_vector3(cube.lookup("center"))
        if not cube.exists("size"):
            raise RaytracerError(f"TangleCube #{index}: missing 'size' field")
        size = _number(cube, "size", float, int)
        if size is None:
            raise RaytracerError(f"TangleCube #{index}: invalid 'size' field")
        material = parse_material(cube, _base_color(cube))
        scene.add_primitive(create_tangle_cube(center, size, material))


def _parse_cylinders(group: Setting, scene: Scene) -> None:
    for index, cylinder in enumerate(group):
        if not cylinder.exists("baseCenter"):
            raise RaytracerError(f"Cylinder #{index}: missing or invalid 'baseCenter' field")
        base_center = parse_vector3(cylinder.lookup("baseCenter"))
        radius = 1.0
        if cylinder.exists("radius"):
            value = _number(cylinder, "radius", int, float)
            if value is None:
                raise RaytracerError(f"Cylinder #{index}: missing or invalid 'radius' field")
            radius = value
        height = float("inf")
        if cylinder.exists("height"):
            value = _number(cylinder, "height", int, float)
            if value is not None:
                height = value
        rotation = Vector3()
        if cylinder.exists("rotation"):
            rotation = parse_vector3(cylinder.lookup("rotation"))
        material = parse_material(cylinder, _base_color(cylinder))
        scene.add_primitive(create_cylinder(base_center, radius, height, rotation, material))


def _parse_cones(group: Setting, scene: Scene) -> None:
    for index, cone in enumerate(group):
        if not cone.exists("baseCenter"):
            raise RaytracerError(f"Cone #{index}: missing or invalid 'baseCenter' field")
        base_center = parse_vector3(cone.lookup("baseCenter"))
        radius = _number(cone, "radius", int, float) if cone.exists("radius") else None
        if radius is None:
            raise RaytracerError(f"Cone #{index}: missing or invalid 'radius' field")
        height = float("inf")
        if cone.exists("height"):
            value = _number(cone, "height", int, float)
            if value is not None:
                height = value
        rotation = Vector3()
        if cone.exists("rotation"):
            rotation = parse_vector3(cone.lookup("rotation"))
        material = parse_material(cone, _base_color(cone))
        scene.add_primitive(create_cone(base_center, radius, height, rotation, material))


def _parse_triangles(group: Setting, scene: Scene) -> None:
    for index, triangle in enumerate(group):
        if not all(triangle.exists(name) for name in "abc"):
            raise RaytracerError(f"Triangle #{index}: missing points a, b, c")
        a, b, c = (parse_vector3(triangle.lookup(name)) for name in "abc")
        material = parse_material(triangle, _base_color(triangle))
        scene.add_primitive(create_triangle(a, b, c, material))


def _parse_toruses(group: Setting, scene: Scene) -> None:
    for index, torus in enumerate(group):
        if not torus.exists("center"):
            raise RaytracerError(f"Torus #{index}: missing or invalid 'center' field")
        center = parse_vector3(torus.lookup("center"))
        radii = {"majorRadius": 1.0, "minorRadius": 0.5}
        for name in radii:
            if torus.exists(name):
                value = _number(torus, name, int, float)
                if value is None:
                    raise RaytracerError(f"Torus #{index}: missing or invalid '{name}' field")
                radii[name] = value
        rotation = Vector3()
        if torus.exists("rotation"):
            rotation = parse_vector3(torus.lookup("rotation"))
        material = parse_material(torus, _base_color(torus))
        scene.add_primitive(
            create_torus(center, radii["majorRadius"], radii["minorRadius"], rotation, material)
        )


def _parse_meshes(group: Setting, scene: Scene) -> None:
    for index, mesh in enumerate(group):
        path = mesh.lookup_value("file", str)
        if path is None:
            raise RaytracerError(f"OBJ #{index}: missing 'file' field")
        color = _base_color(mesh)
        scale = 1.0
        if mesh.exists("scale"):
            value = _number(mesh, "scale", int, float)
            if value is not None:
                scale = value
        offset = parse_vector3(mesh.lookup("offset")) if mesh.exists("offset") else Vector3()
        rotation = (
            parse_vector3(mesh.lookup("rotation")) if mesh.exists("rotation") else Vector3()
        )
        for triangle in load_obj(str(path), scale, offset, rotation):
            material = parse_material(mesh, color)
            scene.add_primitive(create_triangle(triangle.a, triangle.b, triangle.c, material))


_PRIMITIVE_SECTIONS = (
    ("spheres", _parse_spheres),
    ("planes", _parse_planes),
    ("tanglecubes", _parse_tangle_cubes),
    ("cylinders", _parse_cylinders),
    ("cones", _parse_cones),
    ("triangles", _parse_triangles),
    ("torus", _parse_toruses),
    ("obj", _parse_meshes),
)


def _parse_primitives(root: Setting, scene: Scene) -> None:
    if not root.exists("primitives"):
        return
    try:
        primitives = root.lookup("primitives")
        for name, reader in _PRIMITIVE_SECTIONS:
            if primitives.exists(name):
                reader(primitives.lookup(name), scene)
    except ConfigError as error:
        raise RaytracerError(f"[SceneParser] Error parsing primitives: {error}") from error


def _populate(root: Setting, scene: Scene) -> None:
    try:
        _parse_camera(root, scene)
        _parse_lights(root, scene)
        _parse_primitives(root, scene)
    except ConfigError as error:
        raise RaytracerError(f"[SceneParser] Setting error: {error}") from error


def _syntax_checked(loader, source: str) -> Setting:
    try:
        return loader(source)
    except ConfigError as error:
        if error.line is None:
            raise
        raise RaytracerError(
            f"[SceneParser] Parse error: {error.error} at line {error.line}"
        ) from error


class SceneParser:
    """Fills a scene from a scene description file."""

    def __init__(self, filename: str, scene: Scene) -> None:
        self.filename = filename
        self.scene = scene

    def parse(self) -> bool:
        """Read the file and add its camera, lights and primitives to the scene."""
        root = _syntax_checked(load, self.filename)
        _populate(root, self.scene)
        return True


def parse_scene_text(text: str, scene: Scene) -> Scene:
    """Fill ``scene`` from description text and return it."""
    _populate(_syntax_checked(loads, text), scene)
    return scene


def parse_scene_file(filename: str, scene: Scene) -> Scene:
    """Fill ``scene`` from a description file and return it."""
    SceneParser(filename, scene).parse()
    return scene