# raytracer

Building blocks for a ray tracer: vectors and rays, light sources, geometric
primitives with ray intersection and surface normals, Wavefront OBJ mesh
loading, and a reader for scene descriptions written in the libconfig syntax.

## Modules

- `raytracer.geometry`: `Vector3`, an immutable vector with `+`, `-`,
  scalar `*` and `/`, negation, iteration, `dot`, `cross`, `length` and
  `normalized` (the zero vector stays zero); `Ray`, whose direction is
  normalised on construction and whose `at(t)` gives `origin + t * direction`;
  and `RaytracerError`, the error raised for invalid scenes and files.
- `raytracer.lights`: `AmbientLight`, `PointLight`, `DirectionalLight` and
  `CompositeLight`, all with an `intensity` and a
  `direction_from(point)` method. A directional light keeps its direction
  normalised. A `CompositeLight` groups lights (`add_light`, `len`,
  iteration); its intensity is the sum of its members capped at 1, and an
  empty group has intensity 0 and points straight up.
- `raytracer.camera`: `Camera`, with `position`, `rotation` (degrees),
  `field_of_view` (60 by default), `width` and `height` (800 by 600 by
  default) and `set_resolution(width, height)`.
- `raytracer.shapes`: `Color`, `MaterialType`, `Material` and the primitives
  `Sphere`, `Plane` and `Triangle`. Every primitive has
  `intersect(ray)`, returning the distance to the nearest hit in front of
  the ray or `None`, `normal_at(point)`, a `material`, a `color` and a
  `center`.
- `raytracer.solids`: `Cylinder` and `Cone`, standing on a base centre,
  rotatable by angles in degrees about X, then Y, then Z. A height of
  `float("inf")` makes them infinite; finite cylinders are closed by two
  caps and finite cones by a base disc. A cone's height must be positive.
- `raytracer.surfaces`: `Torus` (major and minor radius, rotatable; its
  quartic is solved with numpy) and `TangleCube`, the implicit surface
  x⁴ - 5x² + y⁴ - 5y² + z⁴ - 5z² + 11.8 = 0 scaled by `size`, found by
  marching along the ray and refining by bisection.
- `raytracer.composite`: `CompositePrimitive`, a group of primitives that
  reports the closest hit; after a hit its normal and material are those of
  the member that was hit. It supports `add_primitive`, `len`, indexing and
  iteration, and its centre is the average of its members' centres.
- `raytracer.factory`: `create_sphere`, `create_plane`, `create_cylinder`,
  `create_cone`, `create_triangle`, `create_torus`, `create_tangle_cube`,
  `create_composite_primitive`, `create_ambient_light` (intensity 0.1 by
  default), `create_point_light`, `create_directional_light` (intensity 1.0
  by default) and `create_composite_light`.
- `raytracer.scene`: `Scene`, holding a `camera`, an `ambient_intensity`,
  the `primitives` and `lights` in the order added (`add_primitive`,
  `add_light`), and the groups `root_primitive` and `root_light` that hold
  the same objects.
- `raytracer.objparser`: `parse_obj(lines, scale, offset, rotation)` and
  `load_obj(filename, ...)` read `v` and `f` lines into `ParsedTriangle`
  values. Vertices are scaled, rotated (`apply_rotation`, degrees, X then Y
  then Z) and then offset. Polygons are split into triangle fans; faces
  naming a missing vertex are skipped with a logged warning. A file that
  cannot be opened raises `RaytracerError`.
- `raytracer.config`: `loads(text)` and `load(filename)` read libconfig-style
  text (groups, arrays, lists, integers, floats, strings, booleans,
  comments) into a tree of `Setting` nodes with `exists`, `lookup` (dotted
  paths such as `a.b[0].c`), `lookup_value(name, kind)`, `len`, indexing and
  iteration. Syntax errors and missing settings raise `ConfigError`, a kind
  of `RaytracerError`.
- `raytracer.sceneparser`: `SceneParser(filename, scene).parse()`,
  `parse_scene_text(text, scene)` and `parse_scene_file(filename, scene)`
  fill a `Scene` from a description; `parse_vector3` and `parse_material`
  read single entries.

## Scene files

A scene describes a camera, optional lights and optional primitives:

```
camera: {
    resolution = { width = 320; height = 240; };
    position = { x = 0; y = -100; z = 20; };
    rotation = { x = 0; y = 0; z = 0; };
    fieldOfView = 72.0;
};

lights: {
    ambient = 0.4;
    point = ( { x = 400; y = 100; z = 500; } );
    directional = (
        { position = { x = 0; y = 0; z = 0; };
          direction = { x = 0; y = -1; z = 0; }; }
    );
};

primitives: {
    spheres = (
        { x = 60; y = 5; z = 40; r = 25; color = { r = 255; g = 64; b = 64; }; }
    );
    planes = (
        { axis = "Z"; position = -20; color = { r = 64; g = 64; b = 255; }; }
    );
};
```

The camera block is required, with integer `width` and `height` and a
floating-point `fieldOfView`. The `ambient` light, if given, must be a
floating-point number between 0 and 1.

Primitive groups are `spheres`, `planes`, `tanglecubes`, `cylinders`,
`cones`, `triangles`, `torus` and `obj`. Vectors are groups of `x`, `y` and
`z`, each defaulting to 0. Each entry may carry a `color` (integer `r`, `g`,
`b`, white by default) and a `material` block: `type` is one of `flat` or
`flat_color`, `lambertian`, `metal`, `dielectric` or `glass`, `emissive` or
`light` (other names are ignored), and the floating-point values
`roughness`, `metalness`, `reflectivity`, `transparency`,
`refractiveIndex` and `emissiveIntensity` are taken only when written as
floats; the block may have its own `color`. Cylinders and cones without a
`height` are infinite. An `obj` entry names a `file` and may give `scale`,
`offset` and `rotation`.

Syntax errors and missing or invalid fields raise `RaytracerError` with a
message naming the offending entry or line.

## Loading a scene

```python
from raytracer.scene import Scene
from raytracer.sceneparser import parse_scene_file

scene = Scene()
parse_scene_file("scenes/example.cfg", scene)
print(scene.camera.width, len(scene.primitives), len(scene.lights))
```

## Working with geometry directly

```python
from raytracer.geometry import Ray, Vector3
from raytracer.shapes import Sphere

ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, 5))
point = ray.at(2.0)                       # Vector3(0.0, 0.0, 2.0)
t = Sphere(Vector3(0, 0, 10), 2.0).intersect(ray)   # 8.0
```

## What this package does not do

It computes intersections, normals and light directions, and builds scenes
from files, but it does not shade pixels, produce images, open a window or
provide a command-line program. Rendering a scene to a picture is left to
the code that uses it.

## Running the tests

Install the package with its `test` extra and run `pytest` from the project
directory.