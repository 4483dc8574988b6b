"""Reading triangle meshes from Wavefront OBJ text."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from itertools import pairwise
from typing import Iterable, Iterator

from raytracer.geometry import RaytracerError, Vector3

_log = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class ParsedTriangle:
    """Three vertices of a triangle read from a mesh."""

    a: Vector3
    b: Vector3
    c: Vector3


def apply_rotation(point: Vector3, rotation: Vector3) -> Vector3:
    """Rotate ``point`` by angles in degrees about X, then Y, then Z."""
    rx, ry, rz = (math.radians(angle) for angle in rotation)
    x, y, z = point
    y, z = y * math.cos(rx) - z * math.sin(rx), y * math.sin(rx) + z * math.cos(rx)
    x, z = x * math.cos(ry) + z * math.sin(ry), -x * math.sin(ry) + z * math.cos(ry)
    x, y = x * math.cos(rz) - y * math.sin(rz), x * math.sin(rz) + y * math.cos(rz)
    return Vector3(x, y, z)


def _parse_vertex(text: str, scale: float, offset: Vector3, rotation: Vector3) -> Vector3:
    coords: list[float] = []
    for token in text.split()[:3]:
        try:
            coords.append(float(token))
        except ValueError:
            break
    coords.extend([0.0] * (3 - len(coords)))
    x, y, z = coords
    return apply_rotation(Vector3(x * scale, y * scale, z * scale), rotation) + offset


def _face_indices(text: str) -> Iterator[int]:
    for token in text.split():
        match = _LEADING_INT.match(token.split("/", 1)[0])
        if match is None:
            _log.warning("Invalid face token: %s", token)
            continue
        yield int(match.group(1)) - 1


def parse_obj(
    lines: Iterable[str],
    scale: float = 1.0,
    offset: Vector3 = Vector3(),
    rotation: Vector3 = Vector3(),
) -> list[ParsedTriangle]:
    """Read vertices and faces from OBJ lines and return the triangles.

    Vertices are scaled, rotated and then moved by ``offset``. Faces with more
    than three vertices are split into a fan; triangles that name a missing
    vertex are skipped.
    """
    vertices: list[Vector3] = []
    faces: list[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line or line.startswith("#"):
            continue
        if line.startswith("v "):
            vertices.append(_parse_vertex(line[2:], scale, offset, rotation))
        elif line.startswith("f "):
            faces.append(line[2:])

    triangles: list[ParsedTriangle] = []
    for face in faces:
        indices = list(_face_indices(face))
        if len(indices) < 3:
            continue
        first = indices[0]
        for second, third in pairwise(indices[1:]):
            corners = (first, second, third)
            if not all(0 <= index < len(vertices) for index in corners):
                _log.warning("Face index out of bounds: %d, %d, %d", *corners)
                continue
            triangles.append(ParsedTriangle(*(vertices[index] for index in corners)))
    return triangles


def load_obj(
    filename: str,
    scale: float = 1.0,
    offset: Vector3 = Vector3(),
    rotation: Vector3 = Vector3(),
) -> list[ParsedTriangle]:
    """Read an OBJ file and return its triangles; see :func:`parse_obj`."""
    try:
        with open(filename, encoding="utf-8", errors="replace") as handle:
            lines = handle.readlines()
    except OSError as error:
        raise RaytracerError(f"ObjParser: Failed to open file: {filename}") from error
    return parse_obj(lines, scale, offset, rotation)