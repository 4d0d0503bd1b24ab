"""Triangle meshes of the unit sphere used to draw the balls.

A mesh is an icosahedron whose twenty faces are each split into a
triangular grid and pushed out onto the unit sphere.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

Vector = tuple[float, float, float]
TexCoord = tuple[float, float]

MIN_RESOLUTION = 1
MAX_RESOLUTION = 29

_NO_ORIENTATION = 99.0


def triangle_index(b: int, c: int, resolution: int) -> int:
    """Position of grid point (b, c) among the points of one subdivided face."""
    return (c * (2 * resolution + 3 - c)) // 2 + b


def _icosahedron_faces() -> list[tuple[Vector, Vector, Vector]]:
    a = math.sqrt(0.8)
    b = math.sqrt(0.2)
    c = a * math.sin(0.4 * math.pi)
    d = a * math.cos(0.4 * math.pi)
    e = a * math.sin(0.8 * math.pi)
    f = a * math.cos(0.8 * math.pi)

    top = (0.0, 0.0, 1.0)
    bottom = (0.0, 0.0, -1.0)
    u1, u2, u3, u4, u5 = (a, 0.0, b), (d, c, b), (f, e, b), (f, -e, b), (d, -c, b)
    l1, l2, l3 = (-f, -e, -b), (-f, e, -b), (-d, c, -b)
    l4, l5 = (-a, 0.0, -b), (-d, -c, -b)

    return [
        (u1, u2, top),
        (u2, u3, top),
        (u3, u4, top),
        (u4, u5, top),
        (u5, u1, top),
        (l1, l2, u1),
        (u1, l2, u2),
        (l2, l3, u2),
        (u2, l3, u3),
        (l3, l4, u3),
        (u3, l4, u4),
        (l4, l5, u4),
        (u4, l5, u5),
        (l5, l1, u5),
        (u5, l1, u1),
        (l2, bottom, l3),
        (l3, bottom, l4),
        (l4, bottom, l5),
        (l5, bottom, l1),
        (l1, bottom, l2),
    ]


def _azimuth(x: float, y: float, orient: float) -> float:
    if y == 0.0:
        if x == 0.0:
            angle = orient
        else:
            angle = math.copysign(0.5, x) * math.copysign(1.0, y)
    else:
        angle = math.atan(x / y) / math.pi
    if angle == 0.0:
        angle = 0.0
    if y < 0.0:
        angle += 1.0
    elif x < 0.0:
        angle += 2.0
    if orient != _NO_ORIENTATION:
        while angle < orient - 0.5:
            angle += 1.0
        while angle > orient + 0.5:
            angle -= 1.0
    return angle


def _face(
    a: Vector, b: Vector, c: Vector, resolution: int, start: int
) -> tuple[list[Vector], list[TexCoord], list[int]]:
    vertices: list[Vector] = []
    texcoords: list[TexCoord] = []
    orient = _NO_ORIENTATION

    for c_step in range(resolution + 1):
        t = c_step / resolution
        for b_step in range(resolution + 1 - c_step):
            s = b_step / resolution
            point = tuple(
                pa + s * (pb - pa) + t * (pc - pa) for pa, pb, pc in zip(a, b, c)
            )
            norm = math.sqrt(sum(v * v for v in point))
            x, y, z = (v / norm for v in point)
            vertices.append((x, y, z))
            orient = _azimuth(x, y, orient)
            polar = math.acos(max(-1.0, min(1.0, z))) / math.pi - 1.0
            texcoords.append((orient, polar))

    indices: list[int] = []
    for c_step in range(resolution):
        for b_step in range(resolution - c_step):
            here = start + triangle_index(b_step, c_step, resolution)
            right = start + triangle_index(b_step + 1, c_step, resolution)
            if c_step:
                below = start + triangle_index(b_step + 1, c_step - 1, resolution)
                indices.extend((here, below, right))
            above = start + triangle_index(b_step, c_step + 1, resolution)
            indices.extend((here, right, above))
    return vertices, texcoords, indices


@dataclass(frozen=True)
class SphereMesh:
    """Vertices, texture coordinates and triangle indices of a unit sphere."""

    resolution: int
    vertices: tuple[Vector, ...]
    texcoords: tuple[TexCoord, ...]
    indices: tuple[int, ...]
    shared: int

    @property
    def triangles(self) -> Iterator[tuple[int, int, int]]:
        """The index triples, one per triangle."""
        it = iter(self.indices)
        return zip(it, it, it)


def build_sphere_mesh(resolution: int) -> SphereMesh:
    """Build the sphere mesh whose faces are split ``resolution`` times per edge.

    Indices that refer to a vertex equal in position and texture coordinate
    to an earlier one are redirected to that earlier vertex.
    """
    if resolution < 1:
        raise ValueError("resolution must be at least 1")

    vertices: list[Vector] = []
    texcoords: list[TexCoord] = []
    indices: list[int] = []
    for a, b, c in _icosahedron_faces():
        face_vertices, face_texcoords, face_indices = _face(
            a, b, c, resolution, len(vertices)
        )
        vertices.extend(face_vertices)
        texcoords.extend(face_texcoords)
        indices.extend(face_indices)

    first_seen: dict[tuple[Vector, TexCoord], int] = {}
    shared = 0
    merged = []
    for index in indices:
        key = (vertices[index], texcoords[index])
        if key in first_seen:
            merged.append(first_seen[key])
            shared += 1
        else:
            first_seen[key] = index
            merged.append(index)

    return SphereMesh(
        resolution=resolution,
        vertices=tuple(vertices),
        texcoords=tuple(texcoords),
        indices=tuple(merged),
        shared=shared,
    )


class SphereTables:
    """Cache of sphere meshes for the odd resolutions up to a limit."""

    def __init__(self) -> None:
        self._meshes: dict[int, SphereMesh] = {}

    def initialise(self, resolution: int) -> None:
        """Build every missing odd-resolution mesh up to ``resolution``.

        The resolution is clamped to the range 1 to 29.
        """
        resolution = max(MIN_RESOLUTION, min(MAX_RESOLUTION, resolution))
        for level in range(1, resolution + 1, 2):
            if level not in self._meshes:
                self._meshes[level] = build_sphere_mesh(level)

    def mesh(self, resolution: int) -> SphereMesh:
        """The mesh built for ``resolution``."""
        try:
            return self._meshes[resolution]
        except KeyError:
            raise LookupError(
                f"no sphere mesh has been built for resolution {resolution}"
            ) from None

    def __contains__(self, resolution: object) -> bool:
        return resolution in self._meshes