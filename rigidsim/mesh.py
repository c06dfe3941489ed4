"""Triangle meshes for body shapes and the striped wheel wedges."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from rigidsim.definitions import BoxShape, CylinderShape, FileShape, MeshDef, WheelShape

Color = tuple[float, float, float, float]

WHITE: Color = (1.0, 1.0, 1.0, 1.0)
BLACK: Color = (0.0, 0.0, 0.0, 1.0)


def _floats(items, width: int, what: str) -> tuple[tuple[float, ...], ...]:
    result = tuple(tuple(float(v) for v in item) for item in items)
    for item in result:
        if len(item) != width:
            raise ValueError(f"each {what} needs {width} components, got {len(item)}")
    return result


@dataclass(frozen=True)
class MeshData:
    """An indexed triangle list with per-vertex normals and texture coordinates."""

    positions: tuple[tuple[float, float, float], ...] = ()
    normals: tuple[tuple[float, float, float], ...] = ()
    uvs: tuple[tuple[float, float], ...] = ()
    indices: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        positions = _floats(self.positions, 3, "position")
        normals = _floats(self.normals, 3, "normal")
        uvs = _floats(self.uvs, 2, "uv")
        indices = tuple(int(i) for i in self.indices)
        if len(normals) != len(positions) or len(uvs) != len(positions):
            raise ValueError("positions, normals and uvs must have the same length")
        if len(indices) % 3:
            raise ValueError("the index count must be a multiple of 3")
        if any(not 0 <= i < len(positions) for i in indices):
            raise ValueError("an index refers to a vertex that does not exist")
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "normals", normals)
        object.__setattr__(self, "uvs", uvs)
        object.__setattr__(self, "indices", indices)

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangles(self) -> list[tuple[int, int, int]]:
        it = iter(self.indices)
        return list(zip(it, it, it))


_QUAD = (0, 1, 2, 2, 3, 0)
_QUAD_UVS = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))


@dataclass(frozen=True)
class BoxMesh:
    """An axis-aligned box given by its bounds."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    min_z: float
    max_z: float

    def mesh(self) -> MeshData:
        x0, x1 = self.min_x, self.max_x
        y0, y1 = self.min_y, self.max_y
        z0, z1 = self.min_z, self.max_z
        faces = [
            (((x0, y0, z1), (x1, y0, z1), (x1, y1, z1), (x0, y1, z1)), (0.0, 0.0, 1.0)),
            (((x0, y1, z0), (x1, y1, z0), (x1, y0, z0), (x0, y0, z0)), (0.0, 0.0, -1.0)),
            (((x1, y0, z0), (x1, y1, z0), (x1, y1, z1), (x1, y0, z1)), (1.0, 0.0, 0.0)),
            (((x0, y0, z1), (x0, y1, z1), (x0, y1, z0), (x0, y0, z0)), (-1.0, 0.0, 0.0)),
            (((x1, y1, z0), (x0, y1, z0), (x0, y1, z1), (x1, y1, z1)), (0.0, 1.0, 0.0)),
            (((x1, y0, z1), (x0, y0, z1), (x0, y0, z0), (x1, y0, z0)), (0.0, -1.0, 0.0)),
        ]
        positions, normals, uvs, indices = [], [], [], []
        for face, (corners, normal) in enumerate(faces):
            positions.extend(corners)
            normals.extend([normal] * 4)
            uvs.extend(_QUAD_UVS)
            indices.extend(4 * face + k for k in _QUAD)
        return MeshData(positions, normals, uvs, indices)


def _cylinder(height: float, radius: float, resolution: int) -> MeshData:
    if resolution < 3:
        raise ValueError("a cylinder needs a resolution of at least 3")
    hh = height / 2.0
    positions, normals, uvs, indices = [], [], [], []
    angles = [2.0 * math.pi * i / resolution for i in range(resolution + 1)]

    # side: a bottom ring then a top ring, with a duplicated seam
    for y, v in ((-hh, 0.0), (hh, 1.0)):
        for i, a in enumerate(angles):
            c, s = math.cos(a), math.sin(a)
            positions.append((radius * c, y, radius * s))
            normals.append((c, 0.0, s))
            uvs.append((i / resolution, v))
    ring = resolution + 1
    for i in range(resolution):
        b0, b1, t0, t1 = i, i + 1, ring + i, ring + i + 1
        indices.extend((b0, t0, b1, b1, t0, t1))

    # caps
    for y, ny in ((hh, 1.0), (-hh, -1.0)):
        center = len(positions)
        positions.append((0.0, y, 0.0))
        normals.append((0.0, ny, 0.0))
        uvs.append((0.5, 0.5))
        first = len(positions)
        for a in angles[:-1]:
            c, s = math.cos(a), math.sin(a)
            positions.append((radius * c, y, radius * s))
            normals.append((0.0, ny, 0.0))
            uvs.append((0.5 + 0.5 * c, 0.5 + 0.5 * s))
        for i in range(resolution):
            here, after = first + i, first + (i + 1) % resolution
            if ny > 0:
                indices.extend((center, after, here))
            else:
                indices.extend((center, here, after))
    return MeshData(positions, normals, uvs, indices)


@dataclass(frozen=True)
class CylinderMesh:
    """A cylinder centred on the origin with its axis along y."""

    height: float
    radius: float
    resolution: int = 16

    def mesh(self) -> MeshData:
        return _cylinder(self.height, self.radius, self.resolution)


@dataclass(frozen=True)
class WheelMesh:
    """A wheel: a cylinder along y, drawn as four striped wedges."""

    radius: float
    width: float

    def mesh(self) -> MeshData:
        return _cylinder(self.width, self.radius, 16)

    def wedges(self) -> list[tuple[MeshData, Color]]:
        return wheel_wedges(self.width, self.radius)


@dataclass(frozen=True)
class FileMesh:
    """A mesh to be loaded from a model file."""

    file_name: str


Mesh = Union[BoxMesh, CylinderMesh, WheelMesh, FileMesh]


def mesh_from_def(mesh_def: MeshDef) -> Mesh:
    """The concrete mesh description for a body's mesh definition."""
    shape = mesh_def.mesh_type
    if isinstance(shape, BoxShape):
        x, y, z = shape.dimensions
        return BoxMesh(-x / 2.0, x / 2.0, -y / 2.0, y / 2.0, -z / 2.0, z / 2.0)
    if isinstance(shape, CylinderShape):
        return CylinderMesh(shape.height, shape.radius)
    if isinstance(shape, WheelShape):
        return WheelMesh(shape.radius, shape.width)
    if isinstance(shape, FileShape):
        return FileMesh(shape.file_name)
    raise TypeError(f"unknown mesh type {type(shape).__name__}")


_WEDGE_TRIANGLES = (
    0, 1, 2, 2, 3, 0,  # +y face
    4, 7, 6, 6, 5, 4,  # -y face
    8, 9, 10, 10, 11, 8,  # inner face
    12, 15, 14, 14, 13, 12,  # outer face
)


def cylinder_wedge(
    inner_radius: float,
    outer_radius: float,
    start_angle: float,
    end_angle: float,
    width: float,
    subdivisions: int,
) -> MeshData:
    """A ring segment about the y axis between two angles, ``width`` thick."""
    if subdivisions < 0:
        raise ValueError("subdivisions must not be negative")
    if subdivisions == 0:
        return MeshData()
    hw = width / 2.0
    step = (end_angle - start_angle) / subdivisions
    r_in, r_out = inner_radius, outer_radius
    yp, yn = (0.0, 1.0, 0.0), (0.0, -1.0, 0.0)
    positions, normals, uvs, indices = [], [], [], []

    for i in range(subdivisions):
        a0 = start_angle + i * step
        a1 = a0 + step
        c0, s0, c1, s1 = math.cos(a0), math.sin(a0), math.cos(a1), math.sin(a1)

        def at(r: float, c: float, s: float, y: float) -> tuple[float, float, float]:
            return (r * c, y, r * s)

        positions.extend(
            [
                at(r_in, c0, s0, hw), at(r_in, c1, s1, hw),
                at(r_out, c1, s1, hw), at(r_out, c0, s0, hw),
                at(r_in, c0, s0, -hw), at(r_in, c1, s1, -hw),
                at(r_out, c1, s1, -hw), at(r_out, c0, s0, -hw),
                at(r_in, c0, s0, hw), at(r_in, c0, s0, -hw),
                at(r_in, c1, s1, -hw), at(r_in, c1, s1, hw),
                at(r_out, c0, s0, hw), at(r_out, c0, s0, -hw),
                at(r_out, c1, s1, -hw), at(r_out, c1, s1, hw),
            ]
        )
        a0_out, a1_out = (c0, 0.0, s0), (c1, 0.0, s1)
        a0_in, a1_in = (-c0, 0.0, -s0), (-c1, 0.0, -s1)
        normals.extend(
            [yp] * 4 + [yn] * 4
            + [a0_in, a0_in, a1_in, a1_in]
            + [a0_out, a0_out, a1_out, a1_out]
        )
        u0, u1 = i / subdivisions, (i + 1) / subdivisions
        uvs.extend([(u0, 0.0), (u1, 0.0), (u1, 1.0), (u0, 1.0)] * 4)
        base = 16 * i
        indices.extend(base + k for k in _WEDGE_TRIANGLES)

    return MeshData(positions, normals, uvs, indices)


def wheel_wedges(width: float, radius: float) -> list[tuple[MeshData, Color]]:
    """Four quarter-circle wedges alternating white and black."""
    inner_radius = 0.25 * radius
    wedges = []
    for quadrant in range(4):
        mesh = cylinder_wedge(
            inner_radius,
            radius,
            math.radians(quadrant * 90.0),
            math.radians((quadrant + 1) * 90.0),
            width,
            10,
        )
        wedges.append((mesh, WHITE if quadrant % 2 == 0 else BLACK))
    return wedges