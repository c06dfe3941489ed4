"""Reflection of terrain meshes and points across vertical planes."""

from __future__ import annotations

import dataclasses
from enum import Enum

import numpy as np

from rigidsim.mesh import MeshData


class Mirror(Enum):
    """Plane a terrain cell is reflected across, if any."""

    NONE = "none"
    XZ = "xz"
    YZ = "yz"


def _reflect(x: float, y: float, size: float, mirror: Mirror) -> tuple[float, float]:
    if mirror is Mirror.XZ:
        return x, size - y
    if mirror is Mirror.YZ:
        return size - x, y
    return x, y


def mirror_mesh(size: float, mesh: MeshData, mirror: Mirror) -> MeshData:
    """Reflect a mesh within a cell of the given size, keeping faces outward."""
    mirror = Mirror(mirror)
    if mirror is Mirror.NONE:
        return mesh
    positions = [(*_reflect(x, y, size, mirror), z) for x, y, z in mesh.positions]
    normals = [(*_reflect(x, y, 0.0, mirror), z) for x, y, z in mesh.normals]
    indices = [i for a, b, c in mesh.triangles for i in (a, c, b)]
    return dataclasses.replace(mesh, positions=positions, normals=normals, indices=indices)


def mirror_point(point, size: float, mirror: Mirror) -> np.ndarray:
    """Reflected copy of a 3D point within a cell of the given size."""
    result = np.array(point, dtype=float)
    result[0], result[1] = _reflect(result[0], result[1], size, Mirror(mirror))
    return result