"""Quarter-turn rotations of terrain meshes and points about the z axis."""

from __future__ import annotations

import dataclasses
from enum import Enum

import numpy as np

from rigidsim.mesh import MeshData


class RotationDirection(Enum):
    FORWARD = "forward"
    REVERSE = "reverse"


class Rotate(Enum):
    """Rotation of a terrain cell in quarter turns."""

    ZERO = 0
    NINETY = 90
    ONE_EIGHTY = 180
    TWO_SEVENTY = 270


def _turn(
    x: float, y: float, size: float, rotate: Rotate, direction: RotationDirection
) -> tuple[float, float]:
    if rotate is Rotate.ZERO:
        return x, y
    if rotate is Rotate.ONE_EIGHTY:
        return size - x, size - y
    if (rotate is Rotate.NINETY) == (direction is RotationDirection.FORWARD):
        return size - y, x
    return y, size - x


def rotate_mesh(size: float, mesh: MeshData, rotation: Rotate) -> MeshData:
    """Rotate a mesh forward within a cell of the given size."""
    rotation = Rotate(rotation)
    if rotation is Rotate.ZERO:
        return mesh
    forward = RotationDirection.FORWARD
    positions = [(*_turn(x, y, size, rotation, forward), z) for x, y, z in mesh.positions]
    normals = [(*_turn(x, y, 0.0, rotation, forward), z) for x, y, z in mesh.normals]
    if rotation is Rotate.ONE_EIGHTY:
        uvs = [(-u, -v) for u, v in mesh.uvs]
    else:
        uvs = [(-v, u) for u, v in mesh.uvs]
    return dataclasses.replace(mesh, positions=positions, normals=normals, uvs=uvs)


def rotate_point(point, size: float, rotate: Rotate, direction: RotationDirection) -> np.ndarray:
    """Rotated copy of a 3D point within a cell of the given size."""
    result = np.array(point, dtype=float)
    result[0], result[1] = _turn(
        result[0], result[1], size, Rotate(rotate), RotationDirection(direction)
    )
    return result