"""A terrain cell that ramps down from one edge to the opposite one."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from rigidsim.mesh import MeshData
from rigidsim.terrain.grid import GridElement, Interference
from rigidsim.terrain.rotate import Rotate, RotationDirection, rotate_mesh, rotate_point


@dataclass
class Slope(GridElement):
    """A square ramp: ``height`` along y = 0, falling to zero at y = size."""

    size: float = 0.0
    height: float = 0.0
    rotate: Rotate = Rotate.ZERO

    def __post_init__(self) -> None:
        self.size = float(self.size)
        self.height = float(self.height)
        self.rotate = Rotate(self.rotate)

    def _top_normal(self) -> np.ndarray:
        normal = np.array([0.0, self.height, self.size])
        return normal / np.linalg.norm(normal)

    def interference(self, point) -> Optional[Interference]:
        size, height = self.size, self.height
        point = rotate_point(point, size, self.rotate, RotationDirection.REVERSE)
        x, y, z = point
        if z > height:
            return None
        if x < 0.0 or x > size or y < 0.0 or y > size:
            return None

        top_normal = self._top_normal()
        top_point = np.array([0.0, 0.0, height])
        depth = -float(top_normal @ (point - top_point))
        if depth < 0.0:
            return None
        hit = Interference(depth, point - depth * top_normal, top_normal)
        return hit.rotated(size, self.rotate, RotationDirection.FORWARD)

    def mesh(self) -> MeshData:
        size, height = self.size, self.height
        normal = tuple(self._top_normal())
        mesh = MeshData(
            positions=[(0.0, 0.0, height), (size, 0.0, height), (size, size, 0.0), (0.0, size, 0.0)],
            normals=[normal] * 4,
            uvs=[(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)],
            indices=[0, 1, 3, 2, 3, 1],
        )
        return rotate_mesh(size, mesh, self.rotate)