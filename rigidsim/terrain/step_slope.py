"""A terrain cell with a vertical step that ramps back down to the ground."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from rigidsim.mesh import MeshData
from rigidsim.terrain.grid import GridElement, Interference
from rigidsim.terrain.mirror import Mirror, mirror_mesh, mirror_point
from rigidsim.terrain.rotate import Rotate, RotationDirection, rotate_mesh, rotate_point

_UP = (0.0, 0.0, 1.0)
_BACK = (-1.0, 0.0, 0.0)

_UVS = (
    (0.0, 0.0), (1 / 3, 0.0), (1 / 3, 1.0), (0.0, 1.0),
    (1 / 3, 0.0), (2 / 3, 0.0), (1 / 3, 1.0),
    (2 / 3, 0.0), (1.0, 0.0), (1.0, 1.0), (2 / 3, 1.0),
)

_INDICES = (
    0, 1, 3, 2, 3, 1,
    4, 5, 6,
    7, 8, 10, 9, 10, 8,
)


@dataclass
class StepSlope(GridElement):
    """Ground for x < size/2, then a ramp falling from ``height`` at y = 0."""

    size: float = 0.0
    height: float = 0.0
    rotate: Rotate = Rotate.ZERO
    mirror: Mirror = Mirror.NONE

    def __post_init__(self) -> None:
        self.size = float(self.size)
        self.height = float(self.height)
        self.rotate = Rotate(self.rotate)
        self.mirror = Mirror(self.mirror)

    def _top_normal(self) -> np.ndarray:
        normal = np.array([0.0, self.height, self.size])
        return normal / np.linalg.norm(normal)

    def _place(self, hit: Interference) -> Interference:
        return hit.mirrored(self.size, self.mirror).rotated(
            self.size, self.rotate, RotationDirection.FORWARD
        )

    def interference(self, point) -> Optional[Interference]:
        size, height = self.size, self.height
        point = rotate_point(point, size, self.rotate, RotationDirection.REVERSE)
        point = mirror_point(point, size, self.mirror)
        x, y, z = point

        if z > height:
            return None
        if x < 0.0 or x > size or y < 0.0 or y > size:
            return None
        if x < size / 2.0:
            if z > 0.0:
                return None
            return self._place(Interference(-z, (x, y, 0.0), _UP))

        top_normal = self._top_normal()
        top_corner = np.array([size / 2.0, 0.0, height])
        depth = -float(top_normal @ (point - top_corner))
        if depth < 0.0:
            return None

        x_depth = x - size / 2.0
        if x_depth > depth:
            return self._place(Interference(depth, point + depth * top_normal, top_normal))
        return self._place(
            Interference(x_depth, point - np.array([x_depth, 0.0, 0.0]), _BACK)
        )

    def mesh(self) -> MeshData:
        s, h = self.size, self.height
        half = s / 2.0
        slope_normal = tuple(self._top_normal())
        positions = [
            # ground
            (0.0, 0.0, 0.0), (half, 0.0, 0.0), (half, s, 0.0), (0.0, s, 0.0),
            # vertical face
            (half, 0.0, 0.0), (half, 0.0, h), (half, s, 0.0),
            # sloped face
            (half, 0.0, h), (s, 0.0, h), (s, s, 0.0), (half, s, 0.0),
        ]
        normals = [_UP] * 4 + [_BACK] * 3 + [slope_normal] * 4
        mesh = MeshData(positions, normals, _UVS, _INDICES)
        mesh = mirror_mesh(s, mesh, self.mirror)
        return rotate_mesh(s, mesh, self.rotate)