"""A terrain cell with a raised block covering half of it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rigidsim.mesh import MeshData
from rigidsim.terrain.grid import GridElement, Interference
from rigidsim.terrain.mirror import Mirror, mirror_mesh, mirror_point
from rigidsim.terrain.rotate import Rotate, RotationDirection, rotate_mesh, rotate_point

_UP = (0.0, 0.0, 1.0)
_BACK = (-1.0, 0.0, 0.0)
_SIDE_PY = (0.0, 1.0, 0.0)
_SIDE_NY = (0.0, -1.0, 0.0)

_UVS = (
    (0.0, 0.0), (1 / 3, 0.0), (1 / 3, 1.0), (0.0, 1.0),
    (1 / 3, 0.0), (2 / 3, 0.0), (2 / 3, 1.0), (1 / 3, 1.0),
    (2 / 3, 0.0), (1.0, 0.0), (1.0, 1.0), (2 / 3, 1.0),
    (1.0, 0.0), (1.0, 1.0), (2 / 3, 1.0), (2 / 3, 0.0),
    (1 / 3, 0.0), (1 / 3, 1.0), (2 / 3, 1.0), (2 / 3, 0.0),
)

_INDICES = (
    0, 1, 3, 2, 3, 1,
    4, 5, 7, 6, 7, 5,
    8, 9, 11, 10, 11, 9,
    12, 13, 15, 14, 15, 13,
    16, 17, 19, 18, 19, 17,
)


@dataclass
class Step(GridElement):
    """Ground level for x < size/2 and a block of ``height`` beyond it."""

    size: float = 0.0
    height: float = 0.0
    rotate: Rotate = Rotate.ZERO
    mirror: Mirror = Mirror.NONE

    def __post_init__(self) -> None:
        self.size = float(self.size)
        self.height = float(self.height)
        self.rotate = Rotate(self.rotate)
        self.mirror = Mirror(self.mirror)

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

        z_depth = height - z
        x_depth = x - size / 2.0
        yp_depth = size - y
        yn_depth = y

        if x_depth > z_depth and yp_depth > z_depth and yn_depth > z_depth:
            return self._place(Interference(z_depth, (x, y, height), _UP))
        if yp_depth > x_depth and yn_depth > x_depth:
            return self._place(Interference(x_depth, (size / 2.0, y, z), _BACK))
        if yp_depth > yn_depth:
            return self._place(Interference(yn_depth, (x, 0.0, z), _SIDE_NY))
        return self._place(Interference(yp_depth, (x, size, z), _SIDE_PY))

    def mesh(self) -> MeshData:
        s, h = self.size, self.height
        half = s / 2.0
        positions = [
            # bottom
            (0.0, 0.0, 0.0), (half, 0.0, 0.0), (half, s, 0.0), (0.0, s, 0.0),
            # vertical face
            (half, 0.0, 0.0), (half, 0.0, h), (half, s, h), (half, s, 0.0),
            # top
            (half, 0.0, h), (s, 0.0, h), (s, s, h), (half, s, h),
            # -y side
            (s, 0.0, 0.0), (s, 0.0, h), (half, 0.0, h), (half, 0.0, 0.0),
            # +y side
            (s, s, 0.0), (half, s, 0.0), (half, s, h), (s, s, h),
        ]
        normals = [_UP] * 4 + [_BACK] * 4 + [_UP] * 4 + [_SIDE_NY] * 4 + [_SIDE_PY] * 4
        mesh = MeshData(positions, normals, _UVS, _INDICES)
        mesh = mirror_mesh(s, mesh, self.mirror)
        return rotate_mesh(s, mesh, self.rotate)