"""A flat, level terrain cell."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rigidsim.mesh import MeshData
from rigidsim.terrain.grid import GridElement, Interference, ground_interference

_UP = (0.0, 0.0, 1.0)


@dataclass
class Plane(GridElement):
    """A level patch at z = 0 of the given (x, y) size."""

    size: tuple[float, float]
    subdivisions: int = 1

    def __post_init__(self) -> None:
        size = tuple(float(s) for s in self.size)
        if len(size) != 2:
            raise ValueError(f"a plane needs 2 size components, got {len(size)}")
        self.size = size
        if int(self.subdivisions) != self.subdivisions or self.subdivisions < 0:
            raise ValueError("subdivisions must be a non-negative integer")
        self.subdivisions = int(self.subdivisions)

    def interference(self, point) -> Optional[Interference]:
        """Contact with the plane if the point lies below it."""
        return ground_interference(point)

    def mesh(self) -> MeshData:
        """A regular grid of quads covering the patch, facing up."""
        count = self.subdivisions + 2
        positions, normals, uvs, indices = [], [], [], []
        for y in range(count):
            ty = y / (count - 1)
            for x in range(count):
                tx = x / (count - 1)
                positions.append((tx * self.size[0], ty * self.size[1], 0.0))
                normals.append(_UP)
                uvs.append((tx, 1.0 - ty))
        for y in range(count - 1):
            for x in range(count - 1):
                quad = y * count + x
                indices.extend(
                    (quad, quad + 1, quad + count, quad + count + 1, quad + count, quad + 1)
                )
        return MeshData(positions, normals, uvs, indices)