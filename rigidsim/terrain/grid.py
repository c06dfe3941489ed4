"""A terrain made of square cells laid out on a regular grid."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

import numpy as np

from rigidsim.mesh import MeshData
from rigidsim.terrain.mirror import Mirror, mirror_point
from rigidsim.terrain.rotate import Rotate, RotationDirection, rotate_point

EXTENDED_SIZE = 500.0
GROUND_COLOR = (140 / 255, 120 / 255, 100 / 255, 1.0)
ELEMENT_COLOR = (100 / 255, 100 / 255, 100 / 255, 1.0)


def _point(values) -> np.ndarray:
    arr = np.array(values, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"expected 3 components, got {arr.size}")
    return arr


@dataclass(eq=False)
class Interference:
    """Penetration of a point into the terrain: depth, contact point and normal."""

    magnitude: float
    position: np.ndarray
    normal: np.ndarray

    def __post_init__(self) -> None:
        self.magnitude = float(self.magnitude)
        self.position = _point(self.position)
        self.normal = _point(self.normal)

    def mirrored(self, size: float, mirror: Mirror) -> Interference:
        return Interference(
            self.magnitude,
            mirror_point(self.position, size, mirror),
            mirror_point(self.normal, 0.0, mirror),
        )

    def rotated(
        self, size: float, rotate: Rotate, direction: RotationDirection
    ) -> Interference:
        return Interference(
            self.magnitude,
            rotate_point(self.position, size, rotate, direction),
            rotate_point(self.normal, 0.0, rotate, direction),
        )


def ground_interference(point) -> Optional[Interference]:
    """Contact with the flat ground plane z = 0, if the point is below it."""
    point = _point(point)
    if point[2] < 0.0:
        return Interference(-point[2], (point[0], point[1], 0.0), (0.0, 0.0, 1.0))
    return None


class GridElement(ABC):
    """One cell of a grid terrain, in coordinates local to the cell."""

    @abstractmethod
    def interference(self, point) -> Optional[Interference]:
        """Contact of a local point with this cell, or None."""

    @abstractmethod
    def mesh(self) -> MeshData:
        """Renderable surface of this cell in local coordinates."""


class GridTerrain:
    """Cells arranged in rows along y and columns along x, on flat ground."""

    def __init__(self, elements: Iterable[Iterable[GridElement]], step: Sequence[float]) -> None:
        self.elements = [list(row) for row in elements]
        self.step = (float(step[0]), float(step[1]))
        if self.step[0] <= 0.0 or self.step[1] <= 0.0:
            raise ValueError("grid steps must be positive")

    def interference(self, point) -> Optional[Interference]:
        """Contact of a world point with the terrain, or None."""
        point = _point(point)
        x, y = point[0], point[1]
        if x < 0.0 or y < 0.0:
            return ground_interference(point)

        x_index = int(x / self.step[0])
        y_index = int(y / self.step[1])
        offset = np.array([x_index * self.step[0], y_index * self.step[1], 0.0])
        if y_index < len(self.elements) and x_index < len(self.elements[y_index]):
            hit = self.elements[y_index][x_index].interference(point - offset)
            if hit is None:
                return None
            return Interference(hit.magnitude, hit.position + offset, hit.normal)
        return ground_interference(point)

    def surrounding_planes(self) -> list[tuple[tuple[float, float], tuple[float, float]]]:
        """Offsets and sizes of the flat ground patches around the grid."""
        if not self.elements:
            raise ValueError("the grid has no rows")
        x_grid = len(self.elements[0]) * self.step[0]
        y_grid = len(self.elements) * self.step[1]
        x_offsets = (-EXTENDED_SIZE, 0.0, x_grid)
        y_offsets = (-EXTENDED_SIZE, 0.0, y_grid)
        x_sizes = (EXTENDED_SIZE, x_grid, EXTENDED_SIZE)
        y_sizes = (EXTENDED_SIZE, y_grid, EXTENDED_SIZE)
        return [
            ((x_off, y_off), (x_size, y_size))
            for y_off, y_size in zip(y_offsets, y_sizes)
            for x_off, x_size in zip(x_offsets, x_sizes)
            if not (x_off == 0.0 and y_off == 0.0)
        ]

    def element_placements(self) -> list[tuple[tuple[float, float], GridElement]]:
        """Each cell with the world offset of its local origin."""
        return [
            ((x_index * self.step[0], y_index * self.step[1]), element)
            for y_index, row in enumerate(self.elements)
            for x_index, element in enumerate(row)
        ]