"""A terrain cell whose surface height is a product of analytic functions."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from rigidsim.mesh import MeshData
from rigidsim.terrain.grid import GridElement, Interference

Surface = Callable[[float, float], float]
Gradient = Callable[[float, float], tuple[float, float]]

MESH_VERTEX_COUNT = 100


def evaluate(
    functions: Sequence[Surface], derivatives: Sequence[Gradient], point
) -> tuple[float, float, float]:
    """Height and (d/dx, d/dy) of the product of ``functions`` at a point.

    The gradient is assembled with the product rule from each factor's
    value and its given partial derivatives.
    """
    x, y = float(point[0]), float(point[1])
    height = 1.0
    parts_x = [1.0] * len(functions)
    parts_y = [1.0] * len(functions)

    for i_fun, (fun, der) in enumerate(zip(functions, derivatives)):
        value = fun(x, y)
        dvx, dvy = der(x, y)
        height *= value
        parts_x = [p * (dvx if i == i_fun else value) for i, p in enumerate(parts_x)]
        parts_y = [p * (dvy if i == i_fun else value) for i, p in enumerate(parts_y)]

    return height, sum(parts_x), sum(parts_y)


def _default_functions() -> list[Surface]:
    return [lambda x, _y: math.cos(x)]


def _default_derivatives() -> list[Gradient]:
    return [lambda x, _y: (-math.sin(x), 0.0)]


@dataclass
class Function(GridElement):
    """A cell of the given (x, y) size with height ``prod(f(x, y))``."""

    size: tuple[float, float] = (10.0, 10.0)
    functions: list[Surface] = field(default_factory=_default_functions)
    derivatives: list[Gradient] = field(default_factory=_default_derivatives)

    def __post_init__(self) -> None:
        size = tuple(float(s) for s in self.size)
        if len(size) != 2:
            raise ValueError(f"a function cell needs 2 size components, got {len(size)}")
        self.size = size
        self.functions = list(self.functions)
        self.derivatives = list(self.derivatives)

    def interference(self, point) -> Optional[Interference]:
        """Vertical contact with the surface if the point lies below it."""
        x, y, z = (float(v) for v in point)
        if x < 0.0 or x > self.size[0] or y < 0.0 or y > self.size[1]:
            return None

        height, dx, dy = evaluate(self.functions, self.derivatives, (x, y, z))
        if z > height:
            return None

        normal = np.array([-dx, -dy, 1.0])
        normal /= np.linalg.norm(normal)
        return Interference(height - z, (x, y, height), normal)

    def mesh(self) -> MeshData:
        """A regular grid sampling of the surface."""
        count = MESH_VERTEX_COUNT
        positions, normals, uvs, indices = [], [], [], []
        for y_vert in range(count):
            ty = y_vert / (count - 1)
            y = ty * self.size[1]
            for x_vert in range(count):
                tx = x_vert / (count - 1)
                x = tx * self.size[0]
                height, dx, dy = evaluate(self.functions, self.derivatives, (x, y, 0.0))
                normal = np.array([-dx, dy, 1.0])
                normal /= np.linalg.norm(normal)
                positions.append((x, y, height))
                normals.append(tuple(normal))
                uvs.append((tx, 1.0 - ty))
        for y in range(count - 1):
            for x in range(count - 1):
                quad = y * count + x
                indices.extend(
                    (quad, quad + 1, quad + count, quad + count + 1, quad + count, quad + 1)
                )
        return MeshData(positions, normals, uvs, indices)