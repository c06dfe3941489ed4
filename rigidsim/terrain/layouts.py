"""Ready-made grid terrain layouts."""

from __future__ import annotations

import math
from collections.abc import Iterable

from rigidsim.terrain.function import Function
from rigidsim.terrain.grid import GridElement
from rigidsim.terrain.mirror import Mirror
from rigidsim.terrain.plane import Plane
from rigidsim.terrain.rotate import Rotate
from rigidsim.terrain.step import Step
from rigidsim.terrain.step_slope import StepSlope

Layout = list[list[GridElement]]


def table_top(size: float, height: float) -> Layout:
    """A raised plateau with ramps down on two sides and steps on the others."""
    return [
        [
            StepSlope(size, height, rotate=Rotate.NINETY, mirror=Mirror.NONE),
            Step(size, height, rotate=Rotate.NINETY, mirror=Mirror.NONE),
            StepSlope(size, height, rotate=Rotate.TWO_SEVENTY, mirror=Mirror.YZ),
        ],
        [
            StepSlope(size, height, rotate=Rotate.NINETY, mirror=Mirror.YZ),
            Step(size, height, rotate=Rotate.TWO_SEVENTY, mirror=Mirror.NONE),
            StepSlope(size, height, rotate=Rotate.TWO_SEVENTY, mirror=Mirror.NONE),
        ],
    ]


def steps(size: float, heights: Iterable[float]) -> Layout:
    """One row per height: a step up, a step down, then flat ground."""
    return [
        [
            Step(size, height),
            Step(size, height, rotate=Rotate.ONE_EIGHTY),
            Plane((size, size), 1),
        ]
        for height in heights
    ]


def wave(size: float, height: float, wave_length: float) -> Layout:
    """A 3x3 patch of cosine waves along x, faded to zero at the outer edges."""
    k = 2.0 * math.pi / wave_length

    def x_start(x, _y):
        return x / size

    def x_end(x, _y):
        return 1.0 - x / size

    def y_start(_x, y):
        return y / size

    def y_end(_x, y):
        return 1.0 - y / size

    def dx_start(_x, _y):
        return (1.0 / size, 0.0)

    def dx_end(_x, _y):
        return (-1.0 / size, 0.0)

    def dy_start(_x, _y):
        return (0.0, 1.0 / size)

    def dy_end(_x, _y):
        return (0.0, -1.0 / size)

    def z_fun(x, _y):
        return height * math.cos(k * x)

    def z_der(x, _y):
        return (-height * k * math.sin(k * x), 0.0)

    cell = (size, size)
    x_fades = [((x_start,), (dx_start,)), ((), ()), ((x_end,), (dx_end,))]
    y_fades = [((y_start,), (dy_start,)), ((), ()), ((y_end,), (dy_end,))]

    return [
        [
            Function(
                cell,
                [z_fun, *x_funs, *y_funs],
                [z_der, *x_ders, *y_ders],
            )
            for x_funs, x_ders in x_fades
        ]
        for y_funs, y_ders in y_fades
    ]