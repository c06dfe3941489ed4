"""Articulated rigid-body dynamics, fixed-step solvers and grid terrain contact."""

__version__ = "0.1.0"