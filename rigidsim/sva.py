"""Spatial vector algebra: motions, forces, inertias and coordinate transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real

import numpy as np


def _vec(values) -> np.ndarray:
    arr = np.array(values, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"expected 3 components, got {arr.size}")
    return arr


def _mat(values) -> np.ndarray:
    arr = np.array(values, dtype=float)
    if arr.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {arr.shape}")
    return arr


def _cross_matrix(v: np.ndarray) -> np.ndarray:
    x, y, z = v
    return np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])


def vector(x: float, y: float, z: float) -> np.ndarray:
    """Return a 3-component float vector."""
    return np.array([x, y, z], dtype=float)


def rx(angle: float) -> np.ndarray:
    """Coordinate rotation matrix about the x axis."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, s], [0.0, -s, c]])


def ry(angle: float) -> np.ndarray:
    """Coordinate rotation matrix about the y axis."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, 0.0, -s], [0.0, 1.0, 0.0], [s, 0.0, c]])


def rz(angle: float) -> np.ndarray:
    """Coordinate rotation matrix about the z axis."""
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, s, 0.0], [-s, c, 0.0], [0.0, 0.0, 1.0]])


@dataclass(eq=False)
class Velocity:
    """Linear velocity of a point."""

    vel: np.ndarray = field(default_factory=lambda: np.zeros(3))

    __array_ufunc__ = None

    def __post_init__(self) -> None:
        self.vel = _vec(self.vel)


@dataclass(eq=False)
class Motion:
    """Spatial motion vector: linear part ``v`` and angular part ``w``."""

    v: np.ndarray = field(default_factory=lambda: np.zeros(3))
    w: np.ndarray = field(default_factory=lambda: np.zeros(3))

    __array_ufunc__ = None

    def __post_init__(self) -> None:
        self.v = _vec(self.v)
        self.w = _vec(self.w)

    @classmethod
    def zero(cls) -> Motion:
        return cls()

    def cross_v(self, other: Motion) -> Motion:
        """Spatial cross product of two motions."""
        return Motion(
            np.cross(self.w, other.v) + np.cross(self.v, other.w),
            np.cross(self.w, other.w),
        )

    def cross_f(self, force: Force) -> Force:
        """Spatial cross product of a motion with a force."""
        return Force(
            np.cross(self.w, force.f),
            np.cross(self.w, force.m) + np.cross(self.v, force.f),
        )

    def velocity_point(self, point) -> Velocity:
        """Velocity of the given point moving with this motion."""
        return Velocity(np.cross(self.w, _vec(point)) + self.v)

    def dot(self, force: Force) -> float:
        """Scalar product (power) of this motion with a force."""
        return float(self.w @ force.m + self.v @ force.f)

    def __add__(self, other):
        if not isinstance(other, Motion):
            return NotImplemented
        return Motion(self.v + other.v, self.w + other.w)

    def __rmul__(self, scalar):
        if not isinstance(scalar, Real):
            return NotImplemented
        k = float(scalar)
        return Motion(k * self.v, k * self.w)


@dataclass(eq=False)
class Force:
    """Spatial force vector: linear part ``f`` and moment ``m``."""

    f: np.ndarray = field(default_factory=lambda: np.zeros(3))
    m: np.ndarray = field(default_factory=lambda: np.zeros(3))

    __array_ufunc__ = None

    def __post_init__(self) -> None:
        self.f = _vec(self.f)
        self.m = _vec(self.m)

    @classmethod
    def zero(cls) -> Force:
        return cls()

    def self_outer_product(self) -> InertiaAB:
        """Outer product of this force with itself, as an articulated inertia."""
        return InertiaAB(
            np.outer(self.f, self.f),
            np.outer(self.m, self.f),
            np.outer(self.m, self.m),
        )

    @classmethod
    def force_point(cls, force, point) -> Force:
        """Force applied at a point, expressed about the origin."""
        force = _vec(force)
        return cls(force, np.cross(_vec(point), force))

    @classmethod
    def from_mat(cls, mat) -> Force:
        """Build from a 6-vector laid out as (moment, force)."""
        arr = np.array(mat, dtype=float).reshape(-1)
        if arr.shape != (6,):
            raise ValueError(f"expected 6 components, got {arr.size}")
        return cls(arr[3:6], arr[0:3])

    def dot(self, motion: Motion) -> float:
        """Scalar product (power) of this force with a motion."""
        return float(self.m @ motion.w + self.f @ motion.v)

    def __add__(self, other):
        if not isinstance(other, Force):
            return NotImplemented
        return Force(self.f + other.f, self.m + other.m)

    def __sub__(self, other):
        if not isinstance(other, Force):
            return NotImplemented
        return Force(self.f - other.f, self.m - other.m)

    def __rmul__(self, scalar):
        if not isinstance(scalar, Real):
            return NotImplemented
        k = float(scalar)
        return Force(k * self.f, k * self.m)


@dataclass(eq=False)
class Inertia:
    """Rigid-body inertia: mass, first moment ``c`` and rotational inertia."""

    m: float = 0.0
    c: np.ndarray = field(default_factory=lambda: np.zeros(3))
    moi: np.ndarray = field(default_factory=lambda: np.zeros((3, 3)))

    __array_ufunc__ = None

    def __post_init__(self) -> None:
        self.m = float(self.m)
        self.c = _vec(self.c)
        self.moi = _mat(self.moi)

    @classmethod
    def zero(cls) -> Inertia:
        return cls()

    def __mul__(self, motion):
        if not isinstance(motion, Motion):
            return NotImplemented
        return Force(
            self.m * motion.v - np.cross(self.c, motion.w),
            self.moi @ motion.w + np.cross(self.c, motion.v),
        )


@dataclass(eq=False)
class InertiaAB:
    """Articulated-body inertia held as three 3x3 blocks."""

    m: np.ndarray = field(default_factory=lambda: np.zeros((3, 3)))
    c: np.ndarray = field(default_factory=lambda: np.zeros((3, 3)))
    moi: np.ndarray = field(default_factory=lambda: np.zeros((3, 3)))

    __array_ufunc__ = None

    def __post_init__(self) -> None:
        self.m = _mat(self.m)
        self.c = _mat(self.c)
        self.moi = _mat(self.moi)

    @classmethod
    def zero(cls) -> InertiaAB:
        return cls()

    @classmethod
    def from_mat(cls, mat) -> InertiaAB:
        """Build from a 6x6 matrix laid out as [[moi, c], [c.T, m]]."""
        arr = np.array(mat, dtype=float)
        if arr.shape != (6, 6):
            raise ValueError(f"expected a 6x6 matrix, got shape {arr.shape}")
        return cls(arr[3:6, 3:6], arr[0:3, 3:6], arr[0:3, 0:3])

    @classmethod
    def from_inertia(cls, inertia: Inertia) -> InertiaAB:
        c_cross = _cross_matrix(inertia.c)
        return cls(
            inertia.m * np.eye(3),
            inertia.m * c_cross,
            inertia.moi - inertia.m * (c_cross @ c_cross),
        )

    def __mul__(self, other):
        if isinstance(other, Motion):
            return Force(
                self.m @ other.v + self.c.T @ other.w,
                self.moi @ other.w + self.c @ other.v,
            )
        if isinstance(other, MotionArray):
            return ForceArray(tuple(self * motion for motion in other.motions))
        return NotImplemented

    def __rmul__(self, scalar):
        if not isinstance(scalar, Real):
            return NotImplemented
        k = float(scalar)
        return InertiaAB(k * self.m, k * self.c, k * self.moi)

    def __add__(self, other):
        if not isinstance(other, InertiaAB):
            return NotImplemented
        return InertiaAB(self.m + other.m, self.c + other.c, self.moi + other.moi)

    def __sub__(self, other):
        if not isinstance(other, InertiaAB):
            return NotImplemented
        return InertiaAB(self.m - other.m, self.c - other.c, self.moi - other.moi)


@dataclass(eq=False)
class Xform:
    """Spatial coordinate transform: a translation followed by a rotation."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.eye(3))

    __array_ufunc__ = None

    def __post_init__(self) -> None:
        self.position = _vec(self.position)
        self.rotation = _mat(self.rotation)

    @classmethod
    def identity(cls) -> Xform:
        return cls()

    def inverse(self) -> Xform:
        return Xform(-(self.rotation @ self.position), self.rotation.T)

    @classmethod
    def rotx(cls, angle: float) -> Xform:
        return cls(rotation=rx(angle))

    @classmethod
    def roty(cls, angle: float) -> Xform:
        return cls(rotation=ry(angle))

    @classmethod
    def rotz(cls, angle: float) -> Xform:
        return cls(rotation=rz(angle))

    @classmethod
    def posx(cls, x: float) -> Xform:
        return cls(position=vector(x, 0.0, 0.0))

    @classmethod
    def posy(cls, y: float) -> Xform:
        return cls(position=vector(0.0, y, 0.0))

    @classmethod
    def posz(cls, z: float) -> Xform:
        return cls(position=vector(0.0, 0.0, z))

    @classmethod
    def pos(cls, x: float, y: float, z: float) -> Xform:
        return cls(position=vector(x, y, z))

    @classmethod
    def quaternion(cls, x: float, y: float, z: float, w: float) -> Xform:
        """Pure rotation from a quaternion.

        The components are taken in the order (scalar, i, j, k), and the
        quaternion is normalised first.
        """
        q = np.array([x, y, z, w], dtype=float)
        norm = float(np.linalg.norm(q))
        if norm == 0.0:
            raise ValueError("cannot build a rotation from a zero quaternion")
        qw, qx, qy, qz = q / norm
        rotation = np.array(
            [
                [1 - 2 * (qy * qy + qz * qz), 2 * (qx * qy - qw * qz), 2 * (qx * qz + qw * qy)],
                [2 * (qx * qy + qw * qz), 1 - 2 * (qx * qx + qz * qz), 2 * (qy * qz - qw * qx)],
                [2 * (qx * qz - qw * qy), 2 * (qy * qz + qw * qx), 1 - 2 * (qx * qx + qy * qy)],
            ]
        )
        return cls(np.zeros(3), rotation)

    def transform_point(self, point) -> np.ndarray:
        """Coordinates of a point in the transformed frame."""
        return self.rotation @ (_vec(point) - self.position)

    def __mul__(self, other):
        rot, pos = self.rotation, self.position
        if isinstance(other, Xform):
            return Xform(other.position + other.rotation.T @ pos, rot @ other.rotation)
        if isinstance(other, Motion):
            return Motion(rot @ (other.v - np.cross(pos, other.w)), rot @ other.w)
        if isinstance(other, Force):
            return Force(rot @ other.f, rot @ (other.m - np.cross(pos, other.f)))
        if isinstance(other, InertiaAB):
            p_cross = _cross_matrix(pos)
            shifted_c = other.c - p_cross @ other.m
            return InertiaAB(
                rot @ other.m @ rot.T,
                rot @ shifted_c @ rot.T,
                rot @ ((other.moi - p_cross @ other.c.T) + shifted_c @ p_cross) @ rot.T,
            )
        if isinstance(other, Velocity):
            return Velocity(rot @ other.vel)
        if isinstance(other, np.ndarray) and other.shape == (3,):
            return rot @ other
        return NotImplemented


@dataclass(eq=False)
class ForceArray:
    """A fixed sequence of spatial forces."""

    forces: tuple[Force, ...] = ()

    __array_ufunc__ = None

    def __post_init__(self) -> None:
        self.forces = tuple(self.forces)

    def __len__(self) -> int:
        return len(self.forces)

    def to_mat(self) -> np.ndarray:
        """6xN matrix whose columns are (moment, force) of each entry."""
        if not self.forces:
            return np.zeros((6, 0))
        return np.column_stack([np.concatenate((f.m, f.f)) for f in self.forces])

    def __mul__(self, motion):
        if not isinstance(motion, Motion):
            return NotImplemented
        return np.array([motion.dot(force) for force in self.forces])


@dataclass(eq=False)
class MotionArray:
    """A fixed sequence of spatial motions."""

    motions: tuple[Motion, ...] = ()

    __array_ufunc__ = None

    def __post_init__(self) -> None:
        self.motions = tuple(self.motions)

    def __len__(self) -> int:
        return len(self.motions)

    def __mul__(self, other):
        if isinstance(other, ForceArray):
            if len(other) != len(self):
                raise ValueError("motion and force arrays differ in length")
            return np.array(
                [[motion.dot(force) for force in other.forces] for motion in self.motions]
            ).reshape(len(self), len(other))
        if isinstance(other, Force):
            return np.array([motion.dot(other) for motion in self.motions])
        if isinstance(other, np.ndarray):
            weights = other.reshape(-1)
            if weights.size != len(self):
                raise ValueError(
                    f"expected {len(self)} coefficients, got {weights.size}"
                )
            result = Motion.zero()
            for motion, weight in zip(self.motions, weights):
                result = result + float(weight) * motion
            return result
        return NotImplemented