"""Declarative descriptions of body shapes and their placement transforms."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from rigidsim.sva import Xform


@dataclass(frozen=True)
class BoxShape:
    """A box centred on the body origin with the given edge lengths."""

    dimensions: tuple[float, float, float]

    def __post_init__(self) -> None:
        dims = tuple(float(d) for d in self.dimensions)
        if len(dims) != 3:
            raise ValueError(f"a box needs 3 dimensions, got {len(dims)}")
        object.__setattr__(self, "dimensions", dims)


@dataclass(frozen=True)
class CylinderShape:
    height: float
    radius: float


@dataclass(frozen=True)
class WheelShape:
    radius: float
    width: float


@dataclass(frozen=True)
class FileShape:
    """A mesh loaded from a model file."""

    file_name: str


MeshType = Union[BoxShape, CylinderShape, WheelShape, FileShape]


class TransformKind(Enum):
    IDENTITY = "identity"
    POSITION = "position"
    QUATERNION = "quaternion"
    ROTATION_X = "rotation_x"
    ROTATION_Y = "rotation_y"
    ROTATION_Z = "rotation_z"


_ARITY = {
    TransformKind.IDENTITY: 0,
    TransformKind.POSITION: 3,
    TransformKind.QUATERNION: 4,
    TransformKind.ROTATION_X: 1,
    TransformKind.ROTATION_Y: 1,
    TransformKind.ROTATION_Z: 1,
}


@dataclass(frozen=True)
class TransformDef:
    """A placement transform: its kind and the numbers that define it."""

    kind: TransformKind = TransformKind.IDENTITY
    values: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        values = tuple(float(v) for v in self.values)
        expected = _ARITY[self.kind]
        if len(values) != expected:
            raise ValueError(
                f"{self.kind.value} transform needs {expected} values, got {len(values)}"
            )
        object.__setattr__(self, "values", values)

    @classmethod
    def identity(cls) -> TransformDef:
        return cls()

    @classmethod
    def from_position(cls, position) -> TransformDef:
        return cls(TransformKind.POSITION, tuple(position))

    @classmethod
    def from_quaternion(cls, quaternion) -> TransformDef:
        """Quaternion given as [x, y, z, w]."""
        return cls(TransformKind.QUATERNION, tuple(quaternion))

    @classmethod
    def rotation_x(cls, angle: float) -> TransformDef:
        return cls(TransformKind.ROTATION_X, (angle,))

    @classmethod
    def rotation_y(cls, angle: float) -> TransformDef:
        return cls(TransformKind.ROTATION_Y, (angle,))

    @classmethod
    def rotation_z(cls, angle: float) -> TransformDef:
        return cls(TransformKind.ROTATION_Z, (angle,))

    def to_xform(self) -> Xform:
        """The spatial transform this definition describes."""
        kind, values = self.kind, self.values
        if kind is TransformKind.IDENTITY:
            return Xform.identity()
        if kind is TransformKind.POSITION:
            return Xform.pos(*values)
        if kind is TransformKind.QUATERNION:
            return Xform.quaternion(*values)
        if kind is TransformKind.ROTATION_X:
            return Xform.rotx(values[0])
        if kind is TransformKind.ROTATION_Y:
            return Xform.roty(values[0])
        return Xform.rotz(values[0])


def _rgba(color) -> tuple[float, float, float, float]:
    channels = tuple(float(c) for c in color)
    if len(channels) == 3:
        return channels + (1.0,)
    if len(channels) == 4:
        return channels
    raise ValueError(f"a colour needs 3 or 4 channels, got {len(channels)}")


@dataclass(frozen=True)
class MeshDef:
    """What a body looks like: its shape, placement and RGBA colour."""

    mesh_type: MeshType
    transform: TransformDef = field(default_factory=TransformDef)
    color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", _rgba(self.color))