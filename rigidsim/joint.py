"""Joints of a rigid-body tree and the state they carry through integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from numbers import Real

from rigidsim.sva import Force, Inertia, InertiaAB, Motion, Xform


class JointType(Enum):
    """Kind of motion a joint allows relative to its parent."""

    BASE = "base"
    RX = "rx"
    RY = "ry"
    RZ = "rz"
    PX = "px"
    PY = "py"
    PZ = "pz"


@dataclass
class JointState:
    """Integrable state of a single joint: position and velocity."""

    q: float = 0.0
    qd: float = 0.0

    @classmethod
    def zero(cls) -> JointState:
        return cls(0.0, 0.0)

    @classmethod
    def from_joint(cls, joint: Joint) -> JointState:
        return cls(joint.q, joint.qd)

    def __add__(self, other):
        if not isinstance(other, JointState):
            return NotImplemented
        return JointState(self.q + other.q, self.qd + other.qd)

    def __mul__(self, scalar):
        if not isinstance(scalar, Real):
            return NotImplemented
        k = float(scalar)
        return JointState(self.q * k, self.qd * k)

    __rmul__ = __mul__

    def __float__(self) -> float:
        return float(self.q)


@dataclass(eq=False)
class Joint:
    """A single-degree-of-freedom joint together with the body it moves."""

    joint_type: JointType = JointType.RX
    name: str = ""

    # definition
    s: Motion = field(default_factory=Motion)
    i: Inertia = field(default_factory=Inertia)
    xt: Xform = field(default_factory=Xform)

    # state and solution
    q: float = 0.0
    qd: float = 0.0
    qdd: float = 0.0

    # kinematics
    xl: Xform = field(default_factory=Xform)
    xj: Xform = field(default_factory=Xform)
    x: Xform = field(default_factory=Xform)
    v: Motion = field(default_factory=Motion)
    vj: Motion = field(default_factory=Motion)
    c: Motion = field(default_factory=Motion)
    a: Motion = field(default_factory=Motion)

    # articulated-body quantities
    iaa: InertiaAB = field(default_factory=InertiaAB)
    paa: Force = field(default_factory=Force)
    tau: float = 0.0
    f_ext: Force = field(default_factory=Force)
    dd: float = 0.0
    u: float = 0.0
    uu: Force = field(default_factory=Force)
    meshes: list = field(default_factory=list)

    @classmethod
    def base(cls, a: Motion) -> Joint:
        """The fixed root of a tree; ``a`` is its acceleration (e.g. gravity)."""
        return cls(joint_type=JointType.BASE, a=a)

    @classmethod
    def _single(cls, joint_type, name, inertia, xt, linear, angular) -> Joint:
        return cls(
            joint_type=joint_type,
            name=name,
            i=inertia,
            xt=xt,
            s=Motion(linear, angular),
        )

    @classmethod
    def rx(cls, name: str, inertia: Inertia, xt: Xform) -> Joint:
        return cls._single(JointType.RX, name, inertia, xt, (0, 0, 0), (1, 0, 0))

    @classmethod
    def ry(cls, name: str, inertia: Inertia, xt: Xform) -> Joint:
        return cls._single(JointType.RY, name, inertia, xt, (0, 0, 0), (0, 1, 0))

    @classmethod
    def rz(cls, name: str, inertia: Inertia, xt: Xform) -> Joint:
        return cls._single(JointType.RZ, name, inertia, xt, (0, 0, 0), (0, 0, 1))

    @classmethod
    def px(cls, name: str, inertia: Inertia, xt: Xform) -> Joint:
        return cls._single(JointType.PX, name, inertia, xt, (1, 0, 0), (0, 0, 0))

    @classmethod
    def py(cls, name: str, inertia: Inertia, xt: Xform) -> Joint:
        return cls._single(JointType.PY, name, inertia, xt, (0, 1, 0), (0, 0, 0))

    @classmethod
    def pz(cls, name: str, inertia: Inertia, xt: Xform) -> Joint:
        return cls._single(JointType.PZ, name, inertia, xt, (0, 0, 1), (0, 0, 0))

    @property
    def state(self) -> JointState:
        return JointState(self.q, self.qd)

    @state.setter
    def state(self, value: JointState) -> None:
        self.q = value.q
        self.qd = value.qd

    @property
    def dstate(self) -> JointState:
        """Time derivative of the state: (qd, qdd)."""
        return JointState(self.qd, self.qdd)

    @dstate.setter
    def dstate(self, value: JointState) -> None:
        self.qd = value.q
        self.qdd = value.qd

    def reset(self) -> None:
        """Clear the acceleration and the applied loads."""
        self.qdd = 0.0
        self.f_ext = Force.zero()
        self.tau = 0.0