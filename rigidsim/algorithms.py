"""Per-joint steps of the articulated-body forward-dynamics algorithm."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from rigidsim.joint import Joint, JointType
from rigidsim.sva import InertiaAB, Motion, Xform

_JOINT_TRANSFORMS = {
    JointType.BASE: lambda q: Xform.identity(),
    JointType.RX: Xform.rotx,
    JointType.RY: Xform.roty,
    JointType.RZ: Xform.rotz,
    JointType.PX: Xform.posx,
    JointType.PY: Xform.posy,
    JointType.PZ: Xform.posz,
}


def loop_1_update(joint: Joint, parent: Joint) -> None:
    """Outward pass: kinematics and bias terms from the parent's motion."""
    joint.reset()
    joint.a = Motion.zero()

    joint.xj = _JOINT_TRANSFORMS[joint.joint_type](joint.q)
    joint.vj = joint.qd * joint.s
    joint.xl = joint.xj * joint.xt

    joint.x = joint.xl * parent.x
    joint.v = (joint.xl * parent.v) + joint.vj

    joint.c = joint.v.cross_v(joint.vj)
    joint.iaa = InertiaAB.from_inertia(joint.i)
    joint.paa = joint.v.cross_f(joint.i * joint.v)


def apply_external_update(joint: Joint, parent: Joint) -> None:
    """Fold the joint's external force into its bias force."""
    joint.paa = joint.paa - joint.x * joint.f_ext


def loop_2_update(joint: Joint, parent: Optional[Joint]) -> None:
    """Inward pass: articulated inertias and bias forces, pushed to the parent."""
    joint.uu = joint.iaa * joint.s
    joint.dd = joint.s.dot(joint.uu)
    joint.u = joint.tau - joint.s.dot(joint.paa)

    if parent is None:
        return
    dd_inv = 1.0 / joint.dd
    ia = joint.iaa - dd_inv * joint.uu.self_outer_product()
    pa = joint.paa + (ia * joint.c) + (dd_inv * joint.u) * joint.uu
    xli = joint.xl.inverse()
    parent.iaa = parent.iaa + xli * ia
    parent.paa = parent.paa + xli * pa


def loop_3_update(joint: Joint, parent: Joint) -> None:
    """Second outward pass: joint and body accelerations."""
    ap = joint.xl * parent.a + joint.c
    te = joint.u - joint.uu.dot(ap)
    joint.qdd = te / joint.dd
    joint.a = ap + joint.qdd * joint.s


def integrate_joint_state(joints: Iterable[Joint], dt: float) -> None:
    """Advance every joint by one explicit Euler step."""
    for joint in joints:
        joint.q += joint.qd * dt
        joint.qd += joint.qdd * dt