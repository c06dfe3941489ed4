import numpy as np
import pytest

from rigidsim.joint import Joint
from rigidsim.structure import MultiBody
from rigidsim.sva import Inertia, Motion, Xform

G = 9.81


def _gravity_base():
    return Joint.base(Motion((0.0, 0.0, G), (0.0, 0.0, 0.0)))


def _link_inertia():
    return Inertia(1.0, (0.0, 0.0, -0.5), np.diag([0.1, 0.1, 0.01]))


def _tree():
    body = MultiBody()
    base = body.add_base(Joint(name="base"))
    a = body.add_joint(Joint(name="a"), base)
    b = body.add_joint(Joint(name="b"), a)
    c = body.add_joint(Joint(name="c"), base)
    return body, base, a, b, c


def test_children_in_insertion_order():
    body, base, a, b, c = _tree()
    assert body.children(base) == [a, c]
    assert body.children(a) == [b]
    assert body.children(b) == []
    assert len(body) == 4
    assert body[b].name == "b"


def test_add_joint_with_unknown_parent_raises():
    body = MultiBody()
    with pytest.raises(KeyError):
        body.add_joint(Joint(), 42)


def test_children_of_unknown_joint_raises():
    with pytest.raises(KeyError):
        MultiBody().children(7)


def test_outward_pass_visits_parents_first():
    body, *_ = _tree()
    seen = []
    body.base_loop(lambda joint, parent: seen.append((parent.name, joint.name)), None)
    assert seen == [("base", "a"), ("a", "b"), ("base", "c")]


def test_inward_pass_visits_children_first():
    body, *_ = _tree()
    seen = []
    body.base_loop(None, lambda joint, parent: seen.append(joint.name))
    assert seen == ["b", "a", "c"]


def test_base_is_never_visited():
    body, *_ = _tree()
    seen = []
    body.base_loop(lambda j, p: seen.append(j.name), lambda j, p: seen.append(j.name))
    assert "base" not in seen
    assert len(seen) == 6


def test_full_pass_on_slider_gives_gravity():
    body = MultiBody()
    base = body.add_base(_gravity_base())
    slider = body.add_joint(
        Joint.pz("body_pz", Inertia(10.0, (0, 0, 0), np.eye(3)), Xform.identity()), base
    )
    body.loop_1()
    body.apply_external_forces()
    body.loop_23()
    assert body[slider].qdd == pytest.approx(-G)


def test_hanging_double_pendulum_is_at_rest():
    body = MultiBody()
    base = body.add_base(_gravity_base())
    upper = body.add_joint(Joint.ry("ry0", _link_inertia(), Xform.identity()), base)
    lower = body.add_joint(Joint.ry("ry1", _link_inertia(), Xform.posz(-1.0)), upper)
    body.loop_1()
    body.apply_external_forces()
    body.loop_23()
    assert body[upper].qdd == pytest.approx(0.0, abs=1e-12)
    assert body[lower].qdd == pytest.approx(0.0, abs=1e-12)


def test_displaced_double_pendulum_upper_link_is_restored():
    body = MultiBody()
    base = body.add_base(_gravity_base())
    upper_joint = Joint.ry("ry0", _link_inertia(), Xform.identity())
    upper_joint.q = 0.3
    upper = body.add_joint(upper_joint, base)
    lower_joint = Joint.ry("ry1", _link_inertia(), Xform.posz(-1.0))
    lower_joint.q = -0.3
    body.add_joint(lower_joint, upper)
    body.loop_1()
    body.apply_external_forces()
    body.loop_23()
    assert body[upper].qdd < 0.0