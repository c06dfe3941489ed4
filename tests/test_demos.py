import math

import pytest

from rigidsim.demos import (
    SpringDamper,
    build_1dof,
    build_double_pendulum,
    build_pendulum,
    main,
)
from rigidsim.integrator import StateMap
from rigidsim.joint import Joint, JointState


def _states(demo, **overrides):
    states = StateMap(demo.simulation.physics_state.states)
    for name, state in overrides.items():
        states[demo.joint_ids[name]] = state
    return states


def test_spring_damper_apply_reduces_torque():
    joint = Joint()
    joint.q = 1.0
    joint.qd = 2.0
    SpringDamper(3.0, 5.0).apply(joint)
    assert joint.tau == pytest.approx(-13.0)


def test_spring_damper_zero_state_leaves_torque():
    joint = Joint()
    joint.tau = 4.0
    SpringDamper(100.0, 1.0).apply(joint)
    assert joint.tau == 4.0


def test_1dof_free_fall_acceleration_at_rest():
    demo = build_1dof()
    jid = demo.joint_ids["body_pz"]
    d = demo.simulation.derivative(_states(demo, body_pz=JointState(0.0, 0.0)))
    assert d[jid].q == pytest.approx(0.0)
    assert d[jid].qd == pytest.approx(-9.81)


def test_1dof_static_equilibrium_has_no_acceleration():
    demo = build_1dof()
    jid = demo.joint_ids["body_pz"]
    q_eq = -10.0 * 9.81 / 100.0
    d = demo.simulation.derivative(_states(demo, body_pz=JointState(q_eq, 0.0)))
    assert d[jid].qd == pytest.approx(0.0, abs=1e-9)


def test_1dof_clock_and_mesh():
    demo = build_1dof()
    assert demo.simulation.time.end_time == 10.0
    assert demo.simulation.time.dt == 0.002
    assert demo.joint_ids["body_pz"] in demo.mesh_defs


def test_pendulum_starts_horizontal_and_swings_symmetrically():
    demo = build_pendulum()
    jid = demo.joint_ids["body_ry0"]
    assert demo.simulation.physics_state.states[jid].q == pytest.approx(0.5 * math.pi)
    plus = demo.simulation.derivative(_states(demo, body_ry0=JointState(0.5 * math.pi, 0.0)))
    minus = demo.simulation.derivative(
        _states(demo, body_ry0=JointState(-0.5 * math.pi, 0.0))
    )
    assert plus[jid].qd != pytest.approx(0.0)
    assert plus[jid].qd == pytest.approx(-minus[jid].qd)


def test_pendulum_hanging_is_equilibrium():
    demo = build_pendulum()
    jid = demo.joint_ids["body_ry0"]
    d = demo.simulation.derivative(_states(demo, body_ry0=JointState(0.0, 0.0)))
    assert d[jid].qd == pytest.approx(0.0, abs=1e-12)


def test_pendulum_moves_towards_hanging():
    demo = build_pendulum()
    jid = demo.joint_ids["body_ry0"]
    demo.simulation.run(max_steps=20)
    assert demo.simulation.physics_state.states[jid].q < 0.5 * math.pi


def test_double_pendulum_structure():
    demo = build_double_pendulum()
    body = demo.simulation.body
    ry0, ry1 = demo.joint_ids["body_ry0"], demo.joint_ids["body_ry1"]
    assert body.children(ry0) == [ry1]
    assert body[ry1].name == "body_ry1"
    assert set(demo.mesh_defs) == {ry0, ry1}


def test_double_pendulum_hanging_is_equilibrium():
    demo = build_double_pendulum()
    states = _states(
        demo, body_ry0=JointState(0.0, 0.0), body_ry1=JointState(0.0, 0.0)
    )
    d = demo.simulation.derivative(states)
    for jid in demo.joint_ids.values():
        assert d[jid].qd == pytest.approx(0.0, abs=1e-12)


def test_main_runs_a_few_steps(capsys):
    assert main(["1dof", "--steps", "2"]) == 0
    out = capsys.readouterr().out
    assert "2 steps" in out
    assert "body_pz" in out


def test_main_rejects_unknown_demo():
    with pytest.raises(SystemExit):
        main(["nonexistent"])