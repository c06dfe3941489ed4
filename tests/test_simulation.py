import numpy as np
import pytest

from rigidsim.integrator import PhysicsSet, SimTime, Solver, StateMap
from rigidsim.joint import Joint, JointState
from rigidsim.simulation import Simulation
from rigidsim.structure import MultiBody
from rigidsim.sva import Inertia, Motion, Xform

G = 9.81
MASS = 10.0


def _slider_body():
    body = MultiBody()
    base = body.add_base(Joint.base(Motion((0.0, 0.0, G), (0.0, 0.0, 0.0))))
    slider = body.add_joint(
        Joint.pz("body_pz", Inertia(MASS, (0, 0, 0), np.eye(3)), Xform.identity()), base
    )
    return body, slider


def _pendulum_body(q0):
    body = MultiBody()
    base = body.add_base(Joint.base(Motion((0.0, 0.0, G), (0.0, 0.0, 0.0))))
    joint = Joint.ry(
        "body_ry0",
        Inertia(1.0, (0.0, 0.0, -0.5), np.diag([0.1, 0.1, 0.01])),
        Xform.identity(),
    )
    joint.q = q0
    pivot = body.add_joint(joint, base)
    return body, pivot


@pytest.mark.parametrize("solver", [Solver.HEUN, Solver.MIDPOINT, Solver.RK4])
def test_free_fall_is_exact_for_higher_order_solvers(solver):
    body, slider = _slider_body()
    dt = 0.01
    sim = Simulation(body, SimTime(dt), solver)
    for _ in range(10):
        sim.step()
    state = sim.physics_state.states[slider]
    elapsed = 10 * dt
    assert state.q == pytest.approx(-0.5 * G * elapsed**2, abs=1e-9)
    assert state.qd == pytest.approx(-G * elapsed, abs=1e-9)


def test_euler_step_moves_velocity_only():
    body, slider = _slider_body()
    sim = Simulation(body, SimTime(0.01), Solver.EULER)
    sim.step()
    state = sim.physics_state.states[slider]
    assert state.q == 0.0
    assert state.qd == pytest.approx(-G * 0.01)


def test_derivative_reports_velocity_and_acceleration():
    body, slider = _slider_body()
    sim = Simulation(body, SimTime(0.01))
    states = StateMap(sim.physics_state.states)
    states[slider] = JointState(0.0, 2.0)
    d = sim.derivative(states)
    assert d[slider].q == pytest.approx(2.0)
    assert d[slider].qd == pytest.approx(-G)


def test_evaluate_system_can_cancel_gravity():
    body, slider = _slider_body()
    sim = Simulation(body, SimTime(0.01), Solver.RK4)

    def lift(multibody):
        multibody[slider].tau += MASS * G

    sim.add_system(PhysicsSet.EVALUATE, lift)
    for _ in range(20):
        sim.step()
    state = sim.physics_state.states[slider]
    assert state.q == pytest.approx(0.0, abs=1e-12)
    assert state.qd == pytest.approx(0.0, abs=1e-12)


def test_pendulum_swings_without_gaining_amplitude():
    q0 = 0.3
    body, pivot = _pendulum_body(q0)
    sim = Simulation(body, SimTime(0.01), Solver.RK4)
    angles = [sim.step()[pivot].q for _ in range(200)]
    assert min(angles) < 0.0
    assert max(abs(q) for q in angles) <= q0 + 1e-3


def test_run_stops_after_end_time():
    body, _ = _slider_body()
    clock = SimTime(0.1, end_time=0.35)
    sim = Simulation(body, clock)
    steps = sim.run()
    assert clock.is_complete()
    assert clock.index == steps
    assert clock.start_time + (steps - 1) * clock.dt <= 0.35


def test_run_respects_max_steps():
    body, _ = _slider_body()
    clock = SimTime(0.01)
    sim = Simulation(body, clock)
    assert sim.run(max_steps=5) == 5
    assert clock.index == 5


def test_run_without_any_limit_raises():
    body, _ = _slider_body()
    with pytest.raises(ValueError):
        Simulation(body, SimTime(0.01)).run()


def test_add_system_rejects_unknown_phase():
    body, _ = _slider_body()
    sim = Simulation(body, SimTime(0.01))
    with pytest.raises(ValueError):
        sim.add_system("sometime", lambda multibody: None)