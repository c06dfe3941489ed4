"""Fixed-step ODE integration over keyed collections of body states."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any, Hashable, Optional, Protocol, runtime_checkable


class PhysicsSet(Enum):
    """Phases of one physics evaluation, in the order they run."""

    PRE = "pre"
    INITIALIZE = "initialize"
    EVALUATE = "evaluate"
    FINALIZE = "finalize"
    POST = "post"


class Solver(Enum):
    """Available fixed-step integration schemes."""

    EULER = "euler"
    HEUN = "heun"
    MIDPOINT = "midpoint"
    RK4 = "rk4"


@dataclass
class SimTime:
    """Simulation clock counting fixed steps from a start time."""

    dt: float
    start_time: float = 0.0
    end_time: Optional[float] = None
    index: int = 0

    def time(self) -> float:
        return self.start_time + self.index * self.dt

    def increment(self) -> None:
        self.index += 1

    def is_complete(self) -> bool:
        """True once the clock has passed its end time, if it has one."""
        if self.end_time is None:
            return False
        return self.time() > self.end_time

    def reset(self) -> None:
        self.index = 0


@runtime_checkable
class Stateful(Protocol):
    """An object whose integrable state can be read and written.

    ``state`` and ``dstate`` hold values supporting ``+`` with each other
    and ``*`` with a float.
    """

    name: str
    state: Any
    dstate: Any

    def reset(self) -> None:
        """Clear per-evaluation quantities before the physics runs."""


class StateMap(dict):
    """States keyed by body identifier, with element-wise arithmetic."""

    def __add__(self, other):
        if not isinstance(other, StateMap):
            return NotImplemented
        result = StateMap()
        for key, value in self.items():
            try:
                result[key] = value + other[key]
            except KeyError:
                raise KeyError(f"no state for {key!r} in the right-hand operand") from None
        return result

    def __mul__(self, scalar):
        if not isinstance(scalar, Real):
            return NotImplemented
        k = float(scalar)
        return StateMap({key: value * k for key, value in self.items()})


@dataclass
class PhysicsState:
    """Current states and their most recently computed derivatives."""

    states: StateMap = field(default_factory=StateMap)
    dstates: StateMap = field(default_factory=StateMap)


def initialize_state(bodies: Mapping[Hashable, Stateful]) -> PhysicsState:
    """Gather the states and derivatives of all bodies."""
    return PhysicsState(
        StateMap({key: body.state for key, body in bodies.items()}),
        StateMap({key: body.dstate for key, body in bodies.items()}),
    )


def distribute_state(bodies: Mapping[Hashable, Stateful], physics_state: PhysicsState) -> None:
    """Write stored states back into the bodies that have one, and reset them."""
    for key, body in bodies.items():
        if key in physics_state.states:
            body.state = physics_state.states[key]
            body.reset()


def collect_state_derivatives(
    bodies: Mapping[Hashable, Stateful], physics_state: PhysicsState
) -> None:
    """Record each body's current state derivative."""
    for key, body in bodies.items():
        physics_state.dstates[key] = body.dstate


Evaluate = Callable[[StateMap, float], StateMap]


def euler(evaluate: Evaluate, state: StateMap, t: float, dt: float) -> StateMap:
    d1 = evaluate(StateMap(state), t)
    return state + d1 * dt


def heun(evaluate: Evaluate, state: StateMap, t: float, dt: float) -> StateMap:
    d1 = evaluate(StateMap(state), t)
    d2 = evaluate(state + d1 * dt, t + dt)
    return state + (d1 + d2) * (dt * 0.5)


def midpoint(evaluate: Evaluate, state: StateMap, t: float, dt: float) -> StateMap:
    d1 = evaluate(StateMap(state), t)
    d2 = evaluate(state + d1 * (dt * 0.5), t + dt * 0.5)
    return state + d2 * dt


def rk4(evaluate: Evaluate, state: StateMap, t: float, dt: float) -> StateMap:
    d1 = evaluate(StateMap(state), t)
    d2 = evaluate(state + d1 * (dt * 0.5), t + dt * 0.5)
    d3 = evaluate(state + d2 * (dt * 0.5), t + dt * 0.5)
    d4 = evaluate(state + d3 * dt, t + dt)
    change = d1 + d2 * 2.0 + d3 * 2.0 + d4
    return state + change * (dt / 6.0)


_STEPPERS: dict[Solver, Callable[[Evaluate, StateMap, float, float], StateMap]] = {
    Solver.EULER: euler,
    Solver.HEUN: heun,
    Solver.MIDPOINT: midpoint,
    Solver.RK4: rk4,
}


def integrate(
    solver: Solver, evaluate: Evaluate, state: StateMap, t: float, dt: float
) -> StateMap:
    """Advance ``state`` by one step of ``dt`` with the chosen solver."""
    return _STEPPERS[Solver(solver)](evaluate, state, t, dt)