"""A fixed-step simulation of a multibody tree."""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional

from rigidsim.integrator import (
    PhysicsSet,
    PhysicsState,
    SimTime,
    Solver,
    StateMap,
    collect_state_derivatives,
    distribute_state,
    initialize_state,
    integrate,
)
from rigidsim.structure import MultiBody

System = Callable[[MultiBody], None]


class Simulation:
    """Steps a multibody forward in time with a chosen solver.

    One physics evaluation runs: state distribution, ``PRE`` systems, the
    kinematic pass followed by ``INITIALIZE`` systems, ``EVALUATE`` systems,
    ``FINALIZE`` systems followed by external forces and the dynamics passes,
    ``POST`` systems, and finally derivative collection.
    """

    def __init__(
        self,
        body: MultiBody,
        time: SimTime,
        solver: Solver = Solver.RK4,
        name: str = "simulation",
    ) -> None:
        self.body = body
        self.time = time
        self.solver = Solver(solver)
        self.name = name
        self._systems: dict[PhysicsSet, list[System]] = {phase: [] for phase in PhysicsSet}
        self.physics_state: PhysicsState = initialize_state(body.joints)

    def add_system(self, phase: PhysicsSet, system: System) -> Simulation:
        """Run ``system(body)`` in the given phase of every evaluation."""
        self._systems[PhysicsSet(phase)].append(system)
        return self

    def _run_phase(self, phase: PhysicsSet) -> None:
        for system in self._systems[phase]:
            system(self.body)

    def _run_physics(self) -> None:
        joints = self.body.joints
        distribute_state(joints, self.physics_state)
        self._run_phase(PhysicsSet.PRE)
        self.body.loop_1()
        self._run_phase(PhysicsSet.INITIALIZE)
        self._run_phase(PhysicsSet.EVALUATE)
        self._run_phase(PhysicsSet.FINALIZE)
        self.body.apply_external_forces()
        self.body.loop_23()
        self._run_phase(PhysicsSet.POST)
        collect_state_derivatives(joints, self.physics_state)

    def derivative(self, states: StateMap) -> StateMap:
        """State derivatives of every joint at the given states."""
        self.physics_state.states = StateMap(states)
        self._run_physics()
        return StateMap(self.physics_state.dstates)

    def step(self) -> StateMap:
        """Advance one fixed step and return the new states."""
        state_0 = StateMap(self.physics_state.states)
        self.time.increment()
        t = self.time.time()
        new_state = integrate(
            self.solver, lambda states, _t: self.derivative(states), state_0, t, self.time.dt
        )
        self.physics_state.states = new_state
        return new_state

    def run(self, max_steps: Optional[int] = None) -> int:
        """Step until the clock completes or ``max_steps`` is reached.

        Returns the number of steps taken.
        """
        if max_steps is None and self.time.end_time is None:
            raise ValueError("a simulation without an end time needs max_steps")
        steps = 0
        while not self.time.is_complete() and (max_steps is None or steps < max_steps):
            self.step()
            steps += 1
        return steps