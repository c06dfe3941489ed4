"""Example mechanisms: a sprung mass, a pendulum and a double pendulum."""

from __future__ import annotations

import argparse
import math
import sys
from dataclasses import dataclass, field
from typing import Callable, Optional

import numpy as np

from rigidsim.definitions import BoxShape, MeshDef, TransformDef
from rigidsim.integrator import PhysicsSet, SimTime, Solver
from rigidsim.joint import Joint
from rigidsim.simulation import Simulation
from rigidsim.structure import MultiBody
from rigidsim.sva import Inertia, Motion, Xform, vector

GRAVITY = 9.81
RED = (1.0, 0.0, 0.0, 1.0)
BLUE = (0.0, 0.0, 1.0, 1.0)


@dataclass
class SpringDamper:
    """Linear spring and damper acting on a joint coordinate."""

    stiffness: float
    damping: float

    def apply(self, joint: Joint) -> None:
        joint.tau -= self.stiffness * joint.q + self.damping * joint.qd


@dataclass
class Demo:
    """A ready-to-run simulation with its joints and their mesh definitions."""

    simulation: Simulation
    joint_ids: dict[str, int]
    mesh_defs: dict[int, MeshDef] = field(default_factory=dict)


def _gravity_base() -> Joint:
    return Joint.base(Motion((0.0, 0.0, GRAVITY), (0.0, 0.0, 0.0)))


def build_1dof() -> Demo:
    """A 10 kg box on a vertical spring-damper, lightly damped."""
    body = MultiBody()
    base_id = body.add_base(_gravity_base())

    mass = 10.0
    stiffness = 100.0
    damping = 0.1 * 2.0 * math.sqrt(mass * stiffness)
    inertia = Inertia(mass, vector(0.0, 0.0, 0.0), np.diag([10.0, 10.0, 10.0]))
    joint_id = body.add_joint(Joint.pz("body_pz", inertia, Xform.identity()), base_id)

    springs = {joint_id: SpringDamper(stiffness, damping)}

    def spring_damper_system(multibody: MultiBody) -> None:
        for jid, spring in springs.items():
            spring.apply(multibody[jid])

    simulation = Simulation(
        body, SimTime(0.002, 0.0, 10.0), Solver.RK4, "example 00_1dof"
    )
    simulation.add_system(PhysicsSet.EVALUATE, spring_damper_system)
    meshes = {
        joint_id: MeshDef(
            mesh_type=BoxShape(dimensions=(1.0, 1.0, 1.0)),
            transform=TransformDef.identity(),
            color=BLUE,
        )
    }
    return Demo(simulation, {"body_pz": joint_id}, meshes)


def _link_inertia(mass: float, width: float, length: float, parallel_axis: bool) -> Inertia:
    moi_z = 1.0 / 12.0 * mass * 2.0 * width**2
    moi_xy = 1.0 / 12.0 * mass * (width**2 + length**2)
    if parallel_axis:
        moi_xy += mass * (length / 2.0) ** 2
    return Inertia(mass, vector(0.0, 0.0, -length / 2.0), np.diag([moi_xy, moi_xy, moi_z]))


def _link_mesh(width: float, length: float, color) -> MeshDef:
    return MeshDef(
        mesh_type=BoxShape(dimensions=(width, width, length)),
        transform=TransformDef.from_position((0.0, 0.0, -length / 2.0)),
        color=color,
    )


def build_pendulum() -> Demo:
    """A single rod swinging about y, released horizontally."""
    body = MultiBody()
    base_id = body.add_base(_gravity_base())
    width, length = 0.05, 1.0
    inertia = _link_inertia(1.0, width, length, parallel_axis=True)

    ry0 = Joint.ry("body_ry0", inertia, Xform.identity())
    ry0.q = 0.5 * math.pi
    ry0_id = body.add_joint(ry0, base_id)

    simulation = Simulation(
        body, SimTime(0.002, 0.0, 60.0), Solver.RK4, "example 01_pendulum"
    )
    meshes = {ry0_id: _link_mesh(width, length, RED)}
    return Demo(simulation, {"body_ry0": ry0_id}, meshes)


def build_double_pendulum() -> Demo:
    """Two rods chained about y, the first released horizontally."""
    body = MultiBody()
    base_id = body.add_base(_gravity_base())
    width, length = 0.05, 1.0
    inertia = _link_inertia(1.0, width, length, parallel_axis=False)

    ry0 = Joint.ry("body_ry0", inertia, Xform.identity())
    ry0.q = 0.5 * math.pi
    ry0_id = body.add_joint(ry0, base_id)

    ry1 = Joint.ry("body_ry1", inertia, Xform.posz(-1.0))
    ry1_id = body.add_joint(ry1, ry0_id)

    simulation = Simulation(
        body, SimTime(0.002, 0.0, 60.0), Solver.RK4, "example 02_double_pendulum"
    )
    meshes = {
        ry0_id: _link_mesh(width, length, RED),
        ry1_id: _link_mesh(width, length, BLUE),
    }
    return Demo(simulation, {"body_ry0": ry0_id, "body_ry1": ry1_id}, meshes)


DEMOS: dict[str, Callable[[], Demo]] = {
    "1dof": build_1dof,
    "pendulum": build_pendulum,
    "double_pendulum": build_double_pendulum,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Run a demo and print the final joint states."""
    parser = argparse.ArgumentParser(prog="rigidsim-demo", description=__doc__)
    parser.add_argument("demo", choices=sorted(DEMOS))
    parser.add_argument(
        "--steps", type=int, default=None, help="stop after this many steps"
    )
    args = parser.parse_args(argv)
    if args.steps is not None and args.steps < 0:
        parser.error("--steps must not be negative")

    demo = DEMOS[args.demo]()
    simulation = demo.simulation
    taken = simulation.run(args.steps)
    print(f"{simulation.name}: {taken} steps, t = {simulation.time.time():.6f}")
    for name, joint_id in demo.joint_ids.items():
        state = simulation.physics_state.states[joint_id]
        print(f"{name}: q = {state.q:.6f}, qd = {state.qd:.6f}")
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())