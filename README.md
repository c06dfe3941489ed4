# rigidsim

rigidsim simulates articulated rigid bodies in Python. It has these parts:

- **Spatial vector algebra** (`rigidsim.sva`). It provides `Xform`, `Motion`,
  `Force`, `Velocity`, `Inertia` and `InertiaAB`, plus `MotionArray` and
  `ForceArray`. It also has the rotation matrices `rx`, `ry` and `rz` and the
  helper `vector(x, y, z)`.
- **Joints and forward dynamics** (`rigidsim.joint`, `rigidsim.algorithms`,
  `rigidsim.structure`):
  - A `Joint` is one of the following:
    - a base, which is the fixed root of a tree;
    - a revolute joint (`Joint.rx`, `Joint.ry`, `Joint.rz`);
    - a prismatic joint (`Joint.px`, `Joint.py`, `Joint.pz`).
  - Joints are arranged in a `MultiBody` tree.
  - The tree's passes (`loop_1`, `apply_external_forces`, `loop_23`) run the
    articulated-body algorithm and compute each joint's acceleration `qdd`.
- **Fixed-step solvers** (`rigidsim.integrator`):
  - The solvers are `euler`, `heun`, `midpoint` and `rk4`. You can also call
    `integrate(solver, ...)` with a `Solver` value.
  - The solvers work on a `StateMap`, which maps each body to its state.
  - `SimTime` is the simulation clock.
- **A simulation driver** (`rigidsim.simulation.Simulation`):
  - It steps a `MultiBody` through time.
  - You can add your own systems to any `PhysicsSet` phase with `add_system`.
    An example is a spring that adds to a joint's `tau`.
- **Shape descriptions and meshes** (`rigidsim.definitions`, `rigidsim.mesh`):
  - `MeshDef` describes a body's shape (`BoxShape`, `CylinderShape`,
    `WheelShape`, `FileShape`), its placement (`TransformDef`) and its colour.
  - `mesh_from_def` turns a `MeshDef` into a box, cylinder or wheel. These
    objects produce a plain triangle list (`MeshData`).
- **Grid terrain** (`rigidsim.terrain`):
  - A `GridTerrain` is a grid of cells. The cell types are `Plane`, `Slope`,
    `Step`, `StepSlope` and `Function`.
  - Steps and sloped steps can be rotated by quarter turns (`Rotate`) and
    mirrored (`Mirror`).
  - A contact query returns an `Interference` with the penetration depth, the
    contact point and the surface normal.
  - Every cell can also produce a `MeshData` of its surface.

## Installation

```
pip install .
```

numpy is the only runtime dependency. To install the test tools as well:

```
pip install .[test]
```

## Building and running a model

```python
import math
import numpy as np

from rigidsim.integrator import SimTime, Solver
from rigidsim.joint import Joint
from rigidsim.simulation import Simulation
from rigidsim.structure import MultiBody
from rigidsim.sva import Inertia, Motion, Xform, vector

body = MultiBody()
base = body.add_base(Joint.base(Motion((0.0, 0.0, 9.81), (0.0, 0.0, 0.0))))

inertia = Inertia(1.0, vector(0.0, 0.0, -0.5), np.diag([0.33, 0.33, 0.001]))
link = Joint.ry("link", inertia, Xform.identity())
link.q = 0.5 * math.pi
link_id = body.add_joint(link, base)

sim = Simulation(body, SimTime(0.002, 0.0, 1.0), Solver.RK4)
steps_taken = sim.run()
state = sim.physics_state.states[link_id]
print(steps_taken, state.q, state.qd)
```

A base joint's acceleration `a` plays the part of gravity.

`Simulation.run(max_steps)` works as follows:

- It steps until the clock passes its end time, or until `max_steps` steps have
  been taken.
- It returns the number of steps taken.
- If the clock has no end time, you must give `max_steps`.

You can also call `Simulation.step()` yourself. It advances one step and
returns the new states.

To add a force system, register a function that takes the `MultiBody`:

```python
from rigidsim.integrator import PhysicsSet

def spring(multibody):
    joint = multibody[link_id]
    joint.tau -= 100.0 * joint.q + 1.0 * joint.qd

sim.add_system(PhysicsSet.EVALUATE, spring)
```

`rigidsim.demos` has three ready-made models:

- `build_1dof()`: a box on a vertical spring and damper;
- `build_pendulum()`: a single rod;
- `build_double_pendulum()`: two rods chained together.

Each function returns a `Demo` with these fields:

- `simulation`;
- `joint_ids`, the joint identifiers by name;
- `mesh_defs`, the shape of each joint.

## Command line

```
rigidsim-demo pendulum --steps 500
```

This runs one of the demo models and prints the final time and the state of
each joint. The model is one of `1dof`, `pendulum` or `double_pendulum`.

Without `--steps`, the model runs to the end time of its clock. That is 10 s
for `1dof` and 60 s for the pendulums, with a step of 0.002 s.

## Terrain

```python
from rigidsim.terrain.grid import GridTerrain
from rigidsim.terrain.layouts import steps
from rigidsim.sva import vector

terrain = GridTerrain(steps(2.0, [0.1, 0.2]), [2.0, 2.0])
contact = terrain.interference(vector(1.5, 0.5, 0.05))
if contact is not None:
    print(contact.magnitude, contact.position, contact.normal)
```

`interference` returns `None` when the point is not in contact. Points outside
the grid are tested against the flat ground at z = 0.

`rigidsim.terrain.layouts` also offers these layouts:

- `table_top(size, height)`;
- `wave(size, height, wave_length)`.

For display, two methods give the placement of the terrain's parts:

- `GridTerrain.element_placements()` gives each cell with its world offset.
- `GridTerrain.surrounding_planes()` gives the offset and size of each flat
  ground patch around the grid.

## What it does not do

- rigidsim does not open a window or draw anything. Meshes are returned as
  plain data (`MeshData`) for you to render however you like.
- A `FileMesh` only records a file name. It is not loaded.
- Terrain contact is a query only. `Simulation` does not apply contact forces
  from a `GridTerrain` by itself. To do that, add a system that does it.