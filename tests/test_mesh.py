import math

import numpy as np
import pytest

from rigidsim.definitions import BoxShape, CylinderShape, FileShape, MeshDef, WheelShape
from rigidsim.mesh import (
    BLACK,
    WHITE,
    BoxMesh,
    CylinderMesh,
    FileMesh,
    MeshData,
    WheelMesh,
    cylinder_wedge,
    mesh_from_def,
    wheel_wedges,
)


def _winding_matches_normals(mesh: MeshData) -> bool:
    pos = np.array(mesh.positions)
    nor = np.array(mesh.normals)
    for a, b, c in mesh.triangles:
        geometric = np.cross(pos[b] - pos[a], pos[c] - pos[a])
        if geometric @ nor[a] <= 0:
            return False
    return True


def test_box_from_def_is_centred():
    box = mesh_from_def(MeshDef(BoxShape((2.0, 4.0, 6.0))))
    assert isinstance(box, BoxMesh)
    for lo, hi, dim in [(box.min_x, box.max_x, 2.0), (box.min_y, box.max_y, 4.0), (box.min_z, box.max_z, 6.0)]:
        assert lo == -hi
        assert hi - lo == pytest.approx(dim)


def test_other_shapes_from_def():
    assert mesh_from_def(MeshDef(CylinderShape(3.0, 0.5))) == CylinderMesh(3.0, 0.5)
    assert mesh_from_def(MeshDef(WheelShape(0.3, 0.1))) == WheelMesh(0.3, 0.1)
    assert mesh_from_def(MeshDef(FileShape("model.obj"))) == FileMesh("model.obj")


def test_box_mesh_geometry():
    mesh = BoxMesh(-1.0, 1.0, -2.0, 2.0, -3.0, 3.0).mesh()
    assert mesh.vertex_count == 24
    assert len(mesh.triangles) == 12
    for x, y, z in mesh.positions:
        assert abs(x) == 1.0 and abs(y) == 2.0 and abs(z) == 3.0
    assert _winding_matches_normals(mesh)


def test_cylinder_mesh_geometry():
    mesh = CylinderMesh(2.0, 0.5).mesh()
    assert _winding_matches_normals(mesh)
    for x, y, z in mesh.positions:
        assert abs(y) == pytest.approx(1.0)
        assert math.hypot(x, z) <= 0.5 + 1e-12


def test_cylinder_needs_resolution():
    with pytest.raises(ValueError):
        CylinderMesh(1.0, 1.0, resolution=2).mesh()


def test_wheel_mesh_is_cylinder_of_its_width():
    assert WheelMesh(0.4, 0.2).mesh() == CylinderMesh(0.2, 0.4).mesh()


def test_cylinder_wedge_counts_and_radii():
    mesh = cylinder_wedge(0.5, 2.0, 0.0, math.pi / 2, 0.4, 5)
    assert mesh.vertex_count == 16 * 5
    assert len(mesh.indices) == 24 * 5
    for x, y, z in mesh.positions:
        r = math.hypot(x, z)
        assert r == pytest.approx(0.5) or r == pytest.approx(2.0)
        assert abs(y) == pytest.approx(0.2)


def test_cylinder_wedge_stays_within_angles():
    mesh = cylinder_wedge(1.0, 2.0, 0.0, math.pi / 2, 1.0, 4)
    for x, _y, z in mesh.positions:
        assert x >= -1e-12 and z >= -1e-12


def test_cylinder_wedge_zero_subdivisions_is_empty():
    assert cylinder_wedge(1.0, 2.0, 0.0, 1.0, 1.0, 0) == MeshData()


def test_wheel_wedges_alternate_colours():
    wedges = wheel_wedges(0.2, 2.0)
    assert [color for _mesh, color in wedges] == [WHITE, BLACK, WHITE, BLACK]
    radii = [math.hypot(x, z) for mesh, _ in wedges for x, _y, z in mesh.positions]
    assert min(radii) == pytest.approx(0.25 * 2.0)
    assert max(radii) == pytest.approx(2.0)
    assert WheelMesh(2.0, 0.2).wedges() == wedges


def test_mesh_data_rejects_bad_input():
    with pytest.raises(ValueError):
        MeshData([(0, 0, 0)], [(0, 0, 1)], [(0, 0)], [0, 0])
    with pytest.raises(ValueError):
        MeshData([(0, 0, 0)], [(0, 0, 1)], [(0, 0)], [0, 0, 1])
    with pytest.raises(ValueError):
        MeshData([(0, 0, 0)], [], [(0, 0)], [])