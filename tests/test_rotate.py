import numpy as np
import pytest

from rigidsim.mesh import MeshData
from rigidsim.terrain.rotate import Rotate, RotationDirection, rotate_mesh, rotate_point

FORWARD = RotationDirection.FORWARD
REVERSE = RotationDirection.REVERSE


def _triangle() -> MeshData:
    return MeshData(
        positions=[(1.0, 1.0, 0.0), (3.0, 1.0, 0.5), (1.0, 4.0, 0.2)],
        normals=[(0.2, 0.1, 1.0)] * 3,
        uvs=[(0.1, 0.2), (0.9, 0.2), (0.1, 0.8)],
        indices=[0, 1, 2],
    )


@pytest.mark.parametrize("rotate", list(Rotate))
def test_forward_then_reverse_is_identity(rotate):
    point = [1.0, 2.5, 0.3]
    there = rotate_point(point, 6.0, rotate, FORWARD)
    back = rotate_point(there, 6.0, rotate, REVERSE)
    assert np.allclose(back, point)


def test_four_quarter_turns_return_home():
    point = np.array([1.0, 2.5, 0.3])
    result = point
    for _ in range(4):
        result = rotate_point(result, 6.0, Rotate.NINETY, FORWARD)
    assert np.allclose(result, point)


def test_two_quarter_turns_equal_half_turn():
    point = [1.0, 2.5, 0.3]
    twice = rotate_point(rotate_point(point, 6.0, Rotate.NINETY, FORWARD), 6.0, Rotate.NINETY, FORWARD)
    assert np.allclose(twice, rotate_point(point, 6.0, Rotate.ONE_EIGHTY, FORWARD))


def test_two_seventy_forward_equals_ninety_reverse():
    point = [1.0, 2.5, 0.3]
    assert np.allclose(
        rotate_point(point, 6.0, Rotate.TWO_SEVENTY, FORWARD),
        rotate_point(point, 6.0, Rotate.NINETY, REVERSE),
    )


def test_ninety_forward_pinned():
    assert np.allclose(rotate_point([1.0, 0.0, 2.0], 10.0, Rotate.NINETY, FORWARD), [10.0, 1.0, 2.0])


def test_rotate_keeps_points_in_cell():
    for rotate in Rotate:
        x, y, _ = rotate_point([0.5, 3.0, 0.0], 4.0, rotate, FORWARD)
        assert 0.0 <= x <= 4.0 and 0.0 <= y <= 4.0


def test_rotate_zero_keeps_mesh():
    mesh = _triangle()
    assert rotate_mesh(5.0, mesh, Rotate.ZERO) == mesh


@pytest.mark.parametrize("rotate", [Rotate.NINETY, Rotate.ONE_EIGHTY, Rotate.TWO_SEVENTY])
def test_rotate_mesh_matches_rotate_point(rotate):
    mesh = _triangle()
    rotated = rotate_mesh(5.0, mesh, rotate)
    for original, result in zip(mesh.positions, rotated.positions):
        assert np.allclose(rotate_point(original, 5.0, rotate, FORWARD), result)
    for original, result in zip(mesh.normals, rotated.normals):
        assert np.allclose(rotate_point(original, 0.0, rotate, FORWARD), result)
    assert rotated.indices == mesh.indices


def test_rotate_mesh_uvs():
    mesh = _triangle()
    for rotate in (Rotate.NINETY, Rotate.TWO_SEVENTY):
        assert rotate_mesh(5.0, mesh, rotate).uvs == tuple((-v, u) for u, v in mesh.uvs)
    assert rotate_mesh(5.0, mesh, Rotate.ONE_EIGHTY).uvs == tuple((-u, -v) for u, v in mesh.uvs)


def test_rotate_mesh_keeps_face_orientation():
    rotated = rotate_mesh(5.0, _triangle(), Rotate.NINETY)
    pos = np.array(rotated.positions)
    geometric = np.cross(pos[1] - pos[0], pos[2] - pos[0])
    assert geometric @ np.array(rotated.normals[0]) > 0