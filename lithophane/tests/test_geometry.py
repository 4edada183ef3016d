import numpy as np
import pytest

from lithophane.geometry import Mesh, face_normals, normal, subtract


def test_subtract():
    np.testing.assert_array_equal(subtract((3, 2, 1), (1, 1, 1)), [2, 1, 0])


def test_normal_follows_right_hand_rule():
    np.testing.assert_array_equal(normal([(0, 0, 0), (1, 0, 0), (0, 1, 0)]), [0, 0, 1])
    np.testing.assert_array_equal(normal([(0, 0, 0), (0, 1, 0), (1, 0, 0)]), [0, 0, -1])


def test_normal_is_not_unit_length():
    # length is twice the area
    n = normal([(0, 0, 0), (2, 0, 0), (0, 2, 0)])
    np.testing.assert_array_equal(n, [0, 0, 4])


def test_face_normals_match_scalar():
    rng = np.random.default_rng(1)
    verts = rng.normal(size=(12, 3)).astype(np.float32)
    expected = np.array([normal(t) for t in verts.reshape(-1, 3, 3)])
    np.testing.assert_allclose(face_normals(verts), expected, rtol=1e-6)


def test_mesh_is_read_only():
    mesh = Mesh.from_triangles([[(0, 0, 0), (1, 0, 0), (0, 1, 0)]])
    assert mesh.vertices.shape == (3, 3)
    assert mesh.vertices.dtype == np.float32
    assert mesh.triangle_count == 1
    with pytest.raises(ValueError):
        mesh.vertices[0, 0] = 5.0
