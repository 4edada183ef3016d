"""Shared mesh assertions for the generator and worker tests."""
from collections import Counter

import numpy as np


def directed_edges(mesh) -> Counter:
    edges = Counter()
    for a, b, c in mesh.triangles.tolist():
        a, b, c = tuple(a), tuple(b), tuple(c)
        edges[(a, b)] += 1
        edges[(b, c)] += 1
        edges[(c, a)] += 1
    return edges


def assert_closed(mesh):
    """Every directed edge appears once and its reverse appears once."""
    edges = directed_edges(mesh)
    for (a, b), n in edges.items():
        assert n == 1, f"edge {a}->{b} used {n} times"
        assert edges.get((b, a)) == 1, f"edge {a}->{b} has no twin"


def signed_volume(mesh) -> float:
    tris = mesh.triangles.astype(np.float64)
    return float(np.einsum("ij,ij->i", tris[:, 0], np.cross(tris[:, 1], tris[:, 2])).sum() / 6.0)


def outward_dots(mesh, reference) -> np.ndarray:
    """Normal . (centroid - reference) per triangle; reference is (3,) or (n, 3)."""
    tris = mesh.triangles.astype(np.float64)
    normals = np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])
    return np.einsum("ij,ij->i", normals, tris.mean(axis=1) - reference)
