"""
Vertex/triangle primitives.

A mesh is a flat float32 vertex list, every three consecutive vertices one
triangle. There is no index buffer; vertices are duplicated per triangle.
Normals are plain cross products (length = twice the triangle area).
"""
from dataclasses import dataclass

import numpy as np


def subtract(a, b) -> np.ndarray:
    return np.asarray(a, dtype=np.float32) - np.asarray(b, dtype=np.float32)


def normal(triangle) -> np.ndarray:
    """(v1 - v0) x (v2 - v0) for one triangle, not normalized."""
    v0, v1, v2 = np.asarray(triangle, dtype=np.float32)
    return np.cross(subtract(v1, v0), subtract(v2, v0))


def face_normals(vertices: np.ndarray) -> np.ndarray:
    tris = np.asarray(vertices, dtype=np.float32).reshape(-1, 3, 3)
    return np.cross(tris[:, 1] - tris[:, 0], tris[:, 2] - tris[:, 0])


@dataclass(frozen=True)
class Mesh:
    vertices: np.ndarray  # (n, 3) float32, read-only

    @classmethod
    def from_triangles(cls, triangles) -> "Mesh":
        vertices = np.ascontiguousarray(np.asarray(triangles, dtype=np.float32).reshape(-1, 3))
        vertices.flags.writeable = False
        return cls(vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.vertices) // 3

    @property
    def triangles(self) -> np.ndarray:
        return self.vertices.reshape(-1, 3, 3)
