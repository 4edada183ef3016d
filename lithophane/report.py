"""Post-generation sanity numbers, computed with trimesh on a merged copy of the mesh."""
from dataclasses import dataclass

import numpy as np
import trimesh

from .geometry import Mesh


@dataclass(frozen=True)
class MeshReport:
    triangles: int
    volume: float
    bounds: tuple  # ((xmin, ymin, zmin), (xmax, ymax, zmax))
    winding_consistent: bool

    def summary(self) -> str:
        (x0, y0, z0), (x1, y1, z1) = self.bounds
        return (f"{self.triangles} triangles, volume {self.volume:.2f}, "
                f"size {x1 - x0:.2f} x {y1 - y0:.2f} x {z1 - z0:.2f}, "
                f"winding {'consistent' if self.winding_consistent else 'INCONSISTENT'}")


def to_trimesh(mesh: Mesh) -> trimesh.Trimesh:
    faces = np.arange(len(mesh.vertices)).reshape(-1, 3)
    # process=True merges the duplicated per-triangle vertices
    return trimesh.Trimesh(vertices=np.asarray(mesh.vertices, dtype=np.float64), faces=faces, process=True)


def inspect_mesh(mesh: Mesh) -> MeshReport:
    tm = to_trimesh(mesh)
    return MeshReport(
        triangles=mesh.triangle_count,
        volume=float(tm.volume),
        bounds=tuple(tuple(float(v) for v in row) for row in tm.bounds),
        winding_consistent=bool(tm.is_winding_consistent),
    )
