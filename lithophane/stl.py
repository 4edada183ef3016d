"""
Binary STL output.

    80 bytes   header, zero-filled
    uint32     triangle count
    per triangle, 50 bytes:
        float32[3]     normal (unnormalized cross product)
        float32[3][3]  vertices in stored order
        uint16         attribute byte count, always 0

All little-endian.
"""
import logging
import struct
from pathlib import Path

import numpy as np

from .errors import MalformedMeshError
from .geometry import Mesh, face_normals

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
RECORD_DTYPE = np.dtype([
    ("normal", "<f4", (3,)),
    ("vertices", "<f4", (3, 3)),
    ("attr", "<u2"),
])


def serialize(mesh: Mesh) -> bytes:
    vertices = np.asarray(mesh.vertices, dtype=np.float32)
    if len(vertices) % 3:
        raise MalformedMeshError(f"{len(vertices)} vertices do not form whole triangles")

    count = len(vertices) // 3
    records = np.zeros(count, dtype=RECORD_DTYPE)
    records["normal"] = face_normals(vertices)
    records["vertices"] = vertices.reshape(count, 3, 3)

    return bytes(HEADER_SIZE) + struct.pack("<I", count) + records.tobytes()


def write_stl(mesh: Mesh, path) -> Path:
    """Serialize and write in one attempt; OSError reaches the caller unchanged."""
    path = Path(path)
    data = serialize(mesh)
    path.write_bytes(data)
    logger.info("wrote %s (%d triangles, %d bytes)", path, mesh.triangle_count, len(data))
    return path
