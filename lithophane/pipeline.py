import logging
import time
from pathlib import Path

from .config import LithophaneConfig
from .generators import mesh_from_lightness, source_lightness
from .geometry import Mesh
from .image import load_image
from .lightness import LightnessMap
from .report import inspect_mesh
from .stl import write_stl

logger = logging.getLogger(__name__)


def make_mesh(lightness: LightnessMap, config: LithophaneConfig) -> Mesh:
    start = time.perf_counter()
    mesh = mesh_from_lightness(config, lightness)
    logger.info("%s mesh: %d triangles in %.2fs",
                config.kind.value, mesh.triangle_count, time.perf_counter() - start)
    return mesh


def make_lithophane(image_path, config: LithophaneConfig, out_path=None) -> Path:
    """Image file in, STL file out. Defaults to the image path with a .stl suffix."""
    image_path = Path(image_path)
    out_path = Path(out_path) if out_path is not None else image_path.with_suffix(".stl")

    lightness = source_lightness(config, load_image(image_path))
    mesh = make_mesh(lightness, config)
    logger.info("mesh check: %s", inspect_mesh(mesh).summary())
    return write_stl(mesh, out_path)
