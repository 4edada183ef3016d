"""Image to lithophane STL: perceived lightness -> height field -> closed triangle mesh."""
from .config import FilterKind, GeneratorKind, LithophaneConfig
from .errors import DegenerateInputError, InvalidPixelLength, LithophaneError, MalformedMeshError
from .generators import cylinder_mesh, flat_image_mesh, flat_mesh, generate, mesh_from_lightness, source_lightness
from .geometry import Mesh
from .heightfield import HeightField
from .lightness import LightnessMap, lightness_map, pixel_lightness
from .pipeline import make_lithophane
from .stl import serialize, write_stl

__all__ = [
    "DegenerateInputError",
    "FilterKind",
    "GeneratorKind",
    "HeightField",
    "InvalidPixelLength",
    "LightnessMap",
    "LithophaneConfig",
    "LithophaneError",
    "MalformedMeshError",
    "Mesh",
    "cylinder_mesh",
    "flat_image_mesh",
    "flat_mesh",
    "generate",
    "lightness_map",
    "make_lithophane",
    "mesh_from_lightness",
    "pixel_lightness",
    "serialize",
    "source_lightness",
    "write_stl",
]
