"""
Height field -> triangle soup.

Grid addressing: a quad is named by its bottom-right corner (x, y), x, y >= 1,
with corners tl=(x-1, y-1), bl=(x-1, y), tr=(x, y-1), br=(x, y). Every quad is
two triangles. The corner order of those six vertices is fixed per surface
(the tuples below) so that (v1 - v0) x (v2 - v0) points out of the solid.

All quads of a surface are emitted in one vectorized pass over the grid, so
the output is grouped by surface instead of interleaved per row. Triangle
order carries no meaning for the STL consumer.
"""
import logging

import numpy as np

from . import heightfield
from .config import FilterKind, GeneratorKind, LithophaneConfig
from .errors import DegenerateInputError
from .geometry import Mesh
from .heightfield import HeightField
from .image import Preprocessor, as_rgb, resize
from .lightness import LightnessMap, lightness_map

logger = logging.getLogger(__name__)

# Six corner names per quad -> two triangles
TOP_SURFACE = ("br", "bl", "tl", "tr", "br", "tl")
WALL_LOW_SIDE = ("br", "bl", "tl", "br", "tl", "tr")  # left (x=0) and bottom (y=h-1) walls
WALL_HIGH_SIDE = ("tl", "bl", "br", "tr", "tl", "br")  # right (x=w-1) and top (y=0) walls
BOTTOM_CAP = ("tl", "bl", "br", "tr", "tl", "br")
OUTER_SURFACE = ("tl", "bl", "br", "tl", "br", "tr")
INNER_SURFACE = ("br", "bl", "tl", "tr", "br", "tl")
ANNULUS = ("br", "bl", "tl", "tr", "br", "tl")


def _quads(winding, tl, bl, tr, br) -> np.ndarray:
    """Stack corner arrays (..., 3) into a flat (n, 3) vertex list, six per quad."""
    corners = {"tl": tl, "bl": bl, "tr": tr, "br": br}
    return np.stack([corners[name] for name in winding], axis=-2).reshape(-1, 3)


def _check_dimensions(field: HeightField) -> None:
    if field.width == 0 or field.height == 0:
        raise DegenerateInputError(f"height field is {field.width}x{field.height}")


def triangle_count(kind: GeneratorKind, width: int, height: int) -> int:
    if kind is GeneratorKind.CYLINDER:
        return 4 * width * (height - 1) + 4 * width
    top = 2 * (width - 1) * (height - 1)
    walls = 4 * (height - 1) + 4 * (width - 1)
    return top + walls + 2


# --- flat slab ---------------------------------------------------------------

def flat_mesh(field: HeightField) -> Mesh:
    """Relief on top, vertical walls down to the floor on all four sides, flat base."""
    _check_dimensions(field)
    h, w = field.heights.shape
    ys, xs = np.mgrid[0:h, 0:w].astype(np.float32)
    top = np.stack([xs, ys, field.heights], axis=-1)
    floor = np.stack([xs, ys, np.full_like(field.heights, field.floor)], axis=-1)

    parts = [
        _quads(TOP_SURFACE, top[:-1, :-1], top[1:, :-1], top[:-1, 1:], top[1:, 1:]),
    ]
    # Walls: tl/tr on the relief edge, bl/br on the floor below it
    for (upper, lower), winding in (
        ((top[:, 0], floor[:, 0]), WALL_LOW_SIDE),  # left
        ((top[:, -1], floor[:, -1]), WALL_HIGH_SIDE),  # right
        ((top[0, :], floor[0, :]), WALL_HIGH_SIDE),  # top
        ((top[-1, :], floor[-1, :]), WALL_LOW_SIDE),  # bottom
    ):
        parts.append(_quads(winding, upper[:-1], lower[:-1], upper[1:], lower[1:]))

    parts.append(_quads(BOTTOM_CAP, floor[0, 0], floor[-1, 0], floor[0, -1], floor[-1, -1]))

    mesh = Mesh.from_triangles(np.concatenate(parts))
    logger.debug("flat mesh %dx%d -> %d triangles", w, h, mesh.triangle_count)
    return mesh


def flat_image_lightness(pixels, config: LithophaneConfig) -> LightnessMap:
    """Resize step owned by the flat-image generator.

    The height passed to the resize is ``src_h * src_w // target_width``; the
    resize keeps the aspect ratio, so in practice the width is the binding
    constraint.
    """
    rgb = as_rgb(pixels)
    src_h, src_w = rgb.shape[:2]
    new_height = src_h * src_w // config.target_width
    if new_height == 0:
        raise DegenerateInputError(
            f"{src_w}x{src_h} image gives zero height at width {config.target_width}"
        )
    resized = resize(rgb, config.target_width, new_height, FilterKind.CATMULL_ROM)
    return lightness_map(resized)


def flat_image_mesh(pixels, config: LithophaneConfig) -> Mesh:
    """Flat slab whose generator does its own resize of the source image."""
    field = heightfield.build(flat_image_lightness(pixels, config), config.signed_scale)
    return flat_mesh(field)


# --- cylinder ----------------------------------------------------------------

def _polar(xs, ys, radii, width: int, height: int, length: float) -> np.ndarray:
    # Column x sits at angle x/width * 2pi, row y at z = -(y/height) * length
    angle = np.asarray(xs, dtype=np.float64) / width * 2.0 * np.pi
    z = -(np.asarray(ys, dtype=np.float64) / height) * length
    radii = np.asarray(radii, dtype=np.float64)
    return np.stack(np.broadcast_arrays(radii * np.cos(angle), radii * np.sin(angle), z), axis=-1).astype(np.float32)


def outer_vertex(field: HeightField, radius: float, length: float, x: int, y: int) -> np.ndarray:
    """Relief-side vertex; x may run past the last column and wraps around."""
    r = radius + float(field.heights[y, x % field.width])
    return _polar(x, y, r, field.width, field.height, length)


def inner_vertex(field: HeightField, radius: float, length: float, x: int, y: int) -> np.ndarray:
    return _polar(x, y, radius + field.floor, field.width, field.height, length)


def cylinder_mesh(field: HeightField, radius: float, length: float) -> Mesh:
    """Image wrapped once around the z axis, hanging down from z=0.

    Outer wall at ``radius + height``, inner wall at ``radius + floor``, the
    two joined by flat rings at the first and last row. There is no duplicate
    column at 2pi: column 0 is appended after the last one so every strip
    closes on itself.
    """
    _check_dimensions(field)
    h, w = field.heights.shape
    ys, xs = np.mgrid[0:h, 0:w]

    outer = _polar(xs, ys, radius + field.heights.astype(np.float64), w, h, length)
    inner = _polar(xs, ys, radius + field.floor, w, h, length)
    outer = np.concatenate([outer, outer[:, :1]], axis=1)
    inner = np.concatenate([inner, inner[:, :1]], axis=1)

    parts = [
        _quads(OUTER_SURFACE, outer[:-1, :-1], outer[1:, :-1], outer[:-1, 1:], outer[1:, 1:]),
        _quads(INNER_SURFACE, inner[:-1, :-1], inner[1:, :-1], inner[:-1, 1:], inner[1:, 1:]),
        # last row: inner edge on the "top" side of the quad
        _quads(ANNULUS, inner[-1, :-1], outer[-1, :-1], inner[-1, 1:], outer[-1, 1:]),
        # first row: outer edge on the "top" side
        _quads(ANNULUS, outer[0, :-1], inner[0, :-1], outer[0, 1:], inner[0, 1:]),
    ]

    mesh = Mesh.from_triangles(np.concatenate(parts))
    logger.debug("cylinder mesh %dx%d r=%.2f l=%.2f -> %d triangles", w, h, radius, length, mesh.triangle_count)
    return mesh


# --- entry point -------------------------------------------------------------

def source_lightness(config: LithophaneConfig, pixels) -> LightnessMap:
    """The lightness map the selected generator builds its height field from."""
    if config.kind is GeneratorKind.FLAT_IMAGE:
        return flat_image_lightness(pixels, config)
    return Preprocessor(config.target_width, config.filter).transform(pixels)


def mesh_from_lightness(config: LithophaneConfig, lightness: LightnessMap) -> Mesh:
    field = heightfield.build(lightness, config.signed_scale)
    if config.kind in (GeneratorKind.FLAT_GRID, GeneratorKind.FLAT_IMAGE):
        return flat_mesh(field)
    if config.kind is GeneratorKind.CYLINDER:
        return cylinder_mesh(field, config.cylinder_radius, config.cylinder_length)
    raise ValueError(f"unsupported generator {config.kind!r}")


def generate(config: LithophaneConfig, pixels) -> Mesh:
    """Run the generator selected by ``config.kind`` on a decoded RGB image."""
    return mesh_from_lightness(config, source_lightness(config, pixels))
