"""
Perceived lightness of sRGB pixels.

pixel (0..255 per channel) -> linear RGB -> luminance Y -> CIE L* -> L*/100

The scalar helpers and ``lightness_map`` share the same math; the map version
runs over a whole H x W x 3 buffer at once.
"""
from dataclasses import dataclass

import numpy as np

from .errors import InvalidPixelLength

LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])
EPSILON = 216.0 / 24389.0
KAPPA = 24389.0 / 27.0


@dataclass(frozen=True)
class LightnessMap:
    """Row-major lightness values in [0, 1] (not clamped) with their dimensions."""
    values: np.ndarray  # (height, width)
    width: int
    height: int

    def __post_init__(self):
        if self.values.size != self.width * self.height:
            raise ValueError(
                f"lightness map holds {self.values.size} values, expected {self.width}x{self.height}"
            )


def srgb_to_linear(s):
    """Gamma-encoded channel in [0, 1] to linear RGB. Works on scalars and arrays."""
    s = np.asarray(s, dtype=np.float64)
    return np.where(s <= 0.04045, s / 12.92, ((s + 0.055) / 1.055) ** 2.4)


def srgb_to_luminance(pixel) -> float:
    pixel = np.asarray(pixel)
    if pixel.shape != (3,):
        raise InvalidPixelLength(f"pixel must have exactly 3 channels, got shape {pixel.shape}")
    return float(srgb_to_linear(pixel / 255.0) @ LUMA_WEIGHTS)


def luminance_to_lightness(y):
    y = np.asarray(y, dtype=np.float64)
    # np.cbrt so the unused branch stays finite for tiny values
    return np.where(y < EPSILON, y * KAPPA, np.cbrt(y) * 116.0 - 16.0)


def pixel_lightness(pixel) -> float:
    """Normalized lightness of one RGB pixel: 0.0 for black, ~1.0 for white."""
    return float(luminance_to_lightness(srgb_to_luminance(pixel))) / 100.0


def lightness_map(pixels: np.ndarray) -> LightnessMap:
    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise InvalidPixelLength(f"expected an H x W x 3 pixel buffer, got shape {pixels.shape}")
    height, width = pixels.shape[:2]

    luminance = srgb_to_linear(pixels / 255.0) @ LUMA_WEIGHTS
    values = luminance_to_lightness(luminance) / 100.0
    return LightnessMap(values=values, width=width, height=height)
