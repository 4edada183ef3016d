"""
Image side of the pipeline: decode, channel conversion, resampling.

Pillow decodes and resamples; OpenCV converts channels and blurs.

Pixel buffers are H x W x 3 uint8 numpy arrays in RGB order.
"""
import logging
from dataclasses import dataclass

import cv2
import numpy as np
from PIL import Image

from .config import FilterKind
from .errors import DegenerateInputError, InvalidPixelLength
from .lightness import LightnessMap, lightness_map

logger = logging.getLogger(__name__)

# Pillow widens the kernel by the shrink ratio, so downsampling averages the
# whole source footprint. BICUBIC is a=-0.5 (Catmull-Rom), LANCZOS is a=3.
_RESAMPLING = {
    FilterKind.NEAREST: Image.Resampling.NEAREST,
    FilterKind.TRIANGLE: Image.Resampling.BILINEAR,
    FilterKind.GAUSSIAN: Image.Resampling.BILINEAR,  # blurred first, see resize()
    FilterKind.CATMULL_ROM: Image.Resampling.BICUBIC,
    FilterKind.LANCZOS3: Image.Resampling.LANCZOS,
}


def load_image(path) -> np.ndarray:
    with Image.open(path) as img:
        rgb = np.array(img.convert('RGB'))
    logger.debug("loaded %s (%dx%d)", path, rgb.shape[1], rgb.shape[0])
    return rgb


def as_rgb(pixels) -> np.ndarray:
    """Gray, gray+channel and RGBA buffers are converted; RGB passes through."""
    pixels = np.ascontiguousarray(pixels, dtype=np.uint8)
    if pixels.ndim == 2:
        return cv2.cvtColor(pixels, cv2.COLOR_GRAY2RGB)
    if pixels.ndim == 3:
        channels = pixels.shape[2]
        if channels == 3:
            return pixels
        if channels == 1:
            return cv2.cvtColor(np.ascontiguousarray(pixels[:, :, 0]), cv2.COLOR_GRAY2RGB)
        if channels == 4:
            return cv2.cvtColor(pixels, cv2.COLOR_RGBA2RGB)
    raise InvalidPixelLength(f"cannot convert pixel buffer of shape {pixels.shape} to RGB")


def resize_dimensions(width: int, height: int, nwidth: int, nheight: int) -> tuple[int, int]:
    """Largest size fitting inside nwidth x nheight that keeps the aspect ratio."""
    if width == 0 or height == 0:
        raise DegenerateInputError(f"cannot resize a {width}x{height} image")
    ratio = min(nwidth / width, nheight / height)
    # round half up
    return max(int(width * ratio + 0.5), 1), max(int(height * ratio + 0.5), 1)


def resize(pixels: np.ndarray, width: int, height: int, filter: FilterKind = FilterKind.CATMULL_ROM) -> np.ndarray:
    src_h, src_w = pixels.shape[:2]
    new_w, new_h = resize_dimensions(src_w, src_h, width, height)
    if (new_w, new_h) == (src_w, src_h):
        return pixels

    if filter is FilterKind.GAUSSIAN:
        sigma = 0.5 * max(1.0, src_w / new_w)
        pixels = cv2.GaussianBlur(pixels, (0, 0), sigmaX=sigma)
    resized = np.array(Image.fromarray(pixels).resize((new_w, new_h), _RESAMPLING[filter]))
    logger.debug("resized %dx%d -> %dx%d (%s)", src_w, src_h, new_w, new_h, filter.value)
    return resized


def save_lightness_preview(lightness: LightnessMap, path) -> None:
    values = np.clip(lightness.values.reshape(lightness.height, lightness.width), 0.0, 1.0)
    Image.fromarray((values * 255).astype(np.uint8)).save(path)


@dataclass(frozen=True)
class Preprocessor:
    """Resize to a target width (height follows the aspect ratio) and compute lightness."""
    width: int
    filter: FilterKind = FilterKind.CATMULL_ROM

    def transform(self, pixels) -> LightnessMap:
        rgb = as_rgb(pixels)
        resized = resize(rgb, self.width, rgb.shape[0], self.filter)
        return lightness_map(resized)
