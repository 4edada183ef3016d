from dataclasses import dataclass

import numpy as np

from .lightness import LightnessMap


@dataclass(frozen=True)
class HeightField:
    heights: np.ndarray  # (height, width) float32, read-only
    floor: float

    @property
    def width(self) -> int:
        return self.heights.shape[1]

    @property
    def height(self) -> int:
        return self.heights.shape[0]


def build(lightness: LightnessMap, scale: float) -> HeightField:
    """Scale a lightness map into heights.

    ``scale`` is already sign-flipped (see ``LithophaneConfig.signed_scale``).
    The floor is where lightness 1.0 lands, i.e. ``scale`` itself, regardless
    of the lightest pixel actually present. This keeps the base thickness the
    same for every image.
    """
    heights = (lightness.values.reshape(lightness.height, lightness.width) * scale).astype(np.float32)
    heights.flags.writeable = False
    return HeightField(heights=heights, floor=float(np.float32(scale)))
