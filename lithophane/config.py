"""
Lithophane job configuration.

A job picks one of three topologies:
- flat_grid: image resized by a preprocessor, flat slab with side walls
- flat_image: same slab, but the generator owns the resize step
- cylinder: image wrapped around a cylinder, inner wall at the floor height

The configuration is built once before generation and never changed.
"""
import math
from dataclasses import dataclass
from enum import Enum

from .errors import DegenerateInputError


class GeneratorKind(Enum):
    FLAT_GRID = "flat_grid"
    FLAT_IMAGE = "flat_image"
    CYLINDER = "cylinder"


class FilterKind(Enum):
    NEAREST = "nearest"
    TRIANGLE = "triangle"
    GAUSSIAN = "gaussian"
    CATMULL_ROM = "catmull_rom"
    LANCZOS3 = "lanczos3"


def _enum_value(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower().replace("-", "_"))
    except ValueError:
        names = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"unknown {enum_cls.__name__} {value!r} (expected one of: {names})") from None


@dataclass(frozen=True)
class LithophaneConfig:
    scale: float = 2.0  # mm of relief between black and white, positive = thicker for darker
    target_width: int = 80  # pixels (= mm) across the output
    kind: GeneratorKind = GeneratorKind.FLAT_GRID
    filter: FilterKind = FilterKind.CATMULL_ROM
    cylinder_radius: float = 20.0
    cylinder_length: float = 20.0

    def __post_init__(self):
        if self.target_width <= 0:
            raise DegenerateInputError(f"target width must be positive, got {self.target_width}")
        if not math.isfinite(self.scale):
            raise ValueError(f"scale must be finite, got {self.scale}")
        if self.kind is GeneratorKind.CYLINDER:
            if not self.cylinder_radius > 0:
                raise ValueError(f"cylinder radius must be positive, got {self.cylinder_radius}")
            if not self.cylinder_length > 0:
                raise ValueError(f"cylinder length must be positive, got {self.cylinder_length}")
            # Not part of the job surface: the inner wall sits at radius - scale,
            # so a smaller radius would fold the shell through the axis.
            if self.cylinder_radius <= self.scale:
                raise ValueError(
                    f"cylinder radius {self.cylinder_radius} must exceed scale {self.scale},"
                    f" the inner wall would sit at radius {self.cylinder_radius - self.scale}"
                )

    @property
    def signed_scale(self) -> float:
        # The only place the scale is negated. Heights end up in [-scale, 0]
        # with the backing surface at -scale, so white pixels sit on the floor.
        return -self.scale

    @classmethod
    def from_params(cls, params: dict) -> "LithophaneConfig":
        """Build a config from a job's ``params`` mapping; missing keys keep defaults."""
        defaults = cls.__dataclass_fields__
        kind = _enum_value(GeneratorKind, params.get("generator", defaults["kind"].default))
        return cls(
            scale=float(params.get("scale", defaults["scale"].default)),
            target_width=int(params.get("width", defaults["target_width"].default)),
            kind=kind,
            filter=_enum_value(FilterKind, params.get("filter", defaults["filter"].default)),
            cylinder_radius=float(params.get("radius", defaults["cylinder_radius"].default)),
            cylinder_length=float(params.get("length", defaults["cylinder_length"].default)),
        )
