import numpy as np
import pytest

from lithophane import heightfield
from lithophane.config import LithophaneConfig
from lithophane.lightness import LightnessMap


def _map(values):
    values = np.asarray(values, dtype=np.float64)
    return LightnessMap(values=values, width=values.shape[1], height=values.shape[0])


def test_heights_are_scaled_lightness():
    field = heightfield.build(_map([[0.0, 0.5], [1.0, 0.25]]), -2.0)
    np.testing.assert_allclose(field.heights, [[0.0, -1.0], [-2.0, -0.5]])
    assert field.heights.dtype == np.float32
    assert (field.width, field.height) == (2, 2)


def test_floor_uses_reference_lightness_not_data():
    # All-black image still gets the full base thickness below it
    field = heightfield.build(_map(np.zeros((3, 3))), -1.5)
    assert field.floor == -1.5
    assert field.heights.max() == 0.0


def test_zero_scale_is_flat():
    field = heightfield.build(_map([[0.2, 0.9]]), 0.0)
    assert field.floor == 0.0
    assert not field.heights.any()


def test_field_is_read_only():
    field = heightfield.build(_map([[0.2, 0.9]]), -1.0)
    with pytest.raises(ValueError):
        field.heights[0, 0] = 1.0


def test_config_negates_scale_once():
    cfg = LithophaneConfig(scale=3.0)
    field = heightfield.build(_map([[1.0, 0.0]]), cfg.signed_scale)
    # white lands on the floor, black is the thickest point
    assert field.heights[0, 0] == field.floor == -3.0
    assert field.heights[0, 1] == 0.0
