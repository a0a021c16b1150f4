"""
Tests for the Oklab heat-map gradient.
"""

import numpy as np
import pytest

from harmonic_pickups.heatmap_colors import (
    HEATMAP_COLORS,
    hex_to_rgb,
    intensity_to_rgb,
    normalise_intensity,
    oklab_to_srgb,
    srgb_to_oklab,
)


class TestColorConversion:
    """Hex parsing and the Oklab round trip."""

    def test_hex_to_rgb(self):
        np.testing.assert_allclose(hex_to_rgb(0xFF8000), [1.0, 128 / 255, 0.0])

    @pytest.mark.parametrize("hex_color", HEATMAP_COLORS)
    def test_oklab_round_trip(self, hex_color):
        rgb = hex_to_rgb(hex_color)
        np.testing.assert_allclose(oklab_to_srgb(srgb_to_oklab(rgb)), rgb, atol=1e-3)

    def test_white_has_unit_lightness(self):
        lab = srgb_to_oklab(np.array([1.0, 1.0, 1.0]))
        assert lab[0] == pytest.approx(1.0, abs=1e-3)
        assert abs(lab[1]) < 1e-3 and abs(lab[2]) < 1e-3


class TestIntensityToRgb:
    """Gradient lookup."""

    def test_ends_of_gradient(self):
        np.testing.assert_allclose(intensity_to_rgb(0.0), [0.0, 0.0, 0.0], atol=1e-3)
        np.testing.assert_allclose(intensity_to_rgb(1.0), [1.0, 1.0, 1.0], atol=1e-3)

    def test_stops_hit_exactly(self):
        """Value 1/6 lands on the second stop (blue)."""
        np.testing.assert_allclose(intensity_to_rgb(1 / 6), [0.0, 0.0, 1.0], atol=1e-3)

    def test_values_clamped(self):
        np.testing.assert_allclose(intensity_to_rgb(-2.0), intensity_to_rgb(0.0))
        np.testing.assert_allclose(intensity_to_rgb(5.0), intensity_to_rgb(1.0))

    def test_shape(self):
        colors = intensity_to_rgb(np.linspace(0, 1, 11))
        assert colors.shape == (11, 3)
        assert np.all((colors >= 0) & (colors <= 1))

    def test_brightness_rises_between_black_and_blue(self):
        lightness = srgb_to_oklab(intensity_to_rgb(np.linspace(0, 1 / 6, 5)))[:, 0]
        assert np.all(np.diff(lightness) > 0)

    def test_degenerate_stops(self):
        np.testing.assert_array_equal(intensity_to_rgb([0.2, 0.8], stops=()), np.zeros((2, 3)))
        np.testing.assert_allclose(intensity_to_rgb([0.2, 0.8], stops=(0xFF0000,)), [[1, 0, 0], [1, 0, 0]])


class TestNormaliseIntensity:

    def test_scales_to_peak(self):
        np.testing.assert_allclose(normalise_intensity([0.0, 2.0, 4.0]), [0.0, 0.5, 1.0])

    def test_zero_curve_stays_zero(self):
        np.testing.assert_array_equal(normalise_intensity(np.zeros(4)), np.zeros(4))

    def test_empty(self):
        assert normalise_intensity([]).size == 0
