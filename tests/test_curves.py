"""Tests for cmap_tool.core.curves — gamma and contrast TRC generators."""

import logging

import numpy as np
import pytest
from cmap_tool.core.curves import contrast_curve, gamma_curve
from cmap_tool.core.errors import InvalidRangeError


class TestGammaCurve:
    def test_identity(self):
        assert np.array_equal(gamma_curve(1.0, 0, 255), np.arange(256))

    def test_shape_and_domain(self):
        curve = gamma_curve(0.4, -20, 300)
        assert curve.shape == (256,)
        assert curve.min() >= 0
        assert curve.max() <= 255

    def test_window_endpoints(self):
        curve = gamma_curve(1.0, 50, 100)
        assert (curve[:51] == 0).all()
        assert (curve[100:] == 255).all()
        assert curve[75] == 128

    def test_monotonic(self):
        assert (np.diff(gamma_curve(2.2, 0, 255)) >= 0).all()

    def test_min_not_below_max(self):
        with pytest.raises(InvalidRangeError):
            gamma_curve(1.0, 200, 100)

    def test_non_positive_gamma(self, caplog):
        with caplog.at_level(logging.WARNING):
            curve = gamma_curve(0.0, 0, 255)
        assert np.array_equal(curve, np.arange(256))
        assert 'setting to 1.0' in caplog.text


    def test_nan_gamma(self, caplog):
        with caplog.at_level(logging.WARNING):
            curve = gamma_curve(float('nan'), 0, 255)
        assert np.array_equal(curve, np.arange(256))
        assert 'setting to 1.0' in caplog.text

class TestContrastCurve:
    def test_zero_is_identity(self):
        assert np.array_equal(contrast_curve(0.0), np.arange(256))

    def test_endpoints_fixed(self):
        curve = contrast_curve(1.0)
        assert curve[0] == 0
        assert curve[255] == 255

    def test_middle_roughly_fixed(self):
        assert 126 <= contrast_curve(0.8)[127] <= 128

    def test_monotonic(self):
        assert (np.diff(contrast_curve(1.5)) >= 0).all()

    def test_negative_factor(self, caplog):
        with caplog.at_level(logging.WARNING):
            curve = contrast_curve(-0.5)
        assert np.array_equal(curve, np.arange(256))
        assert 'setting to 0.0' in caplog.text

    def test_nan_factor(self, caplog):
        with caplog.at_level(logging.WARNING):
            curve = contrast_curve(float('nan'))
        assert np.array_equal(curve, np.arange(256))
        assert 'setting to 0.0' in caplog.text
