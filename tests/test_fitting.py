"""Tests for moment-based distribution fits."""

from __future__ import annotations

import math

import numpy as np
import pytest

from imgeval.core.fitting import (
    SCALE_MIN,
    SHAPE_MAX,
    SHAPE_MIN,
    AsymmetricFit,
    SymmetricFit,
    fit_asymmetric,
    fit_symmetric,
)


class TestFitSymmetric:
    def test_empty(self) -> None:
        assert fit_symmetric([]) == SymmetricFit(shape=1.0, scale=1.0)

    def test_unit_variance(self) -> None:
        fit = fit_symmetric([1.0, -1.0, 1.0, -1.0])
        assert fit.shape == pytest.approx(0.5)
        assert fit.scale == pytest.approx(1.0)

    def test_population_variance(self) -> None:
        # mean 2, squared deviations 4 + 0 + 4 -> variance 8/3
        fit = fit_symmetric([0.0, 2.0, 4.0])
        assert fit.scale == pytest.approx(math.sqrt(8 / 3))

    def test_constant_clamps_to_floor(self) -> None:
        fit = fit_symmetric([2.0, 2.0, 2.0])
        assert fit.shape == SHAPE_MIN
        assert fit.scale == SCALE_MIN

    def test_wide_spread_clamps_shape(self) -> None:
        fit = fit_symmetric([-100.0, 100.0])
        assert fit.shape == SHAPE_MAX
        assert fit.scale == pytest.approx(100.0)

    def test_accepts_2d(self) -> None:
        assert fit_symmetric(np.array([[1.0, -1.0], [1.0, -1.0]])) == fit_symmetric(
            [1.0, -1.0, 1.0, -1.0]
        )

    def test_bounds_hold_for_random_inputs(self) -> None:
        rng = np.random.default_rng(0)
        for scale in (1e-6, 0.1, 1.0, 10.0, 1e3):
            fit = fit_symmetric(rng.normal(0, scale, 500))
            assert SHAPE_MIN <= fit.shape <= SHAPE_MAX
            assert fit.scale >= SCALE_MIN


class TestFitAsymmetric:
    def test_empty(self) -> None:
        assert fit_asymmetric([]) == AsymmetricFit(scale_left=1.0, scale_right=1.0)

    def test_sides(self) -> None:
        fit = fit_asymmetric([3.0, -4.0, 0.0])
        assert fit.scale_left == pytest.approx(4.0)
        assert fit.scale_right == pytest.approx(3.0)

    def test_mean_of_squares_per_side(self) -> None:
        fit = fit_asymmetric([1.0, 3.0, -2.0])
        assert fit.scale_right == pytest.approx(math.sqrt(5.0))
        assert fit.scale_left == pytest.approx(2.0)

    def test_missing_side_defaults_to_unit(self) -> None:
        fit = fit_asymmetric([0.5, 0.5])
        assert fit.scale_left == 1.0
        assert fit.scale_right == pytest.approx(0.5)

    def test_all_zero(self) -> None:
        assert fit_asymmetric([0.0, 0.0]) == AsymmetricFit(1.0, 1.0)

    def test_scale_floor(self) -> None:
        fit = fit_asymmetric([1e-5, -1e-5])
        assert fit.scale_left == SCALE_MIN
        assert fit.scale_right == SCALE_MIN
