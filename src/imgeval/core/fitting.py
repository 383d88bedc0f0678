"""Moment-based generalized / asymmetric generalized Gaussian fits.

These are deliberately simple method-of-moments estimates. Naturalness scores
depend on the exact formulas, so they are not maximum-likelihood fits.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

SHAPE_MIN = 0.1
SHAPE_MAX = 2.0
SCALE_MIN = 0.01


@dataclass(frozen=True, slots=True)
class SymmetricFit:
    shape: float = 1.0
    scale: float = 1.0


@dataclass(frozen=True, slots=True)
class AsymmetricFit:
    scale_left: float = 1.0
    scale_right: float = 1.0


def fit_symmetric(samples: ArrayLike) -> SymmetricFit:
    """Fit {shape, scale} from the population variance of ``samples``."""
    x = np.asarray(samples, dtype=np.float64).ravel()
    if x.size == 0:
        return SymmetricFit()

    variance = float(np.mean((x - x.mean()) ** 2))
    std = math.sqrt(variance)
    return SymmetricFit(
        shape=max(SHAPE_MIN, min(SHAPE_MAX, std / 2)),
        scale=max(SCALE_MIN, std),
    )


def _side_variance(side: np.ndarray) -> float:
    # mean of squares; an empty side counts as unit variance
    if side.size == 0:
        return 1.0
    return float(np.mean(side * side))


def fit_asymmetric(samples: ArrayLike) -> AsymmetricFit:
    """Fit separate left (negative) and right (positive) scales.

    Zeros belong to neither side.
    """
    x = np.asarray(samples, dtype=np.float64).ravel()
    if x.size == 0:
        return AsymmetricFit()

    left = -x[x < 0]
    right = x[x > 0]
    return AsymmetricFit(
        scale_left=max(SCALE_MIN, math.sqrt(_side_variance(left))),
        scale_right=max(SCALE_MIN, math.sqrt(_side_variance(right))),
    )
