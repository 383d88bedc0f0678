"""Naturalness (NIQE-style) feature extraction and scoring.

The image is cut into fixed-size patches; each patch with enough variance is
normalized and described by distribution fits of its values and of its four
directional differences. The averaged description is compared with a model of
natural-image statistics. Lower scores are more natural.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from imgeval.core.fitting import fit_asymmetric, fit_symmetric
from imgeval.core.grayscale import PixelBuffer, luminance_gray
from imgeval.errors import ModelNotLoadedError, NoValidPatchesError
from imgeval.models.config import MetricsConfig
from imgeval.models.model import FEATURE_DIM, NaturalnessModel
from imgeval.observer import ScoreObserver, default_observer

INVERSE_FLOOR = 1e-10


def patch_count(shape: tuple[int, ...], patch_size: int) -> int:
    return (shape[0] // patch_size) * (shape[1] // patch_size)


def extract_patches(gray: NDArray[np.float64], patch_size: int = 96) -> list[NDArray[np.float64]]:
    """Non-overlapping square patches from (0, 0); edge remainders are dropped."""
    h, w = gray.shape
    return [
        gray[i : i + patch_size, j : j + patch_size]
        for i in range(0, h - patch_size + 1, patch_size)
        for j in range(0, w - patch_size + 1, patch_size)
    ]


def directional_differences(
    p: NDArray[np.float64],
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Horizontal, vertical, down-right and down-left neighbour differences."""
    h = p[:, 1:] - p[:, :-1]
    v = p[1:, :] - p[:-1, :]
    d1 = p[1:, 1:] - p[:-1, :-1]
    # d2[i][j-1] = p[i+1][j-1] - p[i][j]
    d2 = p[1:, :-1] - p[:-1, 1:]
    return h, v, d1, d2


def patch_features(
    patch: NDArray[np.float64],
    variance_floor: float = 1e-6,
    duplicate_d2_scale: bool = True,
) -> NDArray[np.float64] | None:
    """36-length feature vector for one patch, or None for a near-flat patch.

    With ``duplicate_d2_scale`` (the default) slots 9 and 10 both hold the
    down-left difference scale, which existing scores depend on. Pass False to
    emit its shape and scale instead.

    Slots 11-18 hold asymmetric scales as (left, right) pairs per direction:
    left from the negative differences, right from the positive ones. Models
    built with the positive side first are not compatible with this layout.
    """
    patch = np.asarray(patch, dtype=np.float64)
    if patch.size < 2:
        return None

    mean = float(patch.mean())
    variance = float(patch.var(ddof=1))
    if not variance >= variance_floor:
        return None

    normalized = (patch - mean) / math.sqrt(variance)
    h, v, d1, d2 = directional_differences(normalized)

    whole = fit_symmetric(normalized)
    h_fit, v_fit, d1_fit, d2_fit = (fit_symmetric(d) for d in (h, v, d1, d2))
    h_asym, v_asym, d1_asym, d2_asym = (fit_asymmetric(d) for d in (h, v, d1, d2))

    d2_pair = (d2_fit.scale, d2_fit.scale) if duplicate_d2_scale else (d2_fit.shape, d2_fit.scale)
    values = [
        whole.shape,
        whole.scale,
        h_fit.shape,
        h_fit.scale,
        v_fit.shape,
        v_fit.scale,
        d1_fit.shape,
        d1_fit.scale,
        *d2_pair,
        h_asym.scale_left,
        h_asym.scale_right,
        v_asym.scale_left,
        v_asym.scale_right,
        d1_asym.scale_left,
        d1_asym.scale_right,
        d2_asym.scale_left,
        d2_asym.scale_right,
    ]

    features = np.zeros(FEATURE_DIM, dtype=np.float64)
    n = min(len(values), FEATURE_DIM)
    features[:n] = values[:n]
    return features


def extract_features(
    gray: NDArray[np.float64],
    config: MetricsConfig | None = None,
    observer: ScoreObserver | None = None,
) -> NDArray[np.float64]:
    """Feature matrix of shape (retained_patches, 36); excluded patches are omitted."""
    config = config or MetricsConfig()
    observer = default_observer(observer)

    patches = extract_patches(gray, config.patch_size)
    rows = []
    for patch in patches:
        features = patch_features(patch, config.variance_floor, config.duplicate_d2_scale)
        if features is not None:
            rows.append(features)

    observer.patches_extracted(len(patches), len(rows))
    if not rows:
        return np.empty((0, FEATURE_DIM), dtype=np.float64)
    return np.vstack(rows)


def mean_features(features: NDArray[np.float64], total_patches: int = 0) -> NDArray[np.float64]:
    if features.shape[0] == 0:
        raise NoValidPatchesError(total_patches)
    return features.mean(axis=0)


def diagonal_inverse(cov: NDArray[np.float64]) -> NDArray[np.float64]:
    """Reciprocal of the covariance diagonal; tiny or invalid entries map to 1."""
    diag = np.diagonal(np.asarray(cov, dtype=np.float64))
    safe = np.where(diag > INVERSE_FLOOR, diag, 1.0)
    return np.where(diag > INVERSE_FLOOR, 1.0 / safe, 1.0)


def euclidean_distance(x: NDArray[np.float64], mu: NDArray[np.float64]) -> float:
    diff = np.asarray(x, dtype=np.float64) - np.asarray(mu, dtype=np.float64)
    return float(np.sqrt(np.sum(diff * diff)))


def mahalanobis_distance(
    x: NDArray[np.float64], mu: NDArray[np.float64], cov: NDArray[np.float64]
) -> float:
    """Diagonal-approximated Mahalanobis distance.

    Off-diagonal covariance is ignored. If the computation overflows or yields
    a non-finite value the plain Euclidean distance is returned instead.
    """
    try:
        with np.errstate(over="raise", invalid="raise", divide="raise"):
            diff = np.asarray(x, dtype=np.float64) - np.asarray(mu, dtype=np.float64)
            total = np.sum(diff * diff * diagonal_inverse(cov))
            distance = float(np.sqrt(np.abs(total)))
    except FloatingPointError:
        return euclidean_distance(x, mu)
    if not math.isfinite(distance):
        return euclidean_distance(x, mu)
    return distance


class NaturalnessScorer:
    """Scores pixel buffers against a loaded :class:`NaturalnessModel`."""

    def __init__(
        self,
        model: NaturalnessModel | None = None,
        config: MetricsConfig | None = None,
        observer: ScoreObserver | None = None,
    ) -> None:
        self.model = model
        self.config = config or MetricsConfig()
        self.config.validate()
        self.observer = default_observer(observer)

    @property
    def is_loaded(self) -> bool:
        return self.model is not None

    def features(self, buf: PixelBuffer) -> NDArray[np.float64]:
        """Mean 36-length feature vector of the image."""
        gray = luminance_gray(buf)
        features = extract_features(gray, self.config, self.observer)
        return mean_features(features, patch_count(gray.shape, self.config.patch_size))

    def score(self, buf: PixelBuffer) -> float:
        if self.model is None:
            raise ModelNotLoadedError()
        mean = self.features(buf)
        value = mahalanobis_distance(mean, self.model.mean, self.model.cov)
        self.observer.score_computed("naturalness", value)
        return value


def naturalness_score(
    buf: PixelBuffer,
    model: NaturalnessModel | None,
    config: MetricsConfig | None = None,
    observer: ScoreObserver | None = None,
) -> float:
    """Naturalness score of ``buf`` (lower is better)."""
    return NaturalnessScorer(model, config, observer).score(buf)
