"""Reference natural-image statistics model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

FEATURE_DIM = 36


@dataclass(frozen=True, slots=True, eq=False)
class NaturalnessModel:
    """Mean feature vector and covariance of undistorted natural images.

    Both arrays are validated and frozen (read-only) on construction.
    """

    mean: NDArray[np.float64]
    cov: NDArray[np.float64]
    version: str = "unversioned"
    name: str = ""

    def __post_init__(self) -> None:
        mean = np.array(self.mean, dtype=np.float64)
        cov = np.array(self.cov, dtype=np.float64)
        if mean.shape != (FEATURE_DIM,):
            raise ValueError(f"model mean must have shape ({FEATURE_DIM},), got {mean.shape}")
        if cov.shape != (FEATURE_DIM, FEATURE_DIM):
            raise ValueError(
                f"model covariance must have shape ({FEATURE_DIM}, {FEATURE_DIM}), got {cov.shape}"
            )
        if not (np.isfinite(mean).all() and np.isfinite(cov).all()):
            raise ValueError("model parameters must be finite")
        mean.flags.writeable = False
        cov.flags.writeable = False
        object.__setattr__(self, "mean", mean)
        object.__setattr__(self, "cov", cov)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "name": self.name,
            "mean": self.mean.tolist(),
            "cov": self.cov.tolist(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NaturalnessModel:
        if "mean" not in data or "cov" not in data:
            raise ValueError("model data must contain 'mean' and 'cov'")
        return cls(
            mean=np.asarray(data["mean"], dtype=np.float64),
            cov=np.asarray(data["cov"], dtype=np.float64),
            version=str(data.get("version", "unversioned")),
            name=str(data.get("name", "")),
        )
