"""Batch-level summary of scored pairs."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field

import numpy as np

from imgeval.models.rating import Rating
from imgeval.models.result import ScoreRecord


@dataclass
class ScoreStats:
    count: int = 0
    mean: float | None = None
    median: float | None = None
    min: float | None = None
    max: float | None = None


@dataclass
class BatchSummary:
    total_pairs: int = 0
    failed_count: int = 0
    naturalness: ScoreStats = field(default_factory=ScoreStats)
    lightness_order: ScoreStats = field(default_factory=ScoreStats)
    naturalness_ratings: dict[str, int] = field(default_factory=dict)
    lightness_order_ratings: dict[str, int] = field(default_factory=dict)
    error_counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def _stats(values: list[float]) -> ScoreStats:
    if not values:
        return ScoreStats()
    arr = np.asarray(values, dtype=np.float64)
    return ScoreStats(
        count=len(values),
        mean=round(float(arr.mean()), 4),
        median=round(float(np.median(arr)), 4),
        min=round(float(arr.min()), 4),
        max=round(float(arr.max()), 4),
    )


def _rating_counts(ratings: list[str | None]) -> dict[str, int]:
    counts = Counter(r for r in ratings if r)
    # fixed band order, empty bands kept
    return {r.value: counts.get(r.value, 0) for r in Rating}


def summarize(records: list[ScoreRecord]) -> BatchSummary:
    """Compute batch-level statistics over every score that was produced.

    A pair where only one metric failed still contributes the other metric.
    """
    if not records:
        return BatchSummary()

    failed = [r for r in records if r.failed]

    nat = [r.naturalness for r in records if r.naturalness is not None]
    loe = [r.lightness_order for r in records if r.lightness_order is not None]

    return BatchSummary(
        total_pairs=len(records),
        failed_count=len(failed),
        naturalness=_stats(nat),
        lightness_order=_stats(loe),
        naturalness_ratings=(
            _rating_counts([r.naturalness_rating for r in records]) if nat else {}
        ),
        lightness_order_ratings=(
            _rating_counts([r.lightness_order_rating for r in records]) if loe else {}
        ),
        error_counts=dict(Counter(r.error_type or "Unknown" for r in failed)),
    )
