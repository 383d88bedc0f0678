"""Qualitative rating bands for both scores."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class Rating(Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


@dataclass(frozen=True, slots=True)
class RatingBand:
    rating: Rating
    upper: float  # exclusive
    color: str


RATING_COLORS: dict[Rating, str] = {
    Rating.EXCELLENT: "#4caf50",
    Rating.GOOD: "#8bc34a",
    Rating.FAIR: "#ff9800",
    Rating.POOR: "#f44336",
}


def _bands(excellent: float, good: float, fair: float) -> tuple[RatingBand, ...]:
    return (
        RatingBand(Rating.EXCELLENT, excellent, RATING_COLORS[Rating.EXCELLENT]),
        RatingBand(Rating.GOOD, good, RATING_COLORS[Rating.GOOD]),
        RatingBand(Rating.FAIR, fair, RATING_COLORS[Rating.FAIR]),
        RatingBand(Rating.POOR, math.inf, RATING_COLORS[Rating.POOR]),
    )


NATURALNESS_BANDS = _bands(3.0, 4.0, 6.0)
LIGHTNESS_ORDER_BANDS = _bands(35.0, 50.0, 65.0)


def rate(score: float, bands: tuple[RatingBand, ...]) -> Rating:
    for band in bands:
        if score < band.upper:
            return band.rating
    return Rating.POOR


def rate_naturalness(score: float) -> Rating:
    return rate(score, NATURALNESS_BANDS)


def rate_lightness_order(score: float) -> Rating:
    return rate(score, LIGHTNESS_ORDER_BANDS)


def rating_color(rating: Rating) -> str:
    return RATING_COLORS[rating]
