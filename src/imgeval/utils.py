"""Shared utilities."""

from __future__ import annotations

from imgeval.models.rating import Rating, rating_color


def fmt_score(value: float | None, digits: int = 4) -> str:
    """Format an optional score for display."""
    if value is None:
        return "—"
    return f"{value:.{digits}f}"


def rating_markup(rating: Rating | str | None) -> str:
    """Rich markup for a rating label in its band color."""
    if rating is None:
        return "—"
    if isinstance(rating, str):
        rating = Rating(rating)
    return f"[{rating_color(rating)}]{rating.value}[/]"
