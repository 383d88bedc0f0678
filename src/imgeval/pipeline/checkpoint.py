"""Resume logic for partially written results files."""

from __future__ import annotations

from imgeval.io.results_io import read_results
from imgeval.models.result import ScoreRecord


def load_scored_set(results_path: str) -> tuple[set[tuple[str, str]], list[ScoreRecord]]:
    """Load already-scored (reference, candidate) keys from an existing results file."""
    _meta, records = read_results(results_path)
    scored = {(r.reference_path, r.candidate_path) for r in records}
    return scored, records


def filter_pending(
    pairs: list[tuple[str, str]],
    scored: set[tuple[str, str]],
) -> list[tuple[str, str]]:
    """Filter out already-scored pairs, returning only pending ones."""
    return [pair for pair in pairs if pair not in scored]
