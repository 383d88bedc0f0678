"""Score one reference/candidate pair. Pure function, safe to run in a process pool."""

from __future__ import annotations

import logging
import os
import time
from datetime import datetime, timezone

from imgeval.core.lightness_order import lightness_order_score
from imgeval.core.naturalness import NaturalnessScorer
from imgeval.io.image_reader import read_pixel_buffer
from imgeval.models.config import BatchConfig
from imgeval.models.model import NaturalnessModel
from imgeval.models.rating import rate_lightness_order, rate_naturalness
from imgeval.models.result import ScoreRecord
from imgeval.observer import NullObserver

logger = logging.getLogger(__name__)


def _fail(record: ScoreRecord, exc: Exception) -> str:
    message = str(exc) or type(exc).__name__
    logger.warning("Failed to score %s: %s", record.candidate_path, message)
    # first failure wins the record-level fields
    if record.error is None:
        record.error = message
        record.error_type = type(exc).__name__
    return message


def evaluate_pair(
    reference_path: str,
    candidate_path: str,
    config: BatchConfig,
    model: NaturalnessModel | None = None,
) -> ScoreRecord:
    """Evaluate a candidate against its reference. Never raises; failures set ``error``.

    Naturalness is scored on the candidate alone; lightness order compares the
    candidate with the reference after resizing it to the reference size. The
    two metrics are guarded separately, so one failing keeps the other's score
    and the failure is kept in ``naturalness_error`` or ``lightness_order_error``.
    """
    started = time.perf_counter()
    record = ScoreRecord(
        reference_path=reference_path,
        candidate_path=candidate_path,
        name=os.path.basename(candidate_path),
        evaluated_at=datetime.now(timezone.utc).isoformat(),
    )

    try:
        reference = read_pixel_buffer(reference_path)
        size = (reference.width, reference.height) if config.resize_candidate else None
        candidate = read_pixel_buffer(candidate_path, size=size)
    except Exception as exc:
        _fail(record, exc)
        record.elapsed_sec = round(time.perf_counter() - started, 4)
        return record

    record.width = reference.width
    record.height = reference.height
    observer = NullObserver()

    if not config.skip_naturalness:
        try:
            scorer = NaturalnessScorer(model, config.metrics, observer)
            record.naturalness = scorer.score(candidate)
            record.naturalness_rating = rate_naturalness(record.naturalness).value
        except Exception as exc:
            record.naturalness_error = _fail(record, exc)

    if not config.skip_lightness_order:
        try:
            record.lightness_order = lightness_order_score(
                reference, candidate, config.metrics, observer
            )
            record.lightness_order_rating = rate_lightness_order(record.lightness_order).value
        except Exception as exc:
            record.lightness_order_error = _fail(record, exc)

    record.elapsed_sec = round(time.perf_counter() - started, 4)
    return record
