"""Lightness-order (LOE-style) rank consistency between two images."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from imgeval.core.grayscale import PixelBuffer, max_channel_gray
from imgeval.core.local_max import local_max
from imgeval.errors import DegenerateGridError
from imgeval.models.config import MetricsConfig
from imgeval.observer import ScoreObserver, default_observer


def block_grid(height: int, width: int, block_target: int = 50) -> tuple[int, int, int]:
    """Return ``(step, blkm, blkn)`` for sampling an image of the given size."""
    step = max(1, min(height, width) // block_target)
    blkm = height // step
    blkn = width // step
    if blkm <= 0 or blkn <= 0:
        raise DegenerateGridError(blkm, blkn)
    return step, blkm, blkn


def downsample(
    local_max_map: NDArray[np.float64], step: int, blkm: int, blkn: int
) -> NDArray[np.float64]:
    """Sample (not average) one value per grid cell at a fixed stride."""
    h, w = local_max_map.shape
    rows = np.minimum(np.arange(blkm) * step, h - 1)
    cols = np.minimum(np.arange(blkn) * step, w - 1)
    return local_max_map[np.ix_(rows, cols)]


def count_rank_mismatches(
    reference_grid: NDArray[np.float64],
    candidate_grid: NDArray[np.float64],
    chunk_rows: int = 256,
) -> int:
    """Count ordered cell pairs whose ``>=`` relation differs between the grids.

    Every ordered pair is compared, self-pairs included. Cells are processed
    in independent chunks whose counts are summed.
    """
    ref = np.asarray(reference_grid, dtype=np.float64).ravel()
    cand = np.asarray(candidate_grid, dtype=np.float64).ravel()
    if ref.shape != cand.shape:
        raise ValueError(f"grid sizes differ: {ref.size} vs {cand.size}")

    total = 0
    for start in range(0, ref.size, chunk_rows):
        stop = start + chunk_rows
        ref_ge = ref[None, :] >= ref[start:stop, None]
        cand_ge = cand[None, :] >= cand[start:stop, None]
        total += int(np.count_nonzero(ref_ge != cand_ge))
    return total


def lightness_order_grids(
    reference: NDArray[np.float64],
    candidate: NDArray[np.float64],
    config: MetricsConfig | None = None,
    observer: ScoreObserver | None = None,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Downsampled local-max grids of two same-sized grayscale maps."""
    config = config or MetricsConfig()
    observer = default_observer(observer)
    if reference.shape != candidate.shape:
        raise ValueError(
            f"reference {reference.shape} and candidate {candidate.shape} sizes differ"
        )

    height, width = reference.shape
    step, blkm, blkn = block_grid(height, width, config.block_target)
    observer.grid_chosen(step, blkm, blkn)

    ref_max = local_max(reference, config.window)
    cand_max = local_max(candidate, config.window)
    return downsample(ref_max, step, blkm, blkn), downsample(cand_max, step, blkm, blkn)


def lightness_order_score(
    reference: PixelBuffer,
    candidate: PixelBuffer,
    config: MetricsConfig | None = None,
    observer: ScoreObserver | None = None,
) -> float:
    """Average number of rank disagreements per grid cell. 0 = order preserved."""
    config = config or MetricsConfig()
    config.validate()
    observer = default_observer(observer)

    ref_grid, cand_grid = lightness_order_grids(
        max_channel_gray(reference), max_channel_gray(candidate), config, observer
    )
    mismatches = count_rank_mismatches(ref_grid, cand_grid, config.mismatch_chunk_rows)
    value = mismatches / ref_grid.size
    observer.score_computed("lightness_order", value)
    return value
