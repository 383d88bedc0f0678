"""Image decoding to pixel buffers and reference/candidate pair discovery."""

from __future__ import annotations

import os
from pathlib import Path

import numpy as np
from PIL import Image

from imgeval.core.grayscale import PixelBuffer


def read_pixel_buffer(path: str | Path, size: tuple[int, int] | None = None) -> PixelBuffer:
    """Decode an image file as RGBA, optionally resized to ``(width, height)``."""
    with Image.open(path) as img:
        rgba = img.convert("RGBA")
    if size is not None and rgba.size != size:
        rgba = rgba.resize(size, Image.Resampling.BILINEAR)
    return PixelBuffer.from_array(np.array(rgba, dtype=np.uint8))


def discover_images(
    root: str | Path,
    extensions: tuple[str, ...],
) -> list[str]:
    """Recursively discover image files under root, sorted by path."""
    root = Path(root)
    found: list[str] = []
    ext_set = {e.lower() for e in extensions}
    for dirpath, _dirnames, filenames in os.walk(root):
        for fn in filenames:
            if any(fn.lower().endswith(ext) for ext in ext_set):
                found.append(os.path.join(dirpath, fn))
    found.sort()
    return found


def pair_images(
    reference_dir: str | Path,
    candidate_dir: str | Path,
    extensions: tuple[str, ...],
) -> tuple[list[tuple[str, str]], list[str]]:
    """Match candidates to references by relative path.

    Returns ``(pairs, unmatched_references)``.
    """
    reference_dir = Path(reference_dir)
    candidate_dir = Path(candidate_dir)
    candidates = {
        os.path.relpath(p, candidate_dir): p for p in discover_images(candidate_dir, extensions)
    }

    pairs: list[tuple[str, str]] = []
    unmatched: list[str] = []
    for ref in discover_images(reference_dir, extensions):
        rel = os.path.relpath(ref, reference_dir)
        cand = candidates.get(rel)
        if cand is None:
            unmatched.append(ref)
        else:
            pairs.append((ref, cand))
    return pairs, unmatched
