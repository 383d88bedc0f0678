"""Programmatic test images and model fixtures."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from imgeval.core.grayscale import PixelBuffer
from imgeval.io.model_io import save_model
from imgeval.models.model import FEATURE_DIM, NaturalnessModel


def make_random_model(seed: int = 0) -> NaturalnessModel:
    """Placeholder model: random mean, unit diagonal, small random off-diagonals."""
    rng = np.random.default_rng(seed)
    mean = rng.random(FEATURE_DIM) * 0.1
    cov = rng.random((FEATURE_DIM, FEATURE_DIM)) * 0.1
    np.fill_diagonal(cov, 1.0)
    return NaturalnessModel(mean=mean, cov=cov, version=f"test-seed-{seed}", name="scaffolding")


@pytest.fixture
def model() -> NaturalnessModel:
    return make_random_model()


@pytest.fixture
def model_file(tmp_path: Path, model: NaturalnessModel) -> str:
    path = tmp_path / "model.json"
    save_model(path, model)
    return str(path)


@pytest.fixture
def textured_buffer() -> PixelBuffer:
    """200x200 noisy RGB image (4 full 96x96 patches)."""
    rng = np.random.default_rng(1)
    return PixelBuffer.from_array(rng.integers(0, 256, (200, 200, 3), dtype=np.uint8))


@pytest.fixture
def flat_buffer() -> PixelBuffer:
    return PixelBuffer.from_array(np.full((200, 200, 3), 128, dtype=np.uint8))


@pytest.fixture
def image_pair(tmp_path: Path) -> tuple[str, str]:
    """A reference PNG and a brightened candidate PNG of the same size."""
    rng = np.random.default_rng(2)
    arr = rng.integers(30, 200, (120, 150, 3), dtype=np.uint8)
    ref = tmp_path / "ref.png"
    cand = tmp_path / "cand.png"
    Image.fromarray(arr).save(ref)
    Image.fromarray(np.clip(arr.astype(np.int16) + 40, 0, 255).astype(np.uint8)).save(cand)
    return str(ref), str(cand)


@pytest.fixture
def pair_dirs(tmp_path: Path) -> tuple[Path, Path]:
    """Reference/candidate directories with three matched pairs and one orphan."""
    rng = np.random.default_rng(3)
    ref_dir = tmp_path / "reference"
    cand_dir = tmp_path / "enhanced"
    ref_dir.mkdir()
    cand_dir.mkdir()

    for i in range(3):
        arr = rng.integers(20, 220, (110 + i * 10, 130, 3), dtype=np.uint8)
        Image.fromarray(arr).save(ref_dir / f"img_{i:03d}.png")
        enhanced = np.clip(arr.astype(np.float64) * 1.2, 0, 255).astype(np.uint8)
        Image.fromarray(enhanced).save(cand_dir / f"img_{i:03d}.png")

    # reference without a candidate
    Image.fromarray(rng.integers(0, 255, (100, 100, 3), dtype=np.uint8)).save(
        ref_dir / "orphan.png"
    )
    return ref_dir, cand_dir
