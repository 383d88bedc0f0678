"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from imgeval.models.config import BatchConfig, MetricsConfig, load_config


class TestMetricsConfig:
    def test_defaults(self) -> None:
        config = MetricsConfig()
        assert config.patch_size == 96
        assert config.variance_floor == 1e-6
        assert config.window == 7
        assert config.block_target == 50
        assert config.duplicate_d2_scale

    @pytest.mark.parametrize(
        "kwargs",
        [{"patch_size": 1}, {"window": -1}, {"block_target": 0}, {"mismatch_chunk_rows": 0}],
    )
    def test_validate(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ValueError):
            MetricsConfig(**kwargs).validate()


class TestLoadConfig:
    def test_nested_metrics(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text(
            "workers: 3\nmodel_path: models/niqe.json\nmetrics:\n  patch_size: 64\n  window: 5\n"
        )
        config = load_config(str(path))
        assert config.workers == 3
        assert config.model_path == "models/niqe.json"
        assert config.metrics.patch_size == 64
        assert config.metrics.window == 5
        assert config.metrics.block_target == 50

    def test_top_level_metrics(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("duplicate_d2_scale: false\nblock_target: 25\nunknown_key: 1\n")
        config = load_config(str(path))
        assert config.metrics.duplicate_d2_scale is False
        assert config.metrics.block_target == 25

    def test_extensions(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("extensions: [png, .JPG]\n")
        assert load_config(str(path)).extensions == (".png", ".JPG")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yml"
        path.write_text("")
        config = load_config(str(path))
        assert config.metrics.patch_size == 96
        assert config.model_path is None
        assert isinstance(config, BatchConfig)

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yml"
        path.write_text("patch_size: 0\n")
        with pytest.raises(ValueError):
            load_config(str(path))
