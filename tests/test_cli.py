"""Tests for the Typer CLI."""

from __future__ import annotations

from pathlib import Path

import orjson
import pytest
from typer.testing import CliRunner

from imgeval.cli.app import app
from imgeval.io.model_io import load_model, save_model

runner = CliRunner()


class TestCLI:
    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("naturalness", "loe", "batch", "summary", "model-info"):
            assert command in result.output

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "imgeval" in result.output

    def test_naturalness(self, image_pair: tuple[str, str], model_file: str) -> None:
        result = runner.invoke(app, ["naturalness", image_pair[1], "-m", model_file])
        assert result.exit_code == 0
        assert "Naturalness:" in result.output

    def test_naturalness_json(self, image_pair: tuple[str, str], model_file: str) -> None:
        result = runner.invoke(app, ["naturalness", image_pair[1], "-m", model_file, "--json"])
        assert result.exit_code == 0
        data = orjson.loads(result.output)
        assert data["naturalness"] >= 0
        assert data["rating"] in {"Excellent", "Good", "Fair", "Poor"}

    def test_naturalness_without_model(self, image_pair: tuple[str, str]) -> None:
        result = runner.invoke(app, ["naturalness", image_pair[1]])
        assert result.exit_code == 1
        assert "model" in result.output.lower()

    def test_loe_identical(self, image_pair: tuple[str, str]) -> None:
        ref = image_pair[0]
        result = runner.invoke(app, ["loe", ref, ref])
        assert result.exit_code == 0
        assert "0.0000" in result.output

    def test_loe_json(self, image_pair: tuple[str, str]) -> None:
        result = runner.invoke(app, ["loe", *image_pair, "--json"])
        assert result.exit_code == 0
        data = orjson.loads(result.output)
        assert data["lightness_order"] == 0.0
        assert data["rating"] == "Excellent"

    def test_loe_missing_file(self, tmp_path: Path, image_pair: tuple[str, str]) -> None:
        result = runner.invoke(app, ["loe", image_pair[0], str(tmp_path / "missing.png")])
        assert result.exit_code == 1

    def test_model_info(self, model_file: str) -> None:
        result = runner.invoke(app, ["model-info", model_file])
        assert result.exit_code == 0
        assert "test-seed-0" in result.output
        assert "36" in result.output

    def test_model_info_missing(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["model-info", str(tmp_path / "nope.json")])
        assert result.exit_code == 1

    def test_model_info_truncated_npz(self, tmp_path: Path, model_file: str) -> None:
        good = tmp_path / "good.npz"
        save_model(good, load_model(model_file))
        bad = tmp_path / "bad.npz"
        bad.write_bytes(good.read_bytes()[:200])

        result = runner.invoke(app, ["model-info", str(bad)])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Error" in result.output

    def test_batch_requires_model(self, pair_dirs: tuple[Path, Path], tmp_path: Path) -> None:
        ref_dir, cand_dir = pair_dirs
        out = tmp_path / "out.jsonl"
        result = runner.invoke(app, ["batch", str(ref_dir), str(cand_dir), "-o", str(out)])
        assert result.exit_code == 1
        assert not out.exists()

    def test_batch_invalid_dir(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["batch", str(tmp_path / "x"), str(tmp_path / "y")])
        assert result.exit_code == 1

    @pytest.mark.timeout(60)
    def test_batch_and_summary(
        self, pair_dirs: tuple[Path, Path], model_file: str, tmp_path: Path
    ) -> None:
        ref_dir, cand_dir = pair_dirs
        out = tmp_path / "out.jsonl"
        result = runner.invoke(
            app,
            [
                "batch", str(ref_dir), str(cand_dir),
                "-o", str(out), "-m", model_file,
                "--workers", "1", "--extensions", "png",
            ],
        )
        assert result.exit_code == 0, result.output
        assert out.exists()

        summary_json = tmp_path / "summary.json"
        result = runner.invoke(app, ["summary", str(out), "-o", str(summary_json)])
        assert result.exit_code == 0
        assert "Naturalness" in result.output
        data = orjson.loads(summary_json.read_bytes())
        assert data["total_pairs"] == 3
        assert data["naturalness"]["count"] == 3

    def test_summary_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.jsonl"
        path.write_text("")
        result = runner.invoke(app, ["summary", str(path)])
        assert result.exit_code == 1
