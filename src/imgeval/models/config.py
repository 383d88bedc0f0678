"""Configuration models with sensible defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class MetricsConfig:
    # Naturalness
    patch_size: int = 96
    variance_floor: float = 1e-6
    duplicate_d2_scale: bool = True  # slots 9-10 carry the d2 scale twice

    # Lightness order
    window: int = 7
    block_target: int = 50
    mismatch_chunk_rows: int = 256

    def validate(self) -> None:
        if self.patch_size < 2:
            raise ValueError(f"patch_size must be >= 2, got {self.patch_size}")
        if self.window < 0:
            raise ValueError(f"window must be >= 0, got {self.window}")
        if self.block_target < 1:
            raise ValueError(f"block_target must be >= 1, got {self.block_target}")
        if self.mismatch_chunk_rows < 1:
            raise ValueError(f"mismatch_chunk_rows must be >= 1, got {self.mismatch_chunk_rows}")


@dataclass(slots=True)
class BatchConfig:
    workers: int = field(default_factory=lambda: os.cpu_count() or 4)
    flush_every: int = 100
    extensions: tuple[str, ...] = (
        ".jpg",
        ".jpeg",
        ".png",
        ".bmp",
        ".tiff",
        ".tif",
        ".webp",
    )
    model_path: str | None = None
    resize_candidate: bool = True
    skip_naturalness: bool = False
    skip_lightness_order: bool = False
    metrics: MetricsConfig = field(default_factory=MetricsConfig)


def _metrics_from_dict(data: dict[str, Any]) -> MetricsConfig:
    kwargs = {k: v for k, v in data.items() if k in MetricsConfig.__dataclass_fields__}
    return MetricsConfig(**kwargs)


def load_config(path: str) -> BatchConfig:
    """Load a BatchConfig from a YAML file.

    Metric settings may sit at the top level or under a ``metrics:`` key.
    Unknown keys are ignored and missing keys keep their defaults.
    """
    import yaml  # type: ignore[import-untyped]

    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        return BatchConfig()

    metrics_data = dict(data.get("metrics") or {})
    for key in MetricsConfig.__dataclass_fields__:
        if key in data:
            metrics_data.setdefault(key, data[key])

    kwargs = {
        k: v
        for k, v in data.items()
        if k in BatchConfig.__dataclass_fields__ and k not in ("metrics", "extensions")
    }
    config = BatchConfig(**kwargs)
    if "extensions" in data and data["extensions"]:
        config.extensions = tuple(f".{str(e).strip().lstrip('.')}" for e in data["extensions"])
    config.metrics = _metrics_from_dict(metrics_data)
    config.metrics.validate()
    return config
