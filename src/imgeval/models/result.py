"""Data models for scored image pairs."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

RESULTS_META_KEY = "__results_meta__"


@dataclass(slots=True)
class ScoreRecord:
    # Identity
    reference_path: str = ""
    candidate_path: str = ""
    name: str = ""
    width: int = 0
    height: int = 0

    # Scores (None when skipped or failed)
    naturalness: float | None = None
    naturalness_rating: str | None = None
    lightness_order: float | None = None
    lightness_order_rating: str | None = None

    # Failure (error/error_type hold the first failure; per-metric fields keep each one)
    error: str | None = None
    error_type: str | None = None
    naturalness_error: str | None = None
    lightness_order_error: str | None = None

    # Meta
    elapsed_sec: float = 0.0
    evaluated_at: str = ""

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScoreRecord:
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass(slots=True)
class ResultsMeta:
    is_meta: bool = field(default=True, repr=False)
    reference_dir: str = ""
    candidate_dir: str = ""
    model_path: str | None = None
    model_version: str | None = None
    schema_version: int = 1
    settings: dict[str, Any] = field(default_factory=dict)
    total_pairs: int = 0
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d.pop("is_meta", None)
        d[RESULTS_META_KEY] = True
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResultsMeta:
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)
