"""JSONL results read/write/append with crash-tolerant parsing."""

from __future__ import annotations

import os
from pathlib import Path

import orjson

from imgeval.models.result import RESULTS_META_KEY, ResultsMeta, ScoreRecord


def create_results(path: str | Path, meta: ResultsMeta) -> None:
    """Create a fresh results file with only the metadata header (truncates existing)."""
    path = Path(path)
    path.write_bytes(orjson.dumps(meta.to_dict(), option=orjson.OPT_APPEND_NEWLINE))


def append_records(path: str | Path, records: list[ScoreRecord]) -> None:
    """Append records to the JSONL results file."""
    path = Path(path)
    with open(path, "ab") as f:
        for rec in records:
            f.write(orjson.dumps(rec.to_dict(), option=orjson.OPT_APPEND_NEWLINE))
        f.flush()
        os.fsync(f.fileno())


def read_results(path: str | Path) -> tuple[ResultsMeta | None, list[ScoreRecord]]:
    """Read a JSONL results file, skipping corrupt lines (e.g. truncated by a crash)."""
    path = Path(path)
    if not path.exists():
        return None, []

    meta: ResultsMeta | None = None
    records: list[ScoreRecord] = []

    with open(path, "rb") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                data = orjson.loads(line)
            except orjson.JSONDecodeError:
                continue
            if not isinstance(data, dict):
                continue

            if data.get(RESULTS_META_KEY):
                if meta is None:
                    meta = ResultsMeta.from_dict(data)
            else:
                records.append(ScoreRecord.from_dict(data))

    return meta, records
