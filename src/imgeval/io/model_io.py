"""Versioned naturalness model artifacts (.json or .npz)."""

from __future__ import annotations

import zipfile
from pathlib import Path

import numpy as np
import orjson

from imgeval.models.model import NaturalnessModel


def load_model(path: str | Path) -> NaturalnessModel:
    """Load a model file. JSON holds ``version``, ``name``, ``mean`` and ``cov``.

    Raises FileNotFoundError for a missing file and ValueError for anything
    that does not describe a valid model.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"naturalness model not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        try:
            data = orjson.loads(path.read_bytes())
        except orjson.JSONDecodeError as exc:
            raise ValueError(f"invalid model JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"model JSON in {path} must be an object")
        return NaturalnessModel.from_dict(data)

    if suffix == ".npz":
        try:
            with np.load(path, allow_pickle=False) as npz:
                if "mean" not in npz.files or "cov" not in npz.files:
                    raise ValueError(f"model archive {path} must contain 'mean' and 'cov'")
                mean = npz["mean"]
                cov = npz["cov"]
                version = str(npz["version"]) if "version" in npz.files else "unversioned"
                name = str(npz["name"]) if "name" in npz.files else ""
        except (zipfile.BadZipFile, OSError, KeyError, EOFError) as exc:
            raise ValueError(f"invalid model archive {path}: {exc}") from exc
        return NaturalnessModel(mean=mean, cov=cov, version=version, name=name)

    raise ValueError(f"unsupported model format: {path.suffix or '(none)'}")


def save_model(path: str | Path, model: NaturalnessModel) -> None:
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        path.write_bytes(orjson.dumps(model.to_dict(), option=orjson.OPT_INDENT_2))
    elif suffix == ".npz":
        with open(path, "wb") as f:
            np.savez(
                f,
                mean=model.mean,
                cov=model.cov,
                version=np.array(model.version),
                name=np.array(model.name),
            )
    else:
        raise ValueError(f"unsupported model format: {path.suffix or '(none)'}")
