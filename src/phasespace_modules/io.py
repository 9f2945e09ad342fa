from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .points import PointSet


def load_points(path: str | Path) -> PointSet:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))

    suffix = p.suffix.lower()
    raw: Any
    if suffix in {".yaml", ".yml"}:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    elif suffix == ".json":
        raw = json.loads(p.read_text(encoding="utf-8"))
    else:
        raise ValueError(f"Unsupported points format: {p.suffix} (expected .json/.yaml/.yml)")

    if isinstance(raw, list):
        raw = {"points": raw}
    try:
        return PointSet.model_validate(raw)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Invalid points file: {p}") from exc
