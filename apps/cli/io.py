"""CLI I/O helpers for reading documents and writing JSON atomically."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

from tabdent.indental.models import IndentalResult
from tabdent.tablatal.models import TableResult


def read_source(path: Path) -> str:
    """Read a UTF-8 document, accepting an optional byte order mark."""

    return path.read_text(encoding="utf-8-sig")


def build_payload(fmt: str, result: IndentalResult | TableResult) -> dict[str, Any]:
    """Build the JSON payload printed or written for one parse."""

    payload: dict[str, Any] = {
        "format": fmt,
        "valid": result.valid,
        "errors": list(result.errors),
        "data": result.data,
    }
    if isinstance(result, TableResult):
        payload["keys"] = list(result.keys)
    return payload


def dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def write_json_atomic(path: Path, payload: dict[str, Any]) -> None:
    """Write payload to path via a temporary file + replace."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        delete=False,
        prefix=f"{path.name}.",
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        json.dump(payload, tmp, ensure_ascii=False, indent=2)

    tmp_path.replace(path)
