"""JSON exchange format for documents."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Mapping

from hud_config.document import Document, DocumentImportError


def serialize(document: Mapping[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False)


def _reject_constant(token: str) -> float:
    raise DocumentImportError(f"Invalid JSON: {token} is not a JSON number")


def _finite_float(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise DocumentImportError(f"Invalid JSON: {token} is out of range")
    return value


def parse(text: str) -> Document:
    """Parse exchange text, rejecting malformed JSON, non-finite numbers and non-object roots."""

    try:
        data = json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except (TypeError, json.JSONDecodeError) as exc:
        raise DocumentImportError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DocumentImportError(f"Expected a JSON object at the root, got {type(data).__name__}")
    return data


def read_document(path: Path) -> Document:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DocumentImportError(f"Unable to read {path}: {exc}") from exc
    return parse(text)


def write_document(path: Path, document: Mapping[str, Any]) -> None:
    """Write the pretty-printed export artifact atomically."""

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(serialize(document) + "\n", encoding="utf-8")
    tmp_path.replace(path)
