"""Document value model: tagged value kinds and path updates."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, List, Mapping, MutableMapping, Sequence

NAMESPACE_KEY = "namespace"

Document = Dict[str, Any]


class DocumentImportError(ValueError):
    """Raised when external text cannot become a document."""


class UnsupportedValueError(TypeError):
    """Raised when a value is none of the supported document kinds."""


class ValueKind(str, Enum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    PAIR = "pair"
    SECTION = "section"
    UNSUPPORTED = "unsupported"


def _is_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(float(value))


def describe_value(value: object, *, strict: bool = False) -> ValueKind:
    """Return the kind of a document value.

    ``bool`` is checked before numbers since it subclasses ``int``. With
    ``strict=True`` an unsupported value raises instead of being flagged.
    """

    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if _is_number(value):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)) and len(value) == 2 and all(_is_number(item) for item in value):
        return ValueKind.PAIR
    if isinstance(value, Mapping):
        return ValueKind.SECTION
    if strict:
        raise UnsupportedValueError(f"Unsupported document value {value!r} ({type(value).__name__})")
    return ValueKind.UNSUPPORTED


def section_names(document: Mapping[str, Any]) -> List[str]:
    """Names of nested sections; ``namespace`` metadata is never a section."""

    return [key for key, value in document.items() if key != NAMESPACE_KEY and isinstance(value, Mapping)]


def find_unsupported(document: Mapping[str, Any]) -> List[str]:
    """Dotted paths of values that fall outside the supported kinds or nest too deep."""

    flagged: List[str] = []
    for key, value in document.items():
        kind = describe_value(value)
        if kind is ValueKind.UNSUPPORTED:
            flagged.append(key)
            continue
        if kind is not ValueKind.SECTION:
            continue
        for child_key, child_value in value.items():
            child_kind = describe_value(child_value)
            if child_kind in {ValueKind.UNSUPPORTED, ValueKind.SECTION}:
                flagged.append(f"{key}.{child_key}")
    return flagged


def set_path(document: MutableMapping[str, Any], path: Sequence[str], value: object) -> None:
    """Write ``value`` at ``path`` in place, creating intermediate mappings."""

    if not path:
        raise ValueError("Update path must contain at least one key")
    node: MutableMapping[str, Any] = document
    for key in path[:-1]:
        child = node.get(key)
        if not isinstance(child, MutableMapping):
            child = {}
            node[key] = child
        node = child
    node[path[-1]] = value


def get_path(document: Mapping[str, Any], path: Sequence[str], default: object = None) -> object:
    node: object = document
    for key in path:
        if not isinstance(node, Mapping) or key not in node:
            return default
        node = node[key]
    return node
