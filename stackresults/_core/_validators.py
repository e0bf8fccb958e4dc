"""Validation helpers shared across the package."""

from __future__ import annotations

from typing import Any, Mapping, Sequence


def require_non_empty(mapping: Mapping[str, Any], keys: Sequence[str]) -> None:
    """Raise ``ValueError`` if any of *keys* are missing or empty in *mapping*."""
    missing = [k for k in keys if not mapping.get(k)]
    if missing:
        raise ValueError(f"Missing required parameters: {', '.join(missing)}")


def json_type_name(value: Any) -> str:
    """Name the JSON type of a value produced by ``json.loads``."""
    if value is None:
        return "null"
    # bool first, it is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
