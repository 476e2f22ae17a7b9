# src/netlify_config/simplify.py — v1
"""Drop empty sections before the configuration is persisted."""

from __future__ import annotations

from typing import Any


def simplify_config(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively remove None values, empty mappings and empty lists."""
    return _simplify_mapping(config)


def _simplify_mapping(mapping: dict[str, Any]) -> dict[str, Any]:
    simplified: dict[str, Any] = {}
    for key, value in mapping.items():
        value = _simplify_value(value)
        if _is_empty(value):
            continue
        simplified[key] = value
    return simplified


def _simplify_value(value: Any) -> Any:
    if isinstance(value, dict):
        return _simplify_mapping(value)
    if isinstance(value, list):
        items = [_simplify_value(item) for item in value]
        return [item for item in items if not _is_empty(item)]
    return value


def _is_empty(value: Any) -> bool:
    return value is None or value == {} or value == []
