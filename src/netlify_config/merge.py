# src/netlify_config/merge.py — v1
"""Deep merge of configuration objects.

Later configs win for scalars, mappings merge recursively, and lists
(redirect and header rules, plugins) are concatenated with earlier
entries first.
"""

from __future__ import annotations

import copy
from typing import Any, Iterable


def merge_configs(configs: Iterable[dict[str, Any]]) -> dict[str, Any]:
    """Merge configs left to right into a new dict; inputs are not modified."""
    result: dict[str, Any] = {}
    for config in configs:
        result = _merge_values(result, config or {})
    return result


def _merge_values(base: Any, override: Any) -> Any:
    if override is None:
        return copy.deepcopy(base)

    if isinstance(base, dict) and isinstance(override, dict):
        merged = copy.deepcopy(base)
        for key, value in override.items():
            merged[key] = _merge_values(merged.get(key), value)
        return merged

    if isinstance(base, list) and isinstance(override, list):
        return [*copy.deepcopy(base), *copy.deepcopy(override)]

    return copy.deepcopy(override)
