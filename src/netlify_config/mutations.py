# src/netlify_config/mutations.py — v1
"""Configuration mutations and the left fold producing the inline config.

Each mutation variant declares its own merge behaviour, so callers never
branch on the field being changed. ``kind`` is a top-level key such as
'headers' or a dotted path such as 'build.environment'.
"""

from __future__ import annotations

import copy
from abc import abstractmethod
from functools import reduce
from typing import Annotated, Any, Iterable, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from buildcore.netlify_config.merge import merge_configs


class _BaseMutation(BaseModel):
    model_config = {"frozen": True}

    kind: str
    value: Any = None

    @field_validator("kind")
    @classmethod
    def validate_kind(cls, v: str) -> str:
        if not any(part for part in v.split(".")):
            raise ValueError("mutation kind must name a configuration key")
        return v

    @property
    def key_path(self) -> tuple[str, ...]:
        return tuple(part for part in self.kind.split(".") if part)

    @property
    def top_level_key(self) -> str:
        return self.key_path[0]

    def apply(self, config: dict[str, Any]) -> dict[str, Any]:
        """Return a new config with this mutation applied. ``config`` is untouched."""
        result = copy.deepcopy(config)
        parent = result
        *parents, leaf = self.key_path
        for key in parents:
            child = parent.get(key)
            if not isinstance(child, dict):
                child = {}
                parent[key] = child
            parent = child
        parent[leaf] = self._combine(parent.get(leaf), copy.deepcopy(self.value))
        return result

    @abstractmethod
    def _combine(self, current: Any, value: Any) -> Any:
        """Combine the value at ``kind`` with this mutation's value.

        Each variant overrides this. ``current`` is None when the key is unset.
        """


class ReplaceMutation(_BaseMutation):
    """Set the value at ``kind``, discarding what was there."""

    operation: Literal["replace"] = "replace"

    def _combine(self, current: Any, value: Any) -> Any:
        return value


class MergeMutation(_BaseMutation):
    """Deep-merge a mapping into the value at ``kind``."""

    operation: Literal["merge"] = "merge"

    def _combine(self, current: Any, value: Any) -> Any:
        if not isinstance(value, dict):
            raise ValueError(f"merge mutation on '{self.kind}' needs a mapping value")
        if not isinstance(current, dict):
            return value
        return merge_configs([current, value])


class AppendMutation(_BaseMutation):
    """Extend the list at ``kind``; a single item is appended as-is."""

    operation: Literal["append"] = "append"

    def _combine(self, current: Any, value: Any) -> Any:
        items = value if isinstance(value, list) else [value]
        if current is None:
            return items
        if not isinstance(current, list):
            raise ValueError(f"append mutation on '{self.kind}' but current value is not a list")
        return [*current, *items]


ConfigMutation = Annotated[
    Union[ReplaceMutation, MergeMutation, AppendMutation],
    Field(discriminator="operation"),
]

_MUTATION_LIST = TypeAdapter(list[ConfigMutation])


def parse_mutations(raw: Iterable[dict[str, Any] | _BaseMutation]) -> list[ConfigMutation]:
    """Validate raw mutation entries ({kind, operation, value}) into typed mutations."""
    items = [m.model_dump() if isinstance(m, _BaseMutation) else m for m in raw]
    return _MUTATION_LIST.validate_python(items)


def apply_mutations(
    config: dict[str, Any],
    mutations: Iterable[ConfigMutation],
) -> dict[str, Any]:
    """Fold ``mutations`` in log order onto ``config``."""
    return reduce(lambda acc, mutation: mutation.apply(acc), mutations, config)


def touched_keys(mutations: Iterable[ConfigMutation]) -> set[str]:
    """Top-level configuration keys changed anywhere in the log."""
    return {m.top_level_key for m in mutations}
