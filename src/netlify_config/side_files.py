# src/netlify_config/side_files.py — v1
"""Helpers shared by the _headers and _redirects side-file parsers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from buildcore.storage.base_file_store import BaseFileStore, MissingFileError


class SideFileParseError(Exception):
    """A side file contains a line that cannot be parsed."""

    def __init__(self, path: Path | None, line_number: int, reason: str) -> None:
        self.path = path
        self.line_number = line_number
        where = f"{path}:{line_number}" if path is not None else f"line {line_number}"
        super().__init__(f"Invalid side file {where}: {reason}")


async def read_optional_side_file(store: BaseFileStore, path: Path | None) -> str | None:
    """Return the side file content, or None when it is absent."""
    if path is None:
        return None
    try:
        return await store.read_text(path)
    except MissingFileError:
        return None


def content_lines(content: str) -> list[tuple[int, str]]:
    """Return (line_number, raw_line) for non-blank, non-comment lines."""
    lines: list[tuple[int, str]] = []
    for number, raw in enumerate(content.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue
        lines.append((number, raw.rstrip()))
    return lines


def merge_rules(file_rules: list[dict[str, Any]], config_rules: Any) -> list[dict[str, Any]]:
    """Side-file rules first, then configuration rules, exact duplicates dropped."""
    merged: list[dict[str, Any]] = []
    for rule in [*file_rules, *(config_rules or [])]:
        if rule not in merged:
            merged.append(rule)
    return merged
