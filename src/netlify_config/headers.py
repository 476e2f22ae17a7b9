# src/netlify_config/headers.py — v1
"""Parse the _headers side file and fold it into the configuration.

Format:

    /path/*
      X-Frame-Options: DENY
      Cache-Control: public, max-age=0

A path line starts at column 0; header lines below it are indented.
Repeated header names for one path are joined with ', '.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from buildcore.netlify_config.side_files import (
    SideFileParseError,
    content_lines,
    merge_rules,
    read_optional_side_file,
)
from buildcore.storage.base_file_store import BaseFileStore

logger = logging.getLogger(__name__)


def parse_headers(content: str, path: Path | None = None) -> list[dict[str, Any]]:
    """Parse _headers content into [{'for': path, 'values': {...}}] rules."""
    rules: list[dict[str, Any]] = []
    current: dict[str, Any] | None = None

    for number, line in content_lines(content):
        if not line[0].isspace():
            current = {"for": line.strip(), "values": {}}
            rules.append(current)
            continue

        if current is None:
            raise SideFileParseError(path, number, "header declared before any path")

        name, sep, value = line.strip().partition(":")
        name, value = name.strip(), value.strip()
        if not sep or not name:
            raise SideFileParseError(path, number, f"expected 'Name: value', got {line.strip()!r}")

        values = current["values"]
        values[name] = f"{values[name]}, {value}" if name in values else value

    return [rule for rule in rules if rule["values"]]


async def add_config_headers(
    config: dict[str, Any],
    headers_path: Path | None,
    store: BaseFileStore,
) -> dict[str, Any]:
    """Return config with rules from the _headers file prepended to ``headers``."""
    content = await read_optional_side_file(store, headers_path)
    if content is None:
        return config

    file_rules = parse_headers(content, headers_path)
    logger.debug("Loaded %d header rules from %s", len(file_rules), headers_path)
    return {**config, "headers": merge_rules(file_rules, config.get("headers"))}
