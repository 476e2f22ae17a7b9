# src/netlify_config/redirects.py — v1
"""Parse the _redirects side file and fold it into the configuration.

Format, one rule per line:

    /from [query=:param ...]  /to  [status[!]]  [Condition=value ...]

A trailing '!' on the status forces the rule even when a file exists
at the source path.
"""

from __future__ import annotations

import logging
import re
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

_STATUS_RE = re.compile(r"^(\d{3})(!?)$")


def _is_query_token(token: str) -> bool:
    return "=" in token and not token.startswith("/") and "://" not in token


def parse_redirect_line(line: str, path: Path | None = None, number: int = 0) -> dict[str, Any]:
    """Parse one _redirects line into a redirect rule mapping."""
    tokens = line.split()
    from_path, rest = tokens[0], tokens[1:]

    query: dict[str, str] = {}
    while rest and _is_query_token(rest[0]):
        key, _, value = rest.pop(0).partition("=")
        query[key] = value

    if not rest:
        raise SideFileParseError(path, number, f"missing destination path in {line.strip()!r}")
    to_path = rest.pop(0)

    rule: dict[str, Any] = {"from": from_path, "to": to_path}
    if query:
        rule["query"] = query

    if rest:
        match = _STATUS_RE.match(rest[0])
        if match:
            rest.pop(0)
            rule["status"] = int(match.group(1))
            if match.group(2):
                rule["force"] = True

    conditions: dict[str, list[str]] = {}
    for token in rest:
        key, sep, value = token.partition("=")
        if not sep or not key or not value:
            raise SideFileParseError(path, number, f"invalid condition {token!r}")
        conditions[key] = value.split(",")
    if conditions:
        rule["conditions"] = conditions

    return rule


def parse_redirects(content: str, path: Path | None = None) -> list[dict[str, Any]]:
    """Parse _redirects content into redirect rule mappings."""
    return [parse_redirect_line(line, path, number) for number, line in content_lines(content)]


async def add_config_redirects(
    config: dict[str, Any],
    redirects_path: Path | None,
    store: BaseFileStore,
) -> dict[str, Any]:
    """Return config with rules from the _redirects file prepended to ``redirects``."""
    content = await read_optional_side_file(store, redirects_path)
    if content is None:
        return config

    file_rules = parse_redirects(content, redirects_path)
    logger.debug("Loaded %d redirect rules from %s", len(file_rules), redirects_path)
    return {**config, "redirects": merge_rules(file_rules, config.get("redirects"))}
