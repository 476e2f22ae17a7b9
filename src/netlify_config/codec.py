# src/netlify_config/codec.py — v1
"""Parse and serialize the TOML configuration file."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from buildcore.storage.base_file_store import BaseFileStore, MissingFileError

logger = logging.getLogger(__name__)


class ConfigParseError(Exception):
    """The configuration file exists but is not valid TOML."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not parse configuration file '{path}': {reason}")


def parse_toml(content: str, path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigParseError(path, str(exc)) from exc


async def parse_optional_config(store: BaseFileStore, path: Path | None) -> dict[str, Any]:
    """Parse the configuration file, or return {} when it does not exist."""
    if path is None:
        return {}
    try:
        content = await store.read_text(path)
    except MissingFileError:
        logger.debug("No configuration file at %s, starting from empty config", path)
        return {}
    return parse_toml(content, path)


def serialize_toml(config: dict[str, Any]) -> str:
    return tomli_w.dumps(config)
