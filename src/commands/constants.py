# src/commands/constants.py — v1
"""Build-time constants exposed to core commands and plugins.

Derived purely from the caller's raw constants and the build directory;
relative paths resolve against the build directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel

from buildcore.storage import layout
from buildcore.version import __version__


class BuildConstants(BaseModel):
    """Resolved, absolute build constants."""

    model_config = {"frozen": True}

    build_dir: Path
    config_path: Path | None = None
    publish_dir: Path
    functions_src: Path | None = None
    functions_dist: Path
    cache_dir: Path
    is_local: bool = True
    site_id: str | None = None
    netlify_build_version: str = __version__


def _resolve(build_dir: Path, value: Any) -> Path | None:
    if value is None or value == "":
        return None
    path = Path(value)
    return path if path.is_absolute() else build_dir / path


def get_constants(constants: dict[str, Any] | BuildConstants | None, build_dir: Path) -> BuildConstants:
    """Resolve raw constants for ``build_dir``.

    Args:
        constants: Raw values from the caller (publish_dir, functions_src, ...).
        build_dir: Build base directory.

    Returns:
        BuildConstants with absolute paths and defaults filled in.
    """
    if isinstance(constants, BuildConstants):
        return constants

    raw = dict(constants or {})
    build_dir = Path(build_dir)

    return BuildConstants(
        build_dir=build_dir,
        config_path=_resolve(build_dir, raw.get("config_path")),
        publish_dir=_resolve(build_dir, raw.get("publish_dir")) or build_dir,
        functions_src=_resolve(build_dir, raw.get("functions_src")),
        functions_dist=(
            _resolve(build_dir, raw.get("functions_dist"))
            or layout.default_functions_dist(build_dir)
        ),
        cache_dir=_resolve(build_dir, raw.get("cache_dir")) or layout.default_cache_dir(build_dir),
        is_local=bool(raw.get("is_local", True)),
        site_id=raw.get("site_id"),
    )
