# src/netlify_config/models.py — v1
"""Paths and deploy context shared by update, backup and restore."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from buildcore.storage import layout


class ConfigPaths(BaseModel):
    """Where the configuration file and its side files live for one build."""

    model_config = {"frozen": True}

    build_dir: Path
    config_path: Path
    headers_path: Path | None = None
    redirects_path: Path | None = None
    context: str | None = None
    branch: str | None = None

    @classmethod
    def for_publish_dir(
        cls,
        build_dir: Path,
        publish_dir: Path | None = None,
        context: str | None = None,
        branch: str | None = None,
    ) -> ConfigPaths:
        """Conventional layout: netlify.toml in build_dir, side files in publish_dir."""
        build_dir = Path(build_dir)
        publish = Path(publish_dir) if publish_dir is not None else build_dir
        if not publish.is_absolute():
            publish = build_dir / publish
        return cls(
            build_dir=build_dir,
            config_path=build_dir / layout.CONFIG_FILENAME,
            headers_path=publish / layout.HEADERS_FILENAME,
            redirects_path=publish / layout.REDIRECTS_FILENAME,
            context=context,
            branch=branch,
        )
