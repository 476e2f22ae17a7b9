# src/storage/layout.py — v1
"""On-disk naming conventions for configuration artifacts and their backups.

Backups live under {build_dir}/.netlify/deploy/ and reuse the base
names of the files they snapshot.
"""

from __future__ import annotations

from pathlib import Path

CONFIG_FILENAME = "netlify.toml"
HEADERS_FILENAME = "_headers"
REDIRECTS_FILENAME = "_redirects"

INTERNAL_DIR = ".netlify"
BACKUP_DIR = "deploy"
FUNCTIONS_DIST_DIR = "functions"
CACHE_DIR = "cache"


def internal_dir(build_dir: Path) -> Path:
    return Path(build_dir) / INTERNAL_DIR


def backup_dir(build_dir: Path) -> Path:
    """Return the build-scoped directory holding configuration backups."""
    return internal_dir(build_dir) / BACKUP_DIR


def config_backup_path(build_dir: Path) -> Path:
    return backup_dir(build_dir) / CONFIG_FILENAME


def headers_backup_path(build_dir: Path) -> Path:
    return backup_dir(build_dir) / HEADERS_FILENAME


def redirects_backup_path(build_dir: Path) -> Path:
    return backup_dir(build_dir) / REDIRECTS_FILENAME


def default_functions_dist(build_dir: Path) -> Path:
    return internal_dir(build_dir) / FUNCTIONS_DIST_DIR


def default_cache_dir(build_dir: Path) -> Path:
    return internal_dir(build_dir) / CACHE_DIR
