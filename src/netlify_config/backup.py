# src/netlify_config/backup.py — v1
"""Back up and restore netlify.toml, _headers and _redirects around a deploy.

Mutating those files is only meant for the deploy API call. Before they
change, each one is copied into {build_dir}/.netlify/deploy/. Once the
deploy call finished, restore_config() copies the backups back, or
deletes the live file when no backup exists because it did not exist
before.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Sequence

from buildcore.netlify_config.models import ConfigPaths
from buildcore.storage import layout
from buildcore.storage.base_file_store import BaseFileStore

logger = logging.getLogger(__name__)


def _slots(paths: ConfigPaths) -> list[tuple[Path | None, Path]]:
    """(live path, backup path) for each of the three artifacts."""
    return [
        (paths.config_path, layout.config_backup_path(paths.build_dir)),
        (paths.headers_path, layout.headers_backup_path(paths.build_dir)),
        (paths.redirects_path, layout.redirects_backup_path(paths.build_dir)),
    ]


async def backup_config(paths: ConfigPaths, store: BaseFileStore) -> None:
    """Snapshot the three artifacts into the build's backup directory."""
    await store.make_dirs(layout.backup_dir(paths.build_dir))
    await asyncio.gather(
        *(_backup_file(store, original, backup) for original, backup in _slots(paths))
    )
    logger.debug("Backed up configuration files to %s", layout.backup_dir(paths.build_dir))


async def restore_config(
    config_mutations: Sequence[object],
    paths: ConfigPaths,
    store: BaseFileStore,
) -> None:
    """Revert the artifacts to their state before update_config().

    No-op when the mutation log is empty, mirroring update_config().
    """
    if len(config_mutations) == 0:
        return

    await asyncio.gather(
        *(_copy_or_delete(store, backup, live) for live, backup in _slots(paths))
    )
    logger.info("Restored configuration files from %s", layout.backup_dir(paths.build_dir))


async def _backup_file(store: BaseFileStore, original: Path | None, backup: Path) -> None:
    # Stale backups from a previous deploy must never be restored.
    await store.delete(backup, missing_ok=True)

    if original is None or not await store.exists(original):
        return

    await store.copy(original, backup)


async def _copy_or_delete(store: BaseFileStore, backup: Path, live: Path | None) -> None:
    if live is None:
        return

    if await store.exists(backup):
        await store.copy(backup, live)
        return

    await store.delete(live, missing_ok=True)
