# src/netlify_config/update.py — v1
"""Persist configuration mutations to netlify.toml for the deploy call.

If netlify.toml does not exist it is created, otherwise the changes are
deep-merged into it. Rules from _headers/_redirects are folded in, and
the side files whose kind was mutated are deleted so the merged file
is the single source of truth for the deploy. When writing or deleting
fails after the backup was taken, the backup is restored before the
error propagates.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Sequence

from buildcore.netlify_config.backup import backup_config, restore_config
from buildcore.netlify_config.codec import parse_optional_config, serialize_toml
from buildcore.netlify_config.context import ensure_config_priority
from buildcore.netlify_config.headers import add_config_headers
from buildcore.netlify_config.merge import merge_configs
from buildcore.netlify_config.models import ConfigPaths
from buildcore.netlify_config.mutations import ConfigMutation, apply_mutations, touched_keys
from buildcore.netlify_config.redirects import add_config_redirects
from buildcore.netlify_config.simplify import simplify_config
from buildcore.storage.base_file_store import BaseFileStore

logger = logging.getLogger(__name__)


async def update_config(
    config_mutations: Sequence[ConfigMutation],
    paths: ConfigPaths,
    store: BaseFileStore,
) -> None:
    """Merge the mutation log into netlify.toml, backing up prior state first.

    Args:
        config_mutations: Ordered mutation log of the build.
        paths: Configuration file, side files, build dir and deploy context.
        store: File store backend.
    """
    if len(config_mutations) == 0:
        return

    inline_config = apply_mutations({}, config_mutations)
    normalized_inline = ensure_config_priority(inline_config, paths.context, paths.branch)
    updated = await _merge_with_config(normalized_inline, paths.config_path, store)
    with_headers = await add_config_headers(updated, paths.headers_path, store)
    final_config = await add_config_redirects(with_headers, paths.redirects_path, store)
    simplified = simplify_config(final_config)

    await backup_config(paths, store)
    touched = touched_keys(config_mutations)
    outcomes = await asyncio.gather(
        _save_config(store, paths.config_path, simplified),
        _delete_side_file(store, paths.headers_path, "headers", touched),
        _delete_side_file(store, paths.redirects_path, "redirects", touched),
        return_exceptions=True,
    )
    failure = next((o for o in outcomes if isinstance(o, BaseException)), None)
    if failure is not None:
        logger.error("Updating %s failed, restoring backup: %s", paths.config_path, failure)
        await restore_config(config_mutations, paths, store)
        raise failure
    logger.info(
        "Applied %d configuration mutation(s) to %s",
        len(config_mutations),
        paths.config_path,
    )


async def _merge_with_config(
    normalized_inline: dict[str, Any],
    config_path: Path,
    store: BaseFileStore,
) -> dict[str, Any]:
    config = await parse_optional_config(store, config_path)
    return merge_configs([config, normalized_inline])


async def _save_config(store: BaseFileStore, config_path: Path, config: dict[str, Any]) -> None:
    await store.write_text(config_path, serialize_toml(config))


async def _delete_side_file(
    store: BaseFileStore,
    file_path: Path | None,
    prop_name: str,
    touched: set[str],
) -> None:
    # Keyed on the log touching this kind, whatever the merged result.
    if prop_name not in touched or file_path is None:
        return
    if not await store.exists(file_path):
        return
    await store.delete(file_path)
    logger.debug("Deleted side file %s, its rules now live in the configuration file", file_path)
