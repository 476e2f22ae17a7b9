# src/netlify_config/context.py — v1
"""Resolve context- and branch-scoped settings of the inline configuration.

The configuration file may hold ``[context.<name>]`` sections that
override top-level build settings for a deploy context or a branch.
Inline changes must win over those, so once the inline ``context``
sections are folded onto ``build``, the resolved ``build`` is mirrored
under the current context and branch names.
"""

from __future__ import annotations

import copy
from typing import Any

from buildcore.netlify_config.merge import merge_configs


def ensure_config_priority(
    config: dict[str, Any],
    context: str | None,
    branch: str | None,
) -> dict[str, Any]:
    """Return ``config`` with its context/branch overrides resolved.

    Args:
        config: Inline configuration folded from the mutation log.
        context: Deploy context name (e.g. 'production', 'deploy-preview').
        branch: Git branch being built.

    Returns:
        New configuration whose ``build`` section takes priority over
        file-based context sections once merged.
    """
    result = copy.deepcopy(config)
    contexts = result.pop("context", None) or {}
    names = _context_names(context, branch)

    build = result.get("build") or {}
    for name in names:
        build = merge_configs([build, contexts.get(name) or {}])

    if not build:
        if contexts:
            result["context"] = contexts
        return result

    result["build"] = build
    result["context"] = {
        **contexts,
        **{name: copy.deepcopy(build) for name in names},
    }
    return result


def _context_names(context: str | None, branch: str | None) -> list[str]:
    # Branch-specific settings override the deploy context.
    names: list[str] = []
    for name in (context, branch):
        if name and name not in names:
            names.append(name)
    return names
