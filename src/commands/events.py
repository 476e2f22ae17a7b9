# src/commands/events.py — v1
"""Failure-domain classifier: which events may fire given prior failures.

A plugin fails *without* failing the build when it calls
``utils.fail_plugin()`` or when the failure happens after deploy, i.e.
inside any onError, onSuccess or onEnd handler. From then on no other
event of that plugin runs, not even onError or onEnd.

Most other failures fail the build: the build command, core commands,
and any onPreBuild, onBuild or onPostBuild handler. Once the build has
failed only onError and onEnd still fire.

onError means "on build failure", not "on plugin failure". onSuccess is
its opposite. onEnd fires either way and is meant for cleanup.
"""

from __future__ import annotations

from collections.abc import Collection

from buildcore.core.models import Event

ALWAYS_ELIGIBLE_EVENTS: frozenset[Event] = frozenset({Event.END})
FAILURE_ONLY_EVENTS: frozenset[Event] = frozenset({Event.ERROR})
SUCCESS_ONLY_EVENTS: frozenset[Event] = frozenset(
    {Event.PRE_BUILD, Event.BUILD, Event.POST_BUILD, Event.SUCCESS}
)

# Handlers running after irreversible deploy actions.
POST_DEPLOY_EVENTS: frozenset[Event] = frozenset({Event.ERROR, Event.SUCCESS, Event.END})


def _coerce(event: Event | str) -> Event:
    try:
        return Event(event)
    except ValueError as exc:
        raise ValueError(f"Unknown build event: {event!r}") from exc


def runs_only_on_build_failure(event: Event | str) -> bool:
    return _coerce(event) in FAILURE_ONLY_EVENTS


def runs_also_on_build_failure(event: Event | str) -> bool:
    evt = _coerce(event)
    return evt in ALWAYS_ELIGIBLE_EVENTS or evt in FAILURE_ONLY_EVENTS


def is_post_deploy(event: Event | str) -> bool:
    return _coerce(event) in POST_DEPLOY_EVENTS


def is_eligible(
    event: Event | str,
    package_name: str | None,
    build_has_error: bool,
    failed_plugins: Collection[str],
) -> bool:
    """Decide whether a command for ``event`` may run.

    Args:
        event: Event currently firing.
        package_name: Owning plugin package, None for core/build commands.
        build_has_error: Whether the build already failed.
        failed_plugins: Plugins disabled for the rest of the build.

    Returns:
        True if the command is allowed to run.
    """
    if package_name is not None and package_name in failed_plugins:
        return False

    if build_has_error:
        return runs_also_on_build_failure(event)

    return not runs_only_on_build_failure(event)
