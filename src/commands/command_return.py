# src/commands/command_return.py — v1
"""Turn a raw executor result into a pipeline-facing CommandResult.

This is where a failure is classified as failing the build, canceling
it, or only disabling the plugin that raised it.
"""

from __future__ import annotations

import logging
from typing import Callable

from buildcore.commands.events import is_post_deploy
from buildcore.commands.plugin_kit.errors import BuildCanceled, PluginFailure
from buildcore.core.models import (
    Command,
    CommandError,
    CommandResult,
    CommandStatus,
    RawCommandResult,
)
from buildcore.tracking.models import TimerEntry

logger = logging.getLogger(__name__)

ReturnHandler = Callable[
    [Command, RawCommandResult, tuple[TimerEntry, ...], int], CommandResult
]


def get_command_return(
    command: Command,
    raw: RawCommandResult,
    timers: tuple[TimerEntry, ...],
    duration_ns: int,
) -> CommandResult:
    """Classify ``raw`` and package it with its timers.

    Args:
        command: Command that produced the result.
        raw: Executor output.
        timers: Timer fragment recorded for this command.
        duration_ns: Measured wall-clock duration.

    Returns:
        CommandResult for the caller to merge into BuildState.
    """
    if raw.error is None:
        logger.debug(
            "%s completed in %.0fms", command.display_name, duration_ns / 1_000_000,
        )
        return CommandResult(
            env_changes=raw.env_changes,
            status=raw.status,
            timers=timers,
            duration_ns=duration_ns,
            config_mutations=tuple(raw.config_mutations),
        )

    error = raw.error
    package_name = command.package_name

    if package_name is not None and (
        isinstance(error, PluginFailure) or is_post_deploy(command.event)
    ):
        logger.warning(
            "Plugin '%s' failed during %s, disabling its remaining events: %s",
            package_name, command.event.value, error,
        )
        return CommandResult(
            error=None,
            status=CommandStatus(
                state="failed_plugin", package_name=package_name, title=str(error),
            ),
            failed_plugins=(package_name,),
            timers=timers,
            duration_ns=duration_ns,
        )

    kind = "build_canceled" if isinstance(error, BuildCanceled) else "build_failure"
    command_error = CommandError(
        message=str(error),
        kind=kind,
        event=command.event,
        command_name=command.display_name,
        package_name=package_name,
        error_type=type(error).__name__,
    )
    logger.error(
        "%s %s: %s",
        command.display_name,
        "canceled the build" if kind == "build_canceled" else "failed",
        error,
    )

    status = None
    if package_name is not None:
        status = CommandStatus(
            state="canceled_build" if kind == "build_canceled" else "failed_build",
            package_name=package_name,
            title=str(error),
        )

    return CommandResult(
        error=command_error,
        status=status,
        timers=timers,
        duration_ns=duration_ns,
    )
