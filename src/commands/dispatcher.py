# src/commands/dispatcher.py — v1
"""Command dispatcher: eligibility, logging, timed execution, classification.

run() never raises for a command failure, it packages the failure into
the CommandResult. Only a command with no variant populated raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from buildcore.commands.command_return import ReturnHandler, get_command_return
from buildcore.commands.constants import get_constants
from buildcore.commands.events import is_eligible
from buildcore.commands.executor import fire_command
from buildcore.commands.executors import BaseExecutors
from buildcore.core.models import BuildState, Command, CommandResult, RawCommandResult
from buildcore.logging.context import set_command_context
from buildcore.tracking.timers import TimerLog

logger = logging.getLogger(__name__)


class DispatchError(Exception):
    """Programmer error: the command cannot be dispatched at all."""


@dataclass(frozen=True)
class DispatchOutcome:
    result: CommandResult
    next_index: int


class CommandDispatcher:
    """Run one command at a time against the caller's BuildState.

    Args:
        executors: Core, build-command and plugin executors.
        return_handler: Classifies raw results (default get_command_return).
    """

    def __init__(
        self,
        executors: BaseExecutors,
        return_handler: ReturnHandler = get_command_return,
    ) -> None:
        self._executors = executors
        self._return_handler = return_handler

    async def run(self, command: Command, state: BuildState) -> DispatchOutcome:
        """Dispatch ``command`` for its event.

        Args:
            command: Event plus exactly one command variant.
            state: Caller-owned state; read-only here.

        Returns:
            DispatchOutcome with the result and ``state.index + 1``.

        Raises:
            DispatchError: If no command variant is populated.
        """
        if command.core is None and command.build is None and command.plugin is None:
            raise DispatchError(f"Command for {command.event.value} has no variant populated")

        next_index = state.index + 1
        constants = get_constants(state.constants, state.build_dir)

        if not is_eligible(
            command.event, command.package_name, state.has_error, state.failed_plugins,
        ):
            return DispatchOutcome(result=CommandResult(), next_index=next_index)

        _log_command(command, state)

        timers = TimerLog()
        try:
            timed = await fire_command(command, state, constants, self._executors, timers)
            raw, duration_ns = timed.raw, timed.duration_ns
        except Exception as exc:
            # The timer was recorded before the exception left fire_command.
            raw = RawCommandResult(error=exc)
            duration_ns = timers.last.duration_ns if timers.last is not None else 0

        result = self._return_handler(command, raw, timers.entries, duration_ns)
        return DispatchOutcome(result=result, next_index=next_index)


def _log_command(command: Command, state: BuildState) -> None:
    try:
        set_command_context(command.event.value, command.package_name)
        logger.info(
            "%d. %s%s",
            state.index + 1,
            command.display_name,
            " (build already failed)" if state.has_error else "",
            extra={
                "data": {
                    "event": command.event.value,
                    "origin": command.origin,
                    "name": command.display_name,
                    "index": state.index,
                    "has_error": state.has_error,
                }
            },
        )
    except Exception:
        logger.debug("Could not log command %r", command, exc_info=True)
