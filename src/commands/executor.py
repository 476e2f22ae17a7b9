# src/commands/executor.py — v1
"""Timed executor wrapper: pick the executor for a command and time it.

Precedence: a core command, then a build command, then the plugin hook.
Callers guarantee that exactly one variant is populated.
"""

from __future__ import annotations

from dataclasses import dataclass

from buildcore.commands.constants import BuildConstants
from buildcore.commands.executors import BaseExecutors
from buildcore.core.models import BuildState, Command, RawCommandResult
from buildcore.tracking.timers import TimerLog, measure_duration, normalize_timer_name

BUILD_COMMAND_TIMER = "build_command"
PLUGIN_EVENT_CATEGORY = "pluginEvent"


@dataclass(frozen=True)
class TimedResult:
    raw: RawCommandResult
    duration_ns: int


async def fire_command(
    command: Command,
    state: BuildState,
    constants: BuildConstants,
    executors: BaseExecutors,
    timers: TimerLog,
) -> TimedResult:
    """Run ``command`` with the matching executor and record its timer.

    Exceptions raised by the executor propagate unchanged once their
    duration has been recorded in ``timers``.
    """
    env = {**state.child_env, **state.env_changes}

    if command.core is not None:
        core = command.core
        raw, duration_ns = await measure_duration(
            lambda: executors.run_core_command(core, state.build_dir, constants),
            core.id,
            timers=timers,
        )
    elif command.build is not None:
        build = command.build
        raw, duration_ns = await measure_duration(
            lambda: executors.run_build_command(
                build, state.config_path, state.build_dir, state.node_path, env,
            ),
            BUILD_COMMAND_TIMER,
            timers=timers,
        )
    else:
        plugin = command.plugin
        raw, duration_ns = await measure_duration(
            lambda: executors.run_plugin_command(command.event, plugin, env, constants),
            command.event.value,
            timers=timers,
            parent_tag=normalize_timer_name(plugin.package_name),
            category=PLUGIN_EVENT_CATEGORY,
        )

    return TimedResult(raw=raw, duration_ns=duration_ns)
