# src/commands/executors.py — v1
"""Executors: run a core command, a shell build command or a plugin hook.

Executors report failures through RawCommandResult.error instead of
raising, so the dispatcher can classify them.
"""

from __future__ import annotations

import asyncio
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from buildcore.commands.constants import BuildConstants
from buildcore.commands.plugin_kit.errors import BuildCommandError
from buildcore.commands.plugin_kit.utils import PluginUtils
from buildcore.commands.registry import PluginRegistry
from buildcore.core.models import (
    BuildCommand,
    CoreCommand,
    Event,
    PluginCommand,
    RawCommandResult,
)

logger = logging.getLogger(__name__)


class BaseExecutors(ABC):
    """The three ways a command can be executed."""

    @abstractmethod
    async def run_core_command(
        self,
        command: CoreCommand,
        build_dir: Path,
        constants: BuildConstants,
    ) -> RawCommandResult:
        """Run a built-in command."""

    @abstractmethod
    async def run_build_command(
        self,
        command: BuildCommand,
        config_path: Path | None,
        build_dir: Path,
        node_path: str | None,
        env: dict[str, str],
    ) -> RawCommandResult:
        """Run the user's shell build command."""

    @abstractmethod
    async def run_plugin_command(
        self,
        event: Event,
        plugin: PluginCommand,
        env: dict[str, str],
        constants: BuildConstants,
    ) -> RawCommandResult:
        """Run one plugin event handler."""


class LocalExecutors(BaseExecutors):
    """Run commands in-process and shell commands as local subprocesses.

    Args:
        registry: Loaded plugin handles, looked up by package name.
    """

    def __init__(self, registry: PluginRegistry | None = None) -> None:
        self._registry = registry or PluginRegistry()

    async def run_core_command(
        self,
        command: CoreCommand,
        build_dir: Path,
        constants: BuildConstants,
    ) -> RawCommandResult:
        if command.handler is None:
            return RawCommandResult()
        try:
            result = await command.handler(build_dir=build_dir, constants=constants)
        except Exception as exc:
            return RawCommandResult(error=exc)
        return result if result is not None else RawCommandResult()

    async def run_build_command(
        self,
        command: BuildCommand,
        config_path: Path | None,
        build_dir: Path,
        node_path: str | None,
        env: dict[str, str],
    ) -> RawCommandResult:
        process_env = {**os.environ, **env}
        if node_path:
            process_env["PATH"] = os.pathsep.join([node_path, process_env.get("PATH", "")])
        if config_path is not None:
            process_env.setdefault("NETLIFY_CONFIG_PATH", str(config_path))

        proc = await asyncio.create_subprocess_shell(
            command.command,
            cwd=str(build_dir),
            env=process_env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
        stdout, _ = await proc.communicate()
        output = stdout.decode("utf-8", errors="replace") if stdout else ""
        for line in output.splitlines():
            logger.info("%s", line)

        if proc.returncode != 0:
            return RawCommandResult(
                error=BuildCommandError(command.command, proc.returncode or 1, output)
            )
        return RawCommandResult()

    async def run_plugin_command(
        self,
        event: Event,
        plugin: PluginCommand,
        env: dict[str, str],
        constants: BuildConstants,
    ) -> RawCommandResult:
        handle = self._registry.get_or_raise(plugin.package_name)
        utils = PluginUtils(plugin.package_name)
        hook = getattr(handle, event.hook_name)

        try:
            env_changes = await hook(constants=constants, env=dict(env), utils=utils)
        except Exception as exc:
            return RawCommandResult(error=exc, config_mutations=utils.config.mutations)

        return RawCommandResult(
            env_changes=dict(env_changes or {}),
            status=utils.status,
            config_mutations=utils.config.mutations,
        )
