# src/commands/runner.py — v1
"""Build runner: dispatch a command sequence and deploy with mutated config.

Commands run strictly in order, each result being merged into the
BuildState before the next command starts, because configuration
mutations are order-sensitive. The optional deploy step runs right
before the first post-deploy event (onError, onSuccess, onEnd) when the
build has not failed. It is surrounded by update_config() and
restore_config(); file-system failures there abort the build.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable

from buildcore.commands.dispatcher import CommandDispatcher
from buildcore.commands.events import is_post_deploy
from buildcore.commands.registry import PluginRegistry
from buildcore.core.models import (
    BuildCommand,
    BuildState,
    Command,
    CommandError,
    CommandResult,
    Event,
)
from buildcore.netlify_config.backup import restore_config
from buildcore.netlify_config.codec import ConfigParseError
from buildcore.netlify_config.models import ConfigPaths
from buildcore.netlify_config.mutations import parse_mutations
from buildcore.netlify_config.side_files import SideFileParseError
from buildcore.netlify_config.update import update_config
from buildcore.storage.base_file_store import BaseFileStore, StorageError

logger = logging.getLogger(__name__)

DeployFn = Callable[[], Awaitable[Any]]

DEPLOY_COMMAND_NAME = "deploy site"


@dataclass
class BuildResult:
    """Result of a full build run."""

    state: BuildState
    success: bool = True
    commands_run: list[str] = field(default_factory=list)
    commands_skipped: list[str] = field(default_factory=list)
    deployed: bool = False
    deploy_result: Any = None
    duration_ms: int = 0


class BuildRunner:
    """Run a command sequence against a BuildState.

    Args:
        dispatcher: Command dispatcher.
        paths: Configuration file and side-file locations.
        store: File store for update/backup/restore.
    """

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        paths: ConfigPaths,
        store: BaseFileStore,
    ) -> None:
        self._dispatcher = dispatcher
        self._paths = paths
        self._store = store

    async def run(
        self,
        commands: Iterable[Command],
        state: BuildState,
        deploy: DeployFn | None = None,
    ) -> BuildResult:
        """Dispatch every command in order, deploying when the time comes.

        Args:
            commands: Commands in execution order.
            state: Pipeline state, updated in place.
            deploy: Optional deploy call needing the mutated configuration.

        Returns:
            BuildResult with final state and execution metadata.
        """
        start_ns = time.monotonic_ns()
        result = BuildResult(state=state)
        deploy_pending = deploy is not None

        for command in commands:
            if deploy_pending and is_post_deploy(command.event):
                await self._deploy_if_healthy(state, deploy, result)
                deploy_pending = False

            outcome = await self._dispatcher.run(command, state)
            if outcome.result.is_empty:
                result.commands_skipped.append(command.display_name)
            else:
                result.commands_run.append(command.display_name)
            state.absorb(outcome.result, outcome.next_index)

        if deploy_pending:
            await self._deploy_if_healthy(state, deploy, result)

        result.success = state.error is None
        result.duration_ms = (time.monotonic_ns() - start_ns) // 1_000_000

        logger.info(
            "Build %s: %d commands run, %d skipped, %d failed plugins, %dms",
            "succeeded" if result.success else "failed",
            len(result.commands_run),
            len(result.commands_skipped),
            len(state.failed_plugins),
            result.duration_ms,
        )
        return result

    async def deploy_with_config(self, state: BuildState, deploy: DeployFn) -> Any:
        """Apply the mutation log for the deploy call, then restore the files."""
        mutations = parse_mutations(state.config_mutations)
        await update_config(mutations, self._paths, self._store)
        try:
            return await deploy()
        finally:
            await restore_config(mutations, self._paths, self._store)

    async def _deploy_if_healthy(
        self,
        state: BuildState,
        deploy: DeployFn | None,
        result: BuildResult,
    ) -> None:
        if deploy is None or state.has_error:
            return
        logger.info("Deploying with %d configuration mutation(s)", len(state.config_mutations))
        try:
            result.deploy_result = await self.deploy_with_config(state, deploy)
        except (StorageError, ConfigParseError, SideFileParseError):
            raise
        except Exception as exc:
            logger.error("Deploy failed: %s", exc)
            failure = CommandError(
                message=str(exc),
                kind="build_failure",
                event=Event.POST_BUILD,
                command_name=DEPLOY_COMMAND_NAME,
                error_type=type(exc).__name__,
            )
            state.absorb(CommandResult(error=failure), state.index)
            return
        result.deployed = True


def plan_commands(registry: PluginRegistry, build_command: str | None = None) -> list[Command]:
    """Every lifecycle command for the registered plugins, in event order.

    The shell build command, when given, opens onBuild ahead of the
    plugins' onBuild hooks.
    """
    commands: list[Command] = []
    for event in Event:
        if event is Event.BUILD and build_command:
            commands.append(Command(event=event, build=BuildCommand(command=build_command)))
        commands.extend(registry.commands_for(event))
    return commands
