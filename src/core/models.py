# src/core/models.py — v1
"""Shared Pydantic data contracts used across modules.

Events, the three command variants, executor and pipeline-facing results,
and the caller-owned BuildState. No module redefines these types.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from buildcore.tracking.models import TimerEntry


# === EVENTS ===


class Event(str, Enum):
    """Lifecycle phase of a build."""

    PRE_BUILD = "onPreBuild"
    BUILD = "onBuild"
    POST_BUILD = "onPostBuild"
    ERROR = "onError"
    SUCCESS = "onSuccess"
    END = "onEnd"

    @property
    def hook_name(self) -> str:
        """Python entry point name on a plugin handle (e.g. 'on_pre_build')."""
        return _HOOK_NAMES[self]


_HOOK_NAMES: dict[Event, str] = {
    Event.PRE_BUILD: "on_pre_build",
    Event.BUILD: "on_build",
    Event.POST_BUILD: "on_post_build",
    Event.ERROR: "on_error",
    Event.SUCCESS: "on_success",
    Event.END: "on_end",
}


# === COMMANDS ===


class CoreCommand(BaseModel):
    """Built-in command invoked directly by the pipeline (e.g. functions bundling)."""

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    id: str
    name: str
    handler: Any = None


class BuildCommand(BaseModel):
    """User-declared shell command."""

    model_config = {"frozen": True}

    command: str
    origin: Literal["ui", "config"] = "config"


class PluginCommand(BaseModel):
    """Event handler of a loaded plugin package."""

    model_config = {"frozen": True}

    package_name: str
    package_json: dict[str, Any] = Field(default_factory=dict)
    loaded_from: Literal["core", "auto_install", "local", "package.json"] = "package.json"
    origin: Literal["core", "ui", "config"] = "config"


class Command(BaseModel):
    """One dispatchable unit: an event plus exactly one command variant."""

    model_config = {"frozen": True}

    event: Event
    core: CoreCommand | None = None
    build: BuildCommand | None = None
    plugin: PluginCommand | None = None

    @property
    def package_name(self) -> str | None:
        """Owning plugin package, None for core and build commands."""
        return self.plugin.package_name if self.plugin is not None else None

    @property
    def display_name(self) -> str:
        if self.core is not None:
            return self.core.name
        if self.build is not None:
            return "build.command"
        if self.plugin is not None:
            return f"{self.event.value} from {self.plugin.package_name}"
        return "<empty command>"

    @property
    def origin(self) -> str | None:
        if self.build is not None:
            return self.build.origin
        if self.plugin is not None:
            return self.plugin.origin
        return None


# === RESULTS ===


class CommandStatus(BaseModel):
    """Status reported by, or on behalf of, a command."""

    model_config = {"frozen": True}

    state: Literal["success", "failed_plugin", "failed_build", "canceled_build"]
    package_name: str | None = None
    title: str | None = None
    summary: str | None = None
    text: str | None = None


class CommandError(BaseModel):
    """Identity of a failure, as reported to the user."""

    model_config = {"frozen": True}

    message: str
    kind: Literal["build_failure", "plugin_failure", "build_canceled"]
    event: Event
    command_name: str
    package_name: str | None = None
    error_type: str = "Exception"


class RawCommandResult(BaseModel):
    """What an executor hands back before classification."""

    model_config = {"arbitrary_types_allowed": True}

    env_changes: dict[str, str] = Field(default_factory=dict)
    error: BaseException | None = None
    status: CommandStatus | None = None
    config_mutations: list[Any] = Field(default_factory=list)


class CommandResult(BaseModel):
    """Pipeline-facing result of one dispatched command. Immutable."""

    model_config = {"frozen": True}

    env_changes: dict[str, str] = Field(default_factory=dict)
    error: CommandError | None = None
    status: CommandStatus | None = None
    failed_plugins: tuple[str, ...] = ()
    timers: tuple[TimerEntry, ...] = ()
    duration_ns: int = 0
    config_mutations: tuple[Any, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self == _EMPTY_RESULT


_EMPTY_RESULT = CommandResult()


# === BUILD STATE ===


class BuildState(BaseModel):
    """Caller-owned pipeline state, mutated only between dispatcher calls."""

    model_config = {"arbitrary_types_allowed": True}

    build_dir: Path
    config_path: Path | None = None
    node_path: str | None = None
    child_env: dict[str, str] = Field(default_factory=dict)
    env_changes: dict[str, str] = Field(default_factory=dict)
    constants: dict[str, Any] = Field(default_factory=dict)

    index: int = 0
    error: CommandError | None = None
    additional_errors: list[CommandError] = Field(default_factory=list)
    failed_plugins: frozenset[str] = frozenset()
    statuses: list[CommandStatus] = Field(default_factory=list)
    timers: list[TimerEntry] = Field(default_factory=list)
    config_mutations: list[Any] = Field(default_factory=list)

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def absorb(self, result: CommandResult, next_index: int) -> None:
        """Merge one command's result into the pipeline state.

        The first build failure is kept as ``error``; later ones are
        appended to ``additional_errors`` so the original identity survives.
        """
        self.index = next_index
        if result.is_empty:
            return
        self.env_changes = {**self.env_changes, **result.env_changes}
        if result.error is not None:
            if self.error is None:
                self.error = result.error
            else:
                self.additional_errors.append(result.error)
        if result.failed_plugins:
            self.failed_plugins = self.failed_plugins | set(result.failed_plugins)
        if result.status is not None:
            self.statuses.append(result.status)
        self.timers.extend(result.timers)
        self.config_mutations.extend(result.config_mutations)
