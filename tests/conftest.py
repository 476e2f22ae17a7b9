# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides a temporary build directory, file stores (real and recording),
configuration paths, stub executors and a few plugin handles.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from buildcore.commands.executors import BaseExecutors
from buildcore.commands.plugin_kit.base_plugin import BasePlugin
from buildcore.core.models import (
    BuildCommand,
    BuildState,
    Command,
    CoreCommand,
    Event,
    PluginCommand,
    RawCommandResult,
)
from buildcore.netlify_config.models import ConfigPaths
from buildcore.storage.local_store import LocalFileStore


# === FIXTURES: Build layout ===


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    """Empty build directory."""
    d = tmp_path / "site"
    d.mkdir()
    return d


@pytest.fixture
def config_paths(build_dir: Path) -> ConfigPaths:
    """netlify.toml in build_dir, side files in build_dir/public."""
    return ConfigPaths.for_publish_dir(build_dir, Path("public"), "production", "main")


@pytest.fixture
def store() -> LocalFileStore:
    return LocalFileStore()


class RecordingStore(LocalFileStore):
    """LocalFileStore that records every operation changing the disk."""

    def __init__(self) -> None:
        self.writes: list[tuple[str, Path]] = []

    async def write_text(self, path, content):
        self.writes.append(("write_text", Path(path)))
        await super().write_text(path, content)

    async def append_text(self, path, content):
        self.writes.append(("append_text", Path(path)))
        await super().append_text(path, content)

    async def copy(self, src, dst):
        self.writes.append(("copy", Path(dst)))
        await super().copy(src, dst)

    async def delete(self, path, missing_ok=False):
        self.writes.append(("delete", Path(path)))
        await super().delete(path, missing_ok=missing_ok)

    async def make_dirs(self, path):
        self.writes.append(("make_dirs", Path(path)))
        await super().make_dirs(path)


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def state(build_dir: Path) -> BuildState:
    return BuildState(build_dir=build_dir, child_env={"NODE_ENV": "production"})


# === FIXTURES: Commands ===


def make_plugin_command(event: Event, package_name: str = "netlify-plugin-a") -> Command:
    return Command(event=event, plugin=PluginCommand(package_name=package_name))


def make_build_command(command: str = "make build") -> Command:
    return Command(event=Event.BUILD, build=BuildCommand(command=command))


def make_core_command(event: Event = Event.BUILD, handler=None) -> Command:
    return Command(
        event=event,
        core=CoreCommand(id="functions_bundling", name="Functions bundling", handler=handler),
    )


@pytest.fixture
def plugin_command_factory():
    return make_plugin_command


@pytest.fixture
def build_command_factory():
    return make_build_command


@pytest.fixture
def core_command_factory():
    return make_core_command


class StubExecutors(BaseExecutors):
    """Executors returning canned results and recording their calls.

    ``results`` maps 'core', 'build' or a package name to either a
    RawCommandResult or an exception to raise.
    """

    def __init__(self, results: dict | None = None) -> None:
        self.results = results or {}
        self.calls: list[tuple[str, tuple]] = []

    def _answer(self, key: str) -> RawCommandResult:
        answer = self.results.get(key, RawCommandResult())
        if isinstance(answer, BaseException):
            raise answer
        return answer

    async def run_core_command(self, command, build_dir, constants):
        self.calls.append(("core", (command.id, build_dir, constants)))
        return self._answer("core")

    async def run_build_command(self, command, config_path, build_dir, node_path, env):
        self.calls.append(("build", (command.command, config_path, build_dir, node_path, env)))
        return self._answer("build")

    async def run_plugin_command(self, event, plugin, env, constants):
        self.calls.append(("plugin", (event, plugin.package_name, env)))
        return self._answer(plugin.package_name)


@pytest.fixture
def stub_executors() -> StubExecutors:
    return StubExecutors()


# === FIXTURES: Plugins ===


class HeadersPlugin(BasePlugin):
    """Adds a security header and an env variable on onPostBuild."""

    @property
    def name(self) -> str:
        return "netlify-plugin-headers"

    @property
    def version(self) -> str:
        return "1.2.0"

    async def on_post_build(self, *, constants, env, utils):
        utils.config.add_header("/*", {"X-Frame-Options": "DENY"})
        utils.show_status(title="Headers added")
        return {"HEADERS_PLUGIN": "1"}


class FailingPlugin(BasePlugin):
    """Calls fail_plugin() on onBuild and raises on onSuccess."""

    @property
    def name(self) -> str:
        return "netlify-plugin-flaky"

    async def on_build(self, *, constants, env, utils):
        utils.fail_plugin("flaky plugin gave up")

    async def on_success(self, *, constants, env, utils):
        raise RuntimeError("should never run")


@pytest.fixture
def headers_plugin() -> HeadersPlugin:
    return HeadersPlugin()


@pytest.fixture
def failing_plugin() -> FailingPlugin:
    return FailingPlugin()
