# tests/integration/commands/test_int_build_run.py — v1
"""Integration: registry + LocalExecutors + dispatcher + runner + deploy cycle."""

from __future__ import annotations

import sys
import tomllib

import pytest

from buildcore.commands.dispatcher import CommandDispatcher
from buildcore.commands.executors import LocalExecutors
from buildcore.commands.plugin_kit.base_plugin import BasePlugin
from buildcore.commands.registry import PluginRegistry
from buildcore.commands.runner import BuildRunner, plan_commands


class RedirectsPlugin(BasePlugin):
    """Adds a function rewrite during onPostBuild and records its events."""

    def __init__(self) -> None:
        self.events: list[str] = []

    @property
    def name(self) -> str:
        return "netlify-plugin-functions"

    async def on_post_build(self, *, constants, env, utils):
        self.events.append("onPostBuild")
        utils.config.add_redirect("/api/*", "/.netlify/functions/:splat", status=200)
        return {"FUNCTIONS_READY": "1"}

    async def on_success(self, *, constants, env, utils):
        self.events.append(f"onSuccess:{env.get('FUNCTIONS_READY')}")

    async def on_end(self, *, constants, env, utils):
        self.events.append("onEnd")


@pytest.fixture
def plugins(headers_plugin, failing_plugin):
    redirects = RedirectsPlugin()
    registry = PluginRegistry()
    registry.register(headers_plugin)
    registry.register(failing_plugin)
    registry.register(redirects)
    return registry, redirects


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell syntax")
class TestBuildRun:
    @pytest.mark.asyncio
    async def test_successful_build_deploys_mutated_config(self, plugins, state, config_paths, store):
        registry, redirects = plugins
        runner = BuildRunner(CommandDispatcher(LocalExecutors(registry)), config_paths, store)
        deployed_config = {}

        async def deploy():
            deployed_config.update(tomllib.loads(config_paths.config_path.read_text()))
            return "deploy-1"

        result = await runner.run(plan_commands(registry, "echo building"), state, deploy)

        assert result.success is True
        assert result.deployed is True
        assert state.failed_plugins == frozenset({"netlify-plugin-flaky"})
        assert deployed_config["headers"] == [{"for": "/*", "values": {"X-Frame-Options": "DENY"}}]
        assert deployed_config["redirects"] == [
            {"from": "/api/*", "to": "/.netlify/functions/:splat", "status": 200}
        ]
        assert redirects.events == ["onPostBuild", "onSuccess:1", "onEnd"]
        assert state.env_changes == {"HEADERS_PLUGIN": "1", "FUNCTIONS_READY": "1"}
        assert not config_paths.config_path.exists()

    @pytest.mark.asyncio
    async def test_failed_build_skips_deploy(self, plugins, state, config_paths, store):
        registry, redirects = plugins
        runner = BuildRunner(CommandDispatcher(LocalExecutors(registry)), config_paths, store)
        deployed = []

        async def deploy():
            deployed.append(True)

        result = await runner.run(plan_commands(registry, "exit 2"), state, deploy)

        assert result.success is False
        assert result.deployed is False
        assert deployed == []
        assert state.error.kind == "build_failure"
        assert state.error.command_name == "build.command"
        assert redirects.events == ["onEnd"]
        assert state.config_mutations == []
