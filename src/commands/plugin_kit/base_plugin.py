# src/commands/plugin_kit/base_plugin.py — v1
"""Standard handle interface for build plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from buildcore.core.models import Event

if TYPE_CHECKING:
    from buildcore.commands.constants import BuildConstants
    from buildcore.commands.plugin_kit.utils import PluginUtils


class BasePlugin(ABC):
    """Lifecycle entry points of a loaded plugin package.

    Override only the events the plugin handles; handles() reports the
    overridden ones so the registry schedules nothing else.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Package name (e.g. '@netlify/plugin-sitemap')."""

    @property
    def version(self) -> str:
        return "0.0.0"

    @property
    def package_json(self) -> dict[str, Any]:
        return {"name": self.name, "version": self.version}

    async def on_pre_build(self, *, constants: BuildConstants, env: dict[str, str],
                           utils: PluginUtils) -> dict[str, str] | None:
        return None

    async def on_build(self, *, constants: BuildConstants, env: dict[str, str],
                       utils: PluginUtils) -> dict[str, str] | None:
        return None

    async def on_post_build(self, *, constants: BuildConstants, env: dict[str, str],
                            utils: PluginUtils) -> dict[str, str] | None:
        return None

    async def on_error(self, *, constants: BuildConstants, env: dict[str, str],
                       utils: PluginUtils) -> dict[str, str] | None:
        return None

    async def on_success(self, *, constants: BuildConstants, env: dict[str, str],
                         utils: PluginUtils) -> dict[str, str] | None:
        return None

    async def on_end(self, *, constants: BuildConstants, env: dict[str, str],
                     utils: PluginUtils) -> dict[str, str] | None:
        return None

    def handles(self, event: Event) -> bool:
        """True if the subclass overrides the entry point for ``event``."""
        hook = event.hook_name
        return getattr(type(self), hook) is not getattr(BasePlugin, hook)
