# src/commands/registry.py — v1
"""Plugin registry: package name -> loaded plugin handle.

Handles are registered directly or imported from dotted class paths.
Registration order is the order in which a plugin's hooks fire.
"""

from __future__ import annotations

import importlib
import logging
from typing import Iterable, Literal

from buildcore.commands.plugin_kit.base_plugin import BasePlugin
from buildcore.core.models import Command, Event, PluginCommand

logger = logging.getLogger(__name__)

LoadOrigin = Literal["core", "auto_install", "local", "package.json"]
PluginOrigin = Literal["core", "ui", "config"]


class RegistryError(Exception):
    """Raised when plugin loading or lookup fails."""


class PluginRegistry:
    """Registry of the plugins loaded for one build."""

    def __init__(self) -> None:
        self._plugins: dict[str, BasePlugin] = {}
        self._loaded_from: dict[str, LoadOrigin] = {}
        self._origins: dict[str, PluginOrigin] = {}

    @property
    def package_names(self) -> list[str]:
        """Package names in registration order."""
        return list(self._plugins)

    def register(
        self,
        plugin: BasePlugin,
        loaded_from: LoadOrigin = "package.json",
        origin: PluginOrigin = "config",
    ) -> None:
        """Register a plugin handle instance."""
        if plugin.name in self._plugins:
            logger.warning("Overwriting existing plugin: %s", plugin.name)
        self._plugins[plugin.name] = plugin
        self._loaded_from[plugin.name] = loaded_from
        self._origins[plugin.name] = origin

    def load_all(
        self,
        class_paths: Iterable[str],
        loaded_from: LoadOrigin = "package.json",
        origin: PluginOrigin = "config",
    ) -> None:
        """Import and register plugins from dotted class paths.

        Raises:
            RegistryError: If a path cannot be imported or is not a BasePlugin.
        """
        for class_path in class_paths:
            plugin = _import_plugin(class_path)
            self.register(plugin, loaded_from=loaded_from, origin=origin)
            logger.debug("Loaded plugin: %s v%s", plugin.name, plugin.version)

        logger.info(
            "Registry loaded %d plugins: %s",
            len(self._plugins),
            ", ".join(self.package_names) or "none",
        )

    def get(self, package_name: str) -> BasePlugin | None:
        """Get plugin by package name, or None if not registered."""
        return self._plugins.get(package_name)

    def get_or_raise(self, package_name: str) -> BasePlugin:
        plugin = self._plugins.get(package_name)
        if plugin is None:
            raise RegistryError(f"Plugin '{package_name}' not found in registry")
        return plugin

    def plugin_command(self, package_name: str) -> PluginCommand:
        plugin = self.get_or_raise(package_name)
        return PluginCommand(
            package_name=plugin.name,
            package_json=plugin.package_json,
            loaded_from=self._loaded_from[package_name],
            origin=self._origins[package_name],
        )

    def commands_for(self, event: Event) -> list[Command]:
        """Commands for every registered plugin handling ``event``."""
        return [
            Command(event=event, plugin=self.plugin_command(name))
            for name, plugin in self._plugins.items()
            if plugin.handles(event)
        ]


def _import_plugin(class_path: str) -> BasePlugin:
    """Import and instantiate a plugin from a dotted class path.

    Args:
        class_path: e.g. 'my_plugins.sitemap.SitemapPlugin'

    Returns:
        Instantiated BasePlugin subclass.
    """
    parts = class_path.rsplit(".", 1)
    if len(parts) != 2:
        raise RegistryError(f"Invalid class path: {class_path}")
    module_path, class_name = parts

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise RegistryError(f"Cannot import module {module_path}: {exc}") from exc

    cls = getattr(module, class_name, None)
    if cls is None:
        raise RegistryError(f"Class {class_name} not found in {module_path}")

    if not isinstance(cls, type) or not issubclass(cls, BasePlugin):
        raise RegistryError(f"{class_path} is not a BasePlugin subclass")

    return cls()
