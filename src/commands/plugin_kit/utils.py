# src/commands/plugin_kit/utils.py — v1
"""Utilities handed to plugin entry points.

``utils.config`` is the constrained mutation API: plugins never touch
netlify.toml directly, they record mutations that the pipeline applies
for the deploy call and reverts afterwards.
"""

from __future__ import annotations

from typing import Any

from buildcore.commands.plugin_kit.errors import BuildCanceled, BuildFailure, PluginFailure
from buildcore.core.models import CommandStatus
from buildcore.netlify_config.mutations import (
    AppendMutation,
    ConfigMutation,
    MergeMutation,
    ReplaceMutation,
)


class ConfigMutator:
    """Records configuration mutations in call order."""

    def __init__(self) -> None:
        self._mutations: list[ConfigMutation] = []

    @property
    def mutations(self) -> list[ConfigMutation]:
        return list(self._mutations)

    def set(self, kind: str, value: Any) -> None:
        self._mutations.append(ReplaceMutation(kind=kind, value=value))

    def merge(self, kind: str, value: dict[str, Any]) -> None:
        self._mutations.append(MergeMutation(kind=kind, value=value))

    def append(self, kind: str, value: Any) -> None:
        self._mutations.append(AppendMutation(kind=kind, value=value))

    def set_headers(self, rules: list[dict[str, Any]]) -> None:
        self.set("headers", rules)

    def add_header(self, for_path: str, values: dict[str, str]) -> None:
        self.append("headers", {"for": for_path, "values": values})

    def set_redirects(self, rules: list[dict[str, Any]]) -> None:
        self.set("redirects", rules)

    def add_redirect(
        self,
        from_path: str,
        to_path: str,
        status: int | None = None,
        force: bool = False,
        **extra: Any,
    ) -> None:
        rule: dict[str, Any] = {"from": from_path, "to": to_path, **extra}
        if status is not None:
            rule["status"] = status
        if force:
            rule["force"] = True
        self.append("redirects", rule)


class PluginUtils:
    """Per-invocation helpers: failure signals, status and config mutations."""

    def __init__(self, package_name: str) -> None:
        self.package_name = package_name
        self.config = ConfigMutator()
        self.status: CommandStatus | None = None

    def fail_build(self, message: str) -> None:
        raise BuildFailure(message)

    def fail_plugin(self, message: str) -> None:
        raise PluginFailure(message)

    def cancel_build(self, message: str) -> None:
        raise BuildCanceled(message)

    def show_status(self, title: str | None = None, summary: str | None = None,
                    text: str | None = None) -> None:
        self.status = CommandStatus(
            state="success",
            package_name=self.package_name,
            title=title,
            summary=summary,
            text=text,
        )
