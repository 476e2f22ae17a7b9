# src/logging/context.py — v1
"""Contextual logging support: attach build_id, deploy_id, event and plugin to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per build and per command.
_build_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "build_id", default=None
)
_deploy_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "deploy_id", default=None
)
_event: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "event", default=None
)
_package_name: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "package_name", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    build_id: str | None = None
    deploy_id: str | None = None
    event: str | None = None
    package_name: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        build_id=_build_id.get(),
        deploy_id=_deploy_id.get(),
        event=_event.get(),
        package_name=_package_name.get(),
    )


def set_build_context(build_id: str, deploy_id: str | None = None) -> None:
    """Set build-level context (called once per build)."""
    _build_id.set(build_id)
    _deploy_id.set(deploy_id)


def set_command_context(event: str, package_name: str | None = None) -> None:
    """Set command-level context (called per dispatched command)."""
    _event.set(event)
    _package_name.set(package_name)


def clear_context() -> None:
    """Reset all context variables."""
    _build_id.set(None)
    _deploy_id.set(None)
    _event.set(None)
    _package_name.set(None)
