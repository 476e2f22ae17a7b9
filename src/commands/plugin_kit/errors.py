# src/commands/plugin_kit/errors.py — v1
"""Failure signals raised by plugins, build commands and core commands."""

from __future__ import annotations


class BuildFailure(Exception):
    """The build must fail (plugin called ``utils.fail_build()``)."""


class PluginFailure(Exception):
    """Only the raising plugin fails; its remaining hooks are disabled."""


class BuildCanceled(Exception):
    """The build is canceled; reported differently from a failure."""


class BuildCommandError(BuildFailure):
    """A shell build command exited with a non-zero code."""

    def __init__(self, command: str, exit_code: int, output: str = "") -> None:
        self.command = command
        self.exit_code = exit_code
        self.output = output
        super().__init__(f"Command '{command}' failed with exit code {exit_code}")
