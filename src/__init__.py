"""buildcore: command dispatch and deploy configuration mutations for builds."""

from buildcore.version import __version__

__all__ = ["__version__"]
