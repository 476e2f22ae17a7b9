# src/storage/base_file_store.py — v1
"""Abstract asynchronous file store used by merge, backup and restore.

Every operation fails with StorageError; a missing file is the
distinguished, recoverable MissingFileError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class StorageError(Exception):
    """A file-system operation failed."""

    def __init__(self, operation: str, path: Path | str, reason: str) -> None:
        self.operation = operation
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot {operation} '{path}': {reason}")


class MissingFileError(StorageError):
    """The file does not exist."""

    def __init__(self, operation: str, path: Path | str) -> None:
        super().__init__(operation, path, "file does not exist")


class BaseFileStore(ABC):
    """Unified interface for the on-disk configuration artifacts."""

    @abstractmethod
    async def exists(self, path: Path) -> bool:
        """Check whether a file exists at path."""

    @abstractmethod
    async def read_text(self, path: Path) -> str:
        """Read a UTF-8 file. Raises MissingFileError if absent, StorageError if undecodable."""

    @abstractmethod
    async def write_text(self, path: Path, content: str) -> None:
        """Create or overwrite a UTF-8 file, creating parent directories."""

    @abstractmethod
    async def append_text(self, path: Path, content: str) -> None:
        """Append to a UTF-8 file, creating it if needed."""

    @abstractmethod
    async def copy(self, src: Path, dst: Path) -> None:
        """Copy a file. Raises MissingFileError if src is absent."""

    @abstractmethod
    async def delete(self, path: Path, missing_ok: bool = False) -> None:
        """Delete a file. Raises MissingFileError if absent unless missing_ok."""

    @abstractmethod
    async def make_dirs(self, path: Path) -> None:
        """Create a directory and its parents if needed."""
