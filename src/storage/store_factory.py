# src/storage/store_factory.py — v1
"""Factory: instantiate the file store from configuration."""

from __future__ import annotations

from buildcore.config.settings import Settings
from buildcore.storage.base_file_store import BaseFileStore
from buildcore.storage.local_store import LocalFileStore


def create_store(settings: Settings) -> BaseFileStore:
    """Create the file store selected by BUILDCORE_STORAGE_BACKEND.

    Raises:
        ValueError: If the backend is not supported.
    """
    if settings.storage_backend == "local":
        return LocalFileStore()

    raise ValueError(f"Unsupported storage backend: {settings.storage_backend!r}")
