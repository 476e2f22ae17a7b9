# tests/unit/storage/test_local_store.py — v1
"""Tests for storage/local_store.py, layout.py and store_factory.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from buildcore.config.settings import Settings
from buildcore.storage import layout
from buildcore.storage.base_file_store import MissingFileError, StorageError
from buildcore.storage.local_store import LocalFileStore
from buildcore.storage.store_factory import create_store


class TestLocalFileStore:
    @pytest.mark.asyncio
    async def test_write_read(self, tmp_path, store):
        path = tmp_path / "nested" / "dir" / "file.txt"
        await store.write_text(path, "héllo")
        assert await store.exists(path)
        assert await store.read_text(path) == "héllo"

    @pytest.mark.asyncio
    async def test_read_missing(self, tmp_path, store):
        with pytest.raises(MissingFileError):
            await store.read_text(tmp_path / "missing")

    @pytest.mark.asyncio
    async def test_read_invalid_utf8(self, tmp_path, store):
        path = tmp_path / "latin1.toml"
        path.write_bytes(b"title = \"caf\xe9\"\n")
        with pytest.raises(StorageError, match="decode") as exc_info:
            await store.read_text(path)
        assert not isinstance(exc_info.value, MissingFileError)
        assert exc_info.value.operation == "decode"

    @pytest.mark.asyncio
    async def test_append_creates(self, tmp_path, store):
        path = tmp_path / "log.txt"
        await store.append_text(path, "a")
        await store.append_text(path, "b")
        assert path.read_text() == "ab"

    @pytest.mark.asyncio
    async def test_copy(self, tmp_path, store):
        src = tmp_path / "src.txt"
        src.write_text("content")
        dst = tmp_path / "out" / "dst.txt"
        await store.copy(src, dst)
        assert dst.read_text() == "content"

    @pytest.mark.asyncio
    async def test_copy_missing_source(self, tmp_path, store):
        with pytest.raises(MissingFileError):
            await store.copy(tmp_path / "missing", tmp_path / "dst")

    @pytest.mark.asyncio
    async def test_delete(self, tmp_path, store):
        path = tmp_path / "f"
        path.write_text("x")
        await store.delete(path)
        assert not await store.exists(path)

    @pytest.mark.asyncio
    async def test_delete_missing(self, tmp_path, store):
        with pytest.raises(MissingFileError):
            await store.delete(tmp_path / "missing")
        await store.delete(tmp_path / "missing", missing_ok=True)

    @pytest.mark.asyncio
    async def test_exists_false_for_directory(self, tmp_path, store):
        assert await store.exists(tmp_path) is False

    @pytest.mark.asyncio
    async def test_write_into_file_parent_fails(self, tmp_path, store):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(StorageError):
            await store.write_text(blocker / "child.txt", "y")

    def test_missing_is_storage_error(self):
        err = MissingFileError("read", "/x")
        assert isinstance(err, StorageError)
        assert err.path == Path("/x")
        assert "does not exist" in str(err)


class TestLayout:
    def test_backup_paths(self):
        build = Path("/site")
        assert layout.backup_dir(build) == Path("/site/.netlify/deploy")
        assert layout.config_backup_path(build) == Path("/site/.netlify/deploy/netlify.toml")
        assert layout.headers_backup_path(build) == Path("/site/.netlify/deploy/_headers")
        assert layout.redirects_backup_path(build) == Path("/site/.netlify/deploy/_redirects")

    def test_internal_defaults(self):
        assert layout.default_functions_dist(Path("/s")) == Path("/s/.netlify/functions")
        assert layout.default_cache_dir(Path("/s")) == Path("/s/.netlify/cache")


class TestStoreFactory:
    def test_local(self):
        assert isinstance(create_store(Settings(_env_file=None)), LocalFileStore)
