# src/storage/local_store.py — v1
"""Local filesystem store (default backend)."""

from __future__ import annotations

import shutil
from pathlib import Path

from buildcore.storage.base_file_store import BaseFileStore, MissingFileError, StorageError


class LocalFileStore(BaseFileStore):
    """Read and write configuration artifacts on the local filesystem."""

    async def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    async def read_text(self, path: Path) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise MissingFileError("read", path) from exc
        except UnicodeDecodeError as exc:
            raise StorageError("decode", path, str(exc)) from exc
        except OSError as exc:
            raise StorageError("read", path, str(exc)) from exc

    async def write_text(self, path: Path, content: str) -> None:
        p = Path(path)
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise StorageError("write", path, str(exc)) from exc

    async def append_text(self, path: Path, content: str) -> None:
        p = Path(path)
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            with p.open("a", encoding="utf-8") as fh:
                fh.write(content)
        except OSError as exc:
            raise StorageError("append to", path, str(exc)) from exc

    async def copy(self, src: Path, dst: Path) -> None:
        dst_path = Path(dst)
        try:
            dst_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(str(src), str(dst_path))
        except FileNotFoundError as exc:
            if not Path(src).exists():
                raise MissingFileError("copy", src) from exc
            raise StorageError("copy to", dst, str(exc)) from exc
        except OSError as exc:
            raise StorageError("copy", src, str(exc)) from exc

    async def delete(self, path: Path, missing_ok: bool = False) -> None:
        try:
            Path(path).unlink()
        except FileNotFoundError as exc:
            if not missing_ok:
                raise MissingFileError("delete", path) from exc
        except OSError as exc:
            raise StorageError("delete", path, str(exc)) from exc

    async def make_dirs(self, path: Path) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError("create directory", path, str(exc)) from exc
