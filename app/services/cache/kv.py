from __future__ import annotations

import asyncio
import os
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Protocol
from urllib.parse import quote


class CacheBackend(str, Enum):
    """Which store variant a cache service was built on."""

    KV = "kv"
    FALLBACK = "fallback"


class KVNamespace(Protocol):
    """Minimal contract of an external key-value binding.

    No batching or transactions: every call is an independent network round trip
    in production, so callers must tolerate any single call failing.
    """

    async def get(self, key: str) -> Optional[str]: ...

    async def put(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


class InMemoryKVNamespace:
    """Process-local binding for development and tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    @property
    def data(self) -> Dict[str, str]:
        return self._data

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileKVNamespace:
    """Binding that keeps one UTF-8 file per key under a local directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.root / quote(key, safe="")

    def _read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as handle:
            return handle.read()

    def _write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp_path = path.with_name(path.name + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            handle.write(value)
        os.replace(tmp_path, path)

    def _remove(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, key)

    async def put(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._remove, key)
