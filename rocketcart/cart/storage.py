"""Persistence adapters for the serialized cart."""
import asyncio
from pathlib import Path
from typing import Dict, Optional, Protocol
from urllib.parse import quote

from rocketcart.db import CART_STORAGE_BACKEND, CART_STORAGE_DIR, get_redis


class PersistenceAdapter(Protocol):
    """Durable key-value storage for serialized cart snapshots."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    """Process-local storage. Does not survive restarts; meant for tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value


class FileStorage:
    """One file per key under a base directory."""

    def __init__(self, storage_dir: str | Path = CART_STORAGE_DIR):
        self.storage_dir = Path(storage_dir)

    def _file_path(self, key: str) -> Path:
        # Keys like "@RocketShoes:cart" are not valid file names everywhere
        return self.storage_dir / f"{quote(key, safe='')}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self._file_path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write(self, key: str, value: str) -> None:
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        path = self._file_path(key)
        # Write then rename so a crash never leaves a truncated snapshot
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)


class RedisStorage:
    """Upstash Redis storage. Redis client is resolved lazily."""

    def __init__(self, redis=None):
        self._redis = redis

    @property
    def redis(self):
        if self._redis is None:
            try:
                self._redis = get_redis()
            except ValueError as e:
                raise ValueError(f"Redis not available: {e}")
        return self._redis

    async def get(self, key: str) -> Optional[str]:
        return await self.redis.get(key)

    async def set(self, key: str, value: str) -> None:
        await self.redis.set(key, value)


def get_storage(backend: Optional[str] = None) -> PersistenceAdapter:
    """Build the configured storage backend."""
    backend = (backend or CART_STORAGE_BACKEND).lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "file":
        return FileStorage()
    if backend == "redis":
        return RedisStorage()
    raise ValueError(f"Unknown cart storage backend: {backend}")
