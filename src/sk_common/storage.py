"""Key-value persistence boundary.

KeyValueStore is the Protocol the session layer depends on; unit tests
inject InMemoryKeyValueStore or an AsyncMock. RedisKeyValueStore is the
durable implementation. Backend errors are wrapped in PersistenceError so
callers handle one exception type.
"""

from typing import Protocol

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from src.sk_common.errors import PersistenceError


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def remove(self, key: str) -> None: ...

    async def set_many(self, values: dict[str, str]) -> None:
        """Write all keys in one atomic step."""
        ...

    async def remove_many(self, keys: list[str]) -> None: ...

    async def aclose(self) -> None: ...


class InMemoryKeyValueStore:
    """Process-local store. Lost on restart; used for tests and local runs."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    async def set_many(self, values: dict[str, str]) -> None:
        self._data.update(values)

    async def remove_many(self, keys: list[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)

    async def aclose(self) -> None:
        pass


class RedisKeyValueStore:
    """Redis-backed store. Keys are namespaced with `prefix`.

    set_many uses MSET and remove_many a single DEL, both atomic in Redis.
    """

    def __init__(self, redis: aioredis.Redis, prefix: str = "") -> None:
        self._redis = redis
        self._prefix = prefix

    @classmethod
    def from_url(cls, url: str, prefix: str = "") -> "RedisKeyValueStore":
        """Build a store that owns its connection pool; aclose() releases it."""
        return cls(aioredis.from_url(url, decode_responses=True), prefix=prefix)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> str | None:
        try:
            return await self._redis.get(self._key(key))
        except RedisError as exc:
            raise PersistenceError(f"get {key}: {exc}") from exc

    async def set(self, key: str, value: str) -> None:
        try:
            await self._redis.set(self._key(key), value)
        except RedisError as exc:
            raise PersistenceError(f"set {key}: {exc}") from exc

    async def remove(self, key: str) -> None:
        try:
            await self._redis.delete(self._key(key))
        except RedisError as exc:
            raise PersistenceError(f"remove {key}: {exc}") from exc

    async def set_many(self, values: dict[str, str]) -> None:
        if not values:
            return
        try:
            await self._redis.mset({self._key(k): v for k, v in values.items()})
        except RedisError as exc:
            raise PersistenceError(f"set_many {sorted(values)}: {exc}") from exc

    async def remove_many(self, keys: list[str]) -> None:
        if not keys:
            return
        try:
            await self._redis.delete(*(self._key(k) for k in keys))
        except RedisError as exc:
            raise PersistenceError(f"remove_many {keys}: {exc}") from exc

    async def aclose(self) -> None:
        await self._redis.aclose()
