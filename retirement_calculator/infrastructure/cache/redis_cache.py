"""Redis adapter for a single cache namespace (one logical Redis database)"""

from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Set

import redis

from retirement_calculator.config import settings
from retirement_calculator.domain.exceptions import CacheUnavailableError


class RedisCache:
    """String cache backed by one Redis logical database"""

    def __init__(self, client: redis.Redis, name: str = "deposit"):
        self.client = client
        self.name = name

    @classmethod
    def from_url(
        cls,
        url: str | None = None,
        db: int = 0,
        name: str = "deposit",
        timeout: float | None = None,
    ) -> "RedisCache":
        """Build a client for `db`; connections are opened lazily on first command"""
        timeout = timeout or settings.redis_socket_timeout_seconds
        client = redis.Redis.from_url(
            url or settings.redis_url,
            db=db,
            decode_responses=True,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
        )
        return cls(client, name=name)

    @contextmanager
    def _unavailable_on_failure(self, operation: str) -> Iterator[None]:
        try:
            yield
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise CacheUnavailableError(f"Redis {self.name} cache unavailable during {operation}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        with self._unavailable_on_failure("get"):
            return self.client.get(key)

    def set(self, key: str, value: str) -> None:
        with self._unavailable_on_failure("set"):
            self.client.set(key, value)

    def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        with self._unavailable_on_failure("delete"):
            return self.client.delete(*keys)

    def exists(self, key: str) -> bool:
        with self._unavailable_on_failure("exists"):
            return bool(self.client.exists(key))

    def keys(self, pattern: str = "*") -> Set[str]:
        # SCAN rather than KEYS so large namespaces don't block the server
        with self._unavailable_on_failure("scan"):
            return set(self.client.scan_iter(match=pattern))

    def multi_get(self, keys: Sequence[str]) -> List[Optional[str]]:
        if not keys:
            return []
        with self._unavailable_on_failure("mget"):
            return list(self.client.mget(list(keys)))

    def size(self, key: str) -> int:
        with self._unavailable_on_failure("strlen"):
            return int(self.client.strlen(key) or 0)

    def ping(self) -> bool:
        with self._unavailable_on_failure("ping"):
            return bool(self.client.ping())
