"""In-process cache namespace for local runs and tests"""

import threading
from fnmatch import fnmatchcase
from typing import Dict, List, Optional, Sequence, Set

from retirement_calculator.domain.exceptions import CacheUnavailableError


class InMemoryCache:
    """Thread-safe dict-backed cache with the same contract as RedisCache"""

    def __init__(self, name: str = "deposit", initial: Dict[str, str] | None = None):
        self.name = name
        self.available = True  # flip to False to simulate an outage
        self._store: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def _check(self) -> None:
        if not self.available:
            raise CacheUnavailableError(f"In-memory {self.name} cache is unavailable")

    def get(self, key: str) -> Optional[str]:
        self._check()
        with self._lock:
            return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._check()
        with self._lock:
            self._store[key] = value

    def delete(self, *keys: str) -> int:
        self._check()
        with self._lock:
            return sum(1 for key in keys if self._store.pop(key, None) is not None)

    def exists(self, key: str) -> bool:
        self._check()
        with self._lock:
            return key in self._store

    def keys(self, pattern: str = "*") -> Set[str]:
        self._check()
        with self._lock:
            return {key for key in self._store if fnmatchcase(key, pattern)}

    def multi_get(self, keys: Sequence[str]) -> List[Optional[str]]:
        self._check()
        with self._lock:
            return [self._store.get(key) for key in keys]

    def size(self, key: str) -> int:
        self._check()
        with self._lock:
            value = self._store.get(key)
        return len(value.encode("utf-8")) if value is not None else 0

    def ping(self) -> bool:
        self._check()
        return True
