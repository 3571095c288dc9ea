"""Ports the services depend on; adapters live in the infrastructure layer"""

from typing import Iterable, List, Optional, Protocol, Sequence, Set

from retirement_calculator.domain.models import LifestyleDeposit


class CachePort(Protocol):
    """
    String-keyed, string-valued cache namespace.

    Implementations raise CacheUnavailableError when the backend cannot be
    reached. A missing key is never an error.
    """

    name: str

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, *keys: str) -> int:
        """Delete keys in one round trip; absent keys are ignored."""
        ...

    def exists(self, key: str) -> bool:
        ...

    def keys(self, pattern: str = "*") -> Set[str]:
        ...

    def multi_get(self, keys: Sequence[str]) -> List[Optional[str]]:
        """Values in the same order as `keys`, None for misses."""
        ...

    def size(self, key: str) -> int:
        """Approximate stored size in bytes, 0 when absent."""
        ...

    def ping(self) -> bool:
        ...


class StorePort(Protocol):
    """Read access to persisted lifestyle deposit records"""

    def find_by_lifestyle_type(self, lifestyle_type: str) -> Optional[LifestyleDeposit]:
        ...

    def find_all(self) -> Iterable[LifestyleDeposit]:
        ...
