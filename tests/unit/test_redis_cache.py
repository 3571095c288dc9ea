"""Unit tests for the Redis cache adapter"""

import pytest
import redis
from unittest.mock import MagicMock
from retirement_calculator.domain.exceptions import CacheUnavailableError
from retirement_calculator.infrastructure.cache.redis_cache import RedisCache


@pytest.fixture
def client() -> MagicMock:
    return MagicMock(spec=redis.Redis)


def test_get_and_set_delegate(client: MagicMock):
    """Test plain reads and writes"""
    client.get.return_value = "3000.00"
    cache = RedisCache(client)

    cache.set("fancy", "3000.00")

    assert cache.get("fancy") == "3000.00"
    client.set.assert_called_once_with("fancy", "3000.00")


def test_delete_batches_keys(client: MagicMock):
    """Test many keys go out in one DEL"""
    client.delete.return_value = 3
    cache = RedisCache(client)

    assert cache.delete("a", "b", "c") == 3
    client.delete.assert_called_once_with("a", "b", "c")


def test_delete_nothing_skips_round_trip(client: MagicMock):
    """Test empty delete does not call Redis"""
    assert RedisCache(client).delete() == 0
    client.delete.assert_not_called()


def test_keys_uses_scan(client: MagicMock):
    """Test key enumeration via SCAN"""
    client.scan_iter.return_value = iter(["simple", "fancy"])

    assert RedisCache(client).keys("*") == {"simple", "fancy"}
    client.scan_iter.assert_called_once_with(match="*")


def test_multi_get_preserves_order(client: MagicMock):
    """Test MGET result order follows input"""
    client.mget.return_value = ["1000.00", None]

    assert RedisCache(client).multi_get(["simple", "missing"]) == ["1000.00", None]
    assert RedisCache(client).multi_get([]) == []


def test_exists_and_size(client: MagicMock):
    """Test EXISTS and STRLEN mapping"""
    client.exists.return_value = 1
    client.strlen.return_value = 7
    cache = RedisCache(client)

    assert cache.exists("fancy") is True
    assert cache.size("fancy") == 7


@pytest.mark.parametrize(
    "method, args",
    [
        ("get", ("fancy",)),
        ("set", ("fancy", "1")),
        ("delete", ("fancy",)),
        ("ping", ()),
    ],
)
def test_connection_errors_become_cache_unavailable(client: MagicMock, method: str, args: tuple):
    """Test driver failures are translated with the cause chained"""
    for name in ("get", "set", "delete", "ping"):
        getattr(client, name).side_effect = redis.exceptions.ConnectionError("refused")
    cache = RedisCache(client, name="deposit")

    with pytest.raises(CacheUnavailableError) as exc_info:
        getattr(cache, method)(*args)

    assert exc_info.value.code == "RC-503"
    assert isinstance(exc_info.value.__cause__, redis.exceptions.ConnectionError)


def test_timeout_becomes_cache_unavailable(client: MagicMock):
    """Test socket timeouts are treated as outages"""
    client.get.side_effect = redis.exceptions.TimeoutError("timed out")

    with pytest.raises(CacheUnavailableError):
        RedisCache(client).get("fancy")


def test_from_url_selects_database():
    """Test namespace maps to a logical Redis database"""
    cache = RedisCache.from_url("redis://localhost:6379", db=1, name="interest")

    assert cache.name == "interest"
    assert cache.client.connection_pool.connection_kwargs["db"] == 1
