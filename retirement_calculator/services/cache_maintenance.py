"""Cache inspection, refresh and manual overrides for lifestyle deposits"""

import logging
from typing import Dict, Mapping, Optional

from retirement_calculator.domain.cache_codec import encode_record
from retirement_calculator.domain.exceptions import (
    CACHE_UNAVAILABLE,
    CALCULATION_FAILED,
    NOT_FOUND,
    CacheUnavailableError,
    CacheUpdateError,
)
from retirement_calculator.domain.models import MaintenanceResult
from retirement_calculator.domain.ports import CachePort, StorePort
from retirement_calculator.infrastructure.observability.logging import log_cache_operation
from retirement_calculator.infrastructure.observability.metrics import record_cache_maintenance

logger = logging.getLogger(__name__)

NO_CACHE_MESSAGE = "Cache is NOT initialized (no Redis connection or fallback cache)."


def _not_configured() -> MaintenanceResult:
    return MaintenanceResult.failure(NO_CACHE_MESSAGE, CACHE_UNAVAILABLE)


def _report(operation: str, key: Optional[str], result: MaintenanceResult) -> MaintenanceResult:
    record_cache_maintenance(operation, result.ok)
    log_cache_operation(operation, key, result.ok, result.message)
    return result


class CacheMaintenanceService:
    """
    Keeps the deposit cache consistent with the backing store.

    Keys are expected lower-cased by the caller. Operations that report a
    status return a MaintenanceResult instead of raising on cache outages;
    only the direct set/delete paths raise (CacheUpdateError).
    """

    def __init__(
        self,
        deposit_cache: Optional[CachePort],
        store: StorePort,
        interest_cache: Optional[CachePort] = None,
        fallback_caches: Optional[Mapping[str, object]] = None,
    ):
        self.deposit_cache = deposit_cache
        self.store = store
        self.interest_cache = interest_cache
        self.fallback_caches = fallback_caches or {}

    def get_status(self, key: str) -> MaintenanceResult:
        """Report cache liveness, key presence and approximate size; never raises"""
        if self.deposit_cache is None:
            if key in self.fallback_caches:
                result = MaintenanceResult.success("Cache is initialized (non-Redis), but size is unknown.")
            else:
                result = _not_configured()
            return _report("status", key, result)

        try:
            if not self.deposit_cache.ping():
                result = MaintenanceResult.failure(
                    "Redis connection exists but is unresponsive (no PONG)", CACHE_UNAVAILABLE
                )
            else:
                has_key = self.deposit_cache.exists(key)
                size = self.deposit_cache.size(key) if has_key else 0
                result = MaintenanceResult.success(
                    f"Redis is UP | Cache key {key} {'exists' if has_key else 'does NOT exist'}"
                    f" | Approximate size: {size}"
                )
        except CacheUnavailableError as e:
            result = MaintenanceResult.failure(f"Error: Redis connection failure - {e}", CACHE_UNAVAILABLE)
        except Exception as e:
            logger.exception("Unexpected error checking cache status for key: %s", key)
            result = MaintenanceResult.failure(f"Error checking cache status: {e}", CALCULATION_FAILED)

        return _report("status", key, result)

    def refresh_cache(self, key: str) -> MaintenanceResult:
        """
        Evict `key`, reload it from the store and cache the encoded record.

        The eviction happens first, so a key the store no longer knows ends up
        absent rather than stale.
        """
        if self.deposit_cache is None:
            return _report("refresh", key, _not_configured())

        try:
            self.deposit_cache.delete(key)

            record = self.store.find_by_lifestyle_type(key)
            if record is None:
                result = MaintenanceResult.failure(f"No lifestyle deposit found for key: {key}", NOT_FOUND)
            else:
                value = encode_record(record)
                self.deposit_cache.set(key, value)
                result = MaintenanceResult.success(
                    f"Cache refreshed for key: {key} with value: {value}", value=value
                )
        except CacheUnavailableError as e:
            result = MaintenanceResult.failure(f"Error refreshing cache for key: {key} - {e}", CACHE_UNAVAILABLE)
        except Exception as e:
            logger.exception("Unexpected error refreshing cache for key: %s", key)
            result = MaintenanceResult.failure(f"Error refreshing cache for key: {key} - {e}", CALCULATION_FAILED)

        return _report("refresh", key, result)

    def refresh_all_cache(self) -> MaintenanceResult:
        """Drop every deposit key in one batch, then repopulate from the store"""
        if self.deposit_cache is None:
            return _report("refresh_all", None, _not_configured())

        try:
            keys = self.deposit_cache.keys("*")
            if keys:
                self.deposit_cache.delete(*keys)

            records = list(self.store.find_all())
            if not records:
                result = MaintenanceResult.success("No LifestyleDeposit records found in the backing store.")
            else:
                for record in records:
                    self.deposit_cache.set(record.lifestyle_type.lower(), encode_record(record))
                result = MaintenanceResult.success(
                    f"Cache successfully refreshed for {len(records)} LifestyleDeposit entries.",
                    value=str(len(records)),
                )
        except CacheUnavailableError as e:
            result = MaintenanceResult.failure(f"Error refreshing all cache entries: {e}", CACHE_UNAVAILABLE)
        except Exception as e:
            logger.exception("Unexpected error refreshing all cache entries")
            result = MaintenanceResult.failure(f"Error refreshing all cache entries: {e}", CALCULATION_FAILED)

        return _report("refresh_all", None, result)

    def fetch_from_cache(self, key: str) -> Optional[str]:
        """
        Read a single deposit entry; a miss returns None.

        Raises:
            CacheUnavailableError: cache cannot be reached
        """
        logger.info("Fetching data from cache for key: %s", key)
        if self.deposit_cache is None:
            raise CacheUnavailableError(NO_CACHE_MESSAGE)
        value = self.deposit_cache.get(key)
        if value is None:
            logger.warning("No data found in cache for key: %s", key)
        else:
            logger.debug("Found data in cache for key: %s: %s", key, value)
        return value

    def fetch_all_cache(self) -> Dict[str, str | None]:
        """
        Every deposit key with its value.

        With an interest namespace configured, each key appears twice as
        '<key>:deposit' and '<key>:interest'. Returns {} when the cache is
        empty or unreachable.
        """
        if self.deposit_cache is None:
            logger.warning(NO_CACHE_MESSAGE)
            return {}

        try:
            keys = sorted(self.deposit_cache.keys("*"))
            if not keys:
                logger.warning("No keys found in cache")
                return {}

            deposits = self.deposit_cache.multi_get(keys)
            if self.interest_cache is None:
                return dict(zip(keys, deposits))

            interests = self.interest_cache.multi_get(keys)
            data: Dict[str, str | None] = {}
            for key, deposit, interest in zip(keys, deposits, interests):
                data[f"{key}:deposit"] = deposit
                data[f"{key}:interest"] = interest

            logger.info("Fetched %d entries from cache", len(data))
            return data
        except CacheUnavailableError:
            logger.exception("Error fetching all data from cache")
            return {}

    def update_cache(self, key: str, value: str) -> None:
        """
        Upsert a deposit entry directly, bypassing the store.

        Raises:
            CacheUpdateError: cache cannot be reached
        """
        logger.info("Updating cache for key: %s with value: %s", key, value)
        if self.deposit_cache is None:
            record_cache_maintenance("set", False)
            raise CacheUpdateError(f"Cache update failed for key: {key} - {NO_CACHE_MESSAGE}")
        try:
            self.deposit_cache.set(key, value)
        except CacheUnavailableError as e:
            record_cache_maintenance("set", False)
            raise CacheUpdateError(f"Cache update failed for key: {key}") from e
        record_cache_maintenance("set", True)

    def delete_from_cache(self, key: str) -> None:
        """
        Evict a deposit entry; deleting an absent key is a no-op.

        Raises:
            CacheUpdateError: cache cannot be reached
        """
        logger.info("Deleting cache for key: %s", key)
        if self.deposit_cache is None:
            record_cache_maintenance("delete", False)
            raise CacheUpdateError(f"Error deleting cache for key: {key} - {NO_CACHE_MESSAGE}")
        try:
            self.deposit_cache.delete(key)
        except CacheUnavailableError as e:
            record_cache_maintenance("delete", False)
            raise CacheUpdateError(f"Error deleting cache for key: {key}") from e
        record_cache_maintenance("delete", True)
