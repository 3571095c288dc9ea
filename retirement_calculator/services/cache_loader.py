"""Startup loading of deposits (from the store) and interest rates (from CSV) into the caches"""

import csv
import logging
from decimal import InvalidOperation
from pathlib import Path

from retirement_calculator.domain.cache_codec import format_amount
from retirement_calculator.domain.ports import CachePort, StorePort
from retirement_calculator.utils.decimal_utils import to_decimal

logger = logging.getLogger(__name__)

LIFESTYLE_COLUMN = "lifestyleType"
RATE_COLUMN = "interestRate"


def load_deposits(store: StorePort, deposit_cache: CachePort) -> int:
    """Cache every stored deposit under its lower-cased lifestyle type, in key order"""
    records = sorted(store.find_all(), key=lambda r: r.lifestyle_type.lower())
    for record in records:
        key = record.lifestyle_type.lower()
        deposit_cache.set(key, format_amount(record.monthly_deposit))
        logger.info("Cached deposit: %s => %s", key, record.monthly_deposit)
    return len(records)


def load_interest_rates(csv_path: str | Path, interest_cache: CachePort) -> int:
    """
    Cache interest rates from a CSV with `lifestyleType` and `interestRate` columns.

    A missing file loads nothing. Rows are validated before anything is written.

    Raises:
        ValueError: missing column, or a rate that is not a non-negative decimal
    """
    path = Path(csv_path)
    if not path.exists():
        logger.warning("Interest rate file not found: %s", path)
        return 0

    rates = {}
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            lifestyle = (row.get(LIFESTYLE_COLUMN) or "").strip()
            raw_rate = (row.get(RATE_COLUMN) or "").strip()
            if not lifestyle or not raw_rate:
                raise ValueError(f"{path}:{line_no}: expected {LIFESTYLE_COLUMN} and {RATE_COLUMN}")
            try:
                rate = to_decimal(raw_rate)
            except InvalidOperation as e:
                raise ValueError(f"{path}:{line_no}: invalid interest rate {raw_rate!r}") from e
            if not rate.is_finite() or rate < 0:
                raise ValueError(f"{path}:{line_no}: interest rate must be a non-negative number, got {raw_rate!r}")
            # a repeated lifestyle keeps its last row
            rates[lifestyle.lower()] = rate

    for key, rate in sorted(rates.items()):
        interest_cache.set(key, str(rate))
        logger.info("Cached interest rate: %s => %s", key, rate)

    logger.info("Interest rate data loaded from %s", path)
    return len(rates)


def warm_cache(
    store: StorePort,
    deposit_cache: CachePort,
    interest_cache: CachePort | None = None,
    csv_path: str | Path | None = None,
) -> dict:
    """Run both loaders; the service is ready once this returns"""
    deposits = load_deposits(store, deposit_cache)
    rates = load_interest_rates(csv_path, interest_cache) if interest_cache and csv_path else 0
    logger.info("Cache warm-up complete", extra={"deposits": deposits, "interest_rates": rates})
    return {"deposits": deposits, "interest_rates": rates}
