"""Retirement plan calculation backed by the deposit and interest-rate caches"""

import logging
from decimal import Decimal
from typing import Optional

from retirement_calculator.config import settings
from retirement_calculator.domain.cache_codec import decode_decimal
from retirement_calculator.domain.exceptions import (
    CalculationFailedError,
    InvalidInputError,
    LifestyleNotFoundError,
)
from retirement_calculator.domain.models import RetirementRequest, RetirementResult
from retirement_calculator.domain.ports import CachePort
from retirement_calculator.domain.projection import future_value, months_until_retirement
from retirement_calculator.infrastructure.observability.metrics import record_cache_lookup
from retirement_calculator.utils.decimal_utils import to_decimal

logger = logging.getLogger(__name__)


class RetirementService:
    """Validates a request, resolves cached inputs and projects the future value"""

    def __init__(
        self,
        deposit_cache: CachePort,
        interest_cache: Optional[CachePort] = None,
        min_age: int | None = None,
    ):
        self.deposit_cache = deposit_cache
        self.interest_cache = interest_cache
        self.min_age = settings.min_age if min_age is None else min_age

    def validate(self, request: RetirementRequest) -> None:
        """
        Apply domain rules before any cache access.

        Raises:
            InvalidInputError: on the first rule violated
        """
        if request.current_age < self.min_age:
            raise InvalidInputError("current_age", f"must be at least {self.min_age}")
        if request.retirement_age < self.min_age:
            raise InvalidInputError("retirement_age", f"must be at least {self.min_age}")
        if request.retirement_age <= request.current_age:
            raise InvalidInputError("retirement_age", "must be greater than current_age")
        if request.interest_rate is not None:
            rate = to_decimal(request.interest_rate)
            if not rate.is_finite():
                raise InvalidInputError("interest_rate", "must be a finite number")
            if rate < 0:
                raise InvalidInputError("interest_rate", "must be non-negative")

    def _cached_decimal(self, cache: CachePort, key: str) -> Optional[Decimal]:
        raw = cache.get(key)
        record_cache_lookup(cache.name, raw is not None)
        return decode_decimal(raw) if raw is not None else None

    def _resolve_interest_rate(self, request: RetirementRequest, key: str) -> Decimal:
        # A caller-supplied rate wins; the cached rate is only read as a fallback
        if request.interest_rate is not None:
            return to_decimal(request.interest_rate)

        rate = self._cached_decimal(self.interest_cache, key) if self.interest_cache else None
        if rate is None:
            logger.error("No interest rate cached for lifestyle type: %s", request.lifestyle_type)
            raise LifestyleNotFoundError(request.lifestyle_type, "interest rate")
        if rate < 0:
            logger.error("Negative interest rate %s cached for lifestyle type: %s", rate, request.lifestyle_type)
            raise CalculationFailedError(f"cached interest rate for {key} is negative: {rate}")
        return rate

    def calculate_plan(self, request: RetirementRequest) -> RetirementResult:
        """
        Project retirement savings for the request.

        Flow:
        1. Validate ages and rate
        2. Resolve monthly deposit from the deposit cache (lower-cased key)
        3. Resolve interest rate (request value, else interest cache)
        4. Compute future value of monthly deposits

        Raises:
            InvalidInputError: request breaks a domain rule
            LifestyleNotFoundError: no deposit or rate cached for the lifestyle
            CalculationFailedError: any other failure, including cache outages
        """
        logger.info("Starting retirement plan calculation for lifestyle type: %s", request.lifestyle_type)
        self.validate(request)

        try:
            key = request.lifestyle_type.lower()

            monthly_deposit = self._cached_decimal(self.deposit_cache, key)
            if monthly_deposit is None:
                logger.error("No deposit amount cached for lifestyle type: %s", request.lifestyle_type)
                raise LifestyleNotFoundError(request.lifestyle_type)

            interest_rate = self._resolve_interest_rate(request, key)
            logger.debug("Resolved monthly deposit %s and interest rate %s", monthly_deposit, interest_rate)

            months = months_until_retirement(request.current_age, request.retirement_age)
            value = future_value(monthly_deposit, interest_rate, months)
            logger.info("Calculated future value: %s", value)

            return RetirementResult(
                current_age=request.current_age,
                retirement_age=request.retirement_age,
                interest_rate=interest_rate,
                lifestyle_type=request.lifestyle_type,
                monthly_deposit=monthly_deposit,
                future_value=value,
            )

        except (LifestyleNotFoundError, CalculationFailedError):
            raise
        except Exception as e:
            logger.exception("Unexpected error during calculation for lifestyle type: %s", request.lifestyle_type)
            raise CalculationFailedError(str(e)) from e
