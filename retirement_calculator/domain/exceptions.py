"""Domain-specific exceptions, each carrying a stable machine-readable code"""

INVALID_INPUT = "RC-400"
NOT_FOUND = "RC-404"
CALCULATION_FAILED = "RC-500"
CACHE_UNAVAILABLE = "RC-503"

# HTTP status each code is served with
HTTP_STATUS = {
    INVALID_INPUT: 400,
    NOT_FOUND: 404,
    CALCULATION_FAILED: 500,
    CACHE_UNAVAILABLE: 503,
}


class RetirementCalculatorError(Exception):
    """Base exception for domain layer"""

    code = CALCULATION_FAILED

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class InvalidInputError(RetirementCalculatorError):
    """Request violates a domain rule (age ordering, negative rate)"""

    code = INVALID_INPUT

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid input: {field} - {reason}")
        self.field = field
        self.reason = reason


class LifestyleNotFoundError(RetirementCalculatorError):
    """No deposit (or interest rate) is configured for the lifestyle type"""

    code = NOT_FOUND

    def __init__(self, lifestyle_type: str, what: str = "deposit amount"):
        super().__init__(f"No {what} configured for lifestyle type: {lifestyle_type}")
        self.lifestyle_type = lifestyle_type


class CalculationFailedError(RetirementCalculatorError):
    """Unexpected failure while resolving inputs or computing the projection"""

    code = CALCULATION_FAILED

    def __init__(self, message: str):
        super().__init__(f"Error during retirement calculation: {message}")


class CacheUnavailableError(RetirementCalculatorError):
    """Cache could not be reached"""

    code = CACHE_UNAVAILABLE


class CacheUpdateError(CacheUnavailableError):
    """A direct cache write or eviction failed"""

    pass
