"""Fixed-point decimal arithmetic for currency and rate values"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Union

CURRENCY_SCALE = 2
RATE_SCALE = 10

# Significant digits kept while raising to large integer powers
INTERMEDIATE_PRECISION = 50

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert to Decimal without passing through binary floats"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(str(value).strip())


def quantum(scale: int) -> Decimal:
    """Return 10**-scale, e.g. Decimal('0.01') for scale 2"""
    return Decimal(1).scaleb(-scale)


def round_to_scale(value: Number, scale: int = CURRENCY_SCALE, rounding: str = ROUND_HALF_UP) -> Decimal:
    """Round to a fixed number of fractional digits (half-up by default)"""
    with localcontext() as ctx:
        ctx.prec = INTERMEDIATE_PRECISION
        return to_decimal(value).quantize(quantum(scale), rounding=rounding)


def divide(a: Number, b: Number, scale: int = RATE_SCALE, rounding: str = ROUND_HALF_UP) -> Decimal:
    """
    Divide a by b and round the quotient to `scale` fractional digits.

    Raises:
        ArithmeticError: if b is zero
    """
    divisor = to_decimal(b)
    if divisor == 0:
        raise ArithmeticError("Division by zero")

    with localcontext() as ctx:
        ctx.prec = INTERMEDIATE_PRECISION
        quotient = to_decimal(a) / divisor
    return round_to_scale(quotient, scale, rounding)


def power(base: Number, exponent: int) -> Decimal:
    """
    Raise base to a non-negative integer power by repeated squaring.

    Exponents here are month counts, so fractional exponents are not supported.
    """
    if exponent < 0:
        raise ValueError("Exponent must be a non-negative integer")

    with localcontext() as ctx:
        ctx.prec = INTERMEDIATE_PRECISION
        result = Decimal(1)
        factor = to_decimal(base)
        n = exponent
        while n:
            if n & 1:
                result *= factor
            factor *= factor
            n >>= 1
        return +result
