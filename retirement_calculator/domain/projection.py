"""Compound-interest projection of monthly retirement deposits"""

from decimal import Decimal

from retirement_calculator.utils.decimal_utils import (
    CURRENCY_SCALE,
    RATE_SCALE,
    divide,
    power,
    round_to_scale,
    to_decimal,
)

MONTHS_PER_YEAR = 12


def months_until_retirement(current_age: int, retirement_age: int) -> int:
    """Whole months between the two ages"""
    return (retirement_age - current_age) * MONTHS_PER_YEAR


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    """
    Convert an annual percentage rate into a monthly periodic rate.

    Example:
        5.0 (% p.a.) → 5.0 / 1200 = 0.0041666667
    """
    return divide(annual_rate_percent, 100 * MONTHS_PER_YEAR, scale=RATE_SCALE)


def future_value(monthly_deposit: Decimal, annual_rate_percent: Decimal, months: int) -> Decimal:
    """
    Future value of an ordinary annuity of monthly deposits.

    Deposits are made at the end of each month, so the last deposit earns no
    interest:

        FV = P * ((1 + r)^n - 1) / r        when r > 0
        FV = P * n                          when r == 0

    The periodic rate r is rounded to 10 fractional digits, the quotient is
    kept at 10 digits, and only the final value is rounded to cents (half-up).
    """
    deposit = to_decimal(monthly_deposit)
    rate = monthly_rate(to_decimal(annual_rate_percent))

    if rate == 0:
        value = deposit * months
    else:
        growth = power(Decimal(1) + rate, months) - 1
        value = divide(deposit * growth, rate, scale=RATE_SCALE)

    return round_to_scale(value, CURRENCY_SCALE)
