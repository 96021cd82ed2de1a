"""Money and percent primitives.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
HUNDRED = Decimal("100")


def percent_of(amount: Decimal, percent_points: Decimal) -> Decimal:
    """amount * percent_points / 100. Signed; no validation."""
    return amount * percent_points / HUNDRED


def monthly_rate(annual_percent: Decimal) -> Decimal:
    return annual_percent / HUNDRED / 12


def cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def ratio(value: Decimal) -> Decimal:
    return value.quantize(FOUR_PLACES, ROUND_HALF_UP)


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Divide, returning exactly 0 when the denominator is <= 0."""
    if denominator <= 0:
        return Decimal("0")
    return numerator / denominator


def format_currency(value: Decimal, with_cents: bool = False) -> str:
    """en-US display: $1,234 or $1,234.56 (negative as -$1,234)."""
    places = TWO_PLACES if with_cents else Decimal("1")
    amount = Decimal(value).quantize(places, ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,}"


def format_percent(value: Decimal) -> str:
    return f"{Decimal(value).quantize(TWO_PLACES, ROUND_HALF_UP)}%"
