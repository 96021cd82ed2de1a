from decimal import Decimal

from src.engine.money import (
    cents,
    format_currency,
    format_percent,
    monthly_rate,
    percent_of,
    ratio,
    safe_divide,
)


class TestPercentOf:
    def test_percent_points(self):
        assert percent_of(Decimal("400000"), Decimal("6")) == Decimal("24000")

    def test_signed(self):
        assert percent_of(Decimal("-1000"), Decimal("10")) == Decimal("-100")

    def test_monthly_rate(self):
        assert monthly_rate(Decimal("12")) == Decimal("0.01")


class TestRounding:
    def test_cents_half_up(self):
        assert cents(Decimal("1.005")) == Decimal("1.01")
        assert cents(Decimal("2333.3333")) == Decimal("2333.33")

    def test_ratio_four_places(self):
        assert ratio(Decimal("33.230769")) == Decimal("33.2308")


class TestSafeDivide:
    def test_normal(self):
        assert safe_divide(Decimal("10"), Decimal("4")) == Decimal("2.5")

    def test_zero_denominator(self):
        assert safe_divide(Decimal("86400"), Decimal("0")) == Decimal("0")

    def test_negative_denominator(self):
        assert safe_divide(Decimal("100"), Decimal("-5")) == Decimal("0")

    def test_zero_over_zero_is_not_nan(self):
        result = safe_divide(Decimal("0"), Decimal("0"))
        assert result.is_finite()
        assert result == 0


class TestFormatting:
    def test_currency_whole_dollars(self):
        assert format_currency(Decimal("1234.5")) == "$1,235"

    def test_currency_with_cents(self):
        assert format_currency(Decimal("1234.5"), with_cents=True) == "$1,234.50"

    def test_negative_currency(self):
        assert format_currency(Decimal("-86400")) == "-$86,400"

    def test_percent(self):
        assert format_percent(Decimal("33.230769")) == "33.23%"
