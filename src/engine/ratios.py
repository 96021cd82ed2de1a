"""Return and coverage ratios: ROI, cash-on-cash, DSCR, LTV, LTC.

Pure functions: Decimal in, Decimal out. No I/O.
Every ratio returns exactly 0 when its divisor is <= 0.
"""

from decimal import Decimal

from src.engine.money import HUNDRED, ratio, safe_divide


def roi(net_profit: Decimal, basis: Decimal) -> Decimal:
    """Return on a cost basis, in percent."""
    return ratio(safe_divide(net_profit, basis) * HUNDRED)


def annualized_cash_on_cash(
    net_profit: Decimal, capital: Decimal, hold_months: int
) -> Decimal:
    """Profit over capital, scaled from the hold period to a year, in percent."""
    if hold_months <= 0:
        return Decimal("0")
    return ratio(safe_divide(net_profit, capital) * Decimal(12) / hold_months * HUNDRED)


def dscr(monthly_noi: Decimal, monthly_debt_service: Decimal) -> Decimal:
    """Debt Service Coverage Ratio = NOI / debt service."""
    return ratio(safe_divide(monthly_noi, monthly_debt_service))


def ltv(loan_amount: Decimal, property_value: Decimal) -> Decimal:
    return ratio(safe_divide(loan_amount, property_value) * HUNDRED)


def ltc(loan_amount: Decimal, project_cost: Decimal) -> Decimal:
    return ratio(safe_divide(loan_amount, project_cost) * HUNDRED)


def cost_per_sqft(cost: Decimal, square_footage: Decimal) -> Decimal:
    return ratio(safe_divide(cost, square_footage))
