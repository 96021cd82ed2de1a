"""Loan payment models: fixed-rate amortization and interest-only hold periods.

Pure functions: Decimal in, dataclass out. No I/O.
Rates are annual percent points (10 means 10%).
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from src.engine.money import TWO_PLACES, cents, monthly_rate, percent_of


@dataclass(frozen=True)
class AmortizationPayment:
    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: list[AmortizationPayment]
    monthly_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal


def term_months(term_years: Decimal | int) -> int:
    return int((Decimal(term_years) * 12).to_integral_value(ROUND_HALF_UP))


def monthly_payment(
    principal: Decimal, annual_rate_percent: Decimal, term_years: Decimal | int
) -> Decimal:
    """Calculate fixed monthly payment for a fully amortizing loan."""
    n = term_months(term_years)
    if principal <= 0 or n <= 0:
        return Decimal("0")
    if annual_rate_percent == 0:
        return cents(principal / n)

    r = monthly_rate(annual_rate_percent)
    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    return cents(principal * (r * factor) / (factor - 1))


def total_interest(
    principal: Decimal, payment: Decimal, term_years: Decimal | int
) -> Decimal:
    """Interest paid over the full term, floored at zero."""
    paid = payment * term_months(term_years)
    return cents(max(Decimal("0"), paid - principal))


def simple_held_interest(
    principal: Decimal, annual_rate_percent: Decimal, held_months: int
) -> Decimal:
    """Interest-only cost of carrying a short-term loan for the hold period."""
    return cents(principal * (annual_rate_percent / 100) / 12 * held_months)


def points_cost(principal: Decimal, points: Decimal) -> Decimal:
    return cents(percent_of(principal, points))


def amortization_schedule(
    principal: Decimal,
    annual_rate_percent: Decimal,
    term_years: Decimal | int,
    periods: int | None = None,
) -> AmortizationSchedule:
    """Generate full or partial amortization schedule.

    Args:
        principal: Loan amount
        annual_rate_percent: Annual interest rate in percent points
        term_years: Loan term in years
        periods: If provided, only generate this many monthly payments
    """
    pmt = monthly_payment(principal, annual_rate_percent, term_years)
    r = monthly_rate(annual_rate_percent)
    n_total = term_months(term_years)
    n_periods = min(periods, n_total) if periods is not None else n_total

    payments: list[AmortizationPayment] = []
    balance = principal
    total_int = Decimal("0")
    total_principal = Decimal("0")

    for period in range(1, n_periods + 1):
        interest = (balance * r).quantize(TWO_PLACES, ROUND_HALF_UP)
        principal_paid = pmt - interest

        # Final payment adjustment
        if principal_paid > balance or period == n_total:
            principal_paid = balance
            actual_payment = interest + principal_paid
        else:
            actual_payment = pmt

        balance -= principal_paid
        total_int += interest
        total_principal += principal_paid

        payments.append(AmortizationPayment(
            period=period,
            payment=actual_payment,
            principal=principal_paid,
            interest=interest,
            balance=balance.quantize(TWO_PLACES, ROUND_HALF_UP),
        ))

    return AmortizationSchedule(
        payments=payments,
        monthly_payment=pmt,
        total_interest=total_int,
        total_principal=total_principal,
    )


def yearly_debt_summary(schedule: AmortizationSchedule) -> list[dict[str, Decimal]]:
    """Aggregate amortization schedule by year.

    Returns list of dicts with keys: year, principal, interest, debt_service, ending_balance
    """
    yearly: list[dict[str, Decimal]] = []
    year_principal = Decimal("0")
    year_interest = Decimal("0")
    year_debt_service = Decimal("0")

    for p in schedule.payments:
        year_principal += p.principal
        year_interest += p.interest
        year_debt_service += p.payment

        if p.period % 12 == 0 or p.period == len(schedule.payments):
            year_num = (p.period - 1) // 12 + 1
            yearly.append({
                "year": Decimal(str(year_num)),
                "principal": year_principal,
                "interest": year_interest,
                "debt_service": year_debt_service,
                "ending_balance": p.balance,
            })
            year_principal = Decimal("0")
            year_interest = Decimal("0")
            year_debt_service = Decimal("0")

    return yearly
