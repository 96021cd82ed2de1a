"""Input validation boundary.

Runs before the engine: rejects non-finite, negative and out-of-range values
so the calculators never have to defend against NaN, Infinity or results too
large to round to cents. Zero values are degenerate but valid and pass through.
"""

import logging
from dataclasses import fields, is_dataclass
from decimal import Decimal

from src.models.deal import CostItem, CostMode, DealInput
from src.models.loan import LoanInput

logger = logging.getLogger(__name__)

MAX_TRANCHES = 3

# Ranges keep every derived figure within 28 significant digits
MAX_MONEY = Decimal("1000000000000")  # $1 trillion
MIN_MONEY = Decimal("0.01")
MIN_AREA = Decimal("1")
MAX_PERCENT = Decimal("1000")
MAX_PERIODS = 1200

PERCENT_FIELDS = {"percent_of_cost", "points", "annual_rate", "selling_costs_pct"}
PERIOD_FIELDS = {"hold_months", "term"}
AREA_FIELDS = {"square_footage"}
SCORE_FIELDS = {"credit_score"}


class InvalidDealInput(ValueError):
    """Input failed boundary validation. `problems` lists every failure."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("; ".join(problems))


def _field_kind(record, name: str) -> str:
    if name in PERCENT_FIELDS:
        return "percent"
    if isinstance(record, CostItem) and name == "amount" and record.mode == CostMode.PERCENT:
        return "percent"
    if name in PERIOD_FIELDS:
        return "periods"
    if name in AREA_FIELDS:
        return "area"
    if name in SCORE_FIELDS:
        return "score"
    return "money"


def _check_number(path: str, value, kind: str, problems: list[str]) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return
    if isinstance(value, float):
        value = Decimal(value)
    if isinstance(value, Decimal) and not value.is_finite():
        problems.append(f"{path} must be a finite number")
        return
    if value < 0:
        problems.append(f"{path} must not be negative")
        return

    if kind == "money":
        if value > MAX_MONEY:
            problems.append(f"{path} must not exceed {MAX_MONEY:,}")
        elif 0 < value < MIN_MONEY:
            problems.append(f"{path} must be zero or at least {MIN_MONEY}")
    elif kind == "area":
        if value > MAX_MONEY:
            problems.append(f"{path} must not exceed {MAX_MONEY:,}")
        elif 0 < value < MIN_AREA:
            problems.append(f"{path} must be zero or at least {MIN_AREA}")
    elif kind == "percent" and value > MAX_PERCENT:
        problems.append(f"{path} must not exceed {MAX_PERCENT}%")
    elif kind == "periods" and value > MAX_PERIODS:
        problems.append(f"{path} must not exceed {MAX_PERIODS}")


def _walk(path: str, record, problems: list[str]) -> None:
    for f in fields(record):
        value = getattr(record, f.name)
        child = f"{path}.{f.name}" if path else f.name
        if is_dataclass(value):
            _walk(child, value, problems)
        elif isinstance(value, tuple):
            for i, item in enumerate(value):
                if is_dataclass(item):
                    _walk(f"{child}[{i}]", item, problems)
        else:
            _check_number(child, value, _field_kind(record, f.name), problems)


def deal_problems(deal: DealInput) -> list[str]:
    problems: list[str] = []
    _walk("", deal, problems)
    if len(deal.financing.tranches) > MAX_TRANCHES:
        problems.append(f"financing.tranches allows at most {MAX_TRANCHES} loans")
    for i, tranche in enumerate(deal.financing.tranches):
        if tranche.percent_of_cost is not None and tranche.principal > 0:
            problems.append(
                f"financing.tranches[{i}] takes a principal or a percent of cost, not both"
            )
    return problems


def validate_deal_input(deal: DealInput) -> DealInput:
    problems = deal_problems(deal)
    if problems:
        logger.warning("Rejected deal input: %s", "; ".join(problems))
        raise InvalidDealInput(problems)
    return deal


def validate_loan_input(loan: LoanInput) -> LoanInput:
    problems: list[str] = []
    if not loan.product_id:
        problems.append("product_id is required")
    _walk("", loan, problems)
    if loan.term is not None and loan.term <= 0:
        problems.append("term must be positive")
    if problems:
        logger.warning("Rejected loan input: %s", "; ".join(problems))
        raise InvalidDealInput(problems)
    return loan
