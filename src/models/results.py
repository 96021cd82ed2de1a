from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class DealVerdict(Enum):
    EXCELLENT = "EXCELLENT DEAL"
    GOOD = "GOOD OPPORTUNITY"
    CAUTION = "PROCEED WITH CAUTION"
    NOT_RECOMMENDED = "NOT RECOMMENDED"


@dataclass(frozen=True)
class CostBreakdown:
    financing: Decimal = Decimal("0")
    holding: Decimal = Decimal("0")
    buying: Decimal = Decimal("0")
    selling: Decimal = Decimal("0")
    misc: Decimal = Decimal("0")


@dataclass(frozen=True)
class FlipAnalysis:
    costs: CostBreakdown
    maximum_allowable_offer: Decimal
    total_cost: Decimal
    net_profit: Decimal
    purchase_rehab_roi: Decimal  # Percent
    total_cost_roi: Decimal  # Percent
    committed_capital: Decimal
    down_payment_required: Decimal
    annualized_cash_on_cash: Decimal  # Percent, on committed capital
    total_annualized_cash_on_cash: Decimal  # Percent, on total cost
    repair_cost_per_sqft: Decimal
    verdict: DealVerdict

    # Loan and out-of-pocket metrics
    tranche_principals: tuple[Decimal, ...] = ()
    total_borrowed: Decimal = Decimal("0")
    monthly_interest_payment: Decimal = Decimal("0")
    out_of_pocket_capital: Decimal = Decimal("0")
    out_of_pocket_roi: Decimal = Decimal("0")
    out_of_pocket_cash_on_cash: Decimal = Decimal("0")
    all_in_cost_per_sqft: Decimal = Decimal("0")


@dataclass(frozen=True)
class FlipProfit:
    """Quick flip estimate attached to fix-and-flip loan quotes."""
    profit: Decimal
    roi: Decimal


@dataclass(frozen=True)
class LoanUnderwritingResult:
    product_id: str
    product_name: str
    term_unit: str
    rate: Decimal
    term_years: Decimal
    monthly_payment: Decimal
    total_interest: Decimal
    total_payments: Decimal
    ltv: Decimal
    dscr: Decimal
    ltc: Decimal
    warnings: list[str] = field(default_factory=list)
    flip_profit: FlipProfit | None = None
