"""Loan quote and underwriting checks against a product catalog.

Pure computation. No I/O. LoanInput + LoanCatalog in, LoanUnderwritingResult out.
"""

from decimal import Decimal

from src.engine.debt import monthly_payment, term_months, total_interest
from src.engine.loan_products import rate_for_credit
from src.engine.money import cents, percent_of, ratio
from src.engine.ratios import dscr, ltc, ltv, roi
from src.engine.underwriting import loan_warnings
from src.models.loan import LoanCatalog, LoanInput, LoanProduct, TermUnit
from src.models.results import FlipProfit, LoanUnderwritingResult

DEFAULT_CREDIT_SCORE = 700
DEFAULT_TERM_MONTHS = 12
DEFAULT_TERM_YEARS = 30
FIX_FLIP_PRODUCT = "fix_flip"


class UnknownLoanProduct(KeyError):
    """Raised when a loan product id is not in the catalog."""


def loan_term_years(product: LoanProduct, term: int | None) -> Decimal:
    """Convert a term in the product's unit into years."""
    if product.term_unit == TermUnit.MONTHS:
        return Decimal(term or DEFAULT_TERM_MONTHS) / 12
    return Decimal(term or DEFAULT_TERM_YEARS)


def flip_profit(
    purchase_price: Decimal,
    rehab_cost: Decimal,
    holding_costs: Decimal,
    after_repair_value: Decimal,
    selling_costs_pct: Decimal = Decimal("8"),
) -> FlipProfit:
    """Quick flip estimate: selling costs as a percent of ARV, ROI over purchase + rehab."""
    selling = percent_of(after_repair_value, selling_costs_pct)
    total = purchase_price + rehab_cost + holding_costs + selling
    profit = cents(after_repair_value - total)
    return FlipProfit(profit=profit, roi=roi(profit, purchase_price + rehab_cost))


def evaluate_loan(
    loan: LoanInput,
    catalog: LoanCatalog,
    default_credit_score: int = DEFAULT_CREDIT_SCORE,
) -> LoanUnderwritingResult:
    """Quote a loan and flag every violated product constraint."""
    product = catalog.get(loan.product_id)
    if product is None:
        raise UnknownLoanProduct(loan.product_id)

    score = loan.credit_score if loan.credit_score is not None else default_credit_score
    rate = rate_for_credit(product, score)
    years = loan_term_years(product, loan.term)
    months = term_months(years)

    payment = monthly_payment(loan.loan_amount, rate, years)
    interest = total_interest(loan.loan_amount, payment, years)
    total_paid = cents(payment * months)

    loan_ltv = ltv(loan.loan_amount, loan.property_value)
    loan_dscr = Decimal("0")
    if loan.monthly_rent > 0:
        loan_dscr = dscr(loan.monthly_rent - loan.monthly_expenses, payment)
    loan_ltc = ltc(loan.loan_amount, loan.purchase_price + loan.rehab_budget)

    profit = None
    if (
        product.id == FIX_FLIP_PRODUCT
        and loan.purchase_price > 0
        and loan.rehab_budget > 0
        and loan.after_repair_value > 0
    ):
        # Holding cost is every payment made over the loan term
        profit = flip_profit(
            loan.purchase_price,
            loan.rehab_budget,
            payment * months,
            loan.after_repair_value,
            loan.selling_costs_pct,
        )

    return LoanUnderwritingResult(
        product_id=product.id,
        product_name=product.name,
        term_unit=product.term_unit.value,
        rate=ratio(rate),
        term_years=ratio(years),
        monthly_payment=payment,
        total_interest=interest,
        total_payments=total_paid,
        ltv=loan_ltv,
        dscr=loan_dscr,
        ltc=loan_ltc,
        warnings=loan_warnings(product, loan.loan_amount, loan_ltv, loan_dscr, loan.credit_score),
        flip_profit=profit,
    )
