"""Underwriting rules: flip deal verdict and loan product covenant warnings.

Verdicts and warnings are ordinary return values, never exceptions.
"""

from decimal import Decimal

from src.models.loan import LoanProduct
from src.models.results import DealVerdict

# (verdict, min ROI percent, profit must exceed), checked top to bottom
VERDICT_TIERS: tuple[tuple[DealVerdict, Decimal, Decimal], ...] = (
    (DealVerdict.EXCELLENT, Decimal("25"), Decimal("50000")),
    (DealVerdict.GOOD, Decimal("15"), Decimal("25000")),
    (DealVerdict.CAUTION, Decimal("5"), Decimal("0")),
)

VERDICT_DESCRIPTIONS: dict[DealVerdict, str] = {
    DealVerdict.EXCELLENT: (
        "This property shows strong profit potential with excellent ROI metrics. "
        "Pursuing this opportunity is recommended."
    ),
    DealVerdict.GOOD: (
        "Solid deal with favorable returns. Consider this property if it aligns "
        "with your investment strategy."
    ),
    DealVerdict.CAUTION: (
        "Marginal returns detected. Review all cost assumptions carefully before proceeding."
    ),
    DealVerdict.NOT_RECOMMENDED: (
        "This deal does not meet minimum profitability thresholds. Negotiate "
        "better terms or pass on this opportunity."
    ),
}


def classify_flip(purchase_rehab_roi: Decimal, net_profit: Decimal) -> DealVerdict:
    """First matching tier wins. ROI and profit must both clear a tier."""
    for verdict, min_roi, min_profit in VERDICT_TIERS:
        if purchase_rehab_roi >= min_roi and net_profit > min_profit:
            return verdict
    return DealVerdict.NOT_RECOMMENDED


def loan_warnings(
    product: LoanProduct,
    loan_amount: Decimal,
    ltv: Decimal,
    dscr: Decimal,
    credit_score: int | None,
) -> list[str]:
    """Independent checks against product limits; any number may fire.

    An empty list means nothing was flagged, not that the loan is approved.
    """
    warnings: list[str] = []
    if product.max_ltv is not None and ltv > product.max_ltv:
        warnings.append(f"LTV of {ltv:.1f}% exceeds max of {product.max_ltv}%")
    if (
        product.min_credit is not None
        and credit_score is not None
        and credit_score < product.min_credit
    ):
        warnings.append(f"Credit score {credit_score} below minimum of {product.min_credit}")
    if product.min_dscr is not None and 0 < dscr < product.min_dscr:
        warnings.append(f"DSCR of {dscr:.2f} below minimum of {product.min_dscr}")
    if loan_amount < product.min_amount:
        warnings.append(f"Loan amount below minimum of ${product.min_amount:,}")
    if loan_amount > product.max_amount:
        warnings.append(f"Loan amount exceeds maximum of ${product.max_amount:,}")
    return warnings
