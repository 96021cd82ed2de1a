"""Cost aggregators: financing, holding, buying, selling and misc totals.

Pure functions: DealInput in, Decimal out. No I/O.
Each aggregator only adds; none subtracts, so non-negative inputs give
non-negative totals.
"""

from decimal import Decimal

from src.engine.debt import points_cost, simple_held_interest
from src.engine.money import cents, percent_of
from src.models.deal import (
    CostBase,
    CostItem,
    CostMode,
    DealInput,
    InsuranceBasis,
    LoanTranche,
)


def cost_base_value(deal: DealInput, base: CostBase) -> Decimal:
    if base == CostBase.AFTER_REPAIR_VALUE:
        return deal.after_repair_value
    if base == CostBase.PURCHASE_AND_REPAIR:
        return deal.purchase_and_repair
    return deal.purchase_price


def resolve_cost_item(deal: DealInput, item: CostItem) -> Decimal:
    """Dollar value of a line item, resolving percent-of-base entries."""
    if item.mode == CostMode.PERCENT:
        return cents(percent_of(cost_base_value(deal, item.base), item.amount))
    return item.amount


def tranche_principal(deal: DealInput, tranche: LoanTranche) -> Decimal:
    """Loan principal, either entered directly or as percent of purchase + repair."""
    if tranche.percent_of_cost is not None:
        return cents(percent_of(deal.purchase_and_repair, tranche.percent_of_cost))
    return tranche.principal


def tranche_cost(deal: DealInput, tranche: LoanTranche) -> dict[str, Decimal]:
    """Points plus interest-only carry for the hold period."""
    principal = tranche_principal(deal, tranche)
    points = points_cost(principal, tranche.points)
    interest = simple_held_interest(principal, tranche.annual_rate, deal.hold_months)
    return {
        "principal": principal,
        "points": points,
        "interest": interest,
        "total": points + interest,
    }


def financing_total(deal: DealInput) -> Decimal:
    total = sum(
        (tranche_cost(deal, t)["total"] for t in deal.financing.tranches),
        Decimal("0"),
    )
    return total + deal.financing.origination + deal.financing.misc.amount


def monthly_holding_cost(deal: DealInput) -> Decimal:
    h = deal.holding
    if h.insurance_basis == InsuranceBasis.OCCUPIED:
        insurance = h.insurance_occupied
    elif h.insurance_basis == InsuranceBasis.BOTH:
        insurance = h.insurance_vacant + h.insurance_occupied
    else:
        insurance = h.insurance_vacant
    return h.property_taxes / 12 + h.hoa + insurance + h.utilities + h.misc.amount


def holding_total(deal: DealInput) -> Decimal:
    return cents(monthly_holding_cost(deal) * deal.hold_months)


def buying_items(deal: DealInput) -> dict[str, Decimal]:
    b = deal.buying
    return {
        "escrow_attorney": resolve_cost_item(deal, b.escrow_attorney),
        "title_insurance": resolve_cost_item(deal, b.title_insurance),
        "misc": b.misc.amount,
    }


def buying_total(deal: DealInput) -> Decimal:
    return sum(buying_items(deal).values(), Decimal("0"))


def selling_items(deal: DealInput) -> dict[str, Decimal]:
    s = deal.selling
    return {
        "escrow": resolve_cost_item(deal, s.escrow),
        "recording": resolve_cost_item(deal, s.recording),
        "realtor": resolve_cost_item(deal, s.realtor),
        "transfer": resolve_cost_item(deal, s.transfer),
        "warranty": resolve_cost_item(deal, s.warranty),
        "staging": resolve_cost_item(deal, s.staging),
        "marketing": resolve_cost_item(deal, s.marketing),
        "misc": s.misc.amount,
    }


def selling_total(deal: DealInput) -> Decimal:
    return sum(selling_items(deal).values(), Decimal("0"))


def misc_total(deal: DealInput) -> Decimal:
    return deal.misc_property.amount
