"""Fix-and-flip deal evaluator: composes the cost aggregators into a profit profile.

Pure computation. No I/O. DealInput in, FlipAnalysis out.
"""

from decimal import Decimal

from src.engine.costs import (
    buying_total,
    financing_total,
    holding_total,
    misc_total,
    selling_total,
    tranche_cost,
)
from src.engine.money import cents, monthly_rate
from src.engine.offer import DEFAULT_MAO_RATIO, maximum_allowable_offer
from src.engine.ratios import annualized_cash_on_cash, cost_per_sqft, roi
from src.engine.underwriting import classify_flip
from src.models.deal import DealInput
from src.models.results import CostBreakdown, FlipAnalysis


def evaluate_flip_deal(
    deal: DealInput,
    mao_ratio: Decimal = DEFAULT_MAO_RATIO,
) -> FlipAnalysis:
    """Run the full flip analysis.

    Totals are summed from cent-rounded category costs, so
    total_cost and net_profit reconcile exactly with the breakdown.
    """
    costs = CostBreakdown(
        financing=financing_total(deal),
        holding=holding_total(deal),
        buying=buying_total(deal),
        selling=selling_total(deal),
        misc=misc_total(deal),
    )
    total_cost = (
        deal.purchase_price
        + deal.repair_cost
        + costs.financing
        + costs.holding
        + costs.buying
        + costs.selling
        + costs.misc
    )
    net_profit = deal.after_repair_value - total_cost

    # Loans
    tranches = [tranche_cost(deal, t) for t in deal.financing.tranches]
    principals = tuple(t["principal"] for t in tranches)
    total_borrowed = sum(principals, Decimal("0"))
    first_principal = principals[0] if principals else Decimal("0")
    monthly_interest = cents(sum(
        (p * monthly_rate(t.annual_rate) for p, t in zip(principals, deal.financing.tranches)),
        Decimal("0"),
    ))
    held_interest = sum((t["interest"] for t in tranches), Decimal("0"))
    points = sum((t["points"] for t in tranches), Decimal("0"))

    # Capital
    committed_capital = max(
        Decimal("0"),
        deal.purchase_price + deal.repair_cost + costs.buying - total_borrowed,
    )
    down_payment = max(
        Decimal("0"),
        deal.purchase_price + costs.buying - first_principal,
    )
    # Cash the investor actually funds: equity plus carry, excluding borrowed principal
    out_of_pocket = max(
        Decimal("0"),
        deal.purchase_and_repair - total_borrowed + costs.buying
        + costs.holding + held_interest + points,
    )

    purchase_rehab_roi = roi(net_profit, deal.purchase_and_repair)

    return FlipAnalysis(
        costs=costs,
        maximum_allowable_offer=maximum_allowable_offer(
            deal.after_repair_value, deal.repair_cost, mao_ratio
        ),
        total_cost=total_cost,
        net_profit=net_profit,
        purchase_rehab_roi=purchase_rehab_roi,
        total_cost_roi=roi(net_profit, total_cost),
        committed_capital=committed_capital,
        down_payment_required=down_payment,
        annualized_cash_on_cash=annualized_cash_on_cash(
            net_profit, committed_capital, deal.hold_months
        ),
        total_annualized_cash_on_cash=annualized_cash_on_cash(
            net_profit, total_cost, deal.hold_months
        ),
        repair_cost_per_sqft=cost_per_sqft(deal.repair_cost, deal.square_footage),
        verdict=classify_flip(purchase_rehab_roi, net_profit),
        tranche_principals=principals,
        total_borrowed=total_borrowed,
        monthly_interest_payment=monthly_interest,
        out_of_pocket_capital=out_of_pocket,
        out_of_pocket_roi=roi(net_profit, out_of_pocket),
        out_of_pocket_cash_on_cash=annualized_cash_on_cash(
            net_profit, out_of_pocket, deal.hold_months
        ),
        all_in_cost_per_sqft=cost_per_sqft(deal.purchase_and_repair, deal.square_footage),
    )
