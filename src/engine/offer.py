"""Maximum Allowable Offer (the 70% rule)."""

from decimal import Decimal

from src.engine.money import cents

DEFAULT_MAO_RATIO = Decimal("0.70")


def maximum_allowable_offer(
    after_repair_value: Decimal,
    repair_cost: Decimal,
    mao_ratio: Decimal = DEFAULT_MAO_RATIO,
) -> Decimal:
    """MAO = ARV * ratio - repairs, floored at zero.

    Derived from ARV and repair cost only; re-run on every evaluation.
    """
    return cents(max(Decimal("0"), after_repair_value * mao_ratio - repair_cost))
