"""Canonical test fixtures used across engine, API and CLI tests.

Fixture: $400K ARV flip, $200K purchase, $60K repairs, 6-month hold,
$180K first loan at 10% with 2 points, $1,500/mo holding costs.
"""

import pytest
from decimal import Decimal

from src.models.deal import (
    BuyingCosts,
    CostBase,
    CostItem,
    DealInput,
    FinancingCosts,
    HoldingCosts,
    LoanTranche,
    SellingCosts,
)
from src.models.loan import LoanInput


@pytest.fixture
def flip_deal() -> DealInput:
    """Deal that should land at $86,400 profit and an EXCELLENT verdict."""
    return DealInput(
        address="12 Oak St, Columbus, OH 43215",
        square_footage=Decimal("1500"),
        after_repair_value=Decimal("400000"),
        as_is_value=Decimal("230000"),
        repair_cost=Decimal("60000"),
        purchase_price=Decimal("200000"),
        hold_months=6,
        financing=FinancingCosts(
            tranches=(
                LoanTranche(
                    principal=Decimal("180000"),
                    points=Decimal("2"),
                    annual_rate=Decimal("10"),
                ),
            ),
        ),
        holding=HoldingCosts(
            property_taxes=Decimal("6000"),  # $500/mo
            insurance_vacant=Decimal("400"),
            utilities=Decimal("600"),
        ),
        buying=BuyingCosts(escrow_attorney=CostItem.flat(Decimal("3000"))),
        selling=SellingCosts(
            realtor=CostItem.percent(Decimal("6"), CostBase.AFTER_REPAIR_VALUE),
            escrow=CostItem.flat(Decimal("2000")),
            transfer=CostItem.flat(Decimal("1500")),
            staging=CostItem.flat(Decimal("1500")),
        ),
    )


@pytest.fixture
def degenerate_deal() -> DealInput:
    """Every value zero with a 6-month hold."""
    return DealInput(hold_months=6)


@pytest.fixture
def flip_payload() -> dict:
    """The flip_deal fixture as an API / CLI JSON payload."""
    return {
        "address": "12 Oak St, Columbus, OH 43215",
        "square_footage": "1500",
        "after_repair_value": "400000",
        "as_is_value": "230000",
        "repair_cost": "60000",
        "purchase_price": "200000",
        "hold_months": 6,
        "financing": {
            "tranches": [{"principal": "180000", "points": "2", "annual_rate": "10"}],
        },
        "holding": {
            "property_taxes": "6000",
            "insurance_vacant": "400",
            "utilities": "600",
        },
        "buying": {"escrow_attorney": {"amount": "3000"}},
        "selling": {
            "realtor": {"amount": "6", "mode": "percent", "base": "after_repair_value"},
            "escrow": {"amount": "2000"},
            "transfer": {"amount": "1500"},
            "staging": {"amount": "1500"},
        },
    }


@pytest.fixture
def over_leveraged_loan() -> LoanInput:
    """DSCR loan at ~90.9% LTV with a 600 credit score."""
    return LoanInput(
        product_id="dscr",
        loan_amount=Decimal("500000"),
        property_value=Decimal("550000"),
        credit_score=600,
    )
