from dataclasses import replace
from decimal import Decimal

import pytest

from src.engine.validation import InvalidDealInput, validate_deal_input, validate_loan_input
from src.models.deal import (
    CostBase,
    CostItem,
    DealInput,
    FinancingCosts,
    HoldingCosts,
    LoanTranche,
    MiscCost,
)
from src.models.loan import LoanInput


class TestDealValidation:
    def test_valid_deal_passes_through(self, flip_deal):
        assert validate_deal_input(flip_deal) is flip_deal

    def test_zero_deal_is_valid(self, degenerate_deal):
        assert validate_deal_input(degenerate_deal) is degenerate_deal

    def test_negative_money(self, flip_deal):
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(replace(flip_deal, purchase_price=Decimal("-1")))
        assert exc.value.problems == ["purchase_price must not be negative"]

    def test_negative_hold_months(self, flip_deal):
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(replace(flip_deal, hold_months=-1))
        assert "hold_months must not be negative" in exc.value.problems

    def test_non_finite_values(self, flip_deal):
        deal = replace(
            flip_deal,
            after_repair_value=Decimal("NaN"),
            holding=HoldingCosts(utilities=Decimal("Infinity")),
        )
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(deal)
        assert exc.value.problems == [
            "after_repair_value must be a finite number",
            "holding.utilities must be a finite number",
        ]

    def test_nested_misc_amount(self, flip_deal):
        deal = replace(flip_deal, misc_property=MiscCost("Permits", Decimal("-50")))
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(deal)
        assert exc.value.problems == ["misc_property.amount must not be negative"]

    def test_too_many_tranches(self, flip_deal):
        deal = replace(flip_deal, financing=FinancingCosts(tranches=(LoanTranche(),) * 4))
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(deal)
        assert exc.value.problems == ["financing.tranches allows at most 3 loans"]

    def test_principal_and_percent(self, flip_deal):
        tranche = LoanTranche(principal=Decimal("100000"), percent_of_cost=Decimal("80"))
        deal = replace(flip_deal, financing=FinancingCosts(tranches=(tranche,)))
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(deal)
        assert "principal or a percent of cost, not both" in str(exc.value)

    def test_negative_tranche_rate(self, flip_deal):
        tranche = LoanTranche(principal=Decimal("100000"), annual_rate=Decimal("-2"))
        deal = replace(flip_deal, financing=FinancingCosts(tranches=(tranche,)))
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(deal)
        assert exc.value.problems == ["financing.tranches[0].annual_rate must not be negative"]

    def test_reports_every_problem(self, flip_deal):
        deal = replace(flip_deal, purchase_price=Decimal("-1"), repair_cost=Decimal("-1"))
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(deal)
        assert len(exc.value.problems) == 2

    def test_is_a_value_error(self):
        assert issubclass(InvalidDealInput, ValueError)


class TestLoanValidation:
    def test_valid(self, over_leveraged_loan):
        assert validate_loan_input(over_leveraged_loan) is over_leveraged_loan

    def test_missing_product(self):
        with pytest.raises(InvalidDealInput) as exc:
            validate_loan_input(LoanInput(product_id="", loan_amount=Decimal("1000")))
        assert exc.value.problems == ["product_id is required"]

    def test_negative_amount(self):
        with pytest.raises(InvalidDealInput) as exc:
            validate_loan_input(LoanInput(product_id="dscr", loan_amount=Decimal("-1000")))
        assert exc.value.problems == ["loan_amount must not be negative"]

    def test_zero_term(self):
        with pytest.raises(InvalidDealInput) as exc:
            validate_loan_input(LoanInput(product_id="fix_flip", loan_amount=Decimal("1"), term=0))
        assert exc.value.problems == ["term must be positive"]


class TestValueRanges:
    def test_arv_beyond_a_trillion(self):
        deal = DealInput(after_repair_value=Decimal("1e27"), purchase_price=Decimal("1"))
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(deal)
        assert exc.value.problems == [
            "after_repair_value must not exceed 1,000,000,000,000",
        ]

    def test_fractional_square_footage(self):
        deal = DealInput(repair_cost=Decimal("100000000"), square_footage=Decimal("1e-25"))
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(deal)
        assert exc.value.problems == ["square_footage must be zero or at least 1"]

    def test_sub_cent_amount(self, flip_deal):
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(replace(flip_deal, purchase_price=Decimal("1e-20")))
        assert exc.value.problems == ["purchase_price must be zero or at least 0.01"]

    def test_upper_bounds_are_inclusive(self):
        deal = DealInput(
            after_repair_value=Decimal("1000000000000"),
            square_footage=Decimal("1"),
            hold_months=1200,
        )
        assert validate_deal_input(deal) is deal

    def test_percent_rate_cap(self, flip_deal):
        tranche = LoanTranche(principal=Decimal("100000"), annual_rate=Decimal("1e20"))
        deal = replace(flip_deal, financing=FinancingCosts(tranches=(tranche,)))
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(deal)
        assert exc.value.problems == ["financing.tranches[0].annual_rate must not exceed 1000%"]

    def test_percent_mode_cost_item_uses_percent_cap(self, flip_deal):
        selling = replace(
            flip_deal.selling,
            realtor=CostItem.percent(Decimal("5000"), CostBase.AFTER_REPAIR_VALUE),
            escrow=CostItem.flat(Decimal("5000")),
        )
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(replace(flip_deal, selling=selling))
        assert exc.value.problems == ["selling.realtor.amount must not exceed 1000%"]

    def test_hold_months_cap(self, flip_deal):
        with pytest.raises(InvalidDealInput) as exc:
            validate_deal_input(replace(flip_deal, hold_months=10**20))
        assert exc.value.problems == ["hold_months must not exceed 1200"]

    def test_huge_loan_amount(self):
        loan = LoanInput(product_id="dscr", loan_amount=Decimal("1e30"))
        with pytest.raises(InvalidDealInput) as exc:
            validate_loan_input(loan)
        assert exc.value.problems == ["loan_amount must not exceed 1,000,000,000,000"]

    def test_huge_term(self):
        loan = LoanInput(product_id="dscr", loan_amount=Decimal("1000"), term=10**9)
        with pytest.raises(InvalidDealInput) as exc:
            validate_loan_input(loan)
        assert exc.value.problems == ["term must not exceed 1200"]
