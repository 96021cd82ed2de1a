"""Pydantic schemas for API request/response models."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from src.models.deal import (
    BuyingCosts,
    CostBase,
    CostItem,
    CostMode,
    DealInput,
    FinancingCosts,
    HoldingCosts,
    InsuranceBasis,
    LoanTranche,
    MiscCost,
    SellingCosts,
)
from src.engine.validation import MAX_MONEY, MAX_PERCENT, MAX_PERIODS
from src.models.loan import LoanInput


# ---- Request schemas ----

class CostItemRequest(BaseModel):
    amount: Decimal = Field(Decimal("0"), ge=0, description="Dollars, or percent points in percent mode")
    mode: Literal["flat", "percent"] = "flat"
    base: Literal["purchase_price", "after_repair_value", "purchase_and_repair"] = "purchase_price"

    def to_model(self) -> CostItem:
        return CostItem(amount=self.amount, mode=CostMode(self.mode), base=CostBase(self.base))


class MiscCostRequest(BaseModel):
    label: str = "Miscellaneous"
    amount: Decimal = Field(Decimal("0"), ge=0)

    def to_model(self) -> MiscCost:
        return MiscCost(label=self.label, amount=self.amount)


class LoanTrancheRequest(BaseModel):
    principal: Decimal = Field(Decimal("0"), ge=0)
    percent_of_cost: Decimal | None = Field(None, ge=0, description="Percent of purchase + repair")
    points: Decimal = Field(Decimal("0"), ge=0)
    annual_rate: Decimal = Field(Decimal("0"), ge=0, description="Percent points")

    def to_model(self) -> LoanTranche:
        return LoanTranche(
            principal=self.principal,
            percent_of_cost=self.percent_of_cost,
            points=self.points,
            annual_rate=self.annual_rate,
        )


class FinancingRequest(BaseModel):
    tranches: list[LoanTrancheRequest] = Field(default_factory=list, max_length=3)
    origination: Decimal = Field(Decimal("0"), ge=0)
    misc: MiscCostRequest = MiscCostRequest(label="Miscellaneous Financing Costs")

    def to_model(self) -> FinancingCosts:
        return FinancingCosts(
            tranches=tuple(t.to_model() for t in self.tranches),
            origination=self.origination,
            misc=self.misc.to_model(),
        )


class HoldingCostsRequest(BaseModel):
    property_taxes: Decimal = Field(Decimal("0"), ge=0, description="Annual")
    hoa: Decimal = Field(Decimal("0"), ge=0, description="Monthly")
    insurance_vacant: Decimal = Field(Decimal("0"), ge=0, description="Monthly")
    insurance_occupied: Decimal = Field(Decimal("0"), ge=0, description="Monthly")
    utilities: Decimal = Field(Decimal("0"), ge=0, description="Monthly")
    misc: MiscCostRequest = MiscCostRequest(label="Miscellaneous Holding Costs")
    insurance_basis: Literal["vacant", "occupied", "both"] = "vacant"

    def to_model(self) -> HoldingCosts:
        return HoldingCosts(
            property_taxes=self.property_taxes,
            hoa=self.hoa,
            insurance_vacant=self.insurance_vacant,
            insurance_occupied=self.insurance_occupied,
            utilities=self.utilities,
            misc=self.misc.to_model(),
            insurance_basis=InsuranceBasis(self.insurance_basis),
        )


class BuyingCostsRequest(BaseModel):
    escrow_attorney: CostItemRequest = CostItemRequest()
    title_insurance: CostItemRequest = CostItemRequest()
    misc: MiscCostRequest = MiscCostRequest(label="Miscellaneous Buying Costs")

    def to_model(self) -> BuyingCosts:
        return BuyingCosts(
            escrow_attorney=self.escrow_attorney.to_model(),
            title_insurance=self.title_insurance.to_model(),
            misc=self.misc.to_model(),
        )


class SellingCostsRequest(BaseModel):
    escrow: CostItemRequest = CostItemRequest()
    recording: CostItemRequest = CostItemRequest()
    realtor: CostItemRequest = CostItemRequest()
    transfer: CostItemRequest = CostItemRequest()
    warranty: CostItemRequest = CostItemRequest()
    staging: CostItemRequest = CostItemRequest()
    marketing: CostItemRequest = CostItemRequest()
    misc: MiscCostRequest = MiscCostRequest(label="Miscellaneous Selling Costs")

    def to_model(self) -> SellingCosts:
        return SellingCosts(
            escrow=self.escrow.to_model(),
            recording=self.recording.to_model(),
            realtor=self.realtor.to_model(),
            transfer=self.transfer.to_model(),
            warranty=self.warranty.to_model(),
            staging=self.staging.to_model(),
            marketing=self.marketing.to_model(),
            misc=self.misc.to_model(),
        )


class FlipAnalyzeRequest(BaseModel):
    address: str = ""
    square_footage: Decimal = Field(Decimal("0"), ge=0)
    evaluator: str = ""
    description: str = ""

    after_repair_value: Decimal = Field(Decimal("0"), ge=0)
    as_is_value: Decimal = Field(Decimal("0"), ge=0)
    repair_cost: Decimal = Field(Decimal("0"), ge=0)
    purchase_price: Decimal = Field(Decimal("0"), ge=0)
    hold_months: int | None = Field(None, ge=0, description="Defaults to the configured hold period")
    misc_property: MiscCostRequest = MiscCostRequest(label="Miscellaneous Property Costs")

    financing: FinancingRequest = FinancingRequest()
    holding: HoldingCostsRequest = HoldingCostsRequest()
    buying: BuyingCostsRequest = BuyingCostsRequest()
    selling: SellingCostsRequest = SellingCostsRequest()

    def to_model(self, default_hold_months: int = 6) -> DealInput:
        hold = self.hold_months if self.hold_months is not None else default_hold_months
        return DealInput(
            address=self.address,
            square_footage=self.square_footage,
            evaluator=self.evaluator,
            description=self.description,
            after_repair_value=self.after_repair_value,
            as_is_value=self.as_is_value,
            repair_cost=self.repair_cost,
            purchase_price=self.purchase_price,
            hold_months=hold,
            misc_property=self.misc_property.to_model(),
            financing=self.financing.to_model(),
            holding=self.holding.to_model(),
            buying=self.buying.to_model(),
            selling=self.selling.to_model(),
        )


class OfferRequest(BaseModel):
    after_repair_value: Decimal = Field(..., ge=0, le=MAX_MONEY)
    repair_cost: Decimal = Field(Decimal("0"), ge=0, le=MAX_MONEY)


class LoanCalculateRequest(BaseModel):
    product_id: str = Field(..., description="Loan product id, e.g. 'dscr' or 'fix_flip'")
    loan_amount: Decimal = Field(..., ge=0)
    property_value: Decimal = Field(Decimal("0"), ge=0)
    credit_score: int | None = Field(None, ge=300, le=850)
    term: int | None = Field(None, gt=0, description="In the product's term unit")
    monthly_rent: Decimal = Field(Decimal("0"), ge=0)
    monthly_expenses: Decimal = Field(Decimal("0"), ge=0)
    purchase_price: Decimal = Field(Decimal("0"), ge=0)
    rehab_budget: Decimal = Field(Decimal("0"), ge=0)
    after_repair_value: Decimal = Field(Decimal("0"), ge=0)
    selling_costs_pct: Decimal | None = Field(None, ge=0)

    def to_model(self, default_selling_costs_pct: Decimal = Decimal("8")) -> LoanInput:
        selling = self.selling_costs_pct
        return LoanInput(
            product_id=self.product_id,
            loan_amount=self.loan_amount,
            property_value=self.property_value,
            credit_score=self.credit_score,
            term=self.term,
            monthly_rent=self.monthly_rent,
            monthly_expenses=self.monthly_expenses,
            purchase_price=self.purchase_price,
            rehab_budget=self.rehab_budget,
            after_repair_value=self.after_repair_value,
            selling_costs_pct=selling if selling is not None else default_selling_costs_pct,
        )


class ScheduleRequest(BaseModel):
    principal: Decimal = Field(..., ge=0, le=MAX_MONEY)
    annual_rate: Decimal = Field(..., ge=0, le=MAX_PERCENT, description="Percent points")
    term_years: int = Field(30, gt=0, le=MAX_PERIODS // 12)
    periods: int | None = Field(None, gt=0, le=MAX_PERIODS, description="Only return the first N payments")


# ---- Response schemas ----

class CostBreakdownResponse(BaseModel):
    financing: Decimal
    holding: Decimal
    buying: Decimal
    selling: Decimal
    misc: Decimal


class FlipAnalysisResponse(BaseModel):
    inputs: FlipAnalyzeRequest
    costs: CostBreakdownResponse
    maximum_allowable_offer: Decimal
    total_cost: Decimal
    net_profit: Decimal
    purchase_rehab_roi: Decimal
    total_cost_roi: Decimal
    committed_capital: Decimal
    down_payment_required: Decimal
    annualized_cash_on_cash: Decimal
    total_annualized_cash_on_cash: Decimal
    repair_cost_per_sqft: Decimal
    verdict: str
    verdict_description: str
    tranche_principals: list[Decimal] = []
    total_borrowed: Decimal = Decimal("0")
    monthly_interest_payment: Decimal = Decimal("0")
    out_of_pocket_capital: Decimal = Decimal("0")
    out_of_pocket_roi: Decimal = Decimal("0")
    out_of_pocket_cash_on_cash: Decimal = Decimal("0")
    all_in_cost_per_sqft: Decimal = Decimal("0")


class OfferResponse(BaseModel):
    after_repair_value: Decimal
    repair_cost: Decimal
    mao_ratio: Decimal
    maximum_allowable_offer: Decimal


class LoanCalculationsResponse(BaseModel):
    rate: Decimal
    term_years: Decimal
    monthly_payment: Decimal
    total_interest: Decimal
    total_payments: Decimal
    ltv: Decimal
    dscr: Decimal
    ltc: Decimal


class LoanLimitsResponse(BaseModel):
    min_amount: Decimal
    max_amount: Decimal
    max_ltv: Decimal | None = None
    max_ltc: Decimal | None = None
    min_credit: int | None = None
    min_dscr: Decimal | None = None


class FlipProfitResponse(BaseModel):
    profit: Decimal
    roi: Decimal


class LoanCalculateResponse(BaseModel):
    product_id: str
    product_name: str
    term_unit: str
    inputs: LoanCalculateRequest
    calculations: LoanCalculationsResponse
    loan_limits: LoanLimitsResponse
    flip_analysis: FlipProfitResponse | None = None
    warnings: list[str]


class LoanProductResponse(BaseModel):
    id: str
    name: str
    category: str
    rate: str
    min_rate: Decimal | None = None
    max_rate: Decimal | None = None
    min_amount: Decimal
    max_amount: Decimal
    term_unit: str
    term_options: list[int] = []
    max_ltv: Decimal | None = None
    max_ltc: Decimal | None = None
    min_credit: int | None = None
    min_dscr: Decimal | None = None
    points: Decimal | None = None
    description: str = ""
    features: list[str] = []
    highlight: bool = False


class LoanProductsResponse(BaseModel):
    products: dict[str, list[LoanProductResponse]]
    total_products: int
    highlighted: list[str] = []


class AmortizationPaymentResponse(BaseModel):
    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


class YearlyDebtResponse(BaseModel):
    year: int
    principal: Decimal
    interest: Decimal
    debt_service: Decimal
    ending_balance: Decimal


class ScheduleResponse(BaseModel):
    monthly_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal
    payments: list[AmortizationPaymentResponse]
    yearly: list[YearlyDebtResponse]
