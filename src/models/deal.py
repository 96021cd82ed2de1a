"""Fix-and-flip deal input records."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class CostMode(Enum):
    FLAT = "flat"
    PERCENT = "percent"


class CostBase(Enum):
    PURCHASE_PRICE = "purchase_price"
    AFTER_REPAIR_VALUE = "after_repair_value"
    PURCHASE_AND_REPAIR = "purchase_and_repair"


class InsuranceBasis(Enum):
    VACANT = "vacant"
    OCCUPIED = "occupied"
    BOTH = "both"


@dataclass(frozen=True)
class CostItem:
    """A transaction line item entered either in dollars or as a percent of a base."""
    amount: Decimal = Decimal("0")
    mode: CostMode = CostMode.FLAT
    base: CostBase = CostBase.PURCHASE_PRICE

    @classmethod
    def flat(cls, amount: Decimal) -> "CostItem":
        return cls(amount=amount)

    @classmethod
    def percent(cls, percent_points: Decimal, base: CostBase) -> "CostItem":
        return cls(amount=percent_points, mode=CostMode.PERCENT, base=base)


@dataclass(frozen=True)
class MiscCost:
    """User-labelled catch-all cost. The label never affects arithmetic."""
    label: str = "Miscellaneous"
    amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class LoanTranche:
    principal: Decimal = Decimal("0")
    # Alternative to principal: percent of purchase price + repair costs
    percent_of_cost: Decimal | None = None
    points: Decimal = Decimal("0")
    annual_rate: Decimal = Decimal("0")  # Percent points, e.g. 10 for 10%


@dataclass(frozen=True)
class HoldingCosts:
    property_taxes: Decimal = Decimal("0")  # Annual
    hoa: Decimal = Decimal("0")  # Monthly
    insurance_vacant: Decimal = Decimal("0")  # Monthly
    insurance_occupied: Decimal = Decimal("0")  # Monthly
    utilities: Decimal = Decimal("0")  # Monthly
    misc: MiscCost = field(default_factory=lambda: MiscCost("Miscellaneous Holding Costs"))  # Monthly
    insurance_basis: InsuranceBasis = InsuranceBasis.VACANT


@dataclass(frozen=True)
class BuyingCosts:
    escrow_attorney: CostItem = field(default_factory=CostItem)
    title_insurance: CostItem = field(default_factory=CostItem)
    misc: MiscCost = field(default_factory=lambda: MiscCost("Miscellaneous Buying Costs"))


@dataclass(frozen=True)
class SellingCosts:
    escrow: CostItem = field(default_factory=CostItem)
    recording: CostItem = field(default_factory=CostItem)
    realtor: CostItem = field(default_factory=CostItem)
    transfer: CostItem = field(default_factory=CostItem)
    warranty: CostItem = field(default_factory=CostItem)
    staging: CostItem = field(default_factory=CostItem)
    marketing: CostItem = field(default_factory=CostItem)
    misc: MiscCost = field(default_factory=lambda: MiscCost("Miscellaneous Selling Costs"))


@dataclass(frozen=True)
class FinancingCosts:
    tranches: tuple[LoanTranche, ...] = ()  # First, second, repair-cost loan
    origination: Decimal = Decimal("0")
    misc: MiscCost = field(default_factory=lambda: MiscCost("Miscellaneous Financing Costs"))


@dataclass(frozen=True)
class DealInput:
    # Identification (informational only)
    address: str = ""
    square_footage: Decimal = Decimal("0")
    evaluator: str = ""
    description: str = ""

    # Property values
    after_repair_value: Decimal = Decimal("0")
    as_is_value: Decimal = Decimal("0")
    repair_cost: Decimal = Decimal("0")
    purchase_price: Decimal = Decimal("0")
    hold_months: int = 6
    misc_property: MiscCost = field(default_factory=lambda: MiscCost("Miscellaneous Property Costs"))

    financing: FinancingCosts = field(default_factory=FinancingCosts)
    holding: HoldingCosts = field(default_factory=HoldingCosts)
    buying: BuyingCosts = field(default_factory=BuyingCosts)
    selling: SellingCosts = field(default_factory=SellingCosts)

    @property
    def purchase_and_repair(self) -> Decimal:
        return self.purchase_price + self.repair_cost
