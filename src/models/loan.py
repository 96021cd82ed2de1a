"""Loan product catalog entries and loan underwriting input."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class LoanCategory(Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    BUSINESS = "business"
    SPECIALTY = "specialty"


class TermUnit(Enum):
    MONTHS = "months"
    YEARS = "years"


@dataclass(frozen=True)
class LoanProduct:
    id: str
    name: str
    category: LoanCategory
    # Percent points. None when the product is quoted as text ("Prime + 2.25%")
    min_rate: Decimal | None
    max_rate: Decimal | None
    min_amount: Decimal
    max_amount: Decimal
    rate_text: str | None = None
    base_rate: Decimal | None = None
    term_unit: TermUnit = TermUnit.YEARS
    term_options: tuple[int, ...] = ()
    max_ltv: Decimal | None = None
    max_ltc: Decimal | None = None
    min_credit: int | None = None
    min_dscr: Decimal | None = None
    points: Decimal | None = None
    description: str = ""
    features: tuple[str, ...] = ()
    highlight: bool = False

    @property
    def has_numeric_rate(self) -> bool:
        return self.min_rate is not None and self.max_rate is not None

    def rate_label(self) -> str:
        if not self.has_numeric_rate:
            return self.rate_text or ""
        return f"{self.min_rate}% - {self.max_rate}%"


@dataclass(frozen=True)
class LoanCatalog:
    """Read-only lookup of loan products keyed by product id."""
    products: dict[str, LoanProduct] = field(default_factory=dict)

    def get(self, product_id: str) -> LoanProduct | None:
        return self.products.get(product_id)

    def by_category(self, category: LoanCategory) -> list[LoanProduct]:
        return [p for p in self.products.values() if p.category == category]

    def highlighted(self) -> list[LoanProduct]:
        return [p for p in self.products.values() if p.highlight]

    def __len__(self) -> int:
        return len(self.products)


@dataclass(frozen=True)
class LoanInput:
    product_id: str
    loan_amount: Decimal
    property_value: Decimal = Decimal("0")
    credit_score: int | None = None
    term: int | None = None  # In the product's term unit
    monthly_rent: Decimal = Decimal("0")
    monthly_expenses: Decimal = Decimal("0")
    purchase_price: Decimal = Decimal("0")
    rehab_budget: Decimal = Decimal("0")
    after_repair_value: Decimal = Decimal("0")
    selling_costs_pct: Decimal = Decimal("8")
