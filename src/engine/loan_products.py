"""Loan product catalog and credit-tiered rate pricing.

The catalog is static configuration: callers pass it into the loan
evaluator explicitly and the engine never mutates it.
"""

from decimal import Decimal
from typing import Any

from src.models.loan import LoanCatalog, LoanCategory, LoanProduct, TermUnit

FALLBACK_RATE = Decimal("8.5")  # Products quoted as text with no base rate

# (minimum score, share of the min→max rate range added)
CREDIT_TIERS: tuple[tuple[int, Decimal], ...] = (
    (760, Decimal("0")),
    (720, Decimal("0.15")),
    (680, Decimal("0.35")),
    (640, Decimal("0.60")),
    (600, Decimal("0.80")),
)


def _d(value) -> Decimal | None:
    return None if value is None else Decimal(str(value))


def _product(
    product_id: str,
    name: str,
    category: LoanCategory,
    rates: tuple,
    amounts: tuple,
    term_unit: TermUnit = TermUnit.YEARS,
    terms: tuple[int, ...] = (),
    **limits: Any,
) -> LoanProduct:
    min_rate, max_rate = rates
    min_amount, max_amount = amounts
    return LoanProduct(
        id=product_id,
        name=name,
        category=category,
        min_rate=_d(min_rate),
        max_rate=_d(max_rate),
        min_amount=Decimal(str(min_amount)),
        max_amount=Decimal(str(max_amount)),
        term_unit=term_unit,
        term_options=terms,
        rate_text=limits.get("rate_text"),
        base_rate=_d(limits.get("base_rate")),
        max_ltv=_d(limits.get("max_ltv")),
        max_ltc=_d(limits.get("max_ltc")),
        min_credit=limits.get("min_credit"),
        min_dscr=_d(limits.get("min_dscr")),
        points=_d(limits.get("points")),
        description=limits.get("description", ""),
        highlight=limits.get("highlight", False),
        features=tuple(limits.get("features", ())),
    )


RES = LoanCategory.RESIDENTIAL
COM = LoanCategory.COMMERCIAL
BIZ = LoanCategory.BUSINESS
SPECIALTY = LoanCategory.SPECIALTY
MONTHS = TermUnit.MONTHS

_PRODUCTS = [
    # Residential
    _product("conventional", "Conventional Mortgage", RES, (6.25, 7.75), (50000, 766550),
             terms=(15, 20, 30), max_ltv=97, min_credit=620,
             description="Traditional mortgage for primary, secondary, or investment properties",
             features=("Low rates", "PMI removal at 80% LTV", "Multiple term options",
                       "Rate lock available")),
    _product("fha", "FHA Loan", RES, (5.75, 7.25), (50000, 472030),
             terms=(15, 30), max_ltv=96.5, min_credit=580,
             description="Government-backed loan with low down payment for first-time buyers",
             features=("3.5% down payment", "Lower credit requirements", "Gift funds allowed",
                       "Assumable")),
    _product("va", "VA Loan", RES, (5.50, 7.00), (50000, 2000000),
             terms=(15, 30), max_ltv=100, min_credit=580,
             description="Zero down payment for veterans and active duty military",
             features=("No down payment", "No PMI", "Competitive rates", "Assumable")),
    _product("usda", "USDA Loan", RES, (5.75, 7.25), (50000, 500000),
             terms=(30,), max_ltv=100, min_credit=640,
             description="Zero down payment for eligible rural and suburban areas",
             features=("No down payment", "Low PMI equivalent", "Income limits apply",
                       "Geographic restrictions")),
    _product("jumbo", "Jumbo Loan", RES, (6.50, 8.00), (766551, 5000000),
             terms=(15, 30), max_ltv=90, min_credit=700,
             description="Loans above conforming limits for luxury properties",
             features=("High loan amounts", "Luxury properties", "Flexible terms",
                       "Portfolio lending")),
    _product("dscr", "DSCR Rental Loan", RES, (7.25, 9.50), (75000, 3000000),
             terms=(30,), max_ltv=80, min_credit=660, min_dscr=1.0, highlight=True,
             description="Investment property loan based on rental income - no tax returns!",
             features=("No income verification", "No tax returns", "Based on rental income",
                       "Unlimited properties")),
    _product("hard_money_res", "Hard Money (Residential)", RES, (10.0, 14.0), (50000, 2000000),
             term_unit=MONTHS, terms=(6, 12, 18, 24), max_ltv=70, min_credit=550, points=2,
             description="Fast asset-based lending for real estate investors",
             features=("Close in 5-10 days", "Credit flexible", "Asset-based", "No income docs")),
    _product("fix_flip", "Fix & Flip Loan", RES, (9.5, 13.0), (75000, 3000000),
             term_unit=MONTHS, terms=(6, 9, 12, 18), max_ltc=90, min_credit=620, points=1.5,
             highlight=True, description="Purchase + rehab financing for house flippers",
             features=("90% of purchase", "100% of rehab", "Draw schedule", "Interest-only")),
    _product("bridge_res", "Bridge Loan (Residential)", RES, (8.5, 12.0), (100000, 5000000),
             term_unit=MONTHS, terms=(6, 12, 18, 24), max_ltv=75, min_credit=620,
             description="Short-term financing to bridge transactions",
             features=("Quick closing", "Flexible terms", "No prepayment penalty",
                       "Interest-only")),
    _product("construction_res", "Construction Loan (Residential)", RES, (7.5, 10.0),
             (100000, 5000000), term_unit=MONTHS, terms=(12, 18, 24), max_ltc=85,
             min_credit=680, description="Ground-up residential construction financing",
             features=("Draw schedule", "One-time close option", "Converts to perm",
                       "Lot purchase included")),
    _product("heloc", "HELOC", RES, (7.99, 12.0), (10000, 500000),
             terms=(10, 15, 20), min_credit=680,
             description="Revolving home equity line of credit",
             features=("Draw as needed", "Interest-only option", "Reusable credit",
                       "Tax deductible")),
    _product("home_equity", "Home Equity Loan", RES, (7.25, 11.0), (10000, 500000),
             terms=(5, 10, 15, 20, 30), max_ltv=80, min_credit=660,
             description="Lump sum second mortgage with fixed rate",
             features=("Fixed rate", "Lump sum", "Predictable payments", "Tax deductible")),
    _product("reverse", "Reverse Mortgage (HECM)", RES, (6.0, 8.5), (0, 1149825),
             max_ltv=60,
             description="Access home equity without monthly payments - 62+ years old",
             features=("No monthly payments", "Stay in your home", "Tax-free funds",
                       "FHA insured")),
    _product("cashout_refi", "Cash-Out Refinance", RES, (6.50, 8.00), (50000, 2000000),
             terms=(15, 20, 30), max_ltv=80, min_credit=620,
             description="Refinance and take cash from your home equity",
             features=("Access equity", "Lower rate possible", "Consolidate debt",
                       "Home improvements")),
    _product("non_qm", "Non-QM Loan", RES, (7.50, 10.0), (100000, 3000000),
             terms=(30,), max_ltv=80, min_credit=620,
             description="Bank statement, asset depletion, foreign national loans",
             features=("Bank statements only", "Self-employed friendly", "Asset depletion",
                       "Foreign nationals")),
    # Commercial
    _product("cre", "Commercial Real Estate", COM, (6.75, 9.0), (500000, 50000000),
             terms=(5, 7, 10, 15, 20, 25), max_ltv=80, min_dscr=1.25,
             description="Office, retail, industrial, and flex space financing",
             features=("Multiple property types", "Interest-only option",
                       "Recourse & non-recourse", "Portfolio lending")),
    _product("multifamily", "Multi-Family (5+ Units)", COM, (6.25, 8.0), (500000, 100000000),
             terms=(5, 7, 10, 12, 15, 30), max_ltv=80, min_dscr=1.20, highlight=True,
             description="Apartment building and multi-unit financing",
             features=("Fannie/Freddie programs", "Non-recourse options", "Supplemental loans",
                       "Bridge to perm")),
    _product("mixed_use", "Mixed-Use Property", COM, (7.0, 9.0), (250000, 20000000),
             terms=(5, 7, 10, 15, 25), max_ltv=75, min_dscr=1.25,
             description="Commercial and residential combination properties",
             features=("Flexible ratios", "Multiple income streams", "Value-add potential",
                       "Urban locations")),
    _product("bridge_comm", "Commercial Bridge", COM, (9.0, 13.0), (500000, 50000000),
             term_unit=MONTHS, terms=(12, 24, 36), max_ltv=75, points=1.5,
             description="Transitional commercial financing for value-add opportunities",
             features=("Quick closing", "Value-add/lease-up", "Repositioning",
                       "Flexible prepay")),
    _product("construction_comm", "Commercial Construction", COM, (8.5, 12.0),
             (1000000, 100000000), term_unit=MONTHS, terms=(18, 24, 36), max_ltc=80,
             description="Ground-up commercial development financing",
             features=("Draw schedule", "Pre-leasing bonuses", "Converts to perm",
                       "JV structures")),
    _product("hard_money_comm", "Commercial Hard Money", COM, (11.0, 15.0), (250000, 20000000),
             term_unit=MONTHS, terms=(6, 12, 18, 24), max_ltv=65, points=2.5,
             description="Fast commercial capital for time-sensitive deals",
             features=("Close in 7-14 days", "All property types", "Distressed situations",
                       "Foreclosure bailout")),
    _product("cmbs", "CMBS Loan", COM, (6.5, 8.0), (2000000, 500000000),
             terms=(10,), max_ltv=75, min_dscr=1.25,
             description="Non-recourse securitized commercial financing",
             features=("Non-recourse", "Fixed rate", "Assumable", "No personal guarantee")),
    _product("hospitality", "Hotel & Hospitality", COM, (7.5, 10.0), (1000000, 100000000),
             terms=(5, 7, 10, 15, 25), max_ltv=70, min_dscr=1.40,
             description="Hotel, motel, and hospitality financing",
             features=("Flag & non-flag", "PIP financing", "Acquisition & refi",
                       "Revenue-based")),
    _product("self_storage", "Self-Storage Loan", COM, (6.75, 8.5), (500000, 50000000),
             terms=(5, 7, 10, 15, 25), max_ltv=80, min_dscr=1.25,
             description="Self-storage facility financing",
             features=("Strong asset class", "Expansion financing", "Conversion projects",
                       "Climate controlled")),
    _product("mhp", "Mobile Home Park", COM, (6.5, 8.5), (500000, 50000000),
             terms=(5, 7, 10, 12, 30), max_ltv=80, min_dscr=1.25,
             description="Manufactured housing community financing",
             features=("Park-owned homes", "Lot rent focused", "Infill potential",
                       "Long-term holds")),
    _product("nnn", "NNN Lease Financing", COM, (6.0, 7.5), (500000, 50000000),
             terms=(10, 15, 20, 25), max_ltv=75,
             description="Triple net lease single tenant properties",
             features=("Credit tenant", "Long lease terms", "Passive income",
                       "Low risk profile")),
    _product("medical_office", "Medical Office Building", COM, (6.5, 8.0), (500000, 30000000),
             terms=(5, 7, 10, 15, 25), max_ltv=85, min_dscr=1.25,
             description="Healthcare real estate financing",
             features=("Higher LTV", "Specialty tenants", "Stable cash flow",
                       "Essential services")),
    # Business
    _product("sba_7a", "SBA 7(a) Loan", BIZ, (None, None), (50000, 5000000),
             terms=(5, 7, 10, 15, 25), rate_text="Prime + 2.25%", base_rate=8.5,
             highlight=True, description="Most flexible SBA program for business growth",
             features=("Low down payment", "Long terms", "Working capital",
                       "Acquisition financing")),
    _product("sba_504", "SBA 504 Loan", BIZ, (5.5, 7.0), (125000, 20000000),
             terms=(10, 20, 25), description="Fixed asset financing with only 10% down",
             features=("10% down payment", "Fixed rates", "Real estate & equipment",
                       "Job creation focus")),
    _product("term_loan", "Business Term Loan", BIZ, (8.0, 25.0), (5000, 5000000),
             terms=(1, 2, 3, 5), description="Fixed payments business loan for growth",
             features=("Predictable payments", "Quick funding", "Multiple uses",
                       "Build credit")),
    _product("working_capital", "Working Capital Loan", BIZ, (15, 45), (10000, 2000000),
             term_unit=MONTHS, terms=(3, 6, 9, 12, 18),
             description="Fast cash flow solution for business needs",
             features=("Same-day funding", "High approval rate", "Flexible payments",
                       "No collateral")),
    _product("business_loc", "Business Line of Credit", BIZ, (7.0, 25.0), (10000, 1000000),
             term_unit=MONTHS, terms=(12, 24), description="Revolving business credit line",
             features=("Pay only what you use", "Reusable credit", "Quick access",
                       "Build credit")),
    _product("equipment", "Equipment Financing", BIZ, (6.0, 20.0), (5000, 5000000),
             terms=(2, 3, 4, 5, 7), max_ltv=100,
             description="Equipment is the collateral - 100% financing available",
             features=("No down payment", "Section 179 benefits", "Fast approval",
                       "New & used equipment")),
    _product("factoring", "Invoice Factoring", BIZ, (1, 5), (10000, 10000000),
             description="Turn outstanding invoices into immediate cash",
             features=("Same-day funding", "85% advance rate", "B2B & B2G",
                       "Credit protection")),
    _product("mca", "Merchant Cash Advance", BIZ, (20, 50), (5000, 500000),
             term_unit=MONTHS, terms=(3, 6, 9, 12, 18),
             description="Based on credit card sales - daily ACH repayment",
             features=("High approval rate", "Bad credit OK", "Fast funding",
                       "Flexible payments")),
    _product("rbf", "Revenue Based Financing", BIZ, (10, 35), (50000, 3000000),
             term_unit=MONTHS, terms=(12, 18, 24),
             description="Scales with your revenue - pay less when slower",
             features=("Revenue-based payments", "Equity preservation", "Flexible terms",
                       "Growth focused")),
    _product("acquisition", "Business Acquisition Loan", BIZ, (7.0, 12.0), (100000, 25000000),
             terms=(5, 7, 10, 15, 25), description="Buy a business or buyout a partner",
             features=("SBA eligible", "Seller financing combo", "Earnout structures",
                       "Due diligence support")),
    _product("startup", "Startup Financing", BIZ, (9.0, 20.0), (10000, 150000),
             terms=(2, 3, 5), description="Launch your business with proper funding",
             features=("New business friendly", "Personal credit based", "Collateral options",
                       "Business planning")),
    _product("robs", "401(k) Business Financing (ROBS)", BIZ, (0, 0), (50000, 500000),
             description="Use retirement funds tax-free and penalty-free",
             features=("No debt", "Tax-free", "Keep retirement status", "IRS compliant")),
    # Specialty
    _product("hfci", "HFCI Fee Financing", SPECIALTY, (12.0, 18.0), (4000, 5000),
             term_unit=MONTHS, terms=(12, 24, 36), highlight=True,
             description="Finance legal fees to save your home from foreclosure",
             features=("Income-based approval", "Save your home", "Stop foreclosure",
                       "Legal fee coverage")),
    _product("debt_consol", "Debt Consolidation", SPECIALTY, (7.99, 24.0), (5000, 100000),
             terms=(2, 3, 5, 7), description="Combine all debts into one lower payment",
             features=("Lower interest", "Single payment", "Improve credit", "Fixed rate")),
    _product("personal", "Personal Loan", SPECIALTY, (6.99, 24.0), (1000, 100000),
             terms=(2, 3, 5, 7), description="Unsecured personal financing for any purpose",
             features=("No collateral", "Fixed rate", "Quick funding", "Multiple uses")),
    _product("auto", "Auto Loan", SPECIALTY, (5.49, 18.0), (5000, 150000),
             terms=(2, 3, 4, 5, 6, 7), description="New and used vehicle financing",
             features=("New & used", "Competitive rates", "Fast approval", "Refinance option")),
    _product("commercial_vehicle", "Commercial Vehicle Loan", SPECIALTY, (7.0, 15.0),
             (10000, 500000), terms=(2, 3, 4, 5, 7),
             description="Trucks, vans, fleet and commercial vehicle financing",
             features=("Fleet financing", "Trucks & vans", "New owner OK",
                       "Competitive rates")),
    _product("practice", "Practice Financing", SPECIALTY, (6.5, 10.0), (50000, 5000000),
             terms=(5, 7, 10, 15, 25),
             description="Medical, dental, veterinary and professional practice financing",
             features=("Acquisition", "Equipment", "Real estate", "Working capital")),
    _product("franchise", "Franchise Financing", SPECIALTY, (7.0, 12.0), (50000, 5000000),
             terms=(5, 7, 10, 15, 25), description="Start or expand your franchise business",
             features=("Multi-unit", "All brands", "SBA eligible", "Fast approval")),
    _product("cannabis", "Cannabis Financing", SPECIALTY, (12.0, 20.0), (100000, 10000000),
             terms=(1, 2, 3, 5, 10), highlight=True,
             description="Licensed cannabis operator financing in legal states",
             features=("Licensed operators", "Real estate", "Equipment", "Working capital")),
    _product("nonprofit", "Church & Non-Profit", SPECIALTY, (5.5, 8.0), (100000, 25000000),
             terms=(5, 7, 10, 15, 20, 25, 30), max_ltv=90,
             description="Faith-based organizations and 501(c)(3) financing",
             features=("High LTV", "Construction", "Acquisition", "Renovation")),
    _product("land", "Land Loan", SPECIALTY, (7.5, 12.0), (50000, 5000000),
             terms=(5, 7, 10, 15, 20), max_ltv=65,
             description="Raw and improved land acquisition financing",
             features=("Raw land", "Entitled land", "Development", "Speculation")),
    _product("agricultural", "Agricultural Loan", SPECIALTY, (6.0, 9.0), (50000, 10000000),
             terms=(1, 5, 7, 10, 15, 20, 30),
             description="Farm and ranch acquisition and operating financing",
             features=("Farm purchase", "Equipment", "Operating lines", "FSA programs")),
    _product("solar", "Solar Financing", SPECIALTY, (4.99, 8.0), (10000, 100000),
             terms=(10, 15, 20, 25),
             description="Residential and commercial solar system financing",
             features=("No money down", "Tax credits", "Lower bills", "Green energy")),
]


DEFAULT_CATALOG = LoanCatalog(products={p.id: p for p in _PRODUCTS})


def catalog_from_dict(data: dict[str, dict[str, Any]]) -> LoanCatalog:
    """Build a catalog from plain mappings keyed by product id.

    Entry keys mirror LoanProduct field names; rates and amounts may be
    numbers or strings.
    """
    products = {}
    for product_id, entry in data.items():
        limits = {k: v for k, v in entry.items() if k not in (
            "name", "category", "min_rate", "max_rate", "min_amount",
            "max_amount", "term_unit", "term_options",
        )}
        products[product_id] = _product(
            product_id,
            entry["name"],
            LoanCategory(entry["category"]),
            (entry.get("min_rate"), entry.get("max_rate")),
            (entry["min_amount"], entry["max_amount"]),
            term_unit=TermUnit(entry.get("term_unit", "years")),
            terms=tuple(entry.get("term_options", ())),
            **limits,
        )
    return LoanCatalog(products=products)


def rate_for_credit(product: LoanProduct, credit_score: int) -> Decimal:
    """Price a product within its rate range by credit tier.

    760+: min rate; 720-759: +15% of range; 680-719: +35%;
    640-679: +60%; 600-639: +80%; below 600: max rate.
    """
    if not product.has_numeric_rate:
        return product.base_rate if product.base_rate is not None else FALLBACK_RATE

    spread = product.max_rate - product.min_rate
    for min_score, share in CREDIT_TIERS:
        if credit_score >= min_score:
            return product.min_rate + spread * share
    return product.max_rate
