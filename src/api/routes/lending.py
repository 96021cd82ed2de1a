"""Lending routes: product catalog, loan quotes and amortization schedules."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_catalog, get_settings
from src.api.schemas import (
    AmortizationPaymentResponse,
    FlipProfitResponse,
    LoanCalculateRequest,
    LoanCalculateResponse,
    LoanCalculationsResponse,
    LoanLimitsResponse,
    LoanProductResponse,
    LoanProductsResponse,
    ScheduleRequest,
    ScheduleResponse,
    YearlyDebtResponse,
)
from src.config import Settings
from src.engine.debt import amortization_schedule, yearly_debt_summary
from src.engine.loan import UnknownLoanProduct, evaluate_loan
from src.engine.validation import validate_loan_input
from src.models.loan import LoanCatalog, LoanCategory, LoanProduct
from src.models.results import LoanUnderwritingResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/lending", tags=["lending"])


def product_to_response(p: LoanProduct) -> LoanProductResponse:
    return LoanProductResponse(
        id=p.id,
        name=p.name,
        category=p.category.value,
        rate=p.rate_label(),
        min_rate=p.min_rate,
        max_rate=p.max_rate,
        min_amount=p.min_amount,
        max_amount=p.max_amount,
        term_unit=p.term_unit.value,
        term_options=list(p.term_options),
        max_ltv=p.max_ltv,
        max_ltc=p.max_ltc,
        min_credit=p.min_credit,
        min_dscr=p.min_dscr,
        points=p.points,
        description=p.description,
        features=list(p.features),
        highlight=p.highlight,
    )


def products_response(catalog: LoanCatalog) -> LoanProductsResponse:
    grouped = {
        category.value: [product_to_response(p) for p in catalog.by_category(category)]
        for category in LoanCategory
    }
    return LoanProductsResponse(
        products=grouped,
        total_products=len(catalog),
        highlighted=[p.id for p in catalog.highlighted()],
    )


def quote_to_response(
    req: LoanCalculateRequest, product: LoanProduct, result: LoanUnderwritingResult
) -> LoanCalculateResponse:
    flip = None
    if result.flip_profit is not None:
        flip = FlipProfitResponse(profit=result.flip_profit.profit, roi=result.flip_profit.roi)
    return LoanCalculateResponse(
        product_id=result.product_id,
        product_name=result.product_name,
        term_unit=result.term_unit,
        inputs=req,
        calculations=LoanCalculationsResponse(
            rate=result.rate,
            term_years=result.term_years,
            monthly_payment=result.monthly_payment,
            total_interest=result.total_interest,
            total_payments=result.total_payments,
            ltv=result.ltv,
            dscr=result.dscr,
            ltc=result.ltc,
        ),
        loan_limits=LoanLimitsResponse(
            min_amount=product.min_amount,
            max_amount=product.max_amount,
            max_ltv=product.max_ltv,
            max_ltc=product.max_ltc,
            min_credit=product.min_credit,
            min_dscr=product.min_dscr,
        ),
        flip_analysis=flip,
        warnings=result.warnings,
    )


def run_quote(req: LoanCalculateRequest, catalog: LoanCatalog, cfg: Settings) -> LoanCalculateResponse:
    """Validate and quote a loan. Raises InvalidDealInput or UnknownLoanProduct."""
    loan = validate_loan_input(req.to_model(cfg.default_selling_costs_pct))
    result = evaluate_loan(loan, catalog, cfg.default_credit_score)
    if result.warnings:
        logger.debug("Loan quote for %s flagged: %s", loan.product_id, "; ".join(result.warnings))
    echoed = req.model_copy(update={"selling_costs_pct": loan.selling_costs_pct})
    return quote_to_response(echoed, catalog.get(loan.product_id), result)


@router.get("/products", response_model=LoanProductsResponse)
async def list_products(catalog: LoanCatalog = Depends(get_catalog)):
    """All loan products grouped by category."""
    return products_response(catalog)


@router.get("/products/{product_id}", response_model=LoanProductResponse)
async def get_product(product_id: str, catalog: LoanCatalog = Depends(get_catalog)):
    product = catalog.get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Loan product not found")
    return product_to_response(product)


@router.post("/calculate", response_model=LoanCalculateResponse)
async def calculate(
    req: LoanCalculateRequest,
    catalog: LoanCatalog = Depends(get_catalog),
    cfg: Settings = Depends(get_settings),
):
    """Quote a loan against its product and list every violated limit."""
    try:
        return run_quote(req, catalog, cfg)
    except UnknownLoanProduct:
        raise HTTPException(status_code=400, detail="Invalid loan type")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/schedule", response_model=ScheduleResponse)
async def schedule(req: ScheduleRequest):
    """Monthly amortization schedule with yearly totals."""
    sched = amortization_schedule(req.principal, req.annual_rate, req.term_years, req.periods)
    return ScheduleResponse(
        monthly_payment=sched.monthly_payment,
        total_interest=sched.total_interest,
        total_principal=sched.total_principal,
        payments=[
            AmortizationPaymentResponse(
                period=p.period,
                payment=p.payment,
                principal=p.principal,
                interest=p.interest,
                balance=p.balance,
            )
            for p in sched.payments
        ],
        yearly=[
            YearlyDebtResponse(
                year=int(y["year"]),
                principal=y["principal"],
                interest=y["interest"],
                debt_service=y["debt_service"],
                ending_balance=y["ending_balance"],
            )
            for y in yearly_debt_summary(sched)
        ],
    )
