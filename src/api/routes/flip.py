"""Fix-and-flip routes: full deal evaluation and the 70% rule offer."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_settings
from src.api.schemas import (
    CostBreakdownResponse,
    FlipAnalysisResponse,
    FlipAnalyzeRequest,
    OfferRequest,
    OfferResponse,
)
from src.config import Settings
from src.engine.flip import evaluate_flip_deal
from src.engine.offer import maximum_allowable_offer
from src.engine.underwriting import VERDICT_DESCRIPTIONS
from src.engine.validation import validate_deal_input
from src.models.results import FlipAnalysis

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/flip", tags=["flip"])


def analysis_to_response(req: FlipAnalyzeRequest, result: FlipAnalysis) -> FlipAnalysisResponse:
    """Pair the (defaults-filled) request with the engine result."""
    c = result.costs
    return FlipAnalysisResponse(
        inputs=req,
        costs=CostBreakdownResponse(
            financing=c.financing,
            holding=c.holding,
            buying=c.buying,
            selling=c.selling,
            misc=c.misc,
        ),
        maximum_allowable_offer=result.maximum_allowable_offer,
        total_cost=result.total_cost,
        net_profit=result.net_profit,
        purchase_rehab_roi=result.purchase_rehab_roi,
        total_cost_roi=result.total_cost_roi,
        committed_capital=result.committed_capital,
        down_payment_required=result.down_payment_required,
        annualized_cash_on_cash=result.annualized_cash_on_cash,
        total_annualized_cash_on_cash=result.total_annualized_cash_on_cash,
        repair_cost_per_sqft=result.repair_cost_per_sqft,
        verdict=result.verdict.value,
        verdict_description=VERDICT_DESCRIPTIONS[result.verdict],
        tranche_principals=list(result.tranche_principals),
        total_borrowed=result.total_borrowed,
        monthly_interest_payment=result.monthly_interest_payment,
        out_of_pocket_capital=result.out_of_pocket_capital,
        out_of_pocket_roi=result.out_of_pocket_roi,
        out_of_pocket_cash_on_cash=result.out_of_pocket_cash_on_cash,
        all_in_cost_per_sqft=result.all_in_cost_per_sqft,
    )


def run_flip(req: FlipAnalyzeRequest, cfg: Settings) -> FlipAnalysisResponse:
    """Validate and evaluate a deal. Raises InvalidDealInput on bad input."""
    deal = validate_deal_input(req.to_model(cfg.default_hold_months))
    result = evaluate_flip_deal(deal, cfg.mao_ratio)
    logger.debug(
        "Evaluated flip %r: profit=%s roi=%s verdict=%s",
        deal.address, result.net_profit, result.purchase_rehab_roi, result.verdict.value,
    )
    echoed = req.model_copy(update={"hold_months": deal.hold_months})
    return analysis_to_response(echoed, result)


@router.post("/evaluate", response_model=FlipAnalysisResponse)
async def evaluate(req: FlipAnalyzeRequest, cfg: Settings = Depends(get_settings)):
    """Evaluate a fix-and-flip deal: costs, profit, returns and verdict."""
    try:
        return run_flip(req, cfg)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/mao", response_model=OfferResponse)
async def mao(req: OfferRequest, cfg: Settings = Depends(get_settings)):
    """Maximum allowable offer under the configured ARV ratio."""
    return OfferResponse(
        after_repair_value=req.after_repair_value,
        repair_cost=req.repair_cost,
        mao_ratio=cfg.mao_ratio,
        maximum_allowable_offer=maximum_allowable_offer(
            req.after_repair_value, req.repair_cost, cfg.mao_ratio
        ),
    )
