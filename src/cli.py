"""Terminal client for flip evaluation and loan quotes.

Usage:
    python -m src.cli flip --address "12 Oak St" --arv 400000 --purchase 200000 --repair 50000 \
        --loan-pct 80 --loan-rate 12 --loan-points 2 --taxes 6000 --realtor-pct 6
    python -m src.cli flip --file deal.json --json
    python -m src.cli loan dscr --amount 500000 --value 550000 --credit 600 --rent 4000
    python -m src.cli products
    python -m src.cli flip --file deal.json --api http://localhost:8000

Without --api the deal is evaluated in-process with the same validation as the server.
"""

import argparse
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path

import httpx
from pydantic import ValidationError

from src.api.deps import get_catalog
from src.api.routes.flip import run_flip
from src.api.routes.lending import products_response, run_quote
from src.api.schemas import (
    BuyingCostsRequest,
    CostItemRequest,
    FinancingRequest,
    FlipAnalyzeRequest,
    HoldingCostsRequest,
    LoanCalculateRequest,
    LoanTrancheRequest,
    SellingCostsRequest,
)
from src.config import settings
from src.engine.loan import UnknownLoanProduct
from src.engine.money import format_currency, format_percent
from src.engine.validation import InvalidDealInput

logger = logging.getLogger(__name__)

EXIT_API_ERROR = 1
EXIT_INVALID_INPUT = 2


class ApiError(Exception):
    """The remote API could not be reached or answered with an error."""


# ── Helpers ──────────────────────────────────────────────────────────────────

def _pct(v) -> str:
    """Values are already in percent points."""
    return format_percent(Decimal(str(v)))


def _dollar(v) -> str:
    return format_currency(Decimal(str(v)))


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def _call_api(api_url: str, method: str, path: str, payload: dict | None = None) -> dict:
    url = f"{api_url.rstrip('/')}{path}"
    logger.debug("%s %s", method, url)
    try:
        resp = httpx.request(method, url, json=payload, timeout=30)
    except httpx.ConnectError:
        raise ApiError(f"Could not connect to API at {api_url}")
    except httpx.TimeoutException:
        raise ApiError("Request timed out")
    if resp.status_code != 200:
        try:
            detail = resp.json().get("detail", resp.text)
        except ValueError:
            detail = resp.text
        raise ApiError(f"API returned {resp.status_code}: {detail}")
    return resp.json()


# ── Request builders ─────────────────────────────────────────────────────────

def flip_request_from_args(args: argparse.Namespace) -> FlipAnalyzeRequest:
    if args.file:
        return FlipAnalyzeRequest.model_validate_json(Path(args.file).read_text(encoding="utf-8"))

    tranches = []
    if args.loan_pct is not None or args.loan_amount is not None:
        tranches.append(LoanTrancheRequest(
            principal=args.loan_amount or Decimal("0"),
            percent_of_cost=args.loan_pct,
            points=args.loan_points,
            annual_rate=args.loan_rate,
        ))
    return FlipAnalyzeRequest(
        address=args.address,
        square_footage=args.sqft,
        after_repair_value=args.arv,
        repair_cost=args.repair,
        purchase_price=args.purchase,
        hold_months=args.hold_months,
        financing=FinancingRequest(tranches=tranches, origination=args.origination),
        holding=HoldingCostsRequest(
            property_taxes=args.taxes,
            insurance_vacant=args.insurance,
            utilities=args.utilities,
        ),
        buying=BuyingCostsRequest(escrow_attorney=CostItemRequest(amount=args.closing)),
        selling=SellingCostsRequest(realtor=CostItemRequest(
            amount=args.realtor_pct, mode="percent", base="after_repair_value",
        )),
    )


def loan_request_from_args(args: argparse.Namespace) -> LoanCalculateRequest:
    return LoanCalculateRequest(
        product_id=args.product_id,
        loan_amount=args.amount,
        property_value=args.value,
        credit_score=args.credit,
        term=args.term,
        monthly_rent=args.rent,
        monthly_expenses=args.expenses,
        purchase_price=args.purchase,
        rehab_budget=args.rehab,
        after_repair_value=args.arv,
    )


# ── Report sections ──────────────────────────────────────────────────────────

def print_flip_report(data: dict) -> None:
    inputs = data["inputs"]
    _header(f"Flip Analysis: {inputs['address'] or 'Unnamed property'}")
    print(f"  After Repair Value:   {_dollar(inputs['after_repair_value'])}")
    print(f"  Purchase Price:       {_dollar(inputs['purchase_price'])}")
    print(f"  Repair Cost:          {_dollar(inputs['repair_cost'])}")
    print(f"  Hold Period:          {inputs['hold_months']} months")
    print(f"  Max Allowable Offer:  {_dollar(data['maximum_allowable_offer'])}")

    _header("Costs")
    costs = data["costs"]
    for label in ("financing", "holding", "buying", "selling", "misc"):
        print(f"  {label.capitalize():<22}{_dollar(costs[label]):>12}")
    print(f"  {'Total Cost':<22}{_dollar(data['total_cost']):>12}")

    _header("Returns")
    print(f"  Net Profit:           {_dollar(data['net_profit'])}")
    print(f"  ROI (purchase+rehab): {_pct(data['purchase_rehab_roi'])}")
    print(f"  ROI (total cost):     {_pct(data['total_cost_roi'])}")
    print(f"  ROI (out of pocket):  {_pct(data['out_of_pocket_roi'])}")
    print(f"  Annualized CoC:       {_pct(data['annualized_cash_on_cash'])}")
    print(f"  Committed Capital:    {_dollar(data['committed_capital'])}")
    print(f"  Down Payment:         {_dollar(data['down_payment_required'])}")
    print(f"  Out of Pocket:        {_dollar(data['out_of_pocket_capital'])}")
    if Decimal(str(data["repair_cost_per_sqft"])) > 0:
        print(f"  Repair $/sqft:        ${float(data['repair_cost_per_sqft']):,.2f}")

    _header(f"Verdict: {data['verdict']}")
    print(f"  {data['verdict_description']}")


def print_loan_report(data: dict) -> None:
    calc = data["calculations"]
    _header(f"Loan Quote: {data['product_name']}")
    print(f"  Rate:                 {_pct(calc['rate'])}")
    print(f"  Term:                 {float(calc['term_years']):g} years")
    print(f"  Monthly Payment:      ${float(calc['monthly_payment']):,.2f}")
    print(f"  Total Interest:       {_dollar(calc['total_interest'])}")
    print(f"  Total Payments:       {_dollar(calc['total_payments'])}")
    print(f"  LTV:                  {_pct(calc['ltv'])}")
    print(f"  LTC:                  {_pct(calc['ltc'])}")
    print(f"  DSCR:                 {float(calc['dscr']):.2f}")

    flip = data.get("flip_analysis")
    if flip:
        _header("Flip Estimate")
        print(f"  Profit:               {_dollar(flip['profit'])}")
        print(f"  ROI:                  {_pct(flip['roi'])}")

    if data["warnings"]:
        _header("Warnings")
        for w in data["warnings"]:
            print(f"  ! {w}")


def print_products(data: dict) -> None:
    for category, products in data["products"].items():
        if not products:
            continue
        _header(category.capitalize())
        for p in products:
            star = "*" if p["highlight"] else " "
            print(f" {star}{p['id']:<20} {p['name']:<36} {p['rate']}")
    if data.get("highlighted"):
        print(f"\n  * Featured: {', '.join(data['highlighted'])}")


# ── Commands ─────────────────────────────────────────────────────────────────

def cmd_flip(args: argparse.Namespace) -> dict:
    req = flip_request_from_args(args)
    if args.api:
        return _call_api(args.api, "POST", "/api/v1/flip/evaluate", req.model_dump(mode="json"))
    return run_flip(req, settings).model_dump(mode="json")


def cmd_loan(args: argparse.Namespace) -> dict:
    req = loan_request_from_args(args)
    if args.api:
        return _call_api(args.api, "POST", "/api/v1/lending/calculate", req.model_dump(mode="json"))
    return run_quote(req, get_catalog(), settings).model_dump(mode="json")


def cmd_products(args: argparse.Namespace) -> dict:
    if args.api:
        return _call_api(args.api, "GET", "/api/v1/lending/products")
    return products_response(get_catalog()).model_dump(mode="json")


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--api", help="Post to a running API (e.g. http://localhost:8000) instead of computing locally")
    common.add_argument("--json", action="store_true", help="Print raw JSON instead of a report")

    parser = argparse.ArgumentParser(description="Fix-and-flip and loan underwriting calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    flip = sub.add_parser("flip", parents=[common], help="Evaluate a fix-and-flip deal")
    flip.add_argument("--file", help="JSON deal file (same shape as the API request)")
    flip.add_argument("--address", default="", help="Property address")
    flip.add_argument("--sqft", type=Decimal, default=Decimal("0"), help="Square footage")
    flip.add_argument("--arv", type=Decimal, default=Decimal("0"), help="After repair value")
    flip.add_argument("--purchase", type=Decimal, default=Decimal("0"), help="Purchase price")
    flip.add_argument("--repair", type=Decimal, default=Decimal("0"), help="Repair cost")
    flip.add_argument("--hold-months", type=int, help=f"Hold period (default: {settings.default_hold_months})")
    flip.add_argument("--loan-amount", type=Decimal, help="Loan principal in dollars")
    flip.add_argument("--loan-pct", type=Decimal, help="Loan as percent of purchase + repair")
    flip.add_argument("--loan-rate", type=Decimal, default=Decimal("0"), help="Annual rate, percent")
    flip.add_argument("--loan-points", type=Decimal, default=Decimal("0"), help="Points, percent of principal")
    flip.add_argument("--origination", type=Decimal, default=Decimal("0"), help="Origination fee")
    flip.add_argument("--taxes", type=Decimal, default=Decimal("0"), help="Annual property taxes")
    flip.add_argument("--insurance", type=Decimal, default=Decimal("0"), help="Monthly vacant insurance")
    flip.add_argument("--utilities", type=Decimal, default=Decimal("0"), help="Monthly utilities")
    flip.add_argument("--closing", type=Decimal, default=Decimal("0"), help="Buying escrow/attorney fees")
    flip.add_argument("--realtor-pct", type=Decimal, default=Decimal("0"), help="Realtor fee, percent of ARV")
    flip.set_defaults(func=cmd_flip, report=print_flip_report)

    loan = sub.add_parser("loan", parents=[common], help="Quote a loan product")
    loan.add_argument("product_id", help="Loan product id, e.g. dscr or fix_flip")
    loan.add_argument("--amount", type=Decimal, required=True, help="Loan amount")
    loan.add_argument("--value", type=Decimal, default=Decimal("0"), help="Property value")
    loan.add_argument("--credit", type=int, help=f"Credit score (default: {settings.default_credit_score})")
    loan.add_argument("--term", type=int, help="Term in the product's unit")
    loan.add_argument("--rent", type=Decimal, default=Decimal("0"), help="Monthly rent")
    loan.add_argument("--expenses", type=Decimal, default=Decimal("0"), help="Monthly expenses")
    loan.add_argument("--purchase", type=Decimal, default=Decimal("0"), help="Purchase price")
    loan.add_argument("--rehab", type=Decimal, default=Decimal("0"), help="Rehab budget")
    loan.add_argument("--arv", type=Decimal, default=Decimal("0"), help="After repair value")
    loan.set_defaults(func=cmd_loan, report=print_loan_report)

    products = sub.add_parser("products", parents=[common], help="List loan products")
    products.set_defaults(func=cmd_products, report=print_products)
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level.upper())
    args = build_parser().parse_args(argv)

    try:
        data = args.func(args)
    except UnknownLoanProduct as e:
        print(f"Error: Invalid loan type {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except InvalidDealInput as e:
        print("Error: invalid input", file=sys.stderr)
        for problem in e.problems:
            print(f"  {problem}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except ApiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_API_ERROR

    if args.json:
        print(json.dumps(data, indent=2))
    else:
        args.report(data)
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
