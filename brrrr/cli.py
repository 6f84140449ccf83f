"""Command-line projection report: reads a deal config JSON and prints a terminal report.

Usage:
    brrrr-projection deal.json
    brrrr-projection deal.json --months 120 --every 6
"""

import argparse
import json
import logging
import sys
from decimal import Decimal
from typing import Optional

from pydantic import ValidationError

from brrrr.api.routes.projection import build_config
from brrrr.api.schemas import ProjectionRequest
from brrrr.config import settings
from brrrr.engine.projection import generate_projection
from brrrr.errors import DomainError
from brrrr.models.projection import ProjectionResult


# ── Helpers ──────────────────────────────────────────────────────────────────

def _pct(v: Decimal) -> str:
    """Format a decimal as a percentage string."""
    if v.is_nan():
        return "n/a"
    return f"{float(v) * 100:.2f}%"


def _dollar(v: Decimal) -> str:
    return f"${float(v):,.0f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_summary(result: ProjectionResult) -> None:
    s = result.summary
    _header("Deal Summary")
    print(f"  Total Investment:     {_dollar(s.total_investment)}")
    print(f"  Remaining Investment: {_dollar(s.remaining_investment)}")
    print(f"  Successful BRRRR:     {'yes' if s.successful_brrrr else 'no'}")
    print(f"  Avg Cash Flow / Mo:   {_dollar(s.average_monthly_cash_flow)}")
    print(f"  Cash-on-Cash:         {_pct(s.cash_on_cash_return)}")
    print(f"  IRR (monthly):        {_pct(s.internal_rate_of_return)}")
    print(f"  IRR (annualized):     {_pct(s.annualized_irr)}")
    print(f"  ROI:                  {_pct(s.return_on_investment)}")
    print(f"  Final Value:          {_dollar(s.final_property_value)}")
    print(f"  Final Equity:         {_dollar(s.final_equity)}")


def print_snapshot_table(result: ProjectionResult, every: int) -> None:
    _header("Monthly Projection")
    print(
        f"  {'Mo':>3}  {'Value':>10}  {'Loan':>10}  {'Equity':>10}  "
        f"{'Cash Flow':>9}  {'Remaining':>10}  {'CoC':>7}  Events"
    )
    print(f"  {'---':>3}  {'-' * 10}  {'-' * 10}  {'-' * 10}  {'-' * 9}  {'-' * 10}  {'-' * 7}  ------")
    for snap in result.monthly_snapshots:
        if snap.month % every and not snap.event_description and snap.month != 1:
            continue
        print(
            f"  {snap.month:>3}  {_dollar(snap.property_value):>10}  "
            f"{_dollar(snap.loan_balance):>10}  {_dollar(snap.equity):>10}  "
            f"{_dollar(snap.cash_flow):>9}  {_dollar(snap.remaining_investment):>10}  "
            f"{_pct(snap.cash_on_cash):>7}  {snap.event_description}"
        )


# ── Main ─────────────────────────────────────────────────────────────────────

def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Project a BRRRR deal month by month")
    parser.add_argument("config", help="Path to a deal config JSON file")
    parser.add_argument("--months", type=int, help="Override the projection horizon")
    parser.add_argument(
        "--every", type=int, default=12,
        help="Print every Nth month plus months with events (default: 12)",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper())

    try:
        with open(args.config, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: Could not read {args.config}: {e}", file=sys.stderr)
        return 1

    if args.months is not None:
        payload["projection_months"] = args.months

    try:
        req = ProjectionRequest.model_validate(payload)
        result = generate_projection(build_config(req))
    except ValidationError as e:
        print(f"Error: Invalid deal config\n{e}", file=sys.stderr)
        return 1
    except DomainError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_summary(result)
    print_snapshot_table(result, max(1, args.every))
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
