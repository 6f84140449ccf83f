"""Refinance calculator for the BRRRR cash-out step.

Pure functions. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR

from brrrr.engine.mortgage import monthly_payment
from brrrr.errors import DomainError

WHOLE = Decimal("1")


@dataclass(frozen=True)
class RefinanceOutcome:
    new_loan_amount: Decimal
    new_monthly_payment: Decimal
    cash_recouped: Decimal  # Loan proceeds net of closing costs
    remaining_investment: Decimal  # Never negative
    is_successful: bool  # All invested capital recycled


def _check_ltv(ltv: Decimal) -> None:
    if not 0 < ltv <= 1:
        raise DomainError("Refinance LTV must be in (0, 1]")


def calculate_refinance(
    arv: Decimal,
    total_investment: Decimal,
    ltv: Decimal,
    annual_rate: Decimal,
    term_years: int,
    closing_costs: Decimal,
) -> RefinanceOutcome:
    """Cash-out refinance against the after-repair value.

    Over-recoupment is not tracked: remaining investment is clamped at zero.
    """
    _check_ltv(ltv)
    new_loan = (arv * ltv).quantize(WHOLE, ROUND_FLOOR)
    cash_recouped = new_loan - closing_costs
    remaining = max(Decimal("0"), total_investment - cash_recouped)

    return RefinanceOutcome(
        new_loan_amount=new_loan,
        new_monthly_payment=monthly_payment(new_loan, annual_rate, term_years),
        cash_recouped=cash_recouped,
        remaining_investment=remaining,
        is_successful=remaining == 0,
    )


def minimum_arv(total_investment: Decimal, ltv: Decimal, closing_costs: Decimal) -> Decimal:
    """Smallest ARV whose cash-out covers the whole investment.

    ARV * LTV - closing costs >= investment  =>  ARV >= (investment + costs) / LTV
    """
    _check_ltv(ltv)
    return ((total_investment + closing_costs) / ltv).quantize(WHOLE, ROUND_CEILING)


def max_purchase_price(
    arv: Decimal,
    rehab_costs: Decimal,
    ltv: Decimal,
    closing_costs: Decimal,
    cash_buffer: Decimal = Decimal("0"),
) -> Decimal:
    """Highest purchase price the refinance can fully pay back. Never negative."""
    _check_ltv(ltv)
    max_cash_out = arv * ltv - closing_costs
    max_purchase = max_cash_out - cash_buffer - rehab_costs
    return max(Decimal("0"), max_purchase).quantize(WHOLE, ROUND_FLOOR)
