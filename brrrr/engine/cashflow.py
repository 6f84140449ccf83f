"""Cash flow calculator: monthly cash flow, cash-on-cash, rules of thumb.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from brrrr.errors import DomainError
from brrrr.models.operation import MonthlyExpenses, MonthlyIncome

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def monthly_cash_flow(income: MonthlyIncome, expenses: MonthlyExpenses) -> Decimal:
    """Net monthly cash flow = total income - total expenses (may be negative)."""
    return (income.total - expenses.total).quantize(TWO_PLACES, ROUND_HALF_UP)


def cash_on_cash_return(annual_cash_flow: Decimal, total_investment: Decimal) -> Decimal:
    """Cash-on-cash return = annual cash flow / total cash invested."""
    if total_investment <= 0:
        raise DomainError("Total investment must be greater than zero")
    return (annual_cash_flow / total_investment).quantize(FOUR_PLACES, ROUND_HALF_UP)


def expense_ratio(total_expenses: Decimal, total_income: Decimal) -> Decimal:
    if total_income <= 0:
        raise DomainError("Total income must be greater than zero")
    return (total_expenses / total_income).quantize(FOUR_PLACES, ROUND_HALF_UP)


def meets_one_percent_rule(monthly_rent: Decimal, purchase_price: Decimal) -> bool:
    """Monthly rent should be at least 1% of the purchase price."""
    return monthly_rent >= purchase_price * Decimal("0.01")


def estimate_with_fifty_percent_rule(rent: Decimal, mortgage_payment: Decimal) -> Decimal:
    """Cash flow assuming operating expenses eat half of the rent."""
    estimated_expenses = rent * Decimal("0.5")
    return (rent - estimated_expenses - mortgage_payment).quantize(TWO_PLACES, ROUND_HALF_UP)
