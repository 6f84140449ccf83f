from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from brrrr.models.acquisition import PropertyAcquisition
from brrrr.models.events import (
    CapitalExpenseEvent,
    ExpenseChangeEvent,
    PropertyValueChangeEvent,
    RefinanceEvent,
    RentChangeEvent,
)
from brrrr.models.operation import MonthlyExpenses, MonthlyIncome, PropertyOperation


@dataclass(frozen=True)
class ProjectionConfig:
    acquisition: PropertyAcquisition
    operation: PropertyOperation
    projection_months: int = 60

    # At most one refinance is modeled
    refinance_event: Optional[RefinanceEvent] = None

    # Dated point events
    property_value_changes: tuple[PropertyValueChangeEvent, ...] = ()
    rent_change_events: tuple[RentChangeEvent, ...] = ()
    expense_change_events: tuple[ExpenseChangeEvent, ...] = ()
    capital_expense_events: tuple[CapitalExpenseEvent, ...] = ()

    # Continuous rates, compounded once per 12-month boundary
    annual_appreciation_rate: Optional[Decimal] = None
    annual_rent_growth_rate: Optional[Decimal] = None
    annual_expense_appreciation_rate: Optional[Decimal] = None


@dataclass(frozen=True)
class MonthlySnapshot:
    month: int
    property_value: Decimal
    loan_balance: Decimal
    equity: Decimal  # Value - loan balance
    remaining_investment: Decimal
    income: MonthlyIncome = field(default_factory=MonthlyIncome)
    expenses: MonthlyExpenses = field(default_factory=MonthlyExpenses)
    cash_flow: Decimal = Decimal("0")
    refinance_proceeds: Decimal = Decimal("0")  # Net cash to investor, refinance month only
    total_cash_flow: Decimal = Decimal("0")
    cash_on_cash: Decimal = Decimal("0")  # Annualized single-month yield
    annualized_return: Decimal = Decimal("0")  # NaN when above the solver limit
    event_description: str = ""


@dataclass(frozen=True)
class ProjectionSummary:
    total_investment: Decimal
    remaining_investment: Decimal
    total_cash_flow: Decimal
    cash_on_cash_return: Decimal
    internal_rate_of_return: Decimal  # Monthly rate; NaN when the series has no root
    annualized_irr: Decimal  # (1 + monthly)^12 - 1
    final_property_value: Decimal
    final_equity: Decimal
    final_loan_balance: Decimal
    total_appreciation: Decimal
    average_monthly_cash_flow: Decimal
    return_on_investment: Decimal
    successful_brrrr: bool


@dataclass(frozen=True)
class ProjectionResult:
    monthly_snapshots: tuple[MonthlySnapshot, ...]
    summary: ProjectionSummary
