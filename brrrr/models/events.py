"""Scheduled events applied by the projection engine, keyed by trigger month."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from brrrr.models.operation import ExpenseCategory

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class PropertyValueChangeEvent:
    month: int
    new_value: Decimal


@dataclass(frozen=True)
class RentChangeEvent:
    month: int
    new_rent: Decimal


@dataclass(frozen=True)
class ExpenseChangeEvent:
    month: int
    category: ExpenseCategory
    new_amount: Decimal  # New monthly amount


@dataclass(frozen=True)
class CapitalExpenseEvent:
    """A building component budgeted for through a monthly reserve."""
    component: str  # e.g. "Roof", "HVAC"
    lifespan_years: int
    replacement_cost: Decimal
    age_at_start_years: int = 0

    @property
    def monthly_reserve(self) -> Decimal:
        return (self.replacement_cost / (self.lifespan_years * 12)).quantize(
            TWO_PLACES, ROUND_HALF_UP
        )


@dataclass(frozen=True)
class RefinanceEvent:
    month: int  # Must fall after rehab completes
    after_repair_value: Decimal
    ltv: Decimal = Decimal("0.75")
    annual_rate: Decimal = Decimal("0.07")
    term_years: int = 30
    closing_costs: Decimal = Decimal("0")
