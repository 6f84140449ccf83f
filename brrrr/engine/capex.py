"""Capital expense reserves for building components (roof, HVAC, ...)."""

from decimal import Decimal
from typing import Iterable

from brrrr.models.events import CapitalExpenseEvent


def total_monthly_reserve(components: Iterable[CapitalExpenseEvent]) -> Decimal:
    return sum((c.monthly_reserve for c in components), Decimal("0"))


def replacement_due_month(component: CapitalExpenseEvent) -> int:
    """Projection month in which the component reaches the end of its life.

    A component already at or past its lifespan is due in month 1.
    """
    remaining_months = (component.lifespan_years - component.age_at_start_years) * 12
    return max(1, remaining_months)
