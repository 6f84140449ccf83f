from decimal import Decimal

from brrrr.engine.capex import replacement_due_month, total_monthly_reserve
from brrrr.models.events import CapitalExpenseEvent

ROOF = CapitalExpenseEvent(component="Roof", lifespan_years=15, replacement_cost=Decimal("9000"))
HVAC = CapitalExpenseEvent(component="HVAC", lifespan_years=20, replacement_cost=Decimal("7200"))


class TestReserves:
    def test_monthly_reserve(self):
        assert ROOF.monthly_reserve == Decimal("50.00")
        assert HVAC.monthly_reserve == Decimal("30.00")

    def test_total(self):
        assert total_monthly_reserve([ROOF, HVAC]) == Decimal("80.00")

    def test_empty(self):
        assert total_monthly_reserve([]) == Decimal("0")


class TestReplacementDue:
    def test_new_component(self):
        assert replacement_due_month(ROOF) == 180

    def test_aged_component(self):
        aged = CapitalExpenseEvent("Roof", 15, Decimal("9000"), age_at_start_years=10)
        assert replacement_due_month(aged) == 60

    def test_past_lifespan_due_immediately(self):
        worn = CapitalExpenseEvent("Water heater", 10, Decimal("1500"), age_at_start_years=12)
        assert replacement_due_month(worn) == 1
