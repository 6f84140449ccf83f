from decimal import Decimal

import pytest

from brrrr.engine.refinance import calculate_refinance, minimum_arv, max_purchase_price
from brrrr.errors import DomainError


class TestCalculateRefinance:
    def test_full_recovery(self):
        outcome = calculate_refinance(
            arv=Decimal("200000"),
            total_investment=Decimal("140000"),
            ltv=Decimal("0.75"),
            annual_rate=Decimal("0.05"),
            term_years=30,
            closing_costs=Decimal("4000"),
        )
        assert outcome.new_loan_amount == Decimal("150000")
        assert outcome.cash_recouped == Decimal("146000")
        assert outcome.remaining_investment == Decimal("0")
        assert outcome.is_successful
        assert outcome.new_monthly_payment == Decimal("805.23")

    def test_partial_recovery(self):
        outcome = calculate_refinance(
            Decimal("160000"), Decimal("133000"), Decimal("0.75"),
            Decimal("0.055"), 30, Decimal("3500"),
        )
        assert outcome.new_loan_amount == Decimal("120000")
        assert outcome.cash_recouped == Decimal("116500")
        assert outcome.remaining_investment == Decimal("16500")
        assert not outcome.is_successful

    def test_loan_amount_floored(self):
        outcome = calculate_refinance(
            Decimal("100001"), Decimal("50000"), Decimal("0.75"), Decimal("0.05"), 30, Decimal("0"),
        )
        assert outcome.new_loan_amount == Decimal("75000")

    def test_remaining_never_negative(self):
        outcome = calculate_refinance(
            Decimal("1000000"), Decimal("10000"), Decimal("0.8"), Decimal("0.05"), 30, Decimal("0"),
        )
        assert outcome.remaining_investment == Decimal("0")
        assert outcome.is_successful

    def test_invalid_ltv(self):
        with pytest.raises(DomainError):
            calculate_refinance(
                Decimal("200000"), Decimal("100000"), Decimal("1.5"), Decimal("0.05"), 30, Decimal("0"),
            )


class TestMinimumARV:
    def test_rounds_up(self):
        assert minimum_arv(Decimal("100000"), Decimal("0.70"), Decimal("3000")) == Decimal("147143")

    def test_feeds_back_into_refinance(self):
        """Refinancing at the minimum ARV recovers everything."""
        arv = minimum_arv(Decimal("133000"), Decimal("0.75"), Decimal("4000"))
        outcome = calculate_refinance(
            arv, Decimal("133000"), Decimal("0.75"), Decimal("0.05"), 30, Decimal("4000"),
        )
        assert outcome.remaining_investment == Decimal("0")


class TestMaxPurchasePrice:
    def test_infeasible_clamps_to_zero(self):
        price = max_purchase_price(
            Decimal("100000"), Decimal("90000"), Decimal("0.70"), Decimal("3000"),
        )
        assert price == Decimal("0")

    def test_feasible_deal(self):
        price = max_purchase_price(
            Decimal("200000"), Decimal("30000"), Decimal("0.75"), Decimal("4000"),
        )
        assert price == Decimal("116000")

    def test_cash_buffer(self):
        price = max_purchase_price(
            Decimal("200000"), Decimal("30000"), Decimal("0.75"), Decimal("4000"),
            cash_buffer=Decimal("5000"),
        )
        assert price == Decimal("111000")
