from decimal import Decimal

import pytest

from brrrr.engine.mortgage import monthly_payment, remaining_balance, amortization_schedule
from brrrr.errors import DomainError


class TestMonthlyPayment:
    def test_standard_mortgage(self):
        """$400K loan at 7% for 30 years."""
        pmt = monthly_payment(Decimal("400000"), Decimal("0.07"), 30)
        assert pmt == Decimal("2661.21")

    def test_refinance_loan(self):
        pmt = monthly_payment(Decimal("150000"), Decimal("0.05"), 30)
        assert pmt == Decimal("805.23")

    def test_zero_rate(self):
        pmt = monthly_payment(Decimal("360000"), Decimal("0"), 30)
        assert pmt == Decimal("1000.00")

    def test_zero_principal(self):
        pmt = monthly_payment(Decimal("0"), Decimal("0.07"), 30)
        assert pmt == Decimal("0")

    def test_non_positive_term_rejected(self):
        with pytest.raises(DomainError):
            monthly_payment(Decimal("100000"), Decimal("0.05"), 0)

    def test_negative_principal_rejected(self):
        with pytest.raises(DomainError):
            monthly_payment(Decimal("-1"), Decimal("0.05"), 30)


class TestRemainingBalance:
    @pytest.mark.parametrize("principal,rate,term", [
        (Decimal("400000"), Decimal("0.07"), 30),
        (Decimal("150000"), Decimal("0.05"), 15),
        (Decimal("80000"), Decimal("0"), 10),
    ])
    def test_endpoints(self, principal, rate, term):
        assert remaining_balance(principal, rate, term, 0) == principal
        assert remaining_balance(principal, rate, term, term * 12) == Decimal("0")

    def test_past_term_is_zero(self):
        assert remaining_balance(Decimal("100000"), Decimal("0.05"), 30, 400) == Decimal("0")

    def test_zero_rate_is_linear(self):
        bal = remaining_balance(Decimal("360000"), Decimal("0"), 30, 120)
        assert bal == Decimal("240000.00")

    def test_first_payment(self):
        """First month of $150K at 5%: $625 interest, ~$180.23 principal."""
        bal = remaining_balance(Decimal("150000"), Decimal("0.05"), 30, 1)
        assert abs(bal - Decimal("149819.77")) <= Decimal("0.01")

    def test_balance_decreases(self):
        balances = [
            remaining_balance(Decimal("400000"), Decimal("0.07"), 30, k) for k in range(0, 361, 12)
        ]
        for i in range(1, len(balances)):
            assert balances[i] < balances[i - 1]

    def test_negative_payments_rejected(self):
        with pytest.raises(DomainError):
            remaining_balance(Decimal("100000"), Decimal("0.05"), 30, -1)


class TestAmortizationSchedule:
    def test_payment_count(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("0.07"), 30)
        assert len(schedule.payments) == 360

    def test_first_payment_mostly_interest(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("0.07"), 30)
        first = schedule.payments[0]
        # At 7%, first month interest = 400000 * 0.07/12 = $2,333.33
        assert first.interest == Decimal("2333.33")
        assert first.principal == Decimal("327.88")

    def test_pays_off_in_full(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("0.07"), 30)
        assert schedule.payments[-1].balance == Decimal("0")
        assert schedule.total_principal == Decimal("400000")

    def test_matches_closed_form_balance(self):
        schedule = amortization_schedule(Decimal("150000"), Decimal("0.05"), 30)
        closed_form = remaining_balance(Decimal("150000"), Decimal("0.05"), 30, 60)
        assert abs(schedule.payments[59].balance - closed_form) < Decimal("1.00")
