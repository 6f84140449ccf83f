"""Fixed-rate mortgage math shared by the acquisition and refinance loans.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from brrrr.errors import DomainError

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class AmortizationPayment:
    month: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: list[AmortizationPayment]
    monthly_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal


def _check_terms(principal: Decimal, term_years: int) -> None:
    if term_years <= 0:
        raise DomainError("Loan term must be greater than zero")
    if principal < 0:
        raise DomainError("Loan principal cannot be negative")


def _exact_payment(principal: Decimal, annual_rate: Decimal, term_years: int) -> Decimal:
    n = term_years * 12
    if annual_rate == 0:
        return principal / n
    r = annual_rate / 12
    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    return principal * (r * factor) / (factor - 1)


def monthly_payment(principal: Decimal, annual_rate: Decimal, term_years: int) -> Decimal:
    """Fixed monthly payment, rounded to cents."""
    _check_terms(principal, term_years)
    return _exact_payment(principal, annual_rate, term_years).quantize(TWO_PLACES, ROUND_HALF_UP)


def remaining_balance(
    principal: Decimal,
    annual_rate: Decimal,
    term_years: int,
    payments_made: int,
) -> Decimal:
    """Outstanding balance after `payments_made` scheduled payments.

    Returns the principal before the first payment and 0 once the loan is paid off.
    """
    _check_terms(principal, term_years)
    if payments_made < 0:
        raise DomainError("Payments made cannot be negative")
    n = term_years * 12
    if payments_made >= n:
        return Decimal("0")
    if payments_made == 0:
        return principal.quantize(TWO_PLACES, ROUND_HALF_UP)

    pmt = _exact_payment(principal, annual_rate, term_years)
    if annual_rate == 0:
        balance = principal - pmt * payments_made
    else:
        r = annual_rate / 12
        growth = (1 + r) ** payments_made
        # B_k = P(1+r)^k - PMT * ((1+r)^k - 1) / r
        balance = principal * growth - pmt * (growth - 1) / r
    return max(Decimal("0"), balance).quantize(TWO_PLACES, ROUND_HALF_UP)


def amortization_schedule(
    principal: Decimal,
    annual_rate: Decimal,
    term_years: int,
) -> AmortizationSchedule:
    """Month-by-month split of each payment into principal and interest."""
    pmt = monthly_payment(principal, annual_rate, term_years)
    r = annual_rate / 12

    payments: list[AmortizationPayment] = []
    balance = principal
    total_interest = Decimal("0")
    total_principal = Decimal("0")

    for month in range(1, term_years * 12 + 1):
        interest = (balance * r).quantize(TWO_PLACES, ROUND_HALF_UP)
        principal_paid = pmt - interest

        # Last payment absorbs rounding drift
        if principal_paid > balance or month == term_years * 12:
            principal_paid = balance
            actual_payment = interest + principal_paid
        else:
            actual_payment = pmt

        balance -= principal_paid
        total_interest += interest
        total_principal += principal_paid

        payments.append(AmortizationPayment(
            month=month,
            payment=actual_payment,
            principal=principal_paid,
            interest=interest,
            balance=balance.quantize(TWO_PLACES, ROUND_HALF_UP),
        ))

    return AmortizationSchedule(
        payments=payments,
        monthly_payment=pmt,
        total_interest=total_interest,
        total_principal=total_principal,
    )
