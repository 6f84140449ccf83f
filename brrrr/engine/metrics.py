"""Investment metrics: ROI, IRR, cap rate, gross rent multiplier.

Pure functions. No I/O. Solvers work in float (numpy/scipy) and hand back Decimal.
"""

import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

import numpy as np
from scipy.optimize import brentq

from brrrr.config import settings
from brrrr.errors import DomainError

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
NAN = Decimal("NaN")

# Bracket for the annualized running return, as annual rates
RETURN_FLOOR = -0.9999
RETURN_CEILING = 100.0
RETURN_CEILING_LIMIT = 1e9


def roi(net_profit: Decimal, total_investment: Decimal) -> Decimal:
    if total_investment <= 0:
        raise DomainError("Total investment must be greater than zero")
    return (net_profit / total_investment).quantize(FOUR_PLACES, ROUND_HALF_UP)


def annualized_roi(net_profit: Decimal, total_investment: Decimal, years: Decimal) -> Decimal:
    """(1 + ROI)^(1/years) - 1."""
    if total_investment <= 0:
        raise DomainError("Total investment must be greater than zero")
    if years <= 0:
        raise DomainError("Years must be greater than zero")
    total = float(roi(net_profit, total_investment))
    if total <= -1:
        return Decimal("-1.0000")
    annualized = (1 + total) ** (1 / float(years)) - 1
    return Decimal(str(annualized)).quantize(FOUR_PLACES, ROUND_HALF_UP)


def npv(cash_flows: Sequence[Decimal], rate: float) -> float:
    """Net present value of periodic cash flows, first flow undiscounted."""
    cf = np.array([float(c) for c in cash_flows])
    periods = np.arange(len(cf))
    return float(np.sum(cf / (1 + rate) ** periods))


def irr(
    cash_flows: Sequence[Decimal],
    max_iterations: Optional[int] = None,
    tolerance: Optional[float] = None,
) -> Decimal:
    """Periodic IRR by Newton-Raphson.

    Returns the rate rounded to 4 places, or Decimal("NaN") when the iteration
    leaves the reals or does not converge (e.g. all-positive flows).

    Raises:
        DomainError: fewer than two cash flows.
    """
    if len(cash_flows) < 2:
        raise DomainError("At least two cash flows are required")
    if max_iterations is None:
        max_iterations = settings.irr_max_iterations
    if tolerance is None:
        tolerance = settings.irr_tolerance

    cf = np.array([float(c) for c in cash_flows])
    periods = np.arange(len(cf))
    rate = settings.irr_initial_guess

    with np.errstate(all="ignore"):
        for _ in range(max_iterations):
            discount = (1 + rate) ** periods
            f_value = float(np.sum(cf / discount))
            f_prime = float(np.sum(-periods * cf / (discount * (1 + rate))))

            if abs(f_value) < tolerance:
                return Decimal(str(rate)).quantize(FOUR_PLACES, ROUND_HALF_UP)

            if f_prime == 0:
                return NAN
            rate = rate - f_value / f_prime
            if not math.isfinite(rate):
                return NAN

    logger.warning("IRR did not converge after %d iterations", max_iterations)
    return NAN


def annualized_return_to_date(cash_flows: Sequence[Decimal]) -> Decimal:
    """Annual rate that zeroes the NPV of monthly cash flows.

    cash_flows[0] is the initial investment (negative); the last flow should
    carry the terminal value. Uses Brent's method with month t discounted at
    (1 + R)^(t/12). The upper bound doubles while the NPV is still positive
    there. Returns 0 when no root is bracketed (e.g. all-negative flows) and
    NaN when the rate is above RETURN_CEILING_LIMIT.
    """
    if len(cash_flows) < 2:
        return Decimal("0")

    cf = np.array([float(c) for c in cash_flows])
    years = np.arange(len(cf)) / 12

    def npv_annual(rate: float) -> float:
        with np.errstate(over="ignore"):
            return float(np.sum(cf / (1 + rate) ** years))

    low = npv_annual(RETURN_FLOOR)
    ceiling = RETURN_CEILING
    while low > 0 and npv_annual(ceiling) > 0:
        if ceiling >= RETURN_CEILING_LIMIT:
            return NAN
        ceiling *= 2

    try:
        rate = brentq(npv_annual, RETURN_FLOOR, ceiling, xtol=1e-8, maxiter=1000)
    except ValueError:
        # No sign change in range (e.g. all-negative cash flows)
        return Decimal("0")
    return Decimal(str(rate)).quantize(FOUR_PLACES, ROUND_HALF_UP)


def monthly_to_annual_rate(monthly: Decimal) -> Decimal:
    if monthly.is_nan():
        return NAN
    return ((1 + monthly) ** 12 - 1).quantize(FOUR_PLACES, ROUND_HALF_UP)


def cap_rate(noi: Decimal, property_value: Decimal) -> Decimal:
    """Cap rate = annual NOI / property value."""
    if property_value <= 0:
        raise DomainError("Property value must be greater than zero")
    return (noi / property_value).quantize(FOUR_PLACES, ROUND_HALF_UP)


def gross_rent_multiplier(property_value: Decimal, annual_gross_rent: Decimal) -> Decimal:
    if annual_gross_rent <= 0:
        raise DomainError("Annual gross rent must be greater than zero")
    return (property_value / annual_gross_rent).quantize(TWO_PLACES, ROUND_HALF_UP)
