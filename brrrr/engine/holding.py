"""Holding costs carried while the property is being rehabbed.

Pure function: acquisition + current expense levels in, MonthlyExpenses out.
"""

from decimal import Decimal, ROUND_HALF_UP

from brrrr.config import settings
from brrrr.models.acquisition import PropertyAcquisition
from brrrr.models.operation import MonthlyExpenses

TWO_PLACES = Decimal("0.01")


def _level_or_estimate(level: Decimal, estimate: Decimal) -> Decimal:
    if level > 0:
        return level
    return estimate.quantize(TWO_PLACES, ROUND_HALF_UP)


def rehab_holding_expenses(
    acquisition: PropertyAcquisition,
    levels: MonthlyExpenses,
) -> MonthlyExpenses:
    """Expenses for one rehab month.

    Only categories flagged in `include_holding_costs` accrue. Each uses the
    current operating level when it is positive, otherwise the configured
    estimate. A flat custom holding cost replaces the breakdown and is
    reported under other expenses.
    """
    if acquisition.use_custom_holding_cost and acquisition.custom_monthly_holding_cost is not None:
        return MonthlyExpenses(other_expenses=acquisition.custom_monthly_holding_cost)

    flags = acquisition.include_holding_costs
    price = acquisition.purchase_price
    zero = Decimal("0")

    return MonthlyExpenses(
        mortgage=levels.mortgage if flags.mortgage else zero,
        taxes=_level_or_estimate(levels.taxes, price * settings.holding_tax_rate / 12)
        if flags.taxes else zero,
        insurance=_level_or_estimate(levels.insurance, price * settings.holding_insurance_rate / 12)
        if flags.insurance else zero,
        maintenance=_level_or_estimate(levels.maintenance, settings.holding_maintenance)
        if flags.maintenance else zero,
        property_management=_level_or_estimate(levels.property_management, settings.holding_management)
        if flags.property_management else zero,
        utilities=_level_or_estimate(levels.utilities, settings.holding_utilities)
        if flags.utilities else zero,
        other_expenses=_level_or_estimate(levels.other_expenses, settings.holding_other)
        if flags.other else zero,
    )
