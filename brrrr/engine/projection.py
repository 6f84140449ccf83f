"""Projection engine: month-by-month simulation of a BRRRR deal.

Composes the mortgage, cash flow, refinance and metrics calculators into a
list of monthly snapshots plus a summary. Pure computation. No I/O.
Dataclasses in, ProjectionResult out.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from brrrr.errors import DomainError
from brrrr.models.events import ExpenseChangeEvent
from brrrr.models.operation import ExpenseCategory, MonthlyExpenses, MonthlyIncome
from brrrr.models.projection import (
    MonthlySnapshot,
    ProjectionConfig,
    ProjectionResult,
    ProjectionSummary,
)

from brrrr.engine.mortgage import monthly_payment, remaining_balance
from brrrr.engine.cashflow import monthly_cash_flow, cash_on_cash_return
from brrrr.engine.refinance import calculate_refinance
from brrrr.engine.metrics import (
    annualized_return_to_date,
    irr,
    monthly_to_annual_rate,
    roi,
)
from brrrr.engine.holding import rehab_holding_expenses
from brrrr.engine.capex import replacement_due_month, total_monthly_reserve

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
WHOLE = Decimal("1")


@dataclass(frozen=True)
class _ActiveLoan:
    """The loan currently on the property.

    `origin_month` is the last month before the first payment: 0 for the
    purchase loan (the last rehab month when rehab charges no mortgage), the
    month before closing for a refinance loan.
    """
    principal: Decimal
    annual_rate: Decimal
    term_years: int
    origin_month: int
    payment: Decimal

    def payments_made(self, month: int) -> int:
        return max(0, month - self.origin_month)

    def balance(self, month: int) -> Decimal:
        return remaining_balance(
            self.principal, self.annual_rate, self.term_years, self.payments_made(month)
        )

    def payment_due(self, month: int) -> Decimal:
        if self.payments_made(month) > self.term_years * 12:
            return Decimal("0")
        return self.payment


def _dollar(value: Decimal) -> str:
    return f"${value:,.0f}"


def _validate(config: ProjectionConfig) -> None:
    acq = config.acquisition
    if config.projection_months <= 0:
        raise DomainError("Projection months must be greater than zero")
    if acq.purchase_price <= 0:
        raise DomainError("Purchase price must be greater than zero")
    if acq.rehab_duration_months < 0:
        raise DomainError("Rehab duration cannot be negative")
    for name in ("closing_costs", "rehab_costs", "other_initial_costs"):
        if getattr(acq, name) < 0:
            raise DomainError(f"{name} cannot be negative")
    if acq.custom_monthly_holding_cost is not None and acq.custom_monthly_holding_cost < 0:
        raise DomainError("Custom monthly holding cost cannot be negative")
    if acq.purchase_loan is not None:
        if acq.purchase_loan.amount < 0 or acq.purchase_loan.term_years <= 0:
            raise DomainError("Purchase loan needs a non-negative amount and a positive term")
        if acq.purchase_loan.annual_rate < 0:
            raise DomainError("Purchase loan rate cannot be negative")
    if acq.cash_invested <= 0:
        raise DomainError("Total investment must be greater than zero")

    refi = config.refinance_event
    if refi is not None:
        if refi.month <= acq.rehab_duration_months:
            raise DomainError("Refinance must happen after rehab completes")
        if not 0 < refi.ltv <= 1:
            raise DomainError("Refinance LTV must be in (0, 1]")
        if refi.term_years <= 0:
            raise DomainError("Refinance term must be greater than zero")
        if refi.annual_rate < 0:
            raise DomainError("Refinance rate cannot be negative")
        if refi.after_repair_value < 0 or refi.closing_costs < 0:
            raise DomainError("Refinance amounts cannot be negative")

    dated = (
        list(config.property_value_changes)
        + list(config.rent_change_events)
        + list(config.expense_change_events)
    )
    if any(e.month < 1 for e in dated):
        raise DomainError("Scheduled events must fall in month 1 or later")
    for component in config.capital_expense_events:
        if component.lifespan_years <= 0:
            raise DomainError(f"{component.component}: lifespan must be greater than zero")
        if component.replacement_cost < 0 or component.age_at_start_years < 0:
            raise DomainError(f"{component.component}: cost and age cannot be negative")

    for rate in (
        config.annual_appreciation_rate,
        config.annual_rent_growth_rate,
        config.annual_expense_appreciation_rate,
    ):
        if rate is not None and rate <= -1:
            raise DomainError("Annual rates must be greater than -100%")


def _purchase_loan(config: ProjectionConfig) -> Optional[_ActiveLoan]:
    acq = config.acquisition
    terms = acq.purchase_loan
    if terms is None or terms.amount == 0:
        return None
    # Amortization starts with the first month that charges a payment
    custom = acq.use_custom_holding_cost and acq.custom_monthly_holding_cost is not None
    charged_in_rehab = acq.include_holding_costs.mortgage and not custom
    return _ActiveLoan(
        principal=terms.amount,
        annual_rate=terms.annual_rate,
        term_years=terms.term_years,
        origin_month=0 if charged_in_rehab else acq.rehab_duration_months,
        payment=monthly_payment(terms.amount, terms.annual_rate, terms.term_years),
    )


def _grow(value: Decimal, rate: Decimal, places: Decimal) -> Decimal:
    return (value * (1 + rate)).quantize(places, ROUND_HALF_UP)


def generate_projection(config: ProjectionConfig) -> ProjectionResult:
    """Run the month-by-month projection.

    Raises:
        DomainError: the configuration violates an input invariant.
    """
    _validate(config)

    acq = config.acquisition
    op = config.operation
    refi = config.refinance_event
    rehab_months = acq.rehab_duration_months
    cash_invested = acq.cash_invested

    value_events = {e.month: e for e in config.property_value_changes}
    rent_events = {e.month: e for e in config.rent_change_events}
    expense_events: dict[int, list[ExpenseChangeEvent]] = defaultdict(list)
    for e in config.expense_change_events:
        expense_events[e.month].append(e)
    capex_due: dict[int, list[str]] = defaultdict(list)
    for component in config.capital_expense_events:
        capex_due[replacement_due_month(component)].append(component.component)

    # Tracked state
    loan = _purchase_loan(config)
    value = acq.purchase_price
    rent = op.monthly_rent
    levels: dict[ExpenseCategory, Decimal] = {
        ExpenseCategory.TAXES: op.monthly_taxes,
        ExpenseCategory.INSURANCE: op.monthly_insurance,
        ExpenseCategory.MAINTENANCE: op.monthly_maintenance,
        ExpenseCategory.UTILITIES: op.monthly_utilities,
        ExpenseCategory.OTHER: op.other_monthly_expenses,
        ExpenseCategory.CAPITAL_RESERVES: total_monthly_reserve(config.capital_expense_events),
    }
    remaining = cash_invested
    total_cf = Decimal("0")
    flows: list[Decimal] = [-cash_invested]
    snapshots: list[MonthlySnapshot] = []

    for month in range(1, config.projection_months + 1):
        notes: list[str] = []
        in_rehab = month <= rehab_months
        anniversary = month % 12 == 0 and not in_rehab
        proceeds = Decimal("0")
        refinanced = False

        # Refinance: pay off the purchase loan, replace it, recycle capital
        if refi is not None and refi.month == month:
            payoff = loan.balance(month - 1) if loan is not None else Decimal("0")
            outcome = calculate_refinance(
                arv=refi.after_repair_value,
                total_investment=remaining + payoff,
                ltv=refi.ltv,
                annual_rate=refi.annual_rate,
                term_years=refi.term_years,
                closing_costs=refi.closing_costs,
            )
            proceeds = outcome.cash_recouped - payoff
            remaining = outcome.remaining_investment
            loan = None
            if outcome.new_loan_amount > 0:
                loan = _ActiveLoan(
                    principal=outcome.new_loan_amount,
                    annual_rate=refi.annual_rate,
                    term_years=refi.term_years,
                    origin_month=month - 1,
                    payment=outcome.new_monthly_payment,
                )
            value = refi.after_repair_value
            refinanced = True
            notes.append("Refinanced")
            if outcome.is_successful:
                notes.append("All invested capital recovered")
            logger.debug(
                "Month %d refinance: loan %s, payoff %s, proceeds %s, remaining %s",
                month, outcome.new_loan_amount, payoff, proceeds, remaining,
            )

        # Property value
        if month in value_events:
            value = value_events[month].new_value
            notes.append(f"Property value changed to {_dollar(value)}")
        elif anniversary and config.annual_appreciation_rate is not None and not refinanced:
            value = _grow(value, config.annual_appreciation_rate, WHOLE)
            notes.append(f"Property value increased to {_dollar(value)} (annual appreciation)")

        # Rent
        if month in rent_events:
            rent = rent_events[month].new_rent
            notes.append(f"Rent changed to {_dollar(rent)}/mo")
        elif anniversary and config.annual_rent_growth_rate is not None:
            rent = _grow(rent, config.annual_rent_growth_rate, WHOLE)
            notes.append(f"Rent increased to {_dollar(rent)}/mo (annual increase)")

        # Expense levels
        changed: set[ExpenseCategory] = set()
        for e in expense_events.get(month, []):
            levels[e.category] = e.new_amount
            changed.add(e.category)
            notes.append(f"{e.category.value} expense changed to ${e.new_amount:,.2f}")
        if anniversary and config.annual_expense_appreciation_rate is not None:
            growth = config.annual_expense_appreciation_rate
            for category in levels:
                if category not in changed:
                    levels[category] = _grow(levels[category], growth, TWO_PLACES)
            notes.append(f"Operating expenses increased {growth * 100:.1f}% (annual increase)")

        for component in capex_due.get(month, []):
            notes.append(f"{component} replacement due")

        operating = MonthlyExpenses(
            mortgage=loan.payment_due(month) if loan is not None else Decimal("0"),
            taxes=levels[ExpenseCategory.TAXES],
            insurance=levels[ExpenseCategory.INSURANCE],
            maintenance=levels[ExpenseCategory.MAINTENANCE],
            property_management=op.management_fee(rent),
            utilities=levels[ExpenseCategory.UTILITIES],
            vacancy_allowance=op.vacancy_allowance(rent),
            other_expenses=levels[ExpenseCategory.OTHER],
            capital_reserves=levels[ExpenseCategory.CAPITAL_RESERVES],
        )
        if in_rehab:
            income = MonthlyIncome()
            expenses = rehab_holding_expenses(acq, operating)
        else:
            income = MonthlyIncome(rent=rent, other_income=op.other_monthly_income)
            expenses = operating

        cash_flow = monthly_cash_flow(income, expenses)
        total_cf += cash_flow

        balance = loan.balance(month) if loan is not None else Decimal("0")
        equity = value - balance

        if remaining > 0:
            coc = (cash_flow * 12 / remaining).quantize(FOUR_PLACES, ROUND_HALF_UP)
        else:
            coc = Decimal("0")

        flows.append(cash_flow + proceeds)
        annualized = annualized_return_to_date(flows[:-1] + [flows[-1] + equity])

        if month == rehab_months:
            notes.append("Rehab complete")

        snapshots.append(MonthlySnapshot(
            month=month,
            property_value=value,
            loan_balance=balance,
            equity=equity,
            remaining_investment=remaining,
            income=income,
            expenses=expenses,
            cash_flow=cash_flow,
            refinance_proceeds=proceeds,
            total_cash_flow=total_cf,
            cash_on_cash=coc,
            annualized_return=annualized,
            event_description="; ".join(notes),
        ))

    summary = _summarize(config, snapshots, flows)
    logger.info(
        "Generated %d-month projection: IRR %s, remaining investment %s",
        config.projection_months, summary.internal_rate_of_return, summary.remaining_investment,
    )
    return ProjectionResult(monthly_snapshots=tuple(snapshots), summary=summary)


def _summarize(
    config: ProjectionConfig,
    snapshots: list[MonthlySnapshot],
    flows: list[Decimal],
) -> ProjectionSummary:
    """Roll the snapshot list up into summary metrics."""
    total_investment = config.acquisition.cash_invested
    final = snapshots[-1]

    avg_cf = (final.total_cash_flow / len(snapshots)).quantize(TWO_PLACES, ROUND_HALF_UP)
    coc = cash_on_cash_return(avg_cf * 12, total_investment)

    # Sale at horizon: final equity lands with the last month's flow
    irr_flows = list(flows)
    irr_flows[-1] += final.equity
    monthly_irr = irr(irr_flows)

    refinance_proceeds = sum((s.refinance_proceeds for s in snapshots), Decimal("0"))
    net_profit = final.total_cash_flow + refinance_proceeds + final.equity - total_investment

    refi = config.refinance_event
    refinanced = refi is not None and refi.month <= config.projection_months

    return ProjectionSummary(
        total_investment=total_investment,
        remaining_investment=final.remaining_investment,
        total_cash_flow=final.total_cash_flow,
        cash_on_cash_return=coc,
        internal_rate_of_return=monthly_irr,
        annualized_irr=monthly_to_annual_rate(monthly_irr),
        final_property_value=final.property_value,
        final_equity=final.equity,
        final_loan_balance=final.loan_balance,
        total_appreciation=final.property_value - config.acquisition.purchase_price,
        average_monthly_cash_flow=avg_cf,
        return_on_investment=roi(net_profit, total_investment),
        successful_brrrr=refinanced and final.remaining_investment == 0,
    )
