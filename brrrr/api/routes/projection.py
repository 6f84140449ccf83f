"""Projection and refinance planning routes."""

from decimal import Decimal

from fastapi import APIRouter, HTTPException

from brrrr.api.schemas import (
    ProjectionRequest,
    ProjectionResponse,
    MonthlySnapshotResponse,
    ProjectionSummaryResponse,
    RefinanceRequest,
    RefinanceResponse,
    RefinanceTargetsRequest,
    RefinanceTargetsResponse,
    QuickCheckRequest,
    QuickCheckResponse,
)
from brrrr.errors import DomainError
from brrrr.models.acquisition import HoldingCostFlags, LoanTerms, PropertyAcquisition
from brrrr.models.events import (
    CapitalExpenseEvent,
    ExpenseChangeEvent,
    PropertyValueChangeEvent,
    RefinanceEvent,
    RentChangeEvent,
)
from brrrr.models.operation import PropertyOperation
from brrrr.models.projection import ProjectionConfig, ProjectionResult
from brrrr.engine.projection import generate_projection
from brrrr.engine.refinance import calculate_refinance, minimum_arv, max_purchase_price
from brrrr.engine.cashflow import (
    estimate_with_fifty_percent_rule,
    expense_ratio,
    meets_one_percent_rule,
)
from brrrr.engine.metrics import gross_rent_multiplier

router = APIRouter(prefix="/api/v1", tags=["projection"])


def build_config(req: ProjectionRequest) -> ProjectionConfig:
    """Convert a projection request into the engine's config."""
    acq = req.acquisition
    loan = None
    if acq.purchase_loan is not None:
        loan = LoanTerms(
            amount=acq.purchase_loan.amount,
            annual_rate=acq.purchase_loan.annual_rate,
            term_years=acq.purchase_loan.term_years,
        )
    refi = None
    if req.refinance_event is not None:
        refi = RefinanceEvent(**req.refinance_event.model_dump())

    return ProjectionConfig(
        acquisition=PropertyAcquisition(
            purchase_price=acq.purchase_price,
            closing_costs=acq.closing_costs,
            other_initial_costs=acq.other_initial_costs,
            rehab_costs=acq.rehab_costs,
            rehab_duration_months=acq.rehab_duration_months,
            purchase_loan=loan,
            include_holding_costs=HoldingCostFlags(**acq.include_holding_costs.model_dump()),
            use_custom_holding_cost=acq.use_custom_holding_cost,
            custom_monthly_holding_cost=acq.custom_monthly_holding_cost,
        ),
        operation=PropertyOperation(**req.operation.model_dump()),
        projection_months=req.projection_months,
        refinance_event=refi,
        property_value_changes=tuple(
            PropertyValueChangeEvent(month=e.month, new_value=e.new_value)
            for e in req.property_value_changes
        ),
        rent_change_events=tuple(
            RentChangeEvent(month=e.month, new_rent=e.new_rent) for e in req.rent_change_events
        ),
        expense_change_events=tuple(
            ExpenseChangeEvent(month=e.month, category=e.category, new_amount=e.new_amount)
            for e in req.expense_change_events
        ),
        capital_expense_events=tuple(
            CapitalExpenseEvent(**e.model_dump()) for e in req.capital_expense_events
        ),
        annual_appreciation_rate=req.annual_appreciation_rate,
        annual_rent_growth_rate=req.annual_rent_growth_rate,
        annual_expense_appreciation_rate=req.annual_expense_appreciation_rate,
    )


def _finite(value: Decimal) -> Decimal | None:
    return None if value.is_nan() else value


def _result_to_response(result: ProjectionResult) -> ProjectionResponse:
    """Convert engine ProjectionResult to API response."""
    snapshots = [
        MonthlySnapshotResponse(
            month=s.month,
            property_value=s.property_value,
            loan_balance=s.loan_balance,
            equity=s.equity,
            remaining_investment=s.remaining_investment,
            rent=s.income.rent,
            other_income=s.income.other_income,
            total_expenses=s.expenses.total,
            cash_flow=s.cash_flow,
            refinance_proceeds=s.refinance_proceeds,
            total_cash_flow=s.total_cash_flow,
            cash_on_cash=s.cash_on_cash,
            annualized_return=_finite(s.annualized_return),
            event_description=s.event_description,
        )
        for s in result.monthly_snapshots
    ]
    sm = result.summary
    summary = ProjectionSummaryResponse(
        total_investment=sm.total_investment,
        remaining_investment=sm.remaining_investment,
        total_cash_flow=sm.total_cash_flow,
        cash_on_cash_return=sm.cash_on_cash_return,
        internal_rate_of_return=_finite(sm.internal_rate_of_return),
        annualized_irr=_finite(sm.annualized_irr),
        final_property_value=sm.final_property_value,
        final_equity=sm.final_equity,
        final_loan_balance=sm.final_loan_balance,
        total_appreciation=sm.total_appreciation,
        average_monthly_cash_flow=sm.average_monthly_cash_flow,
        return_on_investment=sm.return_on_investment,
        successful_brrrr=sm.successful_brrrr,
    )
    return ProjectionResponse(monthly_snapshots=snapshots, summary=summary)


@router.post("/projection", response_model=ProjectionResponse)
async def run_projection(req: ProjectionRequest):
    """Month-by-month projection of a deal."""
    try:
        result = generate_projection(build_config(req))
    except DomainError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _result_to_response(result)


@router.post("/refinance", response_model=RefinanceResponse)
async def run_refinance(req: RefinanceRequest):
    try:
        outcome = calculate_refinance(
            arv=req.after_repair_value,
            total_investment=req.total_investment,
            ltv=req.ltv,
            annual_rate=req.annual_rate,
            term_years=req.term_years,
            closing_costs=req.closing_costs,
        )
    except DomainError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return RefinanceResponse(
        new_loan_amount=outcome.new_loan_amount,
        new_monthly_payment=outcome.new_monthly_payment,
        cash_recouped=outcome.cash_recouped,
        remaining_investment=outcome.remaining_investment,
        is_successful=outcome.is_successful,
    )


@router.post("/refinance/targets", response_model=RefinanceTargetsResponse)
async def refinance_targets(req: RefinanceTargetsRequest):
    """Break-even ARV for the investment and the highest workable purchase price."""
    return RefinanceTargetsResponse(
        minimum_arv=minimum_arv(req.total_investment, req.ltv, req.closing_costs),
        max_purchase_price=max_purchase_price(
            arv=req.after_repair_value,
            rehab_costs=req.rehab_costs,
            ltv=req.ltv,
            closing_costs=req.closing_costs,
            cash_buffer=req.cash_buffer,
        ),
    )


@router.post("/quick-check", response_model=QuickCheckResponse)
async def quick_check(req: QuickCheckRequest):
    """Rule-of-thumb screens: 1% rule, 50% rule, GRM, expense ratio."""
    grm = None
    ratio = None
    if req.monthly_rent > 0:
        grm = gross_rent_multiplier(req.purchase_price, req.monthly_rent * 12)
        if req.monthly_operating_expenses is not None:
            ratio = expense_ratio(req.monthly_operating_expenses, req.monthly_rent)
    return QuickCheckResponse(
        meets_one_percent_rule=meets_one_percent_rule(req.monthly_rent, req.purchase_price),
        fifty_percent_rule_cash_flow=estimate_with_fifty_percent_rule(
            req.monthly_rent, req.mortgage_payment
        ),
        gross_rent_multiplier=grm,
        expense_ratio=ratio,
    )
