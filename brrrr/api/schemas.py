"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from brrrr.config import settings
from brrrr.models.operation import ExpenseCategory


# ---- Request schemas ----

class LoanTermsRequest(BaseModel):
    amount: Decimal = Field(..., ge=0)
    annual_rate: Decimal = Field(..., ge=0, description="Annual rate, e.g. 0.07")
    term_years: int = Field(30, gt=0)


class HoldingCostFlagsRequest(BaseModel):
    mortgage: bool = True
    taxes: bool = True
    insurance: bool = True
    maintenance: bool = False
    property_management: bool = False
    utilities: bool = True
    other: bool = False


class AcquisitionRequest(BaseModel):
    purchase_price: Decimal = Field(..., gt=0)
    closing_costs: Decimal = Field(Decimal("0"), ge=0)
    other_initial_costs: Decimal = Field(Decimal("0"), ge=0)
    rehab_costs: Decimal = Field(Decimal("0"), ge=0)
    rehab_duration_months: int = Field(0, ge=0)
    purchase_loan: LoanTermsRequest | None = Field(None, description="Omit for an all-cash purchase")
    include_holding_costs: HoldingCostFlagsRequest = Field(default_factory=HoldingCostFlagsRequest)
    use_custom_holding_cost: bool = False
    custom_monthly_holding_cost: Decimal | None = Field(None, ge=0)


class OperationRequest(BaseModel):
    monthly_rent: Decimal = Field(Decimal("0"), ge=0)
    other_monthly_income: Decimal = Field(Decimal("0"), ge=0)
    annual_property_tax: Decimal = Field(Decimal("0"), ge=0)
    annual_insurance: Decimal = Field(Decimal("0"), ge=0)
    monthly_maintenance: Decimal = Field(Decimal("0"), ge=0)
    property_management_pct: Decimal = Field(Decimal("0"), ge=0, le=100)
    monthly_utilities: Decimal = Field(Decimal("0"), ge=0)
    vacancy_rate_pct: Decimal = Field(Decimal("0"), ge=0, le=100)
    other_monthly_expenses: Decimal = Field(Decimal("0"), ge=0)


class RefinanceEventRequest(BaseModel):
    month: int = Field(..., ge=1)
    after_repair_value: Decimal = Field(..., ge=0)
    ltv: Decimal = Field(Decimal("0.75"), gt=0, le=1)
    annual_rate: Decimal = Field(Decimal("0.07"), ge=0)
    term_years: int = Field(30, gt=0)
    closing_costs: Decimal = Field(Decimal("0"), ge=0)


class PropertyValueChangeRequest(BaseModel):
    month: int = Field(..., ge=1)
    new_value: Decimal = Field(..., ge=0)


class RentChangeRequest(BaseModel):
    month: int = Field(..., ge=1)
    new_rent: Decimal = Field(..., ge=0)


class ExpenseChangeRequest(BaseModel):
    month: int = Field(..., ge=1)
    category: ExpenseCategory
    new_amount: Decimal = Field(..., ge=0, description="New monthly amount")


class CapitalExpenseRequest(BaseModel):
    component: str
    lifespan_years: int = Field(..., gt=0)
    replacement_cost: Decimal = Field(..., ge=0)
    age_at_start_years: int = Field(0, ge=0)


class ProjectionRequest(BaseModel):
    acquisition: AcquisitionRequest
    operation: OperationRequest = Field(default_factory=OperationRequest)
    projection_months: int = Field(settings.default_projection_months, gt=0, le=600)
    refinance_event: RefinanceEventRequest | None = None
    property_value_changes: list[PropertyValueChangeRequest] = []
    rent_change_events: list[RentChangeRequest] = []
    expense_change_events: list[ExpenseChangeRequest] = []
    capital_expense_events: list[CapitalExpenseRequest] = []
    annual_appreciation_rate: Decimal | None = Field(None, gt=-1)
    annual_rent_growth_rate: Decimal | None = Field(None, gt=-1)
    annual_expense_appreciation_rate: Decimal | None = Field(None, gt=-1)


class RefinanceRequest(BaseModel):
    after_repair_value: Decimal = Field(..., ge=0)
    total_investment: Decimal = Field(..., ge=0)
    ltv: Decimal = Field(Decimal("0.75"), gt=0, le=1)
    annual_rate: Decimal = Field(Decimal("0.07"), ge=0)
    term_years: int = Field(30, gt=0)
    closing_costs: Decimal = Field(Decimal("0"), ge=0)


class RefinanceTargetsRequest(BaseModel):
    """Inputs for the break-even ARV and the maximum purchase price."""
    total_investment: Decimal = Field(..., ge=0)
    after_repair_value: Decimal = Field(..., ge=0)
    rehab_costs: Decimal = Field(Decimal("0"), ge=0)
    ltv: Decimal = Field(Decimal("0.75"), gt=0, le=1)
    closing_costs: Decimal = Field(Decimal("0"), ge=0)
    cash_buffer: Decimal = Field(Decimal("0"), ge=0)


class QuickCheckRequest(BaseModel):
    purchase_price: Decimal = Field(..., gt=0)
    monthly_rent: Decimal = Field(..., ge=0)
    mortgage_payment: Decimal = Field(Decimal("0"), ge=0)
    monthly_operating_expenses: Decimal | None = Field(None, ge=0)


# ---- Response schemas ----

class MonthlySnapshotResponse(BaseModel):
    month: int
    property_value: Decimal
    loan_balance: Decimal
    equity: Decimal
    remaining_investment: Decimal
    rent: Decimal
    other_income: Decimal
    total_expenses: Decimal
    cash_flow: Decimal
    refinance_proceeds: Decimal
    total_cash_flow: Decimal
    cash_on_cash: Decimal
    annualized_return: Decimal | None = Field(None, description="Annual rate to date; null when above the solver limit")
    event_description: str = ""


class ProjectionSummaryResponse(BaseModel):
    total_investment: Decimal
    remaining_investment: Decimal
    total_cash_flow: Decimal
    cash_on_cash_return: Decimal
    internal_rate_of_return: Decimal | None = Field(None, description="Monthly IRR; null when no solution")
    annualized_irr: Decimal | None = None
    final_property_value: Decimal
    final_equity: Decimal
    final_loan_balance: Decimal
    total_appreciation: Decimal
    average_monthly_cash_flow: Decimal
    return_on_investment: Decimal
    successful_brrrr: bool


class ProjectionResponse(BaseModel):
    monthly_snapshots: list[MonthlySnapshotResponse]
    summary: ProjectionSummaryResponse


class RefinanceResponse(BaseModel):
    new_loan_amount: Decimal
    new_monthly_payment: Decimal
    cash_recouped: Decimal
    remaining_investment: Decimal
    is_successful: bool


class RefinanceTargetsResponse(BaseModel):
    minimum_arv: Decimal
    max_purchase_price: Decimal


class QuickCheckResponse(BaseModel):
    meets_one_percent_rule: bool
    fifty_percent_rule_cash_flow: Decimal
    gross_rent_multiplier: Decimal | None = None
    expense_ratio: Decimal | None = None
