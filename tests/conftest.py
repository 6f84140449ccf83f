"""Canonical test fixtures shared by the engine, API and CLI tests.

Fixture deal: $100K all-cash purchase, $3K closing, $30K rehab over 2 months,
$1,800/mo rent, refinanced in month 3 at 75% of a $200K ARV.
"""

import pytest
from decimal import Decimal

from brrrr.models.acquisition import PropertyAcquisition, LoanTerms
from brrrr.models.events import RefinanceEvent
from brrrr.models.operation import PropertyOperation
from brrrr.models.projection import ProjectionConfig


@pytest.fixture
def canonical_operation() -> PropertyOperation:
    """$1,800/mo single-family rental."""
    return PropertyOperation(
        monthly_rent=Decimal("1800"),
        other_monthly_income=Decimal("0"),
        annual_property_tax=Decimal("2400"),
        annual_insurance=Decimal("1200"),
        monthly_maintenance=Decimal("100"),
        property_management_pct=Decimal("8"),
        monthly_utilities=Decimal("0"),
        vacancy_rate_pct=Decimal("5"),
        other_monthly_expenses=Decimal("0"),
    )


@pytest.fixture
def cash_acquisition() -> PropertyAcquisition:
    """All-cash purchase: $133K total invested."""
    return PropertyAcquisition(
        purchase_price=Decimal("100000"),
        closing_costs=Decimal("3000"),
        rehab_costs=Decimal("30000"),
        rehab_duration_months=2,
    )


@pytest.fixture
def full_recovery_refinance() -> RefinanceEvent:
    """$150K loan, $146K net of closing costs: recovers the full $133K."""
    return RefinanceEvent(
        month=3,
        after_repair_value=Decimal("200000"),
        ltv=Decimal("0.75"),
        annual_rate=Decimal("0.05"),
        term_years=30,
        closing_costs=Decimal("4000"),
    )


@pytest.fixture
def brrrr_config(cash_acquisition, canonical_operation, full_recovery_refinance) -> ProjectionConfig:
    return ProjectionConfig(
        acquisition=cash_acquisition,
        operation=canonical_operation,
        projection_months=60,
        refinance_event=full_recovery_refinance,
    )


@pytest.fixture
def rental_config(cash_acquisition, canonical_operation) -> ProjectionConfig:
    """Same deal, held without a refinance."""
    return ProjectionConfig(
        acquisition=cash_acquisition,
        operation=canonical_operation,
        projection_months=60,
    )


@pytest.fixture
def leveraged_acquisition() -> PropertyAcquisition:
    """$80K purchase loan at 6%: $53K cash invested."""
    return PropertyAcquisition(
        purchase_price=Decimal("100000"),
        closing_costs=Decimal("3000"),
        rehab_costs=Decimal("30000"),
        rehab_duration_months=2,
        purchase_loan=LoanTerms(
            amount=Decimal("80000"),
            annual_rate=Decimal("0.06"),
            term_years=30,
        ),
    )


@pytest.fixture
def leveraged_operation() -> PropertyOperation:
    return PropertyOperation(
        monthly_rent=Decimal("1500"),
        annual_property_tax=Decimal("1800"),
        annual_insurance=Decimal("1200"),
        monthly_maintenance=Decimal("100"),
        property_management_pct=Decimal("10"),
        vacancy_rate_pct=Decimal("5"),
        other_monthly_expenses=Decimal("50"),
    )


@pytest.fixture
def projection_payload() -> dict:
    """JSON body for the projection endpoint and the CLI (same deal as brrrr_config)."""
    return {
        "acquisition": {
            "purchase_price": 100000,
            "closing_costs": 3000,
            "rehab_costs": 30000,
            "rehab_duration_months": 2,
        },
        "operation": {
            "monthly_rent": 1800,
            "annual_property_tax": 2400,
            "annual_insurance": 1200,
            "monthly_maintenance": 100,
            "property_management_pct": 8,
            "vacancy_rate_pct": 5,
        },
        "projection_months": 60,
        "refinance_event": {
            "month": 3,
            "after_repair_value": 200000,
            "ltv": "0.75",
            "annual_rate": "0.05",
            "term_years": 30,
            "closing_costs": 4000,
        },
    }
