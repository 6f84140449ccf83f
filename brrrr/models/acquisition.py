from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class LoanTerms:
    amount: Decimal
    annual_rate: Decimal  # e.g. Decimal("0.07")
    term_years: int = 30


@dataclass(frozen=True)
class HoldingCostFlags:
    """Which expense categories accrue while the property is being rehabbed."""
    mortgage: bool = True
    taxes: bool = True
    insurance: bool = True
    maintenance: bool = False
    property_management: bool = False
    utilities: bool = True
    other: bool = False


@dataclass(frozen=True)
class PropertyAcquisition:
    # Purchase
    purchase_price: Decimal
    closing_costs: Decimal = Decimal("0")
    other_initial_costs: Decimal = Decimal("0")

    # Rehab
    rehab_costs: Decimal = Decimal("0")
    rehab_duration_months: int = 0

    # Financing (None = all cash)
    purchase_loan: Optional[LoanTerms] = None

    # Holding costs during rehab
    include_holding_costs: HoldingCostFlags = field(default_factory=HoldingCostFlags)
    use_custom_holding_cost: bool = False
    custom_monthly_holding_cost: Optional[Decimal] = None  # Flat override

    @property
    def loan_amount(self) -> Decimal:
        if self.purchase_loan is None:
            return Decimal("0")
        return self.purchase_loan.amount

    @property
    def total_project_cost(self) -> Decimal:
        """Purchase + closing + rehab + other initial costs."""
        return self.purchase_price + self.closing_costs + self.rehab_costs + self.other_initial_costs

    @property
    def cash_invested(self) -> Decimal:
        """Out-of-pocket cash: project cost not covered by the purchase loan."""
        return self.total_project_cost - self.loan_amount
