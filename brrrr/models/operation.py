from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

TWO_PLACES = Decimal("0.01")


class ExpenseCategory(Enum):
    """Fixed-dollar expense lines that can be re-dated or grown.

    Management fee and vacancy allowance are percentages of rent and follow rent.
    """
    TAXES = "taxes"
    INSURANCE = "insurance"
    MAINTENANCE = "maintenance"
    UTILITIES = "utilities"
    OTHER = "other_expenses"
    CAPITAL_RESERVES = "capital_reserves"


@dataclass(frozen=True)
class PropertyOperation:
    """Stabilized operating baseline, in effect from the month after rehab."""
    monthly_rent: Decimal = Decimal("0")
    other_monthly_income: Decimal = Decimal("0")  # Laundry, parking, etc.
    annual_property_tax: Decimal = Decimal("0")
    annual_insurance: Decimal = Decimal("0")
    monthly_maintenance: Decimal = Decimal("0")
    property_management_pct: Decimal = Decimal("0")  # Percent of rent, e.g. 8 = 8%
    monthly_utilities: Decimal = Decimal("0")
    vacancy_rate_pct: Decimal = Decimal("0")  # Percent of rent
    other_monthly_expenses: Decimal = Decimal("0")

    @property
    def monthly_taxes(self) -> Decimal:
        return (self.annual_property_tax / 12).quantize(TWO_PLACES, ROUND_HALF_UP)

    @property
    def monthly_insurance(self) -> Decimal:
        return (self.annual_insurance / 12).quantize(TWO_PLACES, ROUND_HALF_UP)

    def management_fee(self, rent: Decimal) -> Decimal:
        return (rent * self.property_management_pct / 100).quantize(TWO_PLACES, ROUND_HALF_UP)

    def vacancy_allowance(self, rent: Decimal) -> Decimal:
        return (rent * self.vacancy_rate_pct / 100).quantize(TWO_PLACES, ROUND_HALF_UP)


@dataclass(frozen=True)
class MonthlyIncome:
    rent: Decimal = Decimal("0")
    other_income: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.rent + self.other_income


@dataclass(frozen=True)
class MonthlyExpenses:
    mortgage: Decimal = Decimal("0")
    taxes: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    maintenance: Decimal = Decimal("0")
    property_management: Decimal = Decimal("0")
    utilities: Decimal = Decimal("0")
    vacancy_allowance: Decimal = Decimal("0")
    other_expenses: Decimal = Decimal("0")
    capital_reserves: Decimal = Decimal("0")  # Monthly capex reserve contributions

    @property
    def total(self) -> Decimal:
        return (
            self.mortgage
            + self.taxes
            + self.insurance
            + self.maintenance
            + self.property_management
            + self.utilities
            + self.vacancy_allowance
            + self.other_expenses
            + self.capital_reserves
        )
