from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "BRRRR_"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # IRR solver (Newton-Raphson)
    irr_max_iterations: int = 1000
    irr_tolerance: float = 1e-5
    irr_initial_guess: float = 0.10

    # Rehab holding-cost estimates, used when the operating baseline has no figure.
    # These are rough stand-ins, not computed facts.
    holding_tax_rate: Decimal = Decimal("0.015")  # Annual, % of purchase price
    holding_insurance_rate: Decimal = Decimal("0.005")  # Annual, % of purchase price
    holding_utilities: Decimal = Decimal("200")  # Monthly
    holding_maintenance: Decimal = Decimal("100")  # Monthly
    holding_management: Decimal = Decimal("100")  # Monthly
    holding_other: Decimal = Decimal("100")  # Monthly

    # Projection
    default_projection_months: int = 60


settings = Settings()
