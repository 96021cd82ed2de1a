from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Flip analysis defaults
    mao_ratio: Decimal = Decimal("0.70")  # 70% rule
    default_hold_months: int = 6

    # Loan quotes
    default_credit_score: int = 700
    default_selling_costs_pct: Decimal = Decimal("8")
    # Optional JSON file replacing the built-in loan product catalog
    loan_catalog_path: str = ""


settings = Settings()
