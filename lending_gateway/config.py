"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "lending-gateway"
    service_version: str = "1.0.0"
    log_level: str = "INFO"

    # Pricing policy
    base_interest_rate: float = 5.5  # Prime rate approximation, percent
    max_risk_premium: float = 15.0  # Added in full at zero approval probability
    default_loan_term_months: int = 60

    # Offers
    offer_validity_days: int = 30
    credit_bureau_name: str = "Experian"


settings = Settings()
