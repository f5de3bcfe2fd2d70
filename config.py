"""Configuration management for the DD Post Ticker Tracker."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Google Sheet mirroring the DD posts
    sheet_id: str = "1X8aBiGCBL5rHvToZiZqMiLdEfMWTuvZT5NwuITWdqKo"
    sheet_request_timeout: int = 20  # seconds

    # Company directory (NASDAQ screener export)
    company_csv_path: str = "./data/nasdaq_screener.csv"

    # Default time range for post listings
    default_days_back: int = 1

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
