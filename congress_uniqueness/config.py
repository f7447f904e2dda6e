from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External APIs
    fmp_api_key: str = ""
    fmp_base_url: str = "https://financialmodelingprep.com"
    legislators_base_url: str = "https://unitedstates.github.io/congress-legislators"

    # Local storage
    data_dir: Path = Path("data")
    reports_dir: Path = Path("reports")

    # Provider behaviour
    request_delay_seconds: float = 0.5
    max_retries: int = 3
    http_timeout_seconds: float = 30.0
    market_data_ttl_days: int = 30
    committee_data_max_age_hours: int = 24

    # Analysis
    min_uniqueness_score: int = 50
    keyword_fallback: bool = False  # infer jurisdictions for uncurated committees

    # App
    log_level: str = "INFO"
    log_json: bool = True


settings = Settings()
