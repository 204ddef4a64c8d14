from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./digesttrack.db"
    anthropic_api_key: str = ""

    detector_model: str = "claude-sonnet-4-5-20250929"

    # Anthropic API timeout settings (seconds)
    anthropic_timeout: int = 60
    anthropic_connect_timeout: int = 10

    # Single-user context (no auth)
    default_user_id: str = "00000000-0000-0000-0000-000000000000"

    # Correlation analysis defaults
    analysis_windows: List[int] = [6, 24, 48]
    analysis_coverage_threshold: float = 70
    analysis_min_exposures: int = 3
    analysis_lookback_days: int = 90
    analysis_timezone: str = "UTC"  # IANA zone used to bucket entries into calendar days

    # Logging completeness assumptions for coverage
    expected_meals_per_day: int = 3
    expected_bm_per_day: int = 1

    # Minimum shared-day fraction before two tags are flagged as co-occurring
    cooccurrence_threshold: float = 0.8

    log_level: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
