"""Configuration system using pydantic-settings with environment variable loading."""

from decimal import Decimal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DataSourceSettings(BaseSettings):
    """Price and dividend provider connection settings."""

    model_config = SettingsConfigDict(env_prefix="DATA_")

    symbol: str = "MSTY"
    finnhub_api_key: SecretStr = SecretStr("")
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    polygon_api_key: SecretStr = SecretStr("demo")
    polygon_base_url: str = "https://api.polygon.io"
    dividend_history_url: str = "https://proxy-api.example.com/dividends"
    request_timeout_seconds: float = 10.0


class EstimationSettings(BaseSettings):
    """Dividend estimation and reconciliation heuristics.

    The date windows approximate the fund's usual monthly schedule:
    ex-dividend around the 5th-8th, payment one or two days later, and an
    announcement roughly 3-12 days ahead of the ex-dividend date.
    All fields configurable via ESTIMATION_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="ESTIMATION_")

    # Weighted average
    window_size: int = 6  # newest records considered, weights window..1
    jitter_low: Decimal = Decimal("0.7")
    jitter_high: Decimal = Decimal("1.3")

    # Payout dates
    ex_day_min: int = 5
    ex_day_max: int = 8
    payment_offset_min_days: int = 1
    payment_offset_max_days: int = 2

    # Reconciliation windows
    payment_cutoff_day: int = 12  # dividend is overdue from this day on
    assumed_ex_day: int = 6
    announcement_start_days_before: int = 12
    announcement_end_days_before: int = 3
    early_check_day: int = 25  # start looking at next month from this day

    # Simulated announcement odds per evaluation
    announcement_probability: Decimal = Decimal("0.30")
    early_announcement_probability: Decimal = Decimal("0.25")


class RefreshSettings(BaseSettings):
    """Periodic refresh loop configuration."""

    model_config = SettingsConfigDict(env_prefix="REFRESH_")

    interval_seconds: int = 300  # 5 minutes
    enabled: bool = True


class ProjectionSettings(BaseSettings):
    """Income projection and scenario presets."""

    model_config = SettingsConfigDict(env_prefix="PROJECTION_")

    default_investment: Decimal = Decimal("10000")
    bullish_multiplier: Decimal = Decimal("1.5")
    bearish_multiplier: Decimal = Decimal("0.5")
    projected_months: int = 12


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    data: DataSourceSettings = DataSourceSettings()
    estimation: EstimationSettings = EstimationSettings()
    refresh: RefreshSettings = RefreshSettings()
    projection: ProjectionSettings = ProjectionSettings()
