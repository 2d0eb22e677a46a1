"""Application configuration loaded from environment variables."""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings sourced from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Exchange clock -- every session boundary is defined in this zone
    exchange_timezone: str = "America/Toronto"

    # Database
    database_url: str = "sqlite+aiosqlite:///./tradedesk.db"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Scheduling
    tick_interval_seconds: int = 1
    checklist_reset_hour: int = 20

    # Calculator
    default_symbol: str = "MNQ"
    max_contracts: int = 40

    @field_validator("exchange_timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Reject zone names the tz database does not know."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone '{value}'") from exc
        return value

    @field_validator("checklist_reset_hour")
    @classmethod
    def validate_reset_hour(cls, value: int) -> int:
        if not 0 <= value <= 23:
            raise ValueError("checklist_reset_hour must be within 0-23")
        return value

    @property
    def exchange_zone(self) -> ZoneInfo:
        return ZoneInfo(self.exchange_timezone)


@lru_cache
def get_settings() -> Settings:
    """Return cached singleton Settings instance."""
    return Settings()
