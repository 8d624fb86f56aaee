"""Configuration management for the billing engine."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    engine_version: str
    host: str
    port: int
    debug: bool
    log_level: str
    invoice_due_days: int
    default_working_days_per_month: int
    default_working_hours_per_day: int
    default_currency: str
    default_timezone: str

    @property
    def HOST(self) -> str:
        """Alias for host."""
        return self.host

    @property
    def PORT(self) -> int:
        """Alias for port."""
        return self.port

    @property
    def DEBUG(self) -> bool:
        """Alias for debug."""
        return self.debug

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            engine_version=os.getenv("ENGINE_VERSION", "0.1.0"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int_env("PORT", 8000),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            invoice_due_days=_int_env("INVOICE_DUE_DAYS", 7),
            default_working_days_per_month=_int_env("DEFAULT_WORKING_DAYS_PER_MONTH", 26),
            default_working_hours_per_day=_int_env("DEFAULT_WORKING_HOURS_PER_DAY", 8),
            default_currency=os.getenv("DEFAULT_CURRENCY", "USD").upper(),
            default_timezone=os.getenv("DEFAULT_TIMEZONE", "UTC"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once at application start."""
    logging.basicConfig(
        level=(level or get_settings().log_level),
        format=LOG_FORMAT,
    )


settings = get_settings()
