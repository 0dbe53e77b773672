"""Configuration module for the Invoicely application."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from invoicely.core.exceptions import ConfigurationError

load_dotenv()

STORAGE_BACKENDS = {"memory", "database"}


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_list(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _as_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}.") from exc


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    STORAGE_BACKEND: str
    DATABASE_URL: str
    TRIAL_DAYS: int
    SUBSCRIPTION_PRICE_MINOR: int
    DEFAULT_CURRENCY: str
    CURRENCY_SYMBOL: str
    STRIPE_SECRET_KEY: str | None
    SMTP_HOST: str | None
    SMTP_PORT: int
    SMTP_USERNAME: str | None
    SMTP_PASSWORD: str | None
    SMTP_FROM: str | None
    SMTP_TIMEOUT_SECONDS: int
    JWT_SECRET: str
    JWT_ACCESS_TTL_MINUTES: int
    PASSWORD_PEPPER: str
    API_PREFIX: str
    CORS_ORIGINS: tuple[str, ...]
    LOG_LEVEL: str
    LOG_FILE: str

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"

    @property
    def smtp_configured(self) -> bool:
        return bool(self.SMTP_HOST and self.SMTP_USERNAME and self.SMTP_PASSWORD)


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=(resolved_env != "production"))

    config = Config(
        APP_NAME="Invoicely",
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        STORAGE_BACKEND=os.getenv("STORAGE_BACKEND", "memory").strip().lower(),
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./invoicely.db"),
        TRIAL_DAYS=_as_int("TRIAL_DAYS", 7),
        SUBSCRIPTION_PRICE_MINOR=_as_int("SUBSCRIPTION_PRICE_MINOR", 599),
        DEFAULT_CURRENCY=os.getenv("DEFAULT_CURRENCY", "gbp").strip().lower(),
        CURRENCY_SYMBOL=os.getenv("CURRENCY_SYMBOL", "£"),
        STRIPE_SECRET_KEY=os.getenv("STRIPE_SECRET_KEY"),
        SMTP_HOST=os.getenv("SMTP_HOST"),
        SMTP_PORT=_as_int("SMTP_PORT", 587),
        SMTP_USERNAME=os.getenv("SMTP_USERNAME"),
        SMTP_PASSWORD=os.getenv("SMTP_PASSWORD"),
        SMTP_FROM=os.getenv("SMTP_FROM"),
        SMTP_TIMEOUT_SECONDS=_as_int("SMTP_TIMEOUT_SECONDS", 30),
        JWT_SECRET=os.getenv("JWT_SECRET", "change_me_jwt_secret"),
        JWT_ACCESS_TTL_MINUTES=_as_int("JWT_ACCESS_TTL_MINUTES", 720),
        PASSWORD_PEPPER=os.getenv("PASSWORD_PEPPER", ""),
        API_PREFIX=os.getenv("API_PREFIX", "/api/v1"),
        CORS_ORIGINS=_as_list(os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", ""),
    )
    _validate_config(config)
    return config


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2"}:
        raise ConfigurationError(
            "DATABASE_URL must use sqlite:// or postgresql:// style URL."
        )
    if parsed.scheme.startswith("postgresql") and not parsed.hostname:
        raise ConfigurationError("PostgreSQL DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    if config.STORAGE_BACKEND not in STORAGE_BACKENDS:
        raise ConfigurationError("STORAGE_BACKEND must be one of: memory, database.")
    if config.STORAGE_BACKEND == "database":
        _validate_database_url(config.DATABASE_URL)

    if config.TRIAL_DAYS < 1:
        raise ConfigurationError("TRIAL_DAYS must be >= 1.")
    if config.SUBSCRIPTION_PRICE_MINOR < 1:
        raise ConfigurationError("SUBSCRIPTION_PRICE_MINOR must be >= 1.")
    if len(config.DEFAULT_CURRENCY) != 3 or not config.DEFAULT_CURRENCY.isalpha():
        raise ConfigurationError("DEFAULT_CURRENCY must be a three-letter ISO code.")
    if config.SMTP_TIMEOUT_SECONDS < 1:
        raise ConfigurationError("SMTP_TIMEOUT_SECONDS must be >= 1.")
    if config.JWT_ACCESS_TTL_MINUTES < 1:
        raise ConfigurationError("JWT_ACCESS_TTL_MINUTES must be >= 1.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if config.is_production and "change_me" in config.JWT_SECRET:
        raise ConfigurationError("Production JWT_SECRET uses the placeholder value.")
    if config.is_production and not config.STRIPE_SECRET_KEY:
        raise ConfigurationError("STRIPE_SECRET_KEY is required in production.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
