"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from invoicely.core.config import get_config
from invoicely.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def validate_startup_config() -> None:
    """Fail-fast config checks; warn about dev-mode fallbacks."""
    config = get_config()

    if not config.smtp_configured:
        logger.warning(
            "startup.smtp.not_configured",
            extra={"event": "startup.smtp.not_configured"},
        )
    if not config.STRIPE_SECRET_KEY:
        logger.warning(
            "startup.stripe.not_configured",
            extra={"event": "startup.stripe.not_configured"},
        )
    if config.is_production and config.STORAGE_BACKEND == "memory":
        logger.warning(
            "startup.production.memory_storage",
            extra={"event": "startup.production.memory_storage"},
        )

    logger.info(
        "startup.config.validated",
        extra={"event": "startup.config.validated"},
    )


def bootstrap() -> None:
    """Initialize logging and validate runtime configuration."""
    configure_logging()
    validate_startup_config()
