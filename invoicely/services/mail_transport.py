"""Outbound mail transports."""

from __future__ import annotations

import logging
import smtplib
from abc import ABC, abstractmethod
from email.mime.text import MIMEText

from invoicely.core.config import Config

logger = logging.getLogger(__name__)


class MailTransport(ABC):
    @abstractmethod
    def deliver(self, to: str, subject: str, body: str) -> None:
        """Send a plain-text message. Raises on failure."""


class SmtpMailTransport(MailTransport):
    """Service for sending transactional emails via SMTP with STARTTLS."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_email: str | None = None,
        timeout: int = 30,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_email = from_email or username
        self.timeout = timeout

    def deliver(self, to: str, subject: str, body: str) -> None:
        message = MIMEText(body, "plain", "utf-8")
        message["Subject"] = subject
        message["From"] = self.from_email
        message["To"] = to

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.starttls()
            server.login(self.username, self.password)
            server.send_message(message)
        logger.info("email.sent", extra={"event": "email.sent", "to_email": to})


class LoggingMailTransport(MailTransport):
    """Dev-mode transport used when SMTP credentials are absent. Never raises."""

    def deliver(self, to: str, subject: str, body: str) -> None:
        logger.warning("email.smtp_not_configured", extra={"event": "email.smtp_not_configured"})
        logger.info(
            "email.logged: to=%s subject=%s\n%s",
            to,
            subject,
            body,
            extra={"event": "email.logged", "to_email": to},
        )


def build_mail_transport(config: Config) -> MailTransport:
    if not config.smtp_configured:
        return LoggingMailTransport()
    return SmtpMailTransport(
        host=config.SMTP_HOST,
        port=config.SMTP_PORT,
        username=config.SMTP_USERNAME,
        password=config.SMTP_PASSWORD,
        from_email=config.SMTP_FROM,
        timeout=config.SMTP_TIMEOUT_SECONDS,
    )
