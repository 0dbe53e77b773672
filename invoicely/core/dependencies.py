"""Dependency providers wiring repositories, collaborators and services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache

from invoicely.core.config import Config, get_config
from invoicely.core.exceptions import ConfigurationError
from invoicely.database.db import build_engine, build_session_factory, init_db, verify_database_connection
from invoicely.repositories import (
    AccountRepository,
    InMemoryAccountRepository,
    InMemoryInvoiceRepository,
    InvoiceRepository,
    SqlAccountRepository,
    SqlInvoiceRepository,
)
from invoicely.services.access_gate import AccessGate
from invoicely.services.account_service import AccountService
from invoicely.services.invoice_service import InvoiceService
from invoicely.services.mail_transport import MailTransport, build_mail_transport
from invoicely.services.notification_service import NotificationSender
from invoicely.services.payment_processor import PaymentProcessor, StripePaymentProcessor
from invoicely.services.subscription_service import SubscriptionService
from invoicely.services.trial_policy import TrialPolicy
from invoicely.utils.clock import Clock, utcnow


@dataclass(frozen=True)
class Services:
    gate: AccessGate
    accounts: AccountService
    invoices: InvoiceService
    subscriptions: SubscriptionService


def build_repositories(config: Config) -> tuple[AccountRepository, InvoiceRepository]:
    if config.STORAGE_BACKEND == "database":
        engine = build_engine(config.DATABASE_URL, echo=config.DEBUG and not config.is_production)
        if not verify_database_connection(engine):
            raise ConfigurationError("Database at DATABASE_URL is unreachable.")
        init_db(engine)
        factory = build_session_factory(engine)
        return SqlAccountRepository(factory), SqlInvoiceRepository(factory)
    return InMemoryAccountRepository(), InMemoryInvoiceRepository()


def build_services(
    config: Config | None = None,
    clock: Clock = utcnow,
    accounts: AccountRepository | None = None,
    invoices: InvoiceRepository | None = None,
    processor: PaymentProcessor | None = None,
    transport: MailTransport | None = None,
) -> Services:
    """Assemble the service graph. Any collaborator may be injected."""
    cfg = config or get_config()
    if accounts is None or invoices is None:
        default_accounts, default_invoices = build_repositories(cfg)
        accounts = accounts or default_accounts
        invoices = invoices or default_invoices

    trial_policy = TrialPolicy(clock=clock, trial_length=timedelta(days=cfg.TRIAL_DAYS))
    notifier = NotificationSender(transport or build_mail_transport(cfg), currency_symbol=cfg.CURRENCY_SYMBOL)

    return Services(
        gate=AccessGate(accounts, trial_policy, jwt_secret=cfg.JWT_SECRET),
        accounts=AccountService(
            accounts,
            trial_policy,
            jwt_secret=cfg.JWT_SECRET,
            token_ttl_minutes=cfg.JWT_ACCESS_TTL_MINUTES,
            password_pepper=cfg.PASSWORD_PEPPER,
        ),
        invoices=InvoiceService(invoices, notifier, clock=clock),
        subscriptions=SubscriptionService(
            accounts,
            processor or StripePaymentProcessor(cfg.STRIPE_SECRET_KEY),
            price_minor=cfg.SUBSCRIPTION_PRICE_MINOR,
            default_currency=cfg.DEFAULT_CURRENCY,
        ),
    )


@lru_cache(maxsize=1)
def get_services() -> Services:
    """Process-wide service graph for request handlers."""
    return build_services(get_config())
