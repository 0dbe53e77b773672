from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from invoicely.core.config import get_config
from invoicely.core.dependencies import build_services
from invoicely.repositories import InMemoryAccountRepository, InMemoryInvoiceRepository
from invoicely.services.mail_transport import MailTransport
from invoicely.services.payment_processor import PaymentIntent, PaymentProcessor
from invoicely.utils.clock import FrozenClock

T0 = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
TEST_SECRET = "test-secret"


class FakePaymentProcessor(PaymentProcessor):
    def __init__(self) -> None:
        self.created: list[tuple[int, str]] = []
        self.retrieved: list[str] = []
        self.statuses: dict[str, str] = {}
        self.error: Exception | None = None

    def create_intent(self, amount_minor: int, currency: str) -> PaymentIntent:
        if self.error is not None:
            raise self.error
        self.created.append((amount_minor, currency))
        intent_id = f"pi_{len(self.created)}"
        self.statuses.setdefault(intent_id, "requires_payment_method")
        return PaymentIntent(intent_id=intent_id, client_secret=f"{intent_id}_secret")

    def retrieve_intent_status(self, intent_id: str) -> str:
        if self.error is not None:
            raise self.error
        self.retrieved.append(intent_id)
        return self.statuses.get(intent_id, "requires_payment_method")


class RecordingTransport(MailTransport):
    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self.fail = False

    def deliver(self, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise ConnectionError("smtp down")
        self.sent.append((to, subject, body))


@pytest.fixture
def clock():
    return FrozenClock(T0)


@pytest.fixture
def processor():
    return FakePaymentProcessor()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def test_config():
    return replace(get_config(), JWT_SECRET=TEST_SECRET, STORAGE_BACKEND="memory", TRIAL_DAYS=7)


@pytest.fixture
def services(test_config, clock, processor, transport):
    return build_services(
        test_config,
        clock=clock,
        accounts=InMemoryAccountRepository(),
        invoices=InMemoryInvoiceRepository(),
        processor=processor,
        transport=transport,
    )
