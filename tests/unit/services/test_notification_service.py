from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from invoicely.core.exceptions import DeliveryError, MissingRecipient
from invoicely.models import Invoice, InvoiceItem, compute_total
from invoicely.services.mail_transport import LoggingMailTransport
from invoicely.services.notification_service import NotificationSender, format_invoice_email


def _invoice(notes: str = "", customer_email: str = "billing@acme.test") -> Invoice:
    items = (
        InvoiceItem("Design", Decimal("2"), Decimal("10")),
        InvoiceItem("Hosting", Decimal("1.5"), Decimal("3.335")),
    )
    return Invoice(
        id="inv123",
        owner="owner@example.com",
        customer="Acme",
        customer_email=customer_email,
        items=items,
        total=compute_total(items),
        date=datetime(2026, 3, 1, tzinfo=timezone.utc),
        notes=notes,
    )


def test_format_invoice_email_body():
    subject, body = format_invoice_email(_invoice())

    assert subject == "Invoice inv123"
    assert body == (
        "Hello Acme,\n\n"
        "Please find your invoice below:\n\n"
        "2 x Design @ £10\n"
        "1.5 x Hosting @ £3.335\n\n"
        "Total: £25.00\n\n"
        "Thank you for your business."
    )


def test_format_includes_notes_when_present():
    _subject, body = format_invoice_email(_invoice(notes="Net 30"), currency_symbol="$")

    assert "Total: $25.00\n\nNotes: Net 30\n\nThank you for your business." in body


def test_missing_recipient_fails_before_transport(transport):
    sender = NotificationSender(transport)

    with pytest.raises(MissingRecipient) as exc:
        sender.send(_invoice(customer_email=""))

    assert isinstance(exc.value, DeliveryError)
    assert transport.sent == []


def test_transport_failure_becomes_delivery_error(transport):
    transport.fail = True
    with pytest.raises(DeliveryError) as exc:
        NotificationSender(transport).send(_invoice())
    assert not isinstance(exc.value, MissingRecipient)


def test_unconfigured_transport_logs_and_succeeds(caplog):
    sender = NotificationSender(LoggingMailTransport())

    with caplog.at_level(logging.INFO, logger="invoicely.services.mail_transport"):
        sender.send(_invoice())

    messages = [record.getMessage() for record in caplog.records]
    assert "email.smtp_not_configured" in messages
    assert any("billing@acme.test" in message and "Invoice inv123" in message for message in messages)


def test_format_invoice_email_handles_totals_beyond_default_precision():
    items = (InvoiceItem("Licence", Decimal("99999999999999.999"), Decimal("99999999999999.999")),)
    invoice = Invoice(
        id="inv-big",
        owner="owner@example.com",
        customer="Acme",
        customer_email="billing@acme.test",
        items=items,
        total=compute_total(items),
        date=datetime(2026, 3, 1, tzinfo=timezone.utc),
    )

    _, body = format_invoice_email(invoice)

    assert "99999999999999.999 x Licence @ £99999999999999.999\n" in body
    assert "Total: £9999999999999999800000000000.00\n" in body
