"""Invoice email formatting and dispatch."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, localcontext

from invoicely.core.exceptions import DeliveryError, MissingRecipient
from invoicely.models import Invoice
from invoicely.models.invoice import EXACT_CONTEXT
from invoicely.services.mail_transport import MailTransport

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _plain(value: Decimal) -> str:
    with localcontext(EXACT_CONTEXT):
        if value == value.to_integral_value():
            return format(value.to_integral_value(), "f")
        return format(value.normalize(), "f")


def _money(value: Decimal) -> str:
    with localcontext(EXACT_CONTEXT):
        return format(value.quantize(CENTS, rounding=ROUND_HALF_UP), "f")


def format_invoice_email(invoice: Invoice, currency_symbol: str = "£") -> tuple[str, str]:
    """Return ``(subject, body)`` for the plain-text invoice email."""
    item_lines = "\n".join(
        f"{_plain(item.quantity)} x {item.description} @ {currency_symbol}{_plain(item.unit_price)}"
        for item in invoice.items
    )
    total = _money(invoice.total)
    body = (
        f"Hello {invoice.customer},\n\n"
        "Please find your invoice below:\n\n"
        f"{item_lines}\n\n"
        f"Total: {currency_symbol}{total}\n\n"
    )
    if invoice.notes:
        body += f"Notes: {invoice.notes}\n\n"
    body += "Thank you for your business."
    return f"Invoice {invoice.id}", body


class NotificationSender:
    def __init__(self, transport: MailTransport, currency_symbol: str = "£") -> None:
        self.transport = transport
        self.currency_symbol = currency_symbol

    def send(self, invoice: Invoice) -> None:
        """Deliver ``invoice`` to its customer.

        Raises ``MissingRecipient`` before touching the transport when there is
        no customer email, and ``DeliveryError`` for any transport failure.
        """
        if not invoice.customer_email:
            raise MissingRecipient("Customer email is missing")

        subject, body = format_invoice_email(invoice, self.currency_symbol)
        try:
            self.transport.deliver(invoice.customer_email, subject, body)
        except Exception as exc:
            logger.exception(
                "email.send_failed",
                extra={"event": "email.send_failed", "invoice_id": invoice.id, "to_email": invoice.customer_email},
            )
            raise DeliveryError("Failed to send invoice email") from exc
