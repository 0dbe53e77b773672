"""Invoice service for the draft -> sent lifecycle."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from invoicely.core.enums import INVOICE_DRAFT, INVOICE_SENT
from invoicely.core.exceptions import NotFoundError, ValidationError
from invoicely.core.state_machine import INVOICE_LIFECYCLE, StateMachine
from invoicely.models import Invoice, InvoiceItem, compute_total
from invoicely.repositories.base import InvoiceRepository
from invoicely.services.notification_service import NotificationSender
from invoicely.utils.clock import Clock, utcnow
from invoicely.utils.ids import new_invoice_id
from invoicely.utils.locks import KeyedLock

logger = logging.getLogger(__name__)

MAX_AMOUNT = Decimal("1e15")
MAX_DECIMAL_PLACES = 30


@dataclass(frozen=True)
class ItemInput:
    description: str
    quantity: Decimal | int | float | str
    unit_price: Decimal | int | float | str


def _to_decimal(value: Decimal | int | float | str, field: str) -> Decimal:
    try:
        # str() first so 0.1 stays 0.1 instead of its binary expansion.
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Item {field} must be a number.") from exc
    if not number.is_finite():
        raise ValidationError(f"Item {field} must be a finite number.")
    if number < 0:
        raise ValidationError(f"Item {field} must not be negative.")
    if number >= MAX_AMOUNT:
        raise ValidationError(f"Item {field} must be less than {MAX_AMOUNT:f}.")
    if number.as_tuple().exponent < -MAX_DECIMAL_PLACES:
        raise ValidationError(f"Item {field} allows at most {MAX_DECIMAL_PLACES} decimal places.")
    return number


class InvoiceService:
    """Service for invoice creation, listing and delivery."""

    def __init__(
        self,
        invoices: InvoiceRepository,
        notifier: NotificationSender,
        clock: Clock = utcnow,
        lifecycle: StateMachine = INVOICE_LIFECYCLE,
    ) -> None:
        self.invoices = invoices
        self.notifier = notifier
        self.clock = clock
        self.lifecycle = lifecycle
        self._send_locks = KeyedLock()

    def create_invoice(
        self,
        owner: str,
        customer: str,
        customer_email: str | None,
        items: Iterable[ItemInput],
        notes: str | None = None,
        requested_status: str | None = None,
    ) -> Invoice:
        """Create an invoice for ``owner``.

        ``requested_status`` only labels the invoice: the literal ``"sent"``
        yields a sent invoice, anything else a draft. No email is sent here.
        """
        if not (customer or "").strip():
            raise ValidationError("Customer and items are required.")
        parsed = tuple(
            InvoiceItem(
                description=item.description,
                quantity=_to_decimal(item.quantity, "quantity"),
                unit_price=_to_decimal(item.unit_price, "unit_price"),
            )
            for item in items
        )
        if not parsed:
            raise ValidationError("Customer and items are required.")

        invoice = Invoice(
            id=new_invoice_id(),
            owner=owner,
            customer=customer,
            customer_email=customer_email or "",
            items=parsed,
            total=compute_total(parsed),
            date=self.clock(),
            notes=notes or "",
            status=INVOICE_SENT if requested_status == INVOICE_SENT else INVOICE_DRAFT,
        )
        created = self.invoices.add(invoice)
        logger.info(
            "invoice.created",
            extra={"event": "invoice.created", "invoice_id": created.id, "owner": owner},
        )
        return created

    def list_invoices(self, owner: str) -> list[Invoice]:
        return self.invoices.list_by_owner(owner)

    def get_invoice(self, invoice_id: str, owner: str) -> Invoice:
        invoice = self.invoices.find(invoice_id, owner)
        if invoice is None:
            raise NotFoundError("Invoice not found")
        return invoice

    def send_invoice(self, invoice_id: str, owner: str) -> Invoice:
        """Email the invoice and mark it sent once delivery succeeds.

        A missing invoice and one owned by someone else raise the same
        ``NotFoundError``. Delivery errors propagate and leave the invoice untouched.
        """
        with self._send_locks.hold(invoice_id):
            invoice = self.get_invoice(invoice_id, owner)
            self.lifecycle.assert_transition(invoice.status, INVOICE_SENT)
            self.notifier.send(invoice)
            updated = self.invoices.update_status(invoice_id, owner, INVOICE_SENT)
        if updated is None:
            raise NotFoundError("Invoice not found")
        logger.info("invoice.sent", extra={"event": "invoice.sent", "invoice_id": invoice_id, "owner": owner})
        return updated
