"""Enums for the Invoicely application."""

from enum import Enum


class InvoiceStatus(Enum):
    """Status of invoices. ``sent`` is terminal."""

    DRAFT = "draft"
    SENT = "sent"


class SubscriptionState(Enum):
    """
    Subscription state reported for an account.

    A pending payment lives only at the payment processor; the account itself
    records nothing but the final boolean.
    """

    TRIAL = "trial"
    SUBSCRIBED = "subscribed"


INTENT_SUCCEEDED = "succeeded"

INVOICE_DRAFT = InvoiceStatus.DRAFT.value
INVOICE_SENT = InvoiceStatus.SENT.value
