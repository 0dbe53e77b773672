"""Repository interfaces for account and invoice storage."""

from __future__ import annotations

from abc import ABC, abstractmethod

from invoicely.models import Account, Invoice


class AccountRepository(ABC):
    """Account storage keyed by email, with mobile numbers unique across accounts."""

    @abstractmethod
    def add(self, account: Account) -> Account:
        """Persist a new account.

        Raises ``DuplicateEmail`` or ``DuplicateMobile`` when the account would
        break a uniqueness rule. The check and the insert are atomic.
        """

    @abstractmethod
    def get(self, email: str) -> Account | None:
        """Return the account for ``email`` (case-sensitive) or ``None``."""

    @abstractmethod
    def mark_subscribed(self, email: str) -> Account | None:
        """Set ``subscribed`` on the account. Returns ``None`` if it does not exist."""


class InvoiceRepository(ABC):
    """Invoice storage where every lookup is scoped to an owner."""

    @abstractmethod
    def add(self, invoice: Invoice) -> Invoice:
        """Persist a new invoice."""

    @abstractmethod
    def list_by_owner(self, owner: str) -> list[Invoice]:
        """Return the owner's invoices in insertion order."""

    @abstractmethod
    def find(self, invoice_id: str, owner: str) -> Invoice | None:
        """Return the invoice only if both id and owner match."""

    @abstractmethod
    def update_status(self, invoice_id: str, owner: str, status: str) -> Invoice | None:
        """Set the status of an owned invoice. Returns ``None`` when not found."""
