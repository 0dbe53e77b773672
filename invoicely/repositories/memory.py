"""Process-memory repositories. State is lost on restart."""

from __future__ import annotations

import threading
from dataclasses import replace

from invoicely.core.exceptions import DuplicateEmail, DuplicateMobile
from invoicely.models import Account, Invoice
from invoicely.repositories.base import AccountRepository, InvoiceRepository


class InMemoryAccountRepository(AccountRepository):
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._accounts: dict[str, Account] = {}
        self._mobiles: set[str] = set()

    def add(self, account: Account) -> Account:
        with self._lock:
            if account.email in self._accounts:
                raise DuplicateEmail("User already exists.")
            if account.mobile in self._mobiles:
                raise DuplicateMobile("This mobile number has already been used for a trial.")
            self._accounts[account.email] = replace(account)
            self._mobiles.add(account.mobile)
        return replace(account)

    def get(self, email: str) -> Account | None:
        with self._lock:
            account = self._accounts.get(email)
            return replace(account) if account is not None else None

    def mark_subscribed(self, email: str) -> Account | None:
        with self._lock:
            account = self._accounts.get(email)
            if account is None:
                return None
            account.subscribed = True
            return replace(account)


class InMemoryInvoiceRepository(InvoiceRepository):
    def __init__(self) -> None:
        self._lock = threading.RLock()
        # dicts keep insertion order, which is the listing order.
        self._invoices: dict[str, Invoice] = {}

    def add(self, invoice: Invoice) -> Invoice:
        with self._lock:
            if invoice.id in self._invoices:
                raise ValueError(f"Invoice id already exists: {invoice.id}")
            self._invoices[invoice.id] = replace(invoice)
        return replace(invoice)

    def list_by_owner(self, owner: str) -> list[Invoice]:
        with self._lock:
            return [replace(inv) for inv in self._invoices.values() if inv.owner == owner]

    def find(self, invoice_id: str, owner: str) -> Invoice | None:
        with self._lock:
            invoice = self._invoices.get(invoice_id)
            if invoice is None or invoice.owner != owner:
                return None
            return replace(invoice)

    def update_status(self, invoice_id: str, owner: str, status: str) -> Invoice | None:
        with self._lock:
            invoice = self._invoices.get(invoice_id)
            if invoice is None or invoice.owner != owner:
                return None
            invoice.status = status
            return replace(invoice)
