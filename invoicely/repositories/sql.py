"""SQLAlchemy-backed repositories for the ``database`` storage backend."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from invoicely.core.exceptions import DuplicateEmail, DuplicateMobile
from invoicely.database.db import session_scope
from invoicely.database.models import AccountRow, InvoiceRow
from invoicely.models import Account, Invoice, InvoiceItem
from invoicely.repositories.base import AccountRepository, InvoiceRepository


def _aware(moment: datetime) -> datetime:
    # SQLite drops tzinfo on the way back.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _to_account(row: AccountRow) -> Account:
    return Account(
        email=row.email,
        password_hash=row.password_hash,
        mobile=row.mobile,
        trial_start=_aware(row.trial_start),
        subscribed=row.subscribed,
    )


def _to_invoice(row: InvoiceRow) -> Invoice:
    return Invoice(
        id=row.id,
        owner=row.owner,
        customer=row.customer,
        customer_email=row.customer_email,
        items=tuple(
            InvoiceItem(
                description=item["description"],
                quantity=Decimal(item["quantity"]),
                unit_price=Decimal(item["unit_price"]),
            )
            for item in row.items
        ),
        total=Decimal(row.total),
        date=_aware(row.date),
        notes=row.notes,
        status=row.status,
    )


class SqlAccountRepository(AccountRepository):
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def _check_unique(self, session: Session, account: Account) -> None:
        if session.get(AccountRow, account.email) is not None:
            raise DuplicateEmail("User already exists.")
        taken = session.scalar(select(AccountRow.email).where(AccountRow.mobile == account.mobile))
        if taken is not None:
            raise DuplicateMobile("This mobile number has already been used for a trial.")

    def add(self, account: Account) -> Account:
        row = AccountRow(
            email=account.email,
            password_hash=account.password_hash,
            mobile=account.mobile,
            trial_start=account.trial_start,
            subscribed=account.subscribed,
        )
        try:
            with session_scope(self._session_factory) as session:
                self._check_unique(session, account)
                session.add(row)
        except IntegrityError:
            # Lost a race with a concurrent signup; report which rule tripped.
            with session_scope(self._session_factory) as session:
                self._check_unique(session, account)
            raise
        return _to_account(row)

    def get(self, email: str) -> Account | None:
        with session_scope(self._session_factory) as session:
            row = session.get(AccountRow, email)
            return _to_account(row) if row is not None else None

    def mark_subscribed(self, email: str) -> Account | None:
        with session_scope(self._session_factory) as session:
            row = session.get(AccountRow, email)
            if row is None:
                return None
            row.subscribed = True
            session.flush()
            return _to_account(row)


class SqlInvoiceRepository(InvoiceRepository):
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def _owned(self, session: Session, invoice_id: str, owner: str) -> InvoiceRow | None:
        return session.scalar(
            select(InvoiceRow).where(InvoiceRow.id == invoice_id, InvoiceRow.owner == owner)
        )

    def add(self, invoice: Invoice) -> Invoice:
        row = InvoiceRow(
            id=invoice.id,
            owner=invoice.owner,
            customer=invoice.customer,
            customer_email=invoice.customer_email,
            items=[
                {
                    "description": item.description,
                    "quantity": str(item.quantity),
                    "unit_price": str(item.unit_price),
                }
                for item in invoice.items
            ],
            notes=invoice.notes,
            total=str(invoice.total),
            status=invoice.status,
            date=invoice.date,
        )
        with session_scope(self._session_factory) as session:
            session.add(row)
        return _to_invoice(row)

    def list_by_owner(self, owner: str) -> list[Invoice]:
        with session_scope(self._session_factory) as session:
            rows = session.scalars(
                select(InvoiceRow).where(InvoiceRow.owner == owner).order_by(InvoiceRow.seq)
            ).all()
            return [_to_invoice(row) for row in rows]

    def find(self, invoice_id: str, owner: str) -> Invoice | None:
        with session_scope(self._session_factory) as session:
            row = self._owned(session, invoice_id, owner)
            return _to_invoice(row) if row is not None else None

    def update_status(self, invoice_id: str, owner: str, status: str) -> Invoice | None:
        with session_scope(self._session_factory) as session:
            row = self._owned(session, invoice_id, owner)
            if row is None:
                return None
            row.status = status
            session.flush()
            return _to_invoice(row)
