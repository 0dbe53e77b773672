"""SQLAlchemy tables backing the ``database`` storage backend."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp helper."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base class for Invoicely tables."""


class AccountRow(Base):
    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(String(320), primary_key=True)
    password_hash: Mapped[str] = mapped_column(String(200), nullable=False)
    mobile: Mapped[str] = mapped_column(String(40), unique=True, nullable=False)
    trial_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    subscribed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class InvoiceRow(Base):
    __tablename__ = "invoices"
    __table_args__ = (Index("idx_invoices_owner_seq", "owner", "seq"),)

    # ``seq`` preserves insertion order for listings.
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    owner: Mapped[str] = mapped_column(ForeignKey("accounts.email", ondelete="RESTRICT"), nullable=False)
    customer: Mapped[str] = mapped_column(String(500), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(320), default="", nullable=False)
    # Amounts are decimal strings so totals stay exact on every dialect.
    items: Mapped[list] = mapped_column(JSON, nullable=False)
    notes: Mapped[str] = mapped_column(Text, default="", nullable=False)
    total: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
