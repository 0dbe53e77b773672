"""Identifier generation helpers."""

from __future__ import annotations

import uuid


def new_invoice_id() -> str:
    """Create a UUID4-based invoice identifier."""
    return uuid.uuid4().hex
