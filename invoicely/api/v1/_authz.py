"""Shared authorization helpers for API v1 route modules."""

from __future__ import annotations

from fastapi import Depends, Header

from invoicely.core.dependencies import Services, get_services
from invoicely.models import Account


def _extract_token(authorization: str | None) -> str | None:
    if authorization is None or not authorization.strip():
        return None
    scheme, sep, token = authorization.strip().partition(" ")
    if sep and scheme.lower() == "bearer":
        return token.strip()
    # Older clients send the bare token.
    return authorization.strip()


def gated_account(
    authorization: str | None = Header(default=None, alias="Authorization"),
    services: Services = Depends(get_services),
) -> Account:
    """Known account whose trial is active or who has subscribed."""
    return services.gate.authorize(_extract_token(authorization))


def identified_account(
    authorization: str | None = Header(default=None, alias="Authorization"),
    services: Services = Depends(get_services),
) -> Account:
    """Known account, regardless of trial state."""
    return services.gate.identify(_extract_token(authorization))
