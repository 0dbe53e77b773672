"""Subscription payment endpoints.

These identify the caller but skip the trial check, so an account whose trial
has lapsed can still pay.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from invoicely.api.v1._authz import identified_account
from invoicely.core.dependencies import Services, get_services
from invoicely.models import Account
from invoicely.schemas.subscriptions import (
    ConfirmSubscriptionRequest,
    PaymentIntentRequest,
    PaymentIntentResponse,
    SubscriptionResponse,
)

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post("/intent", response_model=PaymentIntentResponse)
def create_payment_intent(
    payload: PaymentIntentRequest | None = None,
    account: Account = Depends(identified_account),
    services: Services = Depends(get_services),
) -> PaymentIntentResponse:
    currency = payload.currency if payload is not None else None
    intent = services.subscriptions.begin_subscription(account, currency)
    return PaymentIntentResponse(client_secret=intent.client_secret, payment_intent_id=intent.intent_id)


@router.post("/confirm", response_model=SubscriptionResponse)
def confirm_subscription(
    payload: ConfirmSubscriptionRequest,
    account: Account = Depends(identified_account),
    services: Services = Depends(get_services),
) -> SubscriptionResponse:
    updated = services.subscriptions.confirm_subscription(account, payload.payment_intent_id)
    return SubscriptionResponse(message="Subscription confirmed", subscribed=updated.subscribed)
