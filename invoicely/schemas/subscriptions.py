"""Subscription payment schemas."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field


class PaymentIntentRequest(BaseModel):
    currency: str | None = Field(default=None, min_length=3, max_length=3)


class PaymentIntentResponse(BaseModel):
    client_secret: str
    payment_intent_id: str


class ConfirmSubscriptionRequest(BaseModel):
    payment_intent_id: str = Field(
        default="",
        max_length=255,
        validation_alias=AliasChoices("payment_intent_id", "paymentIntentId"),
    )


class SubscriptionResponse(BaseModel):
    message: str
    subscribed: bool
