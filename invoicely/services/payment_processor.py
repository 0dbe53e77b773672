"""Payment processor adapters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import stripe

from invoicely.core.exceptions import PaymentProcessorError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentIntent:
    intent_id: str
    client_secret: str


class PaymentProcessor(ABC):
    @abstractmethod
    def create_intent(self, amount_minor: int, currency: str) -> PaymentIntent:
        """Open a payment intent for ``amount_minor`` units of ``currency``."""

    @abstractmethod
    def retrieve_intent_status(self, intent_id: str) -> str:
        """Return the processor's status string for ``intent_id``."""


class StripePaymentProcessor(PaymentProcessor):
    """PaymentIntents through the Stripe API."""

    def __init__(self, api_key: str | None) -> None:
        self.api_key = api_key

    def _require_key(self) -> str:
        if not self.api_key:
            raise PaymentProcessorError("STRIPE_SECRET_KEY is not set")
        return self.api_key

    def create_intent(self, amount_minor: int, currency: str) -> PaymentIntent:
        api_key = self._require_key()
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount_minor,
                currency=currency,
                automatic_payment_methods={"enabled": True},
                api_key=api_key,
            )
        except stripe.StripeError as exc:
            logger.exception("stripe.intent_create_failed", extra={"event": "stripe.intent_create_failed"})
            raise PaymentProcessorError(exc.user_message or "Failed to create payment intent") from exc
        return PaymentIntent(intent_id=intent.id, client_secret=intent.client_secret)

    def retrieve_intent_status(self, intent_id: str) -> str:
        api_key = self._require_key()
        try:
            intent = stripe.PaymentIntent.retrieve(intent_id, api_key=api_key)
        except stripe.StripeError as exc:
            logger.exception(
                "stripe.intent_retrieve_failed",
                extra={"event": "stripe.intent_retrieve_failed", "intent_id": intent_id},
            )
            raise PaymentProcessorError(exc.user_message or "Failed to confirm subscription") from exc
        return intent.status
