"""Subscription payment flow: trial -> payment pending -> subscribed.

Payment confirmation trusts the processor's retrieve call for a client-supplied
intent id. There is no webhook signature check.
"""

from __future__ import annotations

import logging

from invoicely.core.enums import INTENT_SUCCEEDED
from invoicely.core.exceptions import AlreadySubscribed, NotFoundError, PaymentNotCompleted, ValidationError
from invoicely.models import Account
from invoicely.repositories.base import AccountRepository
from invoicely.services.payment_processor import PaymentIntent, PaymentProcessor

logger = logging.getLogger(__name__)


class SubscriptionService:
    def __init__(
        self,
        accounts: AccountRepository,
        processor: PaymentProcessor,
        price_minor: int = 599,
        default_currency: str = "gbp",
    ) -> None:
        self.accounts = accounts
        self.processor = processor
        self.price_minor = price_minor
        self.default_currency = default_currency

    def begin_subscription(self, account: Account, currency: str | None = None) -> PaymentIntent:
        """Open a payment intent for the fixed subscription price.

        Nothing is stored locally; repeated calls open more intents.
        """
        if account.subscribed:
            raise AlreadySubscribed("Already subscribed")
        resolved = (currency or self.default_currency).strip().lower()
        intent = self.processor.create_intent(self.price_minor, resolved)
        logger.info(
            "subscription.intent_created",
            extra={
                "event": "subscription.intent_created",
                "email": account.email,
                "intent_id": intent.intent_id,
                "currency": resolved,
            },
        )
        return intent

    def confirm_subscription(self, account: Account, intent_id: str | None) -> Account:
        if not (intent_id or "").strip():
            raise ValidationError("paymentIntentId required")
        if account.subscribed:
            return account

        status = self.processor.retrieve_intent_status(intent_id.strip())
        if status != INTENT_SUCCEEDED:
            logger.info(
                "subscription.payment_incomplete",
                extra={"event": "subscription.payment_incomplete", "email": account.email, "intent_status": status},
            )
            raise PaymentNotCompleted("Payment not completed", intent_status=status)

        updated = self.accounts.mark_subscribed(account.email)
        if updated is None:
            raise NotFoundError("User not found")
        logger.info(
            "subscription.confirmed",
            extra={"event": "subscription.confirmed", "email": account.email, "intent_id": intent_id},
        )
        return updated
