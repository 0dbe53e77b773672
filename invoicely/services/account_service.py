"""Signup, login and account status."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from invoicely.auth.tokens import create_access_token
from invoicely.core.enums import SubscriptionState
from invoicely.core.exceptions import Unauthorized, ValidationError
from invoicely.core.security import hash_password, verify_password
from invoicely.models import Account
from invoicely.repositories.base import AccountRepository
from invoicely.services.trial_policy import TrialPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountStatus:
    email: str
    mobile: str
    subscribed: bool
    trial_expired: bool
    trial_start: datetime
    trial_ends_at: datetime
    trial_seconds_remaining: int
    state: str


@dataclass(frozen=True)
class LoginResult:
    token: str
    status: AccountStatus


class AccountService:
    def __init__(
        self,
        accounts: AccountRepository,
        trial_policy: TrialPolicy,
        jwt_secret: str,
        token_ttl_minutes: int = 720,
        password_pepper: str = "",
    ) -> None:
        self.accounts = accounts
        self.trial_policy = trial_policy
        self.jwt_secret = jwt_secret
        self.token_ttl_minutes = token_ttl_minutes
        self.password_pepper = password_pepper

    def signup(self, email: str, password: str, mobile: str) -> Account:
        """Register an account and start its trial now.

        Email is kept exactly as received. A mobile number can back only one
        trial, whatever email it comes with.
        """
        if not (email or "").strip() or not password or not (mobile or "").strip():
            raise ValidationError("Email, password and mobile number are required.")

        account = Account(
            email=email,
            password_hash=hash_password(password, pepper=self.password_pepper),
            mobile=mobile.strip(),
            trial_start=self.trial_policy.clock(),
            subscribed=False,
        )
        created = self.accounts.add(account)
        logger.info("account.created", extra={"event": "account.created", "email": created.email})
        return created

    def login(self, email: str, password: str) -> LoginResult:
        account = self.accounts.get(email)
        if account is None or not verify_password(password, account.password_hash, pepper=self.password_pepper):
            raise Unauthorized("Invalid credentials.")
        token = create_access_token(
            email=account.email,
            secret=self.jwt_secret,
            ttl_minutes=self.token_ttl_minutes,
            now=self.trial_policy.clock(),
        )
        return LoginResult(token=token, status=self.status(account))

    def status(self, account: Account) -> AccountStatus:
        expired = self.trial_policy.is_expired(account)
        remaining = 0 if account.subscribed else int(self.trial_policy.remaining(account).total_seconds())
        if account.subscribed:
            state = SubscriptionState.SUBSCRIBED.value
        else:
            state = SubscriptionState.TRIAL.value
        return AccountStatus(
            email=account.email,
            mobile=account.mobile,
            subscribed=account.subscribed,
            trial_expired=expired,
            trial_start=account.trial_start,
            trial_ends_at=self.trial_policy.trial_ends_at(account),
            trial_seconds_remaining=remaining,
            state=state,
        )
