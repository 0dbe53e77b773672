"""Authorization gate for invoice operations."""

from __future__ import annotations

import logging

from invoicely.auth.tokens import subject_from_token
from invoicely.core.exceptions import TrialExpired, Unauthorized
from invoicely.models import Account
from invoicely.repositories.base import AccountRepository
from invoicely.services.trial_policy import TrialPolicy

logger = logging.getLogger(__name__)


class AccessGate:
    """Resolves a credential to an account and applies the trial policy."""

    def __init__(self, accounts: AccountRepository, trial_policy: TrialPolicy, jwt_secret: str) -> None:
        self.accounts = accounts
        self.trial_policy = trial_policy
        self.jwt_secret = jwt_secret

    def identify(self, credential_token: str | None) -> Account:
        """Resolve the token to a known account without checking the trial.

        Used by the subscription flow, which must stay reachable after the trial lapses.
        """
        if credential_token is None or not credential_token.strip():
            raise Unauthorized("Unauthorized")
        email = subject_from_token(credential_token.strip(), secret=self.jwt_secret, now=self.trial_policy.clock())
        account = self.accounts.get(email)
        if account is None:
            raise Unauthorized("User not found")
        return account

    def authorize(self, credential_token: str | None) -> Account:
        account = self.identify(credential_token)
        if self.trial_policy.is_expired(account):
            logger.info("gate.trial_expired", extra={"event": "gate.trial_expired", "email": account.email})
            raise TrialExpired("Trial expired. Please subscribe to continue.")
        return account
