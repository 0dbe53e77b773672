"""Trial window policy for unsubscribed accounts."""

from __future__ import annotations

from datetime import datetime, timedelta

from invoicely.models import Account
from invoicely.utils.clock import Clock, utcnow

TRIAL_LENGTH = timedelta(days=7)


def is_trial_expired(account: Account, now: datetime, trial_length: timedelta = TRIAL_LENGTH) -> bool:
    """Return True once ``trial_length`` of continuous time has passed since ``trial_start``.

    Subscribed accounts never expire. The boundary is inclusive: an account is
    expired at exactly ``trial_start + trial_length``.
    """
    if account.subscribed:
        return False
    return now - account.trial_start >= trial_length


class TrialPolicy:
    """Binds :func:`is_trial_expired` to a clock and a configured trial length."""

    def __init__(self, clock: Clock = utcnow, trial_length: timedelta = TRIAL_LENGTH) -> None:
        self.clock = clock
        self.trial_length = trial_length

    def is_expired(self, account: Account) -> bool:
        return is_trial_expired(account, self.clock(), self.trial_length)

    def trial_ends_at(self, account: Account) -> datetime:
        return account.trial_start + self.trial_length

    def remaining(self, account: Account) -> timedelta:
        """Time left in the trial, clamped at zero. Meaningless once subscribed."""
        left = self.trial_ends_at(account) - self.clock()
        return max(left, timedelta(0))
