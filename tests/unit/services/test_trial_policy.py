from __future__ import annotations

from datetime import datetime, timedelta, timezone

from invoicely.models import Account
from invoicely.services.trial_policy import TrialPolicy, is_trial_expired
from invoicely.utils.clock import FrozenClock

START = datetime(2026, 1, 10, 12, 0, tzinfo=timezone.utc)


def _account(subscribed: bool = False, trial_start: datetime = START) -> Account:
    return Account(email="a@example.com", password_hash="x$y", mobile="555", trial_start=trial_start, subscribed=subscribed)


def test_not_expired_immediately_after_signup():
    assert is_trial_expired(_account(), START) is False


def test_not_expired_one_minute_before_seven_days():
    now = START + timedelta(days=6, hours=23, minutes=59)
    assert is_trial_expired(_account(), now) is False


def test_expired_at_exactly_seven_days():
    assert is_trial_expired(_account(), START + timedelta(seconds=604800)) is True


def test_expired_well_after_trial():
    assert is_trial_expired(_account(), START + timedelta(days=30)) is True


def test_subscribed_account_never_expires():
    ancient = datetime(2000, 1, 1, tzinfo=timezone.utc)
    assert is_trial_expired(_account(subscribed=True, trial_start=ancient), START) is False


def test_policy_uses_injected_clock():
    clock = FrozenClock(START)
    policy = TrialPolicy(clock=clock)
    account = _account()

    assert policy.is_expired(account) is False
    clock.advance(days=7)
    assert policy.is_expired(account) is True


def test_trial_end_and_remaining_time():
    clock = FrozenClock(START + timedelta(days=2))
    policy = TrialPolicy(clock=clock)
    account = _account()

    assert policy.trial_ends_at(account) == START + timedelta(days=7)
    assert policy.remaining(account) == timedelta(days=5)
    clock.advance(days=10)
    assert policy.remaining(account) == timedelta(0)


def test_custom_trial_length():
    policy = TrialPolicy(clock=FrozenClock(START + timedelta(days=3)), trial_length=timedelta(days=3))
    assert policy.is_expired(_account()) is True
