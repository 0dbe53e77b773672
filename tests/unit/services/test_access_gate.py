from __future__ import annotations

import pytest

from invoicely.auth.tokens import create_access_token
from invoicely.core.exceptions import TrialExpired, Unauthorized


def _login(services, email="owner@example.com", password="pw", mobile="555"):
    services.accounts.signup(email, password, mobile)
    return services.accounts.login(email, password).token


def test_authorize_returns_account_during_trial(services):
    token = _login(services)
    account = services.gate.authorize(token)
    assert account.email == "owner@example.com"


@pytest.mark.parametrize("token", [None, "", "   ", "not-a-jwt", "a.b.\u00e9", "\u00e9.\u00e9.\u00e9"])
def test_missing_or_malformed_token_is_unauthorized(services, token):
    with pytest.raises(Unauthorized):
        services.gate.authorize(token)


def test_token_for_unknown_account_is_unauthorized(services, test_config, clock):
    token = create_access_token("ghost@example.com", secret=test_config.JWT_SECRET, now=clock())
    with pytest.raises(Unauthorized):
        services.gate.authorize(token)


def test_token_signed_with_other_secret_is_unauthorized(services, clock):
    _login(services)
    forged = create_access_token("owner@example.com", secret="other-secret", now=clock())
    with pytest.raises(Unauthorized):
        services.gate.authorize(forged)


def test_expired_trial_is_distinct_from_unauthorized(services, clock):
    services.accounts.signup("owner@example.com", "pw", "555")
    clock.advance(days=7)
    token = services.accounts.login("owner@example.com", "pw").token

    with pytest.raises(TrialExpired) as exc:
        services.gate.authorize(token)
    assert not isinstance(exc.value, Unauthorized)
    assert exc.value.code == "trial_expired"


def test_identify_skips_trial_check(services, clock):
    services.accounts.signup("owner@example.com", "pw", "555")
    clock.advance(days=9)
    token = services.accounts.login("owner@example.com", "pw").token

    assert services.gate.identify(token).email == "owner@example.com"
