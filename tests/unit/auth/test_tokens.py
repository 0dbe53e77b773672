from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from invoicely.auth.tokens import _b64url_encode, _sign, create_access_token, decode_jwt, encode_jwt, subject_from_token
from invoicely.core.exceptions import Unauthorized

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)


def test_access_token_roundtrip_contains_required_claims():
    token = create_access_token("owner@example.com", secret="test-secret", now=NOW)
    claims = decode_jwt(token, secret="test-secret", now=NOW)

    assert claims["sub"] == "owner@example.com"
    assert claims["token_use"] == "access"
    assert "exp" in claims
    assert "iat" in claims
    assert "jti" in claims


def test_subject_from_token_rejects_tampering():
    token = create_access_token("owner@example.com", secret="test-secret", now=NOW)
    header, payload, signature = token.split(".")
    tampered = f"{header}.{payload}.{signature[:-2]}xx"

    with pytest.raises(Unauthorized):
        subject_from_token(tampered, secret="test-secret", now=NOW)


def test_expired_token_is_rejected():
    token = create_access_token("owner@example.com", secret="test-secret", ttl_minutes=10, now=NOW)
    with pytest.raises(Unauthorized):
        subject_from_token(token, secret="test-secret", now=NOW + timedelta(minutes=11))


def test_non_access_token_is_rejected():
    token = encode_jwt({"sub": "owner@example.com", "token_use": "refresh"}, secret="s", ttl=timedelta(days=1), now=NOW)
    with pytest.raises(Unauthorized):
        subject_from_token(token, secret="s", now=NOW)


@pytest.mark.parametrize("signature", ["é", "sigÿ", "\udce9"])
def test_non_ascii_signature_is_unauthorized(signature):
    token = create_access_token("owner@example.com", secret="test-secret", now=NOW)
    header, payload, _ = token.split(".")

    with pytest.raises(Unauthorized):
        decode_jwt(f"{header}.{payload}.{signature}", secret="test-secret", now=NOW)


def _signed(payload_segment: str, secret: str = "test-secret") -> str:
    header = _b64url_encode(b'{"alg":"HS256","typ":"JWT"}')
    signing_input = f"{header}.{payload_segment}"
    return f"{signing_input}.{_sign(signing_input, secret)}"


@pytest.mark.parametrize("raw", [b"[1, 2]", b'"owner@example.com"', b'{"exp": "soon"}', b"not json"])
def test_signed_but_malformed_payload_is_unauthorized(raw):
    token = _signed(_b64url_encode(raw))

    with pytest.raises(Unauthorized):
        decode_jwt(token, secret="test-secret", now=NOW)
