"""JWT token utilities using HS256 signing."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from invoicely.core.exceptions import Unauthorized


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(f"{data}{padding}".encode("ascii"))


def _sign(message: str, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), message.encode("utf-8", "surrogatepass"), hashlib.sha256).digest()
    return _b64url_encode(digest)


def _json_dumps(payload: dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"), sort_keys=True)


def encode_jwt(payload: dict[str, Any], secret: str, ttl: timedelta, now: datetime | None = None) -> str:
    """Encode a signed JWT using HS256."""
    if not secret:
        raise Unauthorized("JWT secret must be configured.")

    issued_at = now or datetime.now(timezone.utc)
    body = dict(payload)
    body.setdefault("iat", int(issued_at.timestamp()))
    body.setdefault("exp", int((issued_at + ttl).timestamp()))
    body.setdefault("jti", str(uuid.uuid4()))
    header = {"alg": "HS256", "typ": "JWT"}

    header_segment = _b64url_encode(_json_dumps(header).encode("utf-8"))
    payload_segment = _b64url_encode(_json_dumps(body).encode("utf-8"))
    signing_input = f"{header_segment}.{payload_segment}"
    signature = _sign(signing_input, secret=secret)
    return f"{signing_input}.{signature}"


def decode_jwt(token: str, secret: str, now: datetime | None = None, verify_exp: bool = True) -> dict[str, Any]:
    """Decode and validate a signed JWT token."""
    if not secret:
        raise Unauthorized("JWT secret must be configured.")
    try:
        header_segment, payload_segment, signature_segment = token.split(".")
    except ValueError as exc:
        raise Unauthorized("Invalid token format.") from exc

    signing_input = f"{header_segment}.{payload_segment}"
    expected_signature = _sign(signing_input, secret=secret)
    presented = signature_segment.encode("utf-8", "surrogatepass")
    if not hmac.compare_digest(expected_signature.encode("ascii"), presented):
        raise Unauthorized("Invalid token signature.")

    try:
        payload = json.loads(_b64url_decode(payload_segment).decode("utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise Unauthorized("Invalid token payload.") from exc
    if not isinstance(payload, dict):
        raise Unauthorized("Invalid token payload.")

    if verify_exp:
        exp = payload.get("exp")
        if exp is None:
            raise Unauthorized("Token is missing exp claim.")
        current = now or datetime.now(timezone.utc)
        if not isinstance(exp, int) or isinstance(exp, bool):
            raise Unauthorized("Invalid exp claim.")
        if int(exp) < int(current.timestamp()):
            raise Unauthorized("Token has expired.")
    return payload


def create_access_token(email: str, secret: str, ttl_minutes: int = 720, now: datetime | None = None) -> str:
    """Create an access token whose subject is the account email."""
    payload = {"sub": email, "token_use": "access"}
    return encode_jwt(payload=payload, secret=secret, ttl=timedelta(minutes=ttl_minutes), now=now)


def subject_from_token(token: str, secret: str, now: datetime | None = None) -> str:
    """Return the account email a valid access token was issued for."""
    claims = decode_jwt(token, secret=secret, now=now)
    if claims.get("token_use") != "access":
        raise Unauthorized("Token is not an access token.")
    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject:
        raise Unauthorized("Invalid auth claims.")
    return subject
