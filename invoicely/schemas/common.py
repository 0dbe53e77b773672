"""Common schema module."""

from __future__ import annotations

from pydantic import BaseModel


class APIEnvelope(BaseModel):
    status: str = "ok"
    message: str | None = None


class ErrorEnvelope(BaseModel):
    status: str = "error"
    error_code: str
    detail: str
