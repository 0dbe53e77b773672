"""Auth and account schema module."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    email: str = ""
    password: str = Field(default="", max_length=256)
    mobile: str = Field(default="", max_length=40)


class LoginRequest(BaseModel):
    email: str = ""
    password: str = Field(default="", max_length=256)


class AccountStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email: str
    mobile: str
    subscribed: bool
    trial_expired: bool
    trial_start: datetime
    trial_ends_at: datetime
    trial_seconds_remaining: int
    state: str


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: AccountStatusResponse
