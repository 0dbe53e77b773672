"""Account domain model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Account:
    email: str
    password_hash: str
    mobile: str
    trial_start: datetime
    subscribed: bool = False
