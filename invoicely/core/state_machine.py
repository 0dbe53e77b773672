"""Canonical state transition helpers for invoice lifecycle."""

from __future__ import annotations

from invoicely.core.enums import INVOICE_DRAFT, INVOICE_SENT
from invoicely.core.exceptions import InvalidTransitionError


class StateMachine:
    """Simple in-memory state machine over a transition table."""

    def __init__(self, transitions: dict[str, set[str]]) -> None:
        self._transitions = transitions

    def can_transition(self, current: str, target: str) -> bool:
        return target in self._transitions.get(current, set())

    def assert_transition(self, current: str, target: str) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(f"Transition not allowed: {current} -> {target}")


# Re-sending an already sent invoice redelivers the email, so sent -> sent is allowed.
INVOICE_LIFECYCLE = StateMachine(
    {
        INVOICE_DRAFT: {INVOICE_SENT},
        INVOICE_SENT: {INVOICE_SENT},
    }
)
