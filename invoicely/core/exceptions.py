"""Custom exceptions for the Invoicely application.

Every exception carries a stable ``code``. Callers branch on the code (or the
exception class); message text is informational only.
"""


class InvoicelyException(Exception):
    """Base exception for Invoicely application."""

    code = "invoicely_error"


class ConfigurationError(InvoicelyException):
    """Raised when configuration is invalid."""

    code = "configuration_error"


class ValidationError(InvoicelyException):
    """Raised when input fails validation."""

    code = "validation_error"


class Unauthorized(InvoicelyException):
    """Raised when a credential is missing, invalid, or resolves to no account."""

    code = "unauthorized"


class TrialExpired(InvoicelyException):
    """Raised when a known, unsubscribed account is past its trial window."""

    code = "trial_expired"


class NotFoundError(InvoicelyException):
    """Raised when a resource is absent or not owned by the caller."""

    code = "not_found"


class DuplicateAccountError(InvoicelyException):
    """Raised when signup would violate an account uniqueness rule."""

    code = "duplicate_account"


class DuplicateEmail(DuplicateAccountError):
    code = "duplicate_email"


class DuplicateMobile(DuplicateAccountError):
    code = "duplicate_mobile"


class AlreadySubscribed(InvoicelyException):
    code = "already_subscribed"


class PaymentNotCompleted(InvoicelyException):
    """Raised when a payment intent has not reached the succeeded status."""

    code = "payment_not_completed"

    def __init__(self, message: str, intent_status: str | None = None) -> None:
        super().__init__(message)
        self.intent_status = intent_status


class PaymentProcessorError(InvoicelyException):
    """Raised when the external payment processor call fails."""

    code = "payment_processor_error"


class DeliveryError(InvoicelyException):
    """Raised when an invoice email could not be delivered."""

    code = "delivery_error"


class MissingRecipient(DeliveryError):
    code = "missing_recipient"


class InvalidTransitionError(InvoicelyException):
    """Raised when a disallowed state transition is attempted."""

    code = "invalid_transition"
