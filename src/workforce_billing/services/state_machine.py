"""Invoice status state machine with transition validation."""

from __future__ import annotations

from workforce_billing.calculators.types import InvoiceStatus


class InvalidTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_status: str, to_status: str, reason: str | None = None):
        self.from_status = from_status
        self.to_status = to_status
        self.reason = reason
        msg = f"Invalid transition from '{from_status}' to '{to_status}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class InvoiceStateMachine:
    """State machine for invoice status transitions.

    Allowed transitions:
    - draft → sent (generated)
    - sent → paid

    Paid is terminal. Nothing moves back to draft or sent.
    """

    VALID_TRANSITIONS: dict[str, list[str]] = {
        InvoiceStatus.DRAFT: [InvoiceStatus.SENT],
        InvoiceStatus.SENT: [InvoiceStatus.PAID],
        InvoiceStatus.PAID: [],  # Terminal state
    }

    # Statuses where payments may still be recorded
    PAYMENT_ALLOWED = {
        InvoiceStatus.SENT,
    }

    @staticmethod
    def _value(status: str) -> str:
        return status.value if isinstance(status, InvoiceStatus) else str(status)

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        """Check if a transition is valid."""
        allowed = cls.VALID_TRANSITIONS.get(cls._value(from_status), [])
        return cls._value(to_status) in allowed

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """Validate a transition, raising InvalidTransitionError if invalid."""
        if not cls.can_transition(from_status, to_status):
            raise InvalidTransitionError(cls._value(from_status), cls._value(to_status))

    @classmethod
    def can_record_payment(cls, status: str) -> bool:
        return cls._value(status) in cls.PAYMENT_ALLOWED
