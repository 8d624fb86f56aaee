"""Input validation for invoices and salary periods.

All validators collect every violation instead of stopping at the first.
`collect_*` functions return the list of messages; `validate_*` functions
raise ValidationError when the list is non-empty.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from workforce_billing.calculators.line_items import InvoiceLineItemEngine
from workforce_billing.calculators.money import ZERO, to_decimal
from workforce_billing.calculators.types import DeductionItems, InvoiceDraft, coerce_date

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NON_DIGITS = re.compile(r"[^0-9]")
PHONE_DIGITS = 10

MAX_SALARY_PERIOD_DAYS = 31
MIN_SALARY_PERIOD_DAYS = 1


class ValidationError(Exception):
    """Raised when caller input fails validation. Carries every violation."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Validation failed")


def is_valid_email(email: str | None) -> bool:
    """Empty is valid (optional field)."""
    if not email:
        return True
    return EMAIL_PATTERN.match(email) is not None


def is_valid_phone(phone: str | None) -> bool:
    """Empty is valid; otherwise exactly 10 digits once non-digits are stripped."""
    if not phone:
        return True
    return len(NON_DIGITS.sub("", phone)) == PHONE_DIGITS


def _blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def collect_invoice_errors(draft: InvoiceDraft) -> list[str]:
    """Return every violation in a project invoice form."""
    errors: list[str] = []

    if draft.invoice_date is None:
        errors.append("Invoice date is required")
    if draft.due_date is None:
        errors.append("Due date is required")
    if draft.invoice_date is not None and draft.due_date is not None:
        if draft.due_date < draft.invoice_date:
            errors.append("Due date must be on or after invoice date")

    # Project invoices need a client; other invoices accept a worker instead.
    if draft.project_id:
        if _blank(draft.client_name):
            errors.append("Client name is required")
    elif _blank(draft.client_name) and _blank(draft.worker_name):
        errors.append("Client or worker name is required")

    # Every contact given is checked; each message is reported once.
    if not all(is_valid_email(email) for email in (draft.client_email, draft.worker_email)):
        errors.append("Invalid email format")
    if not all(is_valid_phone(phone) for phone in (draft.client_phone, draft.worker_phone)):
        errors.append("Phone number must be 10 digits")

    if not draft.items:
        errors.append("At least one line item is required")
    else:
        for number, item in enumerate(draft.items, start=1):
            if _blank(item.description):
                errors.append(f"Item {number}: Description is required")
            if item.quantity <= 0:
                errors.append(f"Item {number}: Quantity must be greater than 0")
            if item.rate < 0:
                errors.append(f"Item {number}: Rate cannot be negative")

    paid_amount = to_decimal(draft.paid_amount)
    total_amount = InvoiceLineItemEngine.compute_total(draft.items)
    if paid_amount < 0:
        errors.append("Paid amount cannot be negative")
    if paid_amount > total_amount:
        errors.append("Paid amount cannot exceed total amount")

    return errors


def validate_invoice(draft: InvoiceDraft) -> None:
    """Raise ValidationError listing every violation in the invoice form."""
    errors = collect_invoice_errors(draft)
    if errors:
        raise ValidationError(errors)


def collect_payment_errors(paid_amount: Any, total_amount: Any) -> list[str]:
    """Violations of 0 <= paid_amount <= total_amount."""
    errors: list[str] = []
    paid = to_decimal(paid_amount)
    if paid < 0:
        errors.append("Paid amount cannot be negative")
    if paid > to_decimal(total_amount):
        errors.append("Paid amount cannot exceed total amount")
    return errors


def _today(now: date | datetime) -> date:
    return now.date() if isinstance(now, datetime) else now


def collect_salary_period_errors(
    worker_id: Any,
    period_from: Any,
    period_to: Any,
    now: date | datetime,
    deductions: Any = None,
) -> list[str]:
    """Return every violation in a salary period request."""
    errors: list[str] = []

    if _blank(worker_id):
        errors.append("Worker selection is required")

    start = coerce_date(period_from)
    end = coerce_date(period_to)
    if start is None:
        errors.append("Period start date is required")
    if end is None:
        errors.append("Period end date is required")

    if start is not None and end is not None:
        if start > end:
            errors.append("Period start date must be before end date")
        if end > _today(now):
            errors.append("Period end date cannot be in the future")

        length = (end - start).days + 1
        if length > MAX_SALARY_PERIOD_DAYS:
            errors.append("Salary period cannot exceed 31 days")
        if length < MIN_SALARY_PERIOD_DAYS:
            errors.append("Salary period must be at least 1 day")

    if deductions is not None and to_decimal(deductions) < 0:
        errors.append("Deductions cannot be negative")

    return errors


def validate_salary_period(
    worker_id: Any,
    period_from: Any,
    period_to: Any,
    now: date | datetime,
    deductions: Any = None,
) -> None:
    """Raise ValidationError listing every violation in the salary period."""
    errors = collect_salary_period_errors(worker_id, period_from, period_to, now, deductions)
    if errors:
        raise ValidationError(errors)


def collect_salary_generation_errors(
    worker_id: Any,
    period_from: Any,
    period_to: Any,
    now: date | datetime,
    deductions: Any,
    gross_salary: Decimal | None,
    deduction_items: DeductionItems | None = None,
) -> list[str]:
    """Period rules plus the deductions ceiling, checked at generation time.

    The deductions may have been edited after the preview was calculated,
    so the ceiling is evaluated again here: itemised deductions plus the
    ad-hoc figure, uncapped, against the gross salary. A gross of None
    skips the ceiling (no computable salary for the period).
    """
    errors = collect_salary_period_errors(worker_id, period_from, period_to, now, deductions)
    if gross_salary is None:
        return errors

    items_total = deduction_items.total if deduction_items is not None else ZERO
    if items_total + to_decimal(deductions) > gross_salary:
        errors.append("Deductions cannot exceed gross salary")
    return errors


def validate_salary_generation(
    worker_id: Any,
    period_from: Any,
    period_to: Any,
    now: date | datetime,
    deductions: Any,
    gross_salary: Decimal | None,
    deduction_items: DeductionItems | None = None,
) -> None:
    errors = collect_salary_generation_errors(
        worker_id, period_from, period_to, now, deductions, gross_salary, deduction_items
    )
    if errors:
        raise ValidationError(errors)
