"""Type definitions for the billing and payroll calculators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from workforce_billing.calculators.money import ZERO, round_money, to_decimal


def coerce_date(value: Any) -> date | None:
    """Coerce a date, datetime or ISO string to a calendar date.

    Anything unparseable is treated as "not yet specified" and yields None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def _money_str(value: Decimal) -> str:
    return str(value)


def _date_str(value: date | None) -> str | None:
    return value.isoformat() if value else None


class PaymentType(str, Enum):
    """Project payment schedule types.

    UNKNOWN is the explicit fallback branch for unrecognised input; it is
    estimated with FIXED semantics.
    """

    FIXED = "fixed"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> PaymentType:
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for member in cls:
            if member.value == text and member is not cls.UNKNOWN:
                return member
        return cls.UNKNOWN


class SalaryType(str, Enum):
    """Worker salary types."""

    DAILY = "daily"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: Any) -> SalaryType:
        """Anything other than 'daily' (any case) is a monthly worker."""
        if isinstance(value, cls):
            return value
        return cls.DAILY if str(value or "").strip().lower() == "daily" else cls.MONTHLY


class InvoiceStatus(str, Enum):
    """Invoice status values."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range. Either bound may be unset."""

    start: date | None = None
    end: date | None = None

    @classmethod
    def of(cls, start: Any, end: Any) -> DateRange:
        return cls(start=coerce_date(start), end=coerce_date(end))

    @property
    def is_specified(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def total_days(self) -> int:
        """Inclusive day count; 0 when unset or inverted."""
        if not self.is_specified or self.end < self.start:
            return 0
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class PaymentSchedule:
    """Project payment schedule as entered on the project form."""

    payment_type: PaymentType
    rate: Decimal
    working_days_per_week: Any = 6  # raw caller input, clamped at use
    overtime_rate: Decimal | None = None
    overtime_hours: Decimal | None = None


@dataclass(frozen=True)
class WorkingDays:
    """Result of a working-days computation."""

    total_days: int
    working_days: int
    full_weeks: int = 0
    remaining_days: int = 0


@dataclass
class BudgetEstimate:
    """Estimated project budget."""

    payment_type: PaymentType
    estimated_total: Decimal
    base_total: Decimal
    overtime_total: Decimal
    working_days: int
    total_days: int
    missing: list[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.missing

    @property
    def is_submittable(self) -> bool:
        """Callers block project submission until this is true."""
        return self.estimated_total > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "payment_type": self.payment_type.value,
            "estimated_total": _money_str(self.estimated_total),
            "base_total": _money_str(self.base_total),
            "overtime_total": _money_str(self.overtime_total),
            "working_days": self.working_days,
            "total_days": self.total_days,
            "missing": list(self.missing),
        }


@dataclass(frozen=True)
class LineItem:
    """An invoice line item. `amount` is derived, never edited directly."""

    description: str = ""
    quantity: Decimal = Decimal("1")
    rate: Decimal = ZERO
    amount: Decimal = ZERO

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "quantity": _money_str(self.quantity),
            "rate": _money_str(self.rate),
            "amount": _money_str(self.amount),
        }


@dataclass
class LineItemsUpdate:
    """Line items after an edit, with the recomputed invoice total."""

    items: list[LineItem]
    total_amount: Decimal


@dataclass
class InvoiceDraft:
    """Project invoice form data, prior to validation."""

    items: list[LineItem] = field(default_factory=list)
    invoice_date: date | None = None
    due_date: date | None = None
    project_id: str | None = None
    client_name: str | None = None
    client_email: str | None = None
    client_phone: str | None = None
    worker_name: str | None = None
    worker_email: str | None = None
    worker_phone: str | None = None
    paid_amount: Decimal = ZERO
    notes: str | None = None


@dataclass
class Invoice:
    """A priced project invoice ready for the persistence collaborator."""

    items: list[LineItem]
    total_amount: Decimal
    paid_amount: Decimal = ZERO
    status: InvoiceStatus = InvoiceStatus.DRAFT
    invoice_date: date | None = None
    due_date: date | None = None
    project_id: str | None = None
    client_name: str | None = None
    client_email: str | None = None
    client_phone: str | None = None
    notes: str | None = None

    @property
    def balance_amount(self) -> Decimal:
        return round_money(self.total_amount - self.paid_amount)

    def to_dict(self) -> dict[str, Any]:
        return {
            "invoice_type": "project",
            "status": self.status.value,
            "invoice_date": _date_str(self.invoice_date),
            "due_date": _date_str(self.due_date),
            "project_id": self.project_id,
            "client_name": self.client_name,
            "client_email": self.client_email,
            "client_phone": self.client_phone,
            "items": [item.to_dict() for item in self.items],
            "total_amount": _money_str(self.total_amount),
            "paid_amount": _money_str(self.paid_amount),
            "balance_amount": _money_str(self.balance_amount),
            "notes": self.notes,
        }


@dataclass(frozen=True)
class AttendanceAggregate:
    """Attendance totals for one worker and period.

    Supplied by the attendance collaborator. `present_days` already counts
    each half day as 0.5; `half_days` is informational.
    """

    working_days_in_period: int = 0
    present_days: Decimal = ZERO
    absent_days: int = 0
    overtime_hours: Decimal = ZERO
    half_days: int = 0


@dataclass(frozen=True)
class SalaryRateInfo:
    """Rates for one worker, already resolved to a per-present-day figure."""

    salary_type: SalaryType
    base_salary_rate: Decimal
    overtime_rate: Decimal = ZERO
    bonus: Decimal = ZERO
    allowances: Decimal = ZERO

    @classmethod
    def for_worker(
        cls,
        salary_type: Any,
        salary_daily: Any = None,
        salary_monthly: Any = None,
        hourly_rate: Any = None,
        overtime_rate: Any = None,
        working_days_per_month: Any = 26,
        bonus: Any = None,
        allowances: Any = None,
        working_hours_per_day: Any = 8,
    ) -> SalaryRateInfo:
        """Resolve worker rate metadata into a per-present-day rate.

        Monthly workers are paid monthly / working_days_per_month for each
        present day. Overtime falls back to 1.5x the hourly rate; without an
        hourly rate, the day rate is spread over working_hours_per_day.
        """
        kind = SalaryType.parse(salary_type)
        if kind is SalaryType.DAILY:
            rate = to_decimal(salary_daily)
        else:
            days = to_decimal(working_days_per_month) or Decimal("26")
            rate = round_money(to_decimal(salary_monthly) / days)

        ot_rate = to_decimal(overtime_rate)
        if not ot_rate:
            hourly = to_decimal(hourly_rate)
            if not hourly:
                hourly = rate / (to_decimal(working_hours_per_day) or Decimal("8"))
            ot_rate = round_money(hourly * Decimal("1.5"))

        return cls(
            salary_type=kind,
            base_salary_rate=rate,
            overtime_rate=ot_rate,
            bonus=to_decimal(bonus),
            allowances=to_decimal(allowances),
        )


@dataclass(frozen=True)
class DeductionItems:
    """Independently supplied deduction sub-items."""

    pf: Decimal = ZERO
    esi: Decimal = ZERO
    tax: Decimal = ZERO
    advances: Decimal = ZERO
    half_day_deduction: Decimal = ZERO
    other: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return round_money(
            self.pf + self.esi + self.tax + self.advances + self.half_day_deduction + self.other
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "pf": _money_str(self.pf),
            "esi": _money_str(self.esi),
            "tax": _money_str(self.tax),
            "advances": _money_str(self.advances),
            "half_day_deduction": _money_str(self.half_day_deduction),
            "other": _money_str(self.other),
        }


@dataclass
class SalaryBreakdown:
    """Salary computed for one worker over one period."""

    salary_type: SalaryType
    base_salary_rate: Decimal
    base_salary_amount: Decimal
    overtime_rate: Decimal
    overtime_amount: Decimal
    deductions: Decimal
    net_pay: Decimal
    bonus: Decimal = ZERO
    allowances: Decimal = ZERO
    working_days_in_period: int = 0
    present_days: Decimal = ZERO
    absent_days: int = 0
    half_days: int = 0
    overtime_hours: Decimal = ZERO
    deduction_notes: str = ""

    @property
    def gross_salary(self) -> Decimal:
        return round_money(
            self.base_salary_amount + self.overtime_amount + self.bonus + self.allowances
        )

    @classmethod
    def empty(cls, salary_type: SalaryType, overtime_rate: Decimal = ZERO) -> SalaryBreakdown:
        """Zero breakdown for a period with no active overlap."""
        return cls(
            salary_type=salary_type,
            base_salary_rate=ZERO,
            base_salary_amount=ZERO,
            overtime_rate=overtime_rate,
            overtime_amount=ZERO,
            deductions=ZERO,
            net_pay=ZERO,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "salary_type": self.salary_type.value,
            "base_salary_rate": _money_str(self.base_salary_rate),
            "working_days_in_period": self.working_days_in_period,
            "present_days": _money_str(self.present_days),
            "absent_days": self.absent_days,
            "half_days": self.half_days,
            "overtime_hours": _money_str(self.overtime_hours),
            "overtime_rate": _money_str(self.overtime_rate),
            "overtime_amount": _money_str(self.overtime_amount),
            "base_salary_amount": _money_str(self.base_salary_amount),
            "bonus": _money_str(self.bonus),
            "allowances": _money_str(self.allowances),
            "gross_salary": _money_str(self.gross_salary),
            "deductions": _money_str(self.deductions),
            "deduction_notes": self.deduction_notes,
            "net_pay": _money_str(self.net_pay),
        }


@dataclass
class SalaryInvoice:
    """A generated salary invoice for the persistence collaborator."""

    worker_id: str
    period: DateRange
    breakdown: SalaryBreakdown
    total_amount: Decimal
    paid_amount: Decimal = ZERO
    status: InvoiceStatus = InvoiceStatus.DRAFT
    invoice_date: date | None = None
    due_date: date | None = None
    worker_name: str | None = None
    worker_email: str | None = None
    worker_phone: str | None = None
    notes: str | None = None

    @property
    def balance_amount(self) -> Decimal:
        return round_money(self.total_amount - self.paid_amount)

    def to_dict(self) -> dict[str, Any]:
        return {
            "invoice_type": "salary",
            "status": self.status.value,
            "worker_id": self.worker_id,
            "worker_name": self.worker_name,
            "worker_email": self.worker_email,
            "worker_phone": self.worker_phone,
            "invoice_date": _date_str(self.invoice_date),
            "due_date": _date_str(self.due_date),
            "salary_period": {
                "from": _date_str(self.period.start),
                "to": _date_str(self.period.end),
            },
            "salary_breakdown": self.breakdown.to_dict(),
            "total_amount": _money_str(self.total_amount),
            "paid_amount": _money_str(self.paid_amount),
            "balance_amount": _money_str(self.balance_amount),
            "notes": self.notes,
        }


@dataclass(frozen=True)
class RateCard:
    """Derived daily/monthly/hourly/overtime rates for a worker."""

    daily_rate: Decimal
    monthly_rate: Decimal
    hourly_rate: Decimal
    overtime_rate: Decimal


@dataclass(frozen=True)
class PeriodSuggestion:
    """A pre-computed candidate salary period."""

    label: str
    period: DateRange

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "from": _date_str(self.period.start),
            "to": _date_str(self.period.end),
        }
