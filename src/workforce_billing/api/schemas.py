"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Project budget schemas
# ============================================================================


class BudgetEstimateRequest(BaseModel):
    """Schema for a project budget estimate."""

    payment_type: str = "fixed"
    rate: Decimal | None = None
    start_date: date | None = None
    end_date: date | None = None
    working_days_per_week: int | None = 6
    overtime_rate: Decimal | None = None
    overtime_hours: Decimal | None = None


class BudgetEstimateResponse(BaseModel):
    """Schema for a project budget estimate response."""

    payment_type: str
    estimated_total: Decimal
    base_total: Decimal
    overtime_total: Decimal
    working_days: int
    total_days: int
    missing: list[str]
    is_submittable: bool


# ============================================================================
# Project invoice schemas
# ============================================================================


class LineItemIn(BaseModel):
    """Schema for an invoice line item as entered."""

    description: str = ""
    quantity: Decimal = Decimal("1")
    rate: Decimal = Decimal("0")


class LineItemOut(BaseModel):
    """Schema for a priced invoice line item."""

    model_config = ConfigDict(from_attributes=True)

    description: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal


class InvoiceTotalsRequest(BaseModel):
    """Schema for recomputing invoice totals."""

    items: list[LineItemIn] = Field(default_factory=list)
    paid_amount: Decimal = Decimal("0")


class InvoiceTotalsResponse(BaseModel):
    """Schema for recomputed invoice totals."""

    items: list[LineItemOut]
    total_amount: Decimal
    paid_amount: Decimal
    balance_amount: Decimal


class ProjectInvoiceRequest(BaseModel):
    """Schema for a project invoice form."""

    invoice_date: date | None = None
    due_date: date | None = None
    project_id: str | None = None
    client_name: str | None = None
    client_email: str | None = None
    client_phone: str | None = None
    worker_name: str | None = None
    worker_email: str | None = None
    worker_phone: str | None = None
    items: list[LineItemIn] = Field(default_factory=list)
    paid_amount: Decimal = Decimal("0")
    notes: str | None = None


# ============================================================================
# Salary schemas
# ============================================================================


class WorkerRates(BaseModel):
    """Schema for worker rate metadata."""

    salary_type: str = "monthly"
    salary_daily: Decimal | None = None
    salary_monthly: Decimal | None = None
    hourly_rate: Decimal | None = None
    overtime_rate: Decimal | None = None
    working_days_per_month: int | None = Field(default=None, ge=1, le=31)
    working_hours_per_day: int | None = Field(default=None, ge=1, le=24)
    bonus: Decimal | None = None
    allowances: Decimal | None = None


class AttendanceIn(BaseModel):
    """Schema for an attendance aggregate."""

    working_days_in_period: int = Field(default=0, ge=0)
    present_days: Decimal = Field(default=Decimal("0"), ge=0)
    absent_days: int = Field(default=0, ge=0)
    overtime_hours: Decimal = Field(default=Decimal("0"), ge=0)
    half_days: int = Field(default=0, ge=0)


class DeductionItemsIn(BaseModel):
    """Schema for itemised deductions."""

    pf: Decimal = Field(default=Decimal("0"), ge=0)
    esi: Decimal = Field(default=Decimal("0"), ge=0)
    tax: Decimal = Field(default=Decimal("0"), ge=0)
    advances: Decimal = Field(default=Decimal("0"), ge=0)
    half_day_deduction: Decimal = Field(default=Decimal("0"), ge=0)
    other: Decimal = Field(default=Decimal("0"), ge=0)


class SalaryInvoiceRequestIn(BaseModel):
    """Schema for salary preview and generation."""

    worker_id: str | None = None
    worker_name: str | None = None
    worker_email: str | None = None
    worker_phone: str | None = None
    period_from: date | None = None
    period_to: date | None = None
    join_date: date | None = None
    inactive_from: date | None = None
    worker: WorkerRates = Field(default_factory=WorkerRates)
    attendance: AttendanceIn = Field(default_factory=AttendanceIn)
    deduction_items: DeductionItemsIn | None = None
    deductions: Decimal | None = None
    deduction_notes: str = ""
    notes: str | None = None


class SalaryBreakdownResponse(BaseModel):
    """Schema for a salary breakdown."""

    salary_type: str
    base_salary_rate: Decimal
    working_days_in_period: int
    present_days: Decimal
    absent_days: int
    half_days: int
    overtime_hours: Decimal
    overtime_rate: Decimal
    overtime_amount: Decimal
    base_salary_amount: Decimal
    bonus: Decimal
    allowances: Decimal
    gross_salary: Decimal
    deductions: Decimal
    deduction_notes: str
    net_pay: Decimal


class PeriodSuggestionResponse(BaseModel):
    """Schema for a suggested salary period."""

    label: str
    period_from: date
    period_to: date


# ============================================================================
# Formatting schemas
# ============================================================================


class FormatRequest(BaseModel):
    """Schema for formatting values with workspace settings."""

    settings: dict[str, Any] | None = None
    amount: Any = None
    value: str | None = None


class FormatResponse(BaseModel):
    """Schema for formatted values."""

    money: str
    date_display: str
    time_display: str
    datetime_display: str


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
    errors: list[str] = Field(default_factory=list)
