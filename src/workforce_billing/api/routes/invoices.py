"""Project and salary invoice endpoints."""

from typing import Any

from fastapi import APIRouter, status

from workforce_billing.api.dependencies import AppSettings, InvoiceServiceDep, Now
from workforce_billing.api.schemas import (
    ErrorResponse,
    InvoiceTotalsRequest,
    InvoiceTotalsResponse,
    LineItemIn,
    LineItemOut,
    PeriodSuggestionResponse,
    ProjectInvoiceRequest,
    SalaryBreakdownResponse,
    SalaryInvoiceRequestIn,
)
from workforce_billing.calculators.line_items import InvoiceLineItemEngine
from workforce_billing.calculators.money import round_money
from workforce_billing.calculators.salary import suggest_salary_periods
from workforce_billing.calculators.types import (
    AttendanceAggregate,
    DeductionItems,
    InvoiceDraft,
    LineItem,
    SalaryBreakdown,
    SalaryRateInfo,
)
from workforce_billing.config import Settings
from workforce_billing.formatting import local_date
from workforce_billing.services.invoice_service import SalaryInvoiceRequest

router = APIRouter(prefix="/invoices", tags=["invoices"])


# ============================================================================
# Payload conversion
# ============================================================================


def _to_items(items: list[LineItemIn]) -> list[LineItem]:
    return [
        InvoiceLineItemEngine.new_item(item.description, item.quantity, item.rate)
        for item in items
    ]


def _to_breakdown_response(breakdown: SalaryBreakdown) -> SalaryBreakdownResponse:
    return SalaryBreakdownResponse.model_validate(breakdown.to_dict())


def _to_salary_inputs(
    payload: SalaryInvoiceRequestIn,
    app_settings: Settings,
) -> tuple[SalaryInvoiceRequest, SalaryRateInfo, AttendanceAggregate, DeductionItems | None]:
    request = SalaryInvoiceRequest(
        worker_id=payload.worker_id,
        period_from=payload.period_from,
        period_to=payload.period_to,
        deductions=payload.deductions,
        deduction_notes=payload.deduction_notes,
        notes=payload.notes,
        worker_name=payload.worker_name,
        worker_email=payload.worker_email,
        worker_phone=payload.worker_phone,
        join_date=payload.join_date,
        inactive_from=payload.inactive_from,
    )
    worker = payload.worker
    rate_info = SalaryRateInfo.for_worker(
        salary_type=worker.salary_type,
        salary_daily=worker.salary_daily,
        salary_monthly=worker.salary_monthly,
        hourly_rate=worker.hourly_rate,
        overtime_rate=worker.overtime_rate,
        working_days_per_month=(
            worker.working_days_per_month or app_settings.default_working_days_per_month
        ),
        bonus=worker.bonus,
        allowances=worker.allowances,
        working_hours_per_day=(
            worker.working_hours_per_day or app_settings.default_working_hours_per_day
        ),
    )
    attendance = AttendanceAggregate(**payload.attendance.model_dump())
    deduction_items = (
        DeductionItems(**payload.deduction_items.model_dump())
        if payload.deduction_items is not None
        else None
    )
    return request, rate_info, attendance, deduction_items


# ============================================================================
# Project invoices
# ============================================================================


@router.post("/project/totals", response_model=InvoiceTotalsResponse)
async def compute_project_totals(payload: InvoiceTotalsRequest) -> InvoiceTotalsResponse:
    """Price every line item and recompute the invoice total and balance."""
    priced = InvoiceLineItemEngine.reprice(_to_items(payload.items))
    paid_amount = round_money(payload.paid_amount)

    return InvoiceTotalsResponse(
        items=[LineItemOut.model_validate(item) for item in priced.items],
        total_amount=priced.total_amount,
        paid_amount=paid_amount,
        balance_amount=round_money(priced.total_amount - paid_amount),
    )


@router.post(
    "/project/validate",
    responses={400: {"model": ErrorResponse}},
)
async def validate_project_invoice(
    payload: ProjectInvoiceRequest,
    service: InvoiceServiceDep,
) -> dict[str, Any]:
    """Validate a project invoice form and return the priced draft invoice."""
    draft = InvoiceDraft(
        items=_to_items(payload.items),
        invoice_date=payload.invoice_date,
        due_date=payload.due_date,
        project_id=payload.project_id,
        client_name=payload.client_name,
        client_email=payload.client_email,
        client_phone=payload.client_phone,
        worker_name=payload.worker_name,
        worker_email=payload.worker_email,
        worker_phone=payload.worker_phone,
        paid_amount=payload.paid_amount,
        notes=payload.notes,
    )
    return service.build_project_invoice(draft).to_dict()


# ============================================================================
# Salary invoices
# ============================================================================


@router.post(
    "/salary/calculate",
    response_model=SalaryBreakdownResponse,
    responses={400: {"model": ErrorResponse}},
)
async def calculate_salary_preview(
    payload: SalaryInvoiceRequestIn,
    service: InvoiceServiceDep,
    app_settings: AppSettings,
    now: Now,
) -> SalaryBreakdownResponse:
    """Calculate a salary breakdown before generating the invoice."""
    request, rate_info, attendance, deduction_items = _to_salary_inputs(payload, app_settings)
    breakdown = service.preview_salary(request, rate_info, attendance, now, deduction_items)
    return _to_breakdown_response(breakdown)


@router.post(
    "/salary/generate",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def generate_salary_invoice(
    payload: SalaryInvoiceRequestIn,
    service: InvoiceServiceDep,
    app_settings: AppSettings,
    now: Now,
) -> dict[str, Any]:
    """Generate a salary invoice from a worker's attendance for a period."""
    request, rate_info, attendance, deduction_items = _to_salary_inputs(payload, app_settings)
    invoice = service.generate_salary_invoice(request, rate_info, attendance, now, deduction_items)
    return invoice.to_dict()


@router.get("/salary/periods", response_model=list[PeriodSuggestionResponse])
async def list_salary_periods(
    now: Now, app_settings: AppSettings
) -> list[PeriodSuggestionResponse]:
    """Suggested salary periods relative to today in the configured timezone."""
    today = local_date(now, app_settings.default_timezone)
    return [
        PeriodSuggestionResponse(
            label=suggestion.label,
            period_from=suggestion.period.start,
            period_to=suggestion.period.end,
        )
        for suggestion in suggest_salary_periods(today)
    ]
