"""Invoice assembly: project invoices, salary invoices and payments."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any

from workforce_billing.calculators.line_items import InvoiceLineItemEngine
from workforce_billing.calculators.money import round_money
from workforce_billing.calculators.salary import SalaryBreakdownEngine, effective_period
from workforce_billing.calculators.types import (
    AttendanceAggregate,
    DateRange,
    DeductionItems,
    Invoice,
    InvoiceDraft,
    InvoiceStatus,
    SalaryBreakdown,
    SalaryInvoice,
    SalaryRateInfo,
)
from workforce_billing.calculators.validators import (
    ValidationError,
    collect_invoice_errors,
    collect_payment_errors,
    collect_salary_generation_errors,
    collect_salary_period_errors,
)
from workforce_billing.config import Settings, get_settings
from workforce_billing.formatting import local_date
from workforce_billing.services.state_machine import InvalidTransitionError, InvoiceStateMachine

logger = logging.getLogger(__name__)


@dataclass
class SalaryInvoiceRequest:
    """Salary invoice generation request from the salary screen."""

    worker_id: str | None
    period_from: Any
    period_to: Any
    deductions: Any = None
    deduction_notes: str = ""
    notes: str | None = None
    worker_name: str | None = None
    worker_email: str | None = None
    worker_phone: str | None = None
    join_date: date | None = None
    inactive_from: date | None = None

    @property
    def period(self) -> DateRange:
        return DateRange.of(self.period_from, self.period_to)


class InvoiceService:
    """Builds invoice records for the persistence collaborator.

    Pure with respect to its inputs: every operation returns a new record.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # Project invoices
    # ------------------------------------------------------------------

    def build_project_invoice(self, draft: InvoiceDraft) -> Invoice:
        """Reprice the draft's items, validate, and return a draft invoice.

        Raises:
            ValidationError: listing every violation in the form
        """
        priced = InvoiceLineItemEngine.reprice(draft.items)
        draft = replace(draft, items=priced.items)

        errors = collect_invoice_errors(draft)
        if errors:
            logger.warning("Rejected project invoice with %d error(s)", len(errors))
            raise ValidationError(errors)

        return Invoice(
            items=priced.items,
            total_amount=priced.total_amount,
            paid_amount=round_money(draft.paid_amount),
            status=InvoiceStatus.DRAFT,
            invoice_date=draft.invoice_date,
            due_date=draft.due_date,
            project_id=draft.project_id,
            client_name=draft.client_name,
            client_email=draft.client_email,
            client_phone=draft.client_phone,
            notes=draft.notes,
        )

    # ------------------------------------------------------------------
    # Salary invoices
    # ------------------------------------------------------------------

    def _today(self, now: date | datetime) -> date:
        """Calendar date of now in the configured timezone."""
        return local_date(now, self.settings.default_timezone)

    @staticmethod
    def _active_window_errors(request: SalaryInvoiceRequest) -> list[str]:
        period = request.period
        if request.inactive_from is None or period.start is None:
            return []
        if period.start >= request.inactive_from:
            return [
                f"Cannot generate salary invoice for period starting {period.start.isoformat()}. "
                f"Worker became inactive from {request.inactive_from.isoformat()}."
            ]
        return []

    @staticmethod
    def _reject(action: str, request: SalaryInvoiceRequest, errors: list[str]) -> None:
        if errors:
            logger.warning(
                "Rejected salary %s for worker %s with %d error(s)",
                action,
                request.worker_id,
                len(errors),
            )
            raise ValidationError(errors)

    @staticmethod
    def _active_breakdown(
        request: SalaryInvoiceRequest,
        rate_info: SalaryRateInfo,
        attendance: AttendanceAggregate,
        deduction_items: DeductionItems | None,
    ) -> tuple[DateRange | None, SalaryBreakdown]:
        """Breakdown over the part of the period the worker was active."""
        active = effective_period(request.period, request.join_date, request.inactive_from)
        if active is None:
            logger.info("Worker %s has no active days in the requested period", request.worker_id)
            return None, SalaryBreakdown.empty(rate_info.salary_type, rate_info.overtime_rate)
        if active != request.period:
            logger.info(
                "Salary period for worker %s clipped to %s..%s",
                request.worker_id,
                active.start,
                active.end,
            )

        breakdown = SalaryBreakdownEngine.calculate(
            rate_info,
            attendance,
            deduction_items=deduction_items,
            adhoc_deductions=request.deductions,
            deduction_notes=request.deduction_notes,
        )
        return active, breakdown

    def preview_salary(
        self,
        request: SalaryInvoiceRequest,
        rate_info: SalaryRateInfo,
        attendance: AttendanceAggregate,
        now: date | datetime,
        deduction_items: DeductionItems | None = None,
    ) -> SalaryBreakdown:
        """Validate the period and compute the breakdown shown before generation.

        Raises:
            ValidationError: listing every violation in the request
        """
        errors = collect_salary_period_errors(
            request.worker_id,
            request.period_from,
            request.period_to,
            self._today(now),
            request.deductions,
        )
        errors.extend(self._active_window_errors(request))
        self._reject("preview", request, errors)

        _, breakdown = self._active_breakdown(request, rate_info, attendance, deduction_items)
        return breakdown

    def generate_salary_invoice(
        self,
        request: SalaryInvoiceRequest,
        rate_info: SalaryRateInfo,
        attendance: AttendanceAggregate,
        now: date | datetime,
        deduction_items: DeductionItems | None = None,
    ) -> SalaryInvoice:
        """Generate a salary invoice in the sent state.

        The itemised and ad-hoc deductions together are checked against the
        gross salary here, independently of any earlier preview. Every
        violation is reported in one error.

        Raises:
            ValidationError: listing every violation in the request
        """
        today = self._today(now)
        active, breakdown = self._active_breakdown(request, rate_info, attendance, deduction_items)
        window_errors = self._active_window_errors(request)

        # No ceiling without a usable period to compute gross over
        usable = request.period.total_days > 0 and not window_errors
        errors = collect_salary_generation_errors(
            request.worker_id,
            request.period_from,
            request.period_to,
            today,
            request.deductions,
            breakdown.gross_salary if usable else None,
            deduction_items,
        )
        errors.extend(window_errors)
        self._reject("invoice", request, errors)

        invoice = SalaryInvoice(
            worker_id=str(request.worker_id),
            worker_name=request.worker_name,
            worker_email=request.worker_email,
            worker_phone=request.worker_phone,
            period=active or request.period,
            breakdown=breakdown,
            total_amount=breakdown.net_pay,
            invoice_date=today,
            due_date=today + timedelta(days=self.settings.invoice_due_days),
            notes=request.notes,
        )
        invoice = self.send(invoice)

        logger.info(
            "Generated salary invoice for worker %s (%s..%s): net pay %s",
            invoice.worker_id,
            invoice.period.start,
            invoice.period.end,
            invoice.total_amount,
        )
        return invoice

    # ------------------------------------------------------------------
    # Status and payments
    # ------------------------------------------------------------------

    @staticmethod
    def send(invoice: Invoice | SalaryInvoice) -> Invoice | SalaryInvoice:
        """Move a draft invoice to sent."""
        InvoiceStateMachine.validate_transition(invoice.status, InvoiceStatus.SENT)
        return replace(invoice, status=InvoiceStatus.SENT)

    @staticmethod
    def mark_paid(invoice: Invoice | SalaryInvoice) -> Invoice | SalaryInvoice:
        """Move a sent invoice to paid; the paid amount becomes the total."""
        InvoiceStateMachine.validate_transition(invoice.status, InvoiceStatus.PAID)
        return replace(invoice, status=InvoiceStatus.PAID, paid_amount=invoice.total_amount)

    @staticmethod
    def record_payment(invoice: Invoice | SalaryInvoice, amount: Any) -> Invoice | SalaryInvoice:
        """Add a payment to a sent invoice.

        Payments only ever increase the paid amount and never exceed the
        total. Reaching the total moves the invoice to paid.

        Raises:
            ValidationError: for a non-positive payment or an overpayment
            InvalidTransitionError: when the invoice does not accept payments
        """
        if not InvoiceStateMachine.can_record_payment(invoice.status):
            raise InvalidTransitionError(
                invoice.status.value, InvoiceStatus.PAID.value, "invoice does not accept payments"
            )

        payment = round_money(amount)
        if payment <= 0:
            raise ValidationError(["Payment amount must be greater than 0"])

        paid: Decimal = round_money(invoice.paid_amount + payment)
        errors = collect_payment_errors(paid, invoice.total_amount)
        if errors:
            raise ValidationError(errors)

        if paid == invoice.total_amount:
            return InvoiceService.mark_paid(invoice)
        return replace(invoice, paid_amount=paid)
