"""Pytest fixtures for billing engine tests."""

from __future__ import annotations

from decimal import Decimal

import pytest

from workforce_billing.calculators.types import AttendanceAggregate, SalaryRateInfo, SalaryType
from workforce_billing.config import Settings
from workforce_billing.services.invoice_service import InvoiceService, SalaryInvoiceRequest


@pytest.fixture
def app_settings() -> Settings:
    """Settings independent of the process environment."""
    return Settings(
        engine_version="test",
        host="127.0.0.1",
        port=8000,
        debug=False,
        log_level="DEBUG",
        invoice_due_days=7,
        default_working_days_per_month=26,
        default_working_hours_per_day=8,
        default_currency="USD",
        default_timezone="UTC",
    )


@pytest.fixture
def service(app_settings: Settings) -> InvoiceService:
    return InvoiceService(app_settings)


@pytest.fixture
def daily_worker_rates() -> SalaryRateInfo:
    """Daily worker on 800/day with overtime at 120/hour."""
    return SalaryRateInfo(
        salary_type=SalaryType.DAILY,
        base_salary_rate=Decimal("800"),
        overtime_rate=Decimal("120"),
    )


@pytest.fixture
def may_attendance() -> AttendanceAggregate:
    """20 present days and 5 overtime hours in May 2024."""
    return AttendanceAggregate(
        working_days_in_period=27,
        present_days=Decimal("20"),
        absent_days=7,
        overtime_hours=Decimal("5"),
    )


@pytest.fixture
def may_request() -> SalaryInvoiceRequest:
    return SalaryInvoiceRequest(
        worker_id="worker-1",
        period_from="2024-05-01",
        period_to="2024-05-31",
        deductions=Decimal("300"),
        deduction_notes="Tools",
        worker_name="Ravi Kumar",
    )
