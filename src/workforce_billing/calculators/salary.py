"""Salary breakdown from worker rates and an attendance aggregate."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import Any

from workforce_billing.calculators.money import ZERO, round_money, to_decimal
from workforce_billing.calculators.types import (
    AttendanceAggregate,
    DateRange,
    DeductionItems,
    PeriodSuggestion,
    RateCard,
    SalaryBreakdown,
    SalaryRateInfo,
    SalaryType,
)

OVERTIME_MULTIPLIER = Decimal("1.5")
DEFAULT_WORKING_DAYS_PER_MONTH = 26
DEFAULT_WORKING_HOURS_PER_DAY = 8


class SalaryBreakdownEngine:
    """Computes a worker's pay for one period.

    Calculation order:
    1) base = round(base rate * present days)
    2) overtime = round(overtime rate * overtime hours)
    3) gross = base + overtime + bonus + allowances
    4) deductions = deduction items + ad-hoc figure, kept within [0, gross]
    5) net = gross - deductions

    Rate semantics (daily vs. monthly-derived daily) are resolved before
    this engine runs; it only multiplies the rate it is given.
    """

    @staticmethod
    def total_deductions(
        deduction_items: DeductionItems | None, adhoc_deductions: Any = None
    ) -> Decimal:
        items_total = deduction_items.total if deduction_items is not None else ZERO
        return round_money(items_total + to_decimal(adhoc_deductions))

    @staticmethod
    def calculate(
        rate_info: SalaryRateInfo,
        attendance: AttendanceAggregate,
        deduction_items: DeductionItems | None = None,
        adhoc_deductions: Any = None,
        deduction_notes: str = "",
    ) -> SalaryBreakdown:
        base_amount = round_money(rate_info.base_salary_rate * to_decimal(attendance.present_days))
        overtime_amount = round_money(rate_info.overtime_rate * to_decimal(attendance.overtime_hours))
        bonus = round_money(rate_info.bonus)
        allowances = round_money(rate_info.allowances)
        gross = round_money(base_amount + overtime_amount + bonus + allowances)

        requested = SalaryBreakdownEngine.total_deductions(deduction_items, adhoc_deductions)
        deductions = min(max(requested, ZERO), gross)

        return SalaryBreakdown(
            salary_type=rate_info.salary_type,
            base_salary_rate=rate_info.base_salary_rate,
            base_salary_amount=base_amount,
            overtime_rate=rate_info.overtime_rate,
            overtime_amount=overtime_amount,
            bonus=bonus,
            allowances=allowances,
            deductions=deductions,
            net_pay=round_money(gross - deductions),
            working_days_in_period=attendance.working_days_in_period,
            present_days=to_decimal(attendance.present_days),
            absent_days=attendance.absent_days,
            half_days=attendance.half_days,
            overtime_hours=to_decimal(attendance.overtime_hours),
            deduction_notes=deduction_notes or "",
        )


def calculate_salary(
    rate_info: SalaryRateInfo,
    attendance: AttendanceAggregate,
    deduction_items: DeductionItems | None = None,
    adhoc_deductions: Any = None,
    deduction_notes: str = "",
) -> SalaryBreakdown:
    return SalaryBreakdownEngine.calculate(
        rate_info, attendance, deduction_items, adhoc_deductions, deduction_notes
    )


def derive_rates(
    salary_type: Any,
    primary_value: Any,
    working_days_per_month: Any = DEFAULT_WORKING_DAYS_PER_MONTH,
    working_hours_per_day: Any = DEFAULT_WORKING_HOURS_PER_DAY,
) -> RateCard:
    """Derive the full rate card from a worker's primary salary figure.

    A daily worker's primary value is the daily rate; a monthly worker's is
    the monthly salary. Overtime is 1.5x the hourly rate.
    """
    value = to_decimal(primary_value)
    days = to_decimal(working_days_per_month) or Decimal(DEFAULT_WORKING_DAYS_PER_MONTH)
    hours = to_decimal(working_hours_per_day) or Decimal(DEFAULT_WORKING_HOURS_PER_DAY)

    if SalaryType.parse(salary_type) is SalaryType.DAILY:
        daily = value
        monthly = daily * days
    else:
        monthly = value
        daily = monthly / days

    hourly = daily / hours
    return RateCard(
        daily_rate=round_money(daily),
        monthly_rate=round_money(monthly),
        hourly_rate=round_money(hourly),
        overtime_rate=round_money(hourly * OVERTIME_MULTIPLIER),
    )


def effective_period(
    period: DateRange,
    join_date: date | None = None,
    inactive_from: date | None = None,
) -> DateRange | None:
    """Clip a salary period to the worker's active window.

    Attendance before the join date is ignored; a worker who became
    inactive is paid up to the day before the inactive date. Returns None
    when the period has no active overlap.
    """
    if not period.is_specified:
        return None

    start = period.start
    end = period.end
    if join_date is not None and join_date > start:
        start = join_date
    if inactive_from is not None and inactive_from <= end:
        end = inactive_from - timedelta(days=1)

    if end < start:
        return None
    return DateRange(start=start, end=end)


def _first_of_month(day: date) -> date:
    return day.replace(day=1)


def suggest_salary_periods(today: date) -> list[PeriodSuggestion]:
    """Candidate periods offered on the salary generation screen."""
    this_month_start = _first_of_month(today)
    last_month_end = this_month_start - timedelta(days=1)
    last_month_start = _first_of_month(last_month_end)

    return [
        PeriodSuggestion("Current Month", DateRange(this_month_start, today)),
        PeriodSuggestion("Last Month", DateRange(last_month_start, last_month_end)),
        PeriodSuggestion("Last 30 Days", DateRange(today - timedelta(days=30), today)),
    ]
