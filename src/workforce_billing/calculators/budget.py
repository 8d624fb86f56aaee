"""Project budget estimation from a payment schedule."""

from __future__ import annotations

import math
from decimal import Decimal

from workforce_billing.calculators.money import ZERO, round_money, to_decimal
from workforce_billing.calculators.types import (
    BudgetEstimate,
    DateRange,
    PaymentSchedule,
    PaymentType,
)
from workforce_billing.calculators.working_days import (
    MAX_DAYS_PER_WEEK,
    MIN_DAYS_PER_WEEK,
    compute_working_days,
    parse_days_per_week,
)

DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30  # flat month, no calendar awareness


class PaymentScheduleEstimator:
    """Estimates a project's total budget.

    Base amount by payment type:
    - FIXED: rate
    - DAILY: rate * working days
    - WEEKLY: rate * max(1, ceil(total days / 7))
    - MONTHLY: rate * max(1, ceil(total days / 30))
    - UNKNOWN: same as FIXED

    Overtime (rate * hours) is added only when both are positive. An
    incomplete schedule estimates to zero and lists what is missing.
    """

    @staticmethod
    def periods(total_days: int, period_length: int) -> int:
        """Number of billable periods, never less than one."""
        return max(1, math.ceil(total_days / period_length))

    @staticmethod
    def base_total(
        payment_type: PaymentType, rate: Decimal, working_days: int, total_days: int
    ) -> Decimal:
        if payment_type is PaymentType.DAILY:
            return rate * working_days
        if payment_type is PaymentType.WEEKLY:
            return rate * PaymentScheduleEstimator.periods(total_days, DAYS_PER_WEEK)
        if payment_type is PaymentType.MONTHLY:
            return rate * PaymentScheduleEstimator.periods(total_days, DAYS_PER_MONTH)
        if payment_type is PaymentType.UNKNOWN:
            return rate
        return rate

    @staticmethod
    def overtime_total(schedule: PaymentSchedule) -> Decimal:
        overtime_rate = to_decimal(schedule.overtime_rate)
        overtime_hours = to_decimal(schedule.overtime_hours)
        if overtime_rate > 0 and overtime_hours > 0:
            return overtime_rate * overtime_hours
        return ZERO

    @staticmethod
    def missing_inputs(schedule: PaymentSchedule, date_range: DateRange | None) -> list[str]:
        missing: list[str] = []
        if to_decimal(schedule.rate) <= 0:
            missing.append("rate")
        if date_range is None or not date_range.is_specified:
            missing.append("dates")
        days_per_week = parse_days_per_week(schedule.working_days_per_week)
        if days_per_week is None or not MIN_DAYS_PER_WEEK <= days_per_week <= MAX_DAYS_PER_WEEK:
            missing.append("working_days_per_week")
        return missing

    @classmethod
    def estimate(cls, schedule: PaymentSchedule, date_range: DateRange | None) -> BudgetEstimate:
        payment_type = PaymentType.parse(schedule.payment_type)
        days = compute_working_days(date_range, schedule.working_days_per_week)
        missing = cls.missing_inputs(schedule, date_range)

        rate = to_decimal(schedule.rate)
        base = cls.base_total(payment_type, rate, days.working_days, days.total_days)
        overtime = cls.overtime_total(schedule)

        estimated_total = ZERO if missing else base + overtime

        return BudgetEstimate(
            payment_type=payment_type,
            estimated_total=round_money(estimated_total),
            base_total=round_money(base),
            overtime_total=round_money(overtime),
            working_days=days.working_days,
            total_days=days.total_days,
            missing=missing,
        )


def estimate_budget(schedule: PaymentSchedule, date_range: DateRange | None) -> BudgetEstimate:
    """Estimate a project budget. Never raises for incomplete input."""
    return PaymentScheduleEstimator.estimate(schedule, date_range)
