"""Working-day counting under a capped weekly schedule."""

from __future__ import annotations

from typing import Any

from workforce_billing.calculators.types import DateRange, WorkingDays

MIN_DAYS_PER_WEEK = 1
MAX_DAYS_PER_WEEK = 7


def parse_days_per_week(value: Any) -> int | None:
    """Parse a raw days-per-week value; None when it is not an integer."""
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            return int(value)
        return int(str(value).strip())
    except (ValueError, OverflowError):
        return None


def clamp_days_per_week(value: Any) -> int:
    """Clamp caller input into [1, 7]. Unparseable input counts as 0, then clamps to 1."""
    parsed = parse_days_per_week(value) or 0
    return max(MIN_DAYS_PER_WEEK, min(MAX_DAYS_PER_WEEK, parsed))


def compute_working_days(date_range: DateRange | None, working_days_per_week: Any) -> WorkingDays:
    """Count calendar and working days in an inclusive date range.

    The range is split into full weeks plus a trailing remainder; the
    remainder days are treated as the leading days of a week and count as
    working days up to the weekly cap. This does not look at which weekday
    the range starts on, so it is an approximation.
    """
    total_days = date_range.total_days if date_range is not None else 0
    if total_days == 0:
        return WorkingDays(total_days=0, working_days=0)

    per_week = clamp_days_per_week(working_days_per_week)
    full_weeks, remaining_days = divmod(total_days, 7)
    working_days = full_weeks * per_week + min(remaining_days, per_week)

    return WorkingDays(
        total_days=total_days,
        working_days=working_days,
        full_weeks=full_weeks,
        remaining_days=remaining_days,
    )
