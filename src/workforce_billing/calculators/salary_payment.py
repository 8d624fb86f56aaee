"""Salary payout amounts with advance recovery."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from workforce_billing.calculators.money import ZERO, round_money, to_decimal

DEFAULT_DAYS_IN_MONTH = 30


class SalaryPaymentType(str, Enum):
    """Kinds of salary payout."""

    FULL = "full"
    PARTIAL = "partial"
    ADVANCE = "advance"
    ADHOC = "adhoc"


@dataclass(frozen=True)
class WorkerPayProfile:
    """Worker salary figures needed to price a payout."""

    salary_monthly: Decimal = ZERO
    salary_daily: Decimal = ZERO
    advance_balance: Decimal = ZERO


@dataclass(frozen=True)
class SalaryPaymentAmounts:
    """Gross payout, advance recovered from it, and the net paid out."""

    amount_gross: Decimal
    advance_deducted: Decimal
    net_amount: Decimal


def calculate_salary_payment(
    worker: WorkerPayProfile,
    payment_type: Any,
    days_paid: Any = None,
    amount: Any = None,
    days_in_month: Any = DEFAULT_DAYS_IN_MONTH,
) -> SalaryPaymentAmounts:
    """Price a salary payout.

    - full: the monthly salary
    - partial: daily rate * days paid (daily derived from monthly / days in month)
    - advance: the requested amount; an advance is never recovered from itself
    - adhoc: the requested amount

    Outstanding advances are recovered from every payout except an advance,
    up to the gross amount.

    Raises:
        ValueError: on a missing or unsupported type, or a non-positive
            days/amount where one is required.
    """
    if not payment_type:
        raise ValueError("type is required")
    try:
        kind = SalaryPaymentType(payment_type)
    except ValueError:
        raise ValueError(f"Unsupported type: {payment_type}") from None

    advance_balance = to_decimal(worker.advance_balance)
    monthly = to_decimal(worker.salary_monthly)
    daily = to_decimal(worker.salary_daily)
    month_days = to_decimal(days_in_month) or Decimal(DEFAULT_DAYS_IN_MONTH)
    requested_days = to_decimal(days_paid)
    requested_amount = to_decimal(amount)

    if kind is SalaryPaymentType.FULL:
        gross = monthly
    elif kind is SalaryPaymentType.PARTIAL:
        if requested_days <= 0:
            raise ValueError("days_paid must be > 0 for partial")
        if daily <= 0:
            daily = monthly / month_days if monthly > 0 else ZERO
        gross = daily * requested_days
    else:
        if requested_amount <= 0:
            raise ValueError(f"amount must be > 0 for {kind.value}")
        gross = requested_amount

    if kind is SalaryPaymentType.ADVANCE:
        recovered = ZERO
    else:
        recovered = min(max(advance_balance, ZERO), gross)

    return SalaryPaymentAmounts(
        amount_gross=round_money(gross),
        advance_deducted=round_money(recovered),
        net_amount=round_money(gross - recovered),
    )
