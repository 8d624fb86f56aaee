"""Billing and payroll calculators."""

from workforce_billing.calculators.budget import PaymentScheduleEstimator, estimate_budget
from workforce_billing.calculators.line_items import InvoiceLineItemEngine
from workforce_billing.calculators.money import round_money, to_decimal
from workforce_billing.calculators.salary import SalaryBreakdownEngine, calculate_salary
from workforce_billing.calculators.validators import ValidationError
from workforce_billing.calculators.working_days import compute_working_days

__all__ = [
    "PaymentScheduleEstimator",
    "estimate_budget",
    "InvoiceLineItemEngine",
    "round_money",
    "to_decimal",
    "SalaryBreakdownEngine",
    "calculate_salary",
    "ValidationError",
    "compute_working_days",
]
