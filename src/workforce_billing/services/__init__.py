"""Billing engine services."""

from workforce_billing.services.invoice_service import InvoiceService, SalaryInvoiceRequest
from workforce_billing.services.state_machine import InvalidTransitionError, InvoiceStateMachine

__all__ = [
    "InvoiceService",
    "SalaryInvoiceRequest",
    "InvoiceStateMachine",
    "InvalidTransitionError",
]
