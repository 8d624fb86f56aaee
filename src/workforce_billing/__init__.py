"""Workforce billing engine: project budgets, invoices and salary breakdowns."""

__version__ = "0.1.0"
