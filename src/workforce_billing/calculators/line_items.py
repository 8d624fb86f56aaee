"""Invoice line item editing with currency-safe totals."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Any

from workforce_billing.calculators.money import round_money, sum_money, to_decimal
from workforce_billing.calculators.types import LineItem, LineItemsUpdate


class InvoiceLineItemEngine:
    """Edits invoice line items and keeps amounts and totals consistent.

    Invariants:
    - item.amount == round(item.quantity * item.rate) after every
      quantity or rate edit, for the edited item only
    - total == round(sum(item.amount)) over the full list after every edit
    - the list never drops below one item

    Every operation returns new lists; the input list is not mutated.
    """

    MIN_ITEMS = 1

    @staticmethod
    def price(quantity: Any, rate: Any) -> Decimal:
        """Amount for a quantity at a rate, rounded to cents."""
        return round_money(to_decimal(quantity) * to_decimal(rate))

    @staticmethod
    def new_item(description: str = "", quantity: Any = 1, rate: Any = 0) -> LineItem:
        qty = to_decimal(quantity)
        unit = to_decimal(rate)
        return LineItem(
            description=description,
            quantity=qty,
            rate=unit,
            amount=InvoiceLineItemEngine.price(qty, unit),
        )

    @staticmethod
    def compute_total(items: list[LineItem]) -> Decimal:
        """Invoice total: rounded sum of item amounts."""
        return sum_money(item.amount for item in items)

    @staticmethod
    def _updated(items: list[LineItem]) -> LineItemsUpdate:
        return LineItemsUpdate(items=items, total_amount=InvoiceLineItemEngine.compute_total(items))

    @staticmethod
    def add_item(items: list[LineItem]) -> list[LineItem]:
        """Append an empty item (quantity 1, rate 0)."""
        return [*items, InvoiceLineItemEngine.new_item()]

    @staticmethod
    def can_remove(items: list[LineItem]) -> bool:
        return len(items) > InvoiceLineItemEngine.MIN_ITEMS

    @staticmethod
    def remove_item(items: list[LineItem], index: int) -> LineItemsUpdate:
        """Remove the item at index. The last remaining item is kept."""
        if not InvoiceLineItemEngine.can_remove(items):
            return InvoiceLineItemEngine._updated(list(items))
        remaining = list(items)
        del remaining[index]
        return InvoiceLineItemEngine._updated(remaining)

    @staticmethod
    def set_quantity(items: list[LineItem], index: int, value: Any) -> LineItemsUpdate:
        updated = list(items)
        item = updated[index]
        quantity = to_decimal(value)
        updated[index] = replace(
            item, quantity=quantity, amount=InvoiceLineItemEngine.price(quantity, item.rate)
        )
        return InvoiceLineItemEngine._updated(updated)

    @staticmethod
    def set_rate(items: list[LineItem], index: int, value: Any) -> LineItemsUpdate:
        updated = list(items)
        item = updated[index]
        rate = to_decimal(value)
        updated[index] = replace(
            item, rate=rate, amount=InvoiceLineItemEngine.price(item.quantity, rate)
        )
        return InvoiceLineItemEngine._updated(updated)

    @staticmethod
    def set_description(items: list[LineItem], index: int, value: str | None) -> LineItemsUpdate:
        updated = list(items)
        updated[index] = replace(updated[index], description=value or "")
        return InvoiceLineItemEngine._updated(updated)

    @staticmethod
    def reprice(items: list[LineItem]) -> LineItemsUpdate:
        """Recompute every amount, e.g. for items loaded from a payload."""
        repriced = [
            replace(item, amount=InvoiceLineItemEngine.price(item.quantity, item.rate))
            for item in items
        ]
        return InvoiceLineItemEngine._updated(repriced)
