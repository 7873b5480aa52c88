"""Shopping cart, as an explicitly owned object.

A cart belongs to one checkout session; whoever creates it passes it
around.  Lines are keyed by the catalog item id (product or variant).
"""

from __future__ import annotations

from dataclasses import dataclass

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.catalog import CatalogItem, ProductVariant


@dataclass
class CartLine:
    item: CatalogItem
    quantity: int

    @property
    def product_id(self) -> str:
        if isinstance(self.item, ProductVariant):
            return self.item.product_id
        return self.item.id  # type: ignore[return-value]

    @property
    def variant_id(self) -> str | None:
        if isinstance(self.item, ProductVariant):
            return self.item.id
        return None


class Cart:

    def __init__(self) -> None:
        self._lines: dict[str, CartLine] = {}

    def add(self, item: CatalogItem, quantity: int = 1) -> None:
        """Add *quantity* units, merging with an existing line."""
        if item.id is None:
            raise ValidationError("Cannot add an unsaved item to the cart")
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")
        line = self._lines.get(item.id)
        if line is None:
            self._lines[item.id] = CartLine(item=item, quantity=quantity)
        else:
            line.quantity += quantity

    def remove(self, item_id: str) -> None:
        self._lines.pop(item_id, None)

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """Set the quantity of a line; zero or less removes it."""
        if quantity <= 0:
            self.remove(item_id)
            return
        line = self._lines.get(item_id)
        if line is None:
            raise ValidationError(f"Item '{item_id}' is not in the cart")
        line.quantity = quantity

    def clear(self) -> None:
        self._lines.clear()

    def get(self, item_id: str) -> CartLine | None:
        return self._lines.get(item_id)

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._lines

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines
