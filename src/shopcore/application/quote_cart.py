"""Application service: price a cart for checkout.

Each line is priced in the shopper's currency through the PriceResolver,
and the resolved unit price becomes the snapshot stored on the order
item.  A cart holding an item without a usable price cannot be quoted:
selling it at zero would be indistinguishable from giving it away.
"""

from __future__ import annotations

from shopcore.application.dto import CartQuote, CheckoutItemSpec
from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.cart import Cart
from shopcore.domain.model.currency import normalize_currency
from shopcore.domain.model.value_objects import Money
from shopcore.domain.service.price_resolver import PriceResolver


class QuoteCartHandler:

    def __init__(self, price_resolver: PriceResolver | None = None) -> None:
        self._price_resolver = price_resolver or PriceResolver()

    def handle(self, cart: Cart, currency: str) -> CartQuote:
        currency = normalize_currency(currency)
        if cart.is_empty:
            raise ValidationError("Cart is empty")

        items: list[CheckoutItemSpec] = []
        unpriced: list[str] = []
        total = Money.zero(currency)

        for line in cart.lines:
            resolved = self._price_resolver.resolve(line.item, currency)
            if resolved.is_missing:
                unpriced.append(line.item.name)
                continue
            items.append(
                CheckoutItemSpec(
                    product_id=line.product_id,
                    variant_id=line.variant_id,
                    quantity=line.quantity,
                    unit_price=resolved.money,
                )
            )
            total = total + resolved.money * line.quantity

        if unpriced:
            raise ValidationError(f"No price set for: {', '.join(unpriced)}")
        return CartQuote(items=items, total=total)
