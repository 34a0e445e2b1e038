# in-memory cart, never written to storage
from dataclasses import replace
from typing import List, Tuple

from db.models import CartLineItem, Product, ProductVariant


class Cart:
    """
    Line items keyed by variant id.

    A line never holds a quantity below 1; setting one removes the line.
    """

    def __init__(self) -> None:
        self._lines: List[CartLineItem] = []

    @property
    def items(self) -> Tuple[CartLineItem, ...]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def find(self, variant_id: int):
        return next((l for l in self._lines if l.variant_id == variant_id), None)

    def add(self, product: Product, variant: ProductVariant, quantity: int) -> None:
        """Merge into the existing line for this variant, else append a new one.

        Price and display fields are copied now, so later catalog edits do not
        change what is already in the cart.
        """
        existing = self.find(variant.id)
        if existing:
            self.update_quantity(variant.id, existing.quantity + quantity)
            return
        if quantity <= 0:
            return

        self._lines.append(
            CartLineItem(
                product_id=product.id,
                variant_id=variant.id,
                name=product.name,
                image_url=product.image_url,
                quantity=quantity,
                variant_description=f"{variant.size} / {variant.cloth_material}",
                price=variant.price,
            )
        )

    def remove(self, variant_id: int) -> None:
        self._lines = [l for l in self._lines if l.variant_id != variant_id]

    def update_quantity(self, variant_id: int, quantity: int) -> None:
        if quantity <= 0:
            self.remove(variant_id)
            return
        self._lines = [
            replace(l, quantity=quantity) if l.variant_id == variant_id else l
            for l in self._lines
        ]

    def total(self) -> float:
        return sum(l.price * l.quantity for l in self._lines)

    def clear(self) -> None:
        self._lines = []
