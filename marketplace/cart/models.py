"""Cart summary models with Decimal-based pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from marketplace.models import CartItem, Product
from marketplace.services.money import multiply, round_money, to_float


@dataclass
class CartLine:
    """A cart item resolved against the catalog."""
    product: Product
    qty: int

    @property
    def unit_price(self) -> Decimal:
        return round_money(self.product.price)

    @property
    def line_total(self) -> Decimal:
        """Price for all units."""
        return round_money(multiply(self.unit_price, self.qty))

    def to_item(self) -> CartItem:
        return CartItem(product_id=self.product.id, qty=self.qty)

    def to_dict(self) -> dict:
        return {
            "product_id": self.product.id,
            "title": self.product.title,
            "qty": self.qty,
            "unit_price": to_float(self.unit_price),
            "total": to_float(self.line_total),
        }


@dataclass
class CartSummary:
    """Cart contents priced against the current catalog."""
    lines: List[CartLine] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)  # product ids no longer in the catalog

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total_items(self) -> int:
        """Total number of units in the cart."""
        return sum(line.qty for line in self.lines)

    @property
    def total(self) -> Decimal:
        return round_money(sum((line.line_total for line in self.lines), Decimal("0")))

    def items(self) -> List[CartItem]:
        """Snapshot of the priced lines, as stored in an order."""
        return [line.to_item() for line in self.lines]

    def to_dict(self) -> dict:
        return {
            "is_empty": self.is_empty,
            "total_items": self.total_items,
            "items": [line.to_dict() for line in self.lines],
            "missing": list(self.missing),
            "total": to_float(self.total),
        }
