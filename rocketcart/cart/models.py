"""Cart models: line items and the ordered cart sequence."""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import List, Optional

from rocketcart.services.models import Product


@dataclass
class CartItem:
    """A product in the cart with the requested quantity."""
    product: Product
    amount: int

    def __post_init__(self):
        if not isinstance(self.amount, int) or isinstance(self.amount, bool) or self.amount < 1:
            raise ValueError(f"amount must be a positive integer, got {self.amount!r}")

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def total_price(self) -> Decimal:
        """Price for all units."""
        return self.product.price * self.amount

    def to_dict(self) -> dict:
        """Flat dict: every product field plus amount."""
        data = self.product.to_dict()
        data["amount"] = self.amount
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        """Create from a flat dict produced by to_dict."""
        fields = dict(data)
        amount = fields.pop("amount")
        return cls(product=Product.model_validate(fields), amount=amount)


@dataclass
class Cart:
    """Ordered cart contents. Insertion order is the display order."""
    items: List[CartItem] = field(default_factory=list)

    def __post_init__(self):
        seen = set()
        for item in self.items:
            if item.product_id in seen:
                raise ValueError(f"duplicate cart item for product {item.product_id}")
            seen.add(item.product_id)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def find(self, product_id: int) -> Optional[CartItem]:
        """Linear lookup by product id."""
        return next((item for item in self.items if item.product_id == product_id), None)

    def copy(self) -> "Cart":
        """Copy with independent line items. Products are immutable and shared."""
        return Cart(items=[replace(item) for item in self.items])

    @property
    def total_items(self) -> int:
        """Total number of units in cart."""
        return sum(item.amount for item in self.items)

    @property
    def subtotal(self) -> Decimal:
        """Sum of line totals."""
        return sum((item.total_price for item in self.items), Decimal("0"))

    def summary(self) -> dict:
        """Cart summary for display and logging."""
        return {
            "is_empty": not self.items,
            "total_items": self.total_items,
            "items": [
                {
                    "product_id": item.product_id,
                    "title": item.product.title,
                    "amount": item.amount,
                    "unit_price": float(item.product.price),
                    "total": float(item.total_price),
                }
                for item in self.items
            ],
            "subtotal": float(self.subtotal),
        }

    def to_list(self) -> list:
        """Convert to the stored JSON shape."""
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_list(cls, data: list) -> "Cart":
        """Create from the stored JSON shape."""
        if not isinstance(data, list):
            raise TypeError(f"stored cart must be a list, got {type(data).__name__}")
        return cls(items=[CartItem.from_dict(item) for item in data])
