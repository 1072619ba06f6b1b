"""In-memory cart state container."""
from dataclasses import replace as copy_item
from typing import Optional

from .models import Cart, CartItem


class CartRepository:
    """
    Holds the live cart sequence.

    `replace` is the only mutation and never suspends, so under asyncio
    each swap is indivisible relative to other tasks. Neither the snapshot
    handed out nor the cart passed in is ever aliased with live state.
    """

    def __init__(self, cart: Optional[Cart] = None):
        self._cart = cart.copy() if cart is not None else Cart()

    def find(self, product_id: int) -> Optional[CartItem]:
        item = self._cart.find(product_id)
        return copy_item(item) if item else None

    def snapshot(self) -> Cart:
        return self._cart.copy()

    def replace(self, new_cart: Cart) -> None:
        self._cart = new_cart.copy()
