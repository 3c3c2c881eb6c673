"""Session cart helpers.

The cart only lives in the client session; it is never written to the local
cache or the remote store.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from storefront.schemas.menu import CartItem, MenuItem

CART_SESSION_KEY: str = "cart"

# Per-line fields kept in the session cookie.
SESSION_LINE_FIELDS: set[str] = {"id", "name", "price", "quantity"}


class ItemUnavailableError(Exception):
    """Raised when adding a menu item that is marked unavailable."""


class EmptyCartError(Exception):
    """Raised when checking out with nothing in the cart."""


class Cart:
    """Ordered cart lines with add-one / remove-one semantics."""

    def __init__(self, items: list[CartItem] | None = None) -> None:
        self.items: list[CartItem] = list(items or [])

    @classmethod
    def from_session(cls, session: MutableMapping[str, Any]) -> "Cart":
        raw = session.get(CART_SESSION_KEY) or []
        return cls([CartItem.model_validate(line) for line in raw])

    def store(self, session: MutableMapping[str, Any]) -> None:
        session[CART_SESSION_KEY] = [item.model_dump(include=SESSION_LINE_FIELDS) for item in self.items]

    def add(self, menu_item: MenuItem) -> CartItem:
        if not menu_item.is_available:
            raise ItemUnavailableError(f"{menu_item.name} is not available right now")
        for index, line in enumerate(self.items):
            if line.id == menu_item.id:
                self.items[index] = line.model_copy(update={"quantity": line.quantity + 1})
                return self.items[index]
        line = CartItem(**menu_item.model_dump(), quantity=1)
        self.items.append(line)
        return line

    def remove(self, item_id: str) -> None:
        """Drop one unit; the line disappears when it reaches zero."""
        updated: list[CartItem] = []
        for line in self.items:
            if line.id == item_id:
                if line.quantity > 1:
                    updated.append(line.model_copy(update={"quantity": line.quantity - 1}))
                continue
            updated.append(line)
        self.items = updated

    def clear(self) -> None:
        self.items = []

    @property
    def total(self) -> float:
        return sum(line.price * line.quantity for line in self.items)

    @property
    def count(self) -> int:
        return sum(line.quantity for line in self.items)

    def is_empty(self) -> bool:
        return not self.items
