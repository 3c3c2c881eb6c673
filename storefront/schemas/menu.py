"""Menu and cart schemas."""

from typing import Literal

from pydantic import BaseModel, Field

from storefront.schemas.base import CamelModel, DocumentModel

ItemType = Literal["veg", "non-veg"]


class MenuItem(DocumentModel):
    """Dish shown on the storefront."""

    name: str
    description: str = ""
    price: float = Field(ge=0)
    type: ItemType = "veg"
    category: str = "Main Course"
    is_available: bool = True
    image: str | None = None


class CartItem(MenuItem):
    """Menu item snapshot with a quantity."""

    quantity: int = Field(default=1, ge=1)


class CartAddRequest(CamelModel):
    """Payload to add one unit of a menu item to the cart."""

    item_id: str


class CartResponse(CamelModel):
    """Serialized session cart."""

    items: list[CartItem]
    total: float
    count: int


class CategoryCreate(BaseModel):
    """Payload for adding a category."""

    name: str = Field(min_length=1)


class CategoryRename(CamelModel):
    """Payload for renaming a category."""

    new_name: str = Field(min_length=1)
