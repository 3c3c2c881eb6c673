"""Order schemas."""

import re
from typing import Literal

from pydantic import BaseModel, field_validator

from storefront.schemas.base import CamelModel, DocumentModel
from storefront.schemas.menu import CartItem

PHONE_PATTERN = re.compile(r"[6-9]\d{9}", re.ASCII)

OrderStatus = Literal["pending", "confirmed", "preparing", "out_for_delivery", "delivered", "cancelled"]
Platform = Literal["whatsapp", "web"]


class CustomerInfo(BaseModel):
    """Checkout contact details."""

    name: str
    phone: str
    address: str

    @field_validator("name")
    @classmethod
    def _name_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value

    @field_validator("phone")
    @classmethod
    def _valid_phone(cls, value: str) -> str:
        if not value:
            raise ValueError("Mobile number is required")
        if not PHONE_PATTERN.fullmatch(value):
            raise ValueError("Enter valid 10-digit Indian number")
        return value

    @field_validator("address")
    @classmethod
    def _address_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Delivery address required")
        return value


class Order(DocumentModel):
    """Placed order with snapshotted line items."""

    customer: CustomerInfo
    items: list[CartItem]
    total_amount: float
    status: OrderStatus = "pending"
    timestamp: int
    platform: Platform = "whatsapp"

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


class OrderStatusUpdate(BaseModel):
    """Payload to move an order to a new status."""

    status: OrderStatus


class CheckoutResponse(CamelModel):
    """Result of a storefront checkout."""

    order_id: str
    total_amount: float
    whatsapp_url: str
