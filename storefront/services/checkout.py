"""Checkout: order creation and the WhatsApp hand-off link."""

from __future__ import annotations

import logging
from urllib.parse import quote

from storefront.core.config import settings
from storefront.schemas.order import CustomerInfo, Order
from storefront.services.cart import Cart, EmptyCartError
from storefront.services.data_service import DataService

logger = logging.getLogger(__name__)

WHATSAPP_BASE_URL: str = "https://wa.me"


def format_amount(value: float) -> str:
    """Whole amounts without decimals, anything else with two."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def format_order_message(order: Order, *, store_name: str | None = None, currency: str | None = None) -> str:
    """Plain-text order summary sent to the store over WhatsApp."""
    store_name = store_name or settings.store_name
    currency = currency or settings.currency
    lines = "\n".join(
        f"▪ {item.quantity} x {item.name} ({currency}{format_amount(item.price)})" for item in order.items
    )
    return (
        f"*New Order @ {store_name}* 🥘\n\n"
        f"*Customer:* {order.customer.name}\n"
        f"*Phone:* {order.customer.phone}\n"
        f"*Address:* {order.customer.address}\n\n"
        f"*Order Details:*\n{lines}\n"
        "------------------------\n"
        f"*Total Amount: {currency}{format_amount(order.total_amount)}*"
    )


def build_whatsapp_url(number: str, message: str) -> str:
    return f"{WHATSAPP_BASE_URL}/{number}?text={quote(message, safe='')}"


def checkout(data_service: DataService, cart: Cart, customer: CustomerInfo) -> tuple[Order, str]:
    """Create the order for the cart contents and return it with its hand-off link.

    The cart is cleared once the order exists.

    Raises:
        EmptyCartError: the cart has no lines.
    """
    if cart.is_empty():
        raise EmptyCartError("Cart is empty")

    order = data_service.create_order(customer, cart.items, platform="whatsapp")
    cart.clear()

    number = data_service.get_settings().whatsapp_number or settings.whatsapp_number
    url = build_whatsapp_url(number, format_order_message(order))
    logger.info("Checkout completed for order %s", order.id)
    return order, url
