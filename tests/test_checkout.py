"""Cart, checkout and customer validation tests."""

from urllib.parse import unquote

import pytest
from pydantic import ValidationError

from storefront.db.seed import seed_menu
from storefront.schemas.menu import CartItem
from storefront.schemas.order import CustomerInfo
from storefront.services.cart import Cart, EmptyCartError, ItemUnavailableError
from storefront.services.checkout import build_whatsapp_url, checkout, format_order_message
from storefront.services.data_service import DataService
from storefront.storage.local_cache import LocalCacheStore


def _customer() -> CustomerInfo:
    return CustomerInfo(name="Ravi Kumar", phone="9876543210", address="12 MG Road, Bengaluru")


@pytest.mark.parametrize(
    "phone",
    [
        "5876543210",
        "987654321",
        "98765432101",
        "98765abcde",
        "+919876543210",
        "9876543210\n",
        "9\u0968\u0967\u0966\u0966\u0966\u0966\u0966\u0966\u0966",
    ],
)
def test_invalid_phone_is_rejected(phone: str) -> None:
    with pytest.raises(ValidationError, match="Enter valid 10-digit Indian number"):
        CustomerInfo(name="Ravi", phone=phone, address="Somewhere")


def test_blank_fields_are_rejected() -> None:
    with pytest.raises(ValidationError) as exc_info:
        CustomerInfo(name="  ", phone="", address=" ")

    messages = str(exc_info.value)
    assert "Name is required" in messages
    assert "Mobile number is required" in messages
    assert "Delivery address required" in messages


def test_cart_add_and_remove_units() -> None:
    menu = {item.id: item for item in seed_menu()}
    cart = Cart()
    cart.add(menu["1"])
    cart.add(menu["1"])
    cart.add(menu["4"])

    assert cart.count == 3
    assert cart.total == 700

    cart.remove("1")
    cart.remove("4")

    assert [(line.id, line.quantity) for line in cart.items] == [("1", 1)]


def test_cart_rejects_unavailable_item() -> None:
    dosa = next(item for item in seed_menu() if item.id == "6")

    with pytest.raises(ItemUnavailableError):
        Cart().add(dosa)


def test_cart_session_keeps_only_line_fields() -> None:
    session: dict = {}
    biryani = seed_menu()[2].model_copy(update={"image": "data:image/jpeg;base64," + "A" * 30_000})
    cart = Cart()
    cart.add(biryani)
    cart.add(biryani)
    cart.store(session)

    restored = Cart.from_session(session)

    assert session["cart"] == [{"id": "3", "name": "Chicken Biryani", "price": 350, "quantity": 2}]
    assert restored.items[0].image is None
    assert restored.total == 700


def test_checkout_creates_order_and_clears_cart(local_cache: LocalCacheStore) -> None:
    service = DataService(local_cache)
    cart = Cart()
    cart.add(seed_menu()[0])
    cart.add(seed_menu()[3])

    order, url = checkout(service, cart, _customer())

    assert cart.is_empty()
    assert order.total_amount == 380
    assert service.get_orders()[0].id == order.id
    assert url.startswith(f"https://wa.me/{service.get_settings().whatsapp_number}?text=")
    assert "*Total Amount: ₹380*" in unquote(url)


def test_checkout_empty_cart_creates_nothing(local_cache: LocalCacheStore) -> None:
    service = DataService(local_cache)

    with pytest.raises(EmptyCartError):
        checkout(service, Cart(), _customer())
    assert service.get_orders() == []


def test_order_message_lists_lines(local_cache: LocalCacheStore) -> None:
    service = DataService(local_cache)
    cart = Cart()
    cart.add(seed_menu()[4])
    cart.add(seed_menu()[4])
    order = service.create_order(_customer(), cart.items)

    message = format_order_message(order, store_name="Amma Food Center", currency="₹")

    assert message.startswith("*New Order @ Amma Food Center*")
    assert "▪ 2 x Gulab Jamun (₹80)" in message
    assert "*Phone:* 9876543210" in message


def test_whatsapp_url_encodes_message() -> None:
    assert build_whatsapp_url("919876543210", "a b&c") == "https://wa.me/919876543210?text=a%20b%26c"


def test_order_message_keeps_large_amounts_exact(local_cache: LocalCacheStore) -> None:
    service = DataService(local_cache)
    items = [
        CartItem(id="cake", name="Wedding Cake", price=1250000, quantity=1),
        CartItem(id="tray", name="Sweets Tray", price=10234.5, quantity=1),
    ]
    order = service.create_order(_customer(), items)

    message = format_order_message(order, store_name="Amma Food Center", currency="₹")

    assert "▪ 1 x Wedding Cake (₹1250000)" in message
    assert "▪ 1 x Sweets Tray (₹10234.50)" in message
    assert message.endswith("*Total Amount: ₹1260234.50*")
    assert "e+" not in message
