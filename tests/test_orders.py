"""Order creation and status lifecycle tests."""

import pytest

from storefront.schemas.menu import CartItem
from storefront.schemas.order import CustomerInfo, Order
from storefront.schemas.settings import SheetsSyncConfig
from storefront.services.data_service import DataService, OrderNotFoundError
from storefront.services.order_status import InvalidStatusTransitionError, can_transition, next_statuses
from storefront.storage.document_store import ORDER_COLLECTION
from storefront.storage.local_cache import LocalCacheStore


class RecordingDispatcher:
    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.dispatched: list[tuple[str, str]] = []

    def dispatch(self, order: Order, config: SheetsSyncConfig | None) -> bool:
        self.dispatched.append((order.id, order.status))
        return self.result


class ExplodingDispatcher:
    def dispatch(self, order: Order, config: SheetsSyncConfig | None) -> bool:
        raise RuntimeError("sheet exploded")


def _customer() -> CustomerInfo:
    return CustomerInfo(name="Ravi Kumar", phone="9876543210", address="12 MG Road, Bengaluru")


def _cart() -> list[CartItem]:
    return [
        CartItem(id="1", name="Butter Chicken", price=320, quantity=2),
        CartItem(id="4", name="Garlic Naan", price=60, quantity=3),
    ]


def test_create_order_snapshots_cart_and_total(local_cache: LocalCacheStore) -> None:
    service = DataService(local_cache)
    cart = _cart()

    order = service.create_order(_customer(), cart)
    cart[0].price = 999
    service.save_menu_item(service.get_menu()[0].model_copy(update={"price": 500}))

    stored = service.get_orders()[0]
    assert order.id.startswith("ord_")
    assert stored.status == "pending"
    assert stored.total_amount == 820
    assert stored.items[0].price == 320
    assert stored.item_count == 5


def test_orders_are_listed_newest_first(local_cache: LocalCacheStore) -> None:
    service = DataService(local_cache)
    first = service.create_order(_customer(), _cart())
    second = service.create_order(_customer(), _cart(), platform="web")

    assert [order.id for order in service.get_orders()] == [second.id, first.id]


def test_create_order_remote_assigns_server_id(local_cache: LocalCacheStore, remote_store) -> None:
    service = DataService(local_cache, remote_store)

    order = service.create_order(_customer(), _cart())

    assert order.id == "remote-1"
    assert remote_store.collections[ORDER_COLLECTION]["remote-1"]["totalAmount"] == 820


def test_status_follows_lifecycle(local_cache: LocalCacheStore) -> None:
    dispatcher = RecordingDispatcher()
    service = DataService(local_cache, dispatcher=dispatcher)
    order = service.create_order(_customer(), _cart())

    for status in ("preparing", "out_for_delivery", "delivered"):
        service.update_order_status(order.id, status)

    assert service.get_orders()[0].status == "delivered"
    assert [status for _, status in dispatcher.dispatched] == ["pending", "preparing", "out_for_delivery", "delivered"]


def test_delivered_order_cannot_be_cancelled(local_cache: LocalCacheStore) -> None:
    service = DataService(local_cache)
    order = service.create_order(_customer(), _cart())
    for status in ("preparing", "out_for_delivery", "delivered"):
        service.update_order_status(order.id, status)

    with pytest.raises(InvalidStatusTransitionError):
        service.update_order_status(order.id, "cancelled")
    assert service.get_orders()[0].status == "delivered"


def test_update_unknown_order_raises(local_cache: LocalCacheStore) -> None:
    service = DataService(local_cache)

    with pytest.raises(OrderNotFoundError):
        service.update_order_status("ord_missing", "preparing")


def test_remote_status_update_is_partial(local_cache: LocalCacheStore, remote_store) -> None:
    service = DataService(local_cache, remote_store)
    order = service.create_order(_customer(), _cart())

    service.update_order_status(order.id, "preparing")

    stored = remote_store.collections[ORDER_COLLECTION][order.id]
    assert stored["status"] == "preparing"
    assert stored["totalAmount"] == 820


def test_dispatcher_failure_does_not_break_order(local_cache: LocalCacheStore) -> None:
    service = DataService(local_cache, dispatcher=ExplodingDispatcher())

    order = service.create_order(_customer(), _cart())

    assert service.get_orders()[0].id == order.id


def test_successful_dispatch_records_last_sync(local_cache: LocalCacheStore) -> None:
    service = DataService(local_cache, dispatcher=RecordingDispatcher())
    current = service.get_settings()
    service.save_settings(
        current.model_copy(
            update={
                "google_sheets": SheetsSyncConfig(
                    spreadsheet_id="sheet-1", access_token="simulated-token", is_connected=True
                )
            }
        )
    )

    service.create_order(_customer(), _cart())

    assert service.get_settings().google_sheets.last_sync_time is not None


@pytest.mark.parametrize(
    ("current", "new", "allowed"),
    [
        ("pending", "preparing", True),
        ("pending", "cancelled", True),
        ("pending", "delivered", False),
        ("preparing", "out_for_delivery", True),
        ("out_for_delivery", "cancelled", False),
        ("delivered", "cancelled", False),
        ("cancelled", "pending", False),
        ("confirmed", "preparing", True),
    ],
)
def test_can_transition(current: str, new: str, allowed: bool) -> None:
    assert can_transition(current, new) is allowed


def test_next_statuses_in_lifecycle_order() -> None:
    assert next_statuses("pending") == ["preparing", "cancelled"]
    assert next_statuses("delivered") == []
