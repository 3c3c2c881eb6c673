"""Google Sheets dispatcher tests."""

import json

import httpx

from storefront.schemas.menu import CartItem
from storefront.schemas.order import CustomerInfo, Order
from storefront.schemas.settings import SheetsSyncConfig
from storefront.services.order_sync import SHEET_COLUMNS, OrderSheetDispatcher, order_to_row


def _order() -> Order:
    return Order(
        id="abc123",
        customer=CustomerInfo(name="Anita", phone="9123456789", address="Flat 4, Pune"),
        items=[
            CartItem(id="3", name="Chicken Biryani", price=350, quantity=1),
            CartItem(id="5", name="Gulab Jamun", price=80, quantity=2),
        ],
        total_amount=510,
        status="pending",
        timestamp=1704448800000,
        platform="whatsapp",
    )


def _config(token: str = "ya29.token") -> SheetsSyncConfig:
    return SheetsSyncConfig(spreadsheet_id="sheet-xyz", sheet_name="Orders", access_token=token, is_connected=True)


def test_order_row_layout() -> None:
    row = order_to_row(_order())

    assert len(row) == len(SHEET_COLUMNS)
    assert row == [
        "abc123",
        "CUST-9123456789",
        "Anita",
        "9123456789",
        "N/A",
        "Chicken Biryani, Gulab Jamun",
        3,
        510,
        "Pending",
        "pending",
        "2024-01-05T10:00:00.000Z",
        "whatsapp",
    ]


def test_dispatch_appends_row_with_bearer_token() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"updates": {"updatedRows": 1}})

    dispatcher = OrderSheetDispatcher(
        httpx.Client(transport=httpx.MockTransport(handler)),
        base_url="https://sheets.test/v4/spreadsheets",
    )

    assert dispatcher.dispatch(_order(), _config()) is True

    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v4/spreadsheets/sheet-xyz/values/Orders!A1:append"
    assert request.url.params["valueInputOption"] == "USER_ENTERED"
    assert request.url.params["insertDataOption"] == "INSERT_ROWS"
    assert request.headers["Authorization"] == "Bearer ya29.token"
    assert json.loads(request.content)["values"][0][0] == "abc123"


def test_simulated_token_skips_network() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("network must not be used")

    dispatcher = OrderSheetDispatcher(httpx.Client(transport=httpx.MockTransport(handler)))

    assert dispatcher.dispatch(_order(), _config("simulated-token")) is True


def test_sink_error_is_swallowed() -> None:
    dispatcher = OrderSheetDispatcher(
        httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
    )

    assert dispatcher.dispatch(_order(), _config()) is False


def test_disconnected_sink_is_skipped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("network must not be used")

    dispatcher = OrderSheetDispatcher(httpx.Client(transport=httpx.MockTransport(handler)))
    config = _config().model_copy(update={"is_connected": False})

    assert dispatcher.dispatch(_order(), config) is False
    assert dispatcher.dispatch(_order(), None) is False
