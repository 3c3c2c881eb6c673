"""Best-effort export of orders to a Google Sheets tab."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from storefront.core.config import settings
from storefront.schemas.order import Order
from storefront.schemas.settings import SheetsSyncConfig
from storefront.utils.time import ms_to_iso

logger = logging.getLogger(__name__)

SIMULATED_TOKEN: str = "simulated-token"
EMAIL_PLACEHOLDER: str = "N/A"
PAYMENT_STATUS_PLACEHOLDER: str = "Pending"

SHEET_COLUMNS: list[str] = [
    "Order ID",
    "Customer ID",
    "Name",
    "Phone",
    "Email",
    "Items",
    "Item Count",
    "Total Amount",
    "Payment Status",
    "Status",
    "Timestamp",
    "Platform",
]

SheetRow = list[str | int | float]


def order_to_row(order: Order) -> SheetRow:
    """Serialize an order into the fixed sheet column layout."""
    return [
        order.id,
        f"CUST-{order.customer.phone}",
        order.customer.name,
        order.customer.phone,
        EMAIL_PLACEHOLDER,
        ", ".join(item.name for item in order.items),
        order.item_count,
        order.total_amount,
        PAYMENT_STATUS_PLACEHOLDER,
        order.status,
        ms_to_iso(order.timestamp),
        order.platform,
    ]


def is_sink_connected(config: SheetsSyncConfig | None) -> bool:
    return bool(config and config.is_connected and config.spreadsheet_id and config.access_token)


class OrderSheetDispatcher:
    """Appends order rows to the configured sheet; never raises on sink failures."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._timeout = settings.sheets_timeout_seconds if timeout is None else timeout
        self._client = client or httpx.Client(timeout=self._timeout)
        self._base_url = (base_url or settings.sheets_api_base).rstrip("/")

    def dispatch(self, order: Order, config: SheetsSyncConfig | None) -> bool:
        """Forward one order event. Returns True when the row reached the sink."""
        return self.append_rows([order_to_row(order)], config)

    def append_rows(self, rows: list[SheetRow], config: SheetsSyncConfig | None) -> bool:
        if not rows or config is None or not is_sink_connected(config):
            return False

        if config.access_token == SIMULATED_TOKEN:
            logger.info(
                "[SHEETS] Simulated sync of %s row(s) to %s/%s",
                len(rows),
                config.spreadsheet_id,
                config.sheet_name,
            )
            return True

        target_range = quote(f"{config.sheet_name}!A1", safe="")
        url = f"{self._base_url}/{config.spreadsheet_id}/values/{target_range}:append"
        try:
            response = self._client.post(
                url,
                params={"valueInputOption": "USER_ENTERED", "insertDataOption": "INSERT_ROWS"},
                json={"values": rows},
                headers={"Authorization": f"Bearer {config.access_token}"},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError:
            logger.warning("[SHEETS] Append of %s row(s) failed", len(rows), exc_info=True)
            return False

        logger.info("[SHEETS] Appended %s row(s) to %s", len(rows), config.sheet_name)
        return True
