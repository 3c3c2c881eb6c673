"""Store settings schemas."""

from storefront.schemas.base import CamelModel


class SheetsSyncConfig(CamelModel):
    """Google Sheets export configuration."""

    spreadsheet_id: str = ""
    sheet_name: str = "Orders"
    access_token: str = ""
    is_connected: bool = False
    last_sync_time: int | None = None


class AppSettings(CamelModel):
    """Singleton store settings."""

    whatsapp_number: str
    categories: list[str]
    google_sheets: SheetsSyncConfig | None = None


class PublicSettings(CamelModel):
    """Settings fields the storefront may read."""

    whatsapp_number: str
    categories: list[str]
