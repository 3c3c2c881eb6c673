"""Schema exports."""

from storefront.schemas.analytics import DailySales
from storefront.schemas.auth import AdminUser, LoginRequest, TokenResponse
from storefront.schemas.content import Announcement, PreviewVideo
from storefront.schemas.menu import CartAddRequest, CartItem, CartResponse, CategoryCreate, CategoryRename, MenuItem
from storefront.schemas.order import CheckoutResponse, CustomerInfo, Order, OrderStatusUpdate
from storefront.schemas.settings import AppSettings, PublicSettings, SheetsSyncConfig

__all__ = [
    "AdminUser",
    "Announcement",
    "AppSettings",
    "CartAddRequest",
    "CartItem",
    "CartResponse",
    "CategoryCreate",
    "CategoryRename",
    "CheckoutResponse",
    "CustomerInfo",
    "DailySales",
    "LoginRequest",
    "MenuItem",
    "Order",
    "OrderStatusUpdate",
    "PreviewVideo",
    "PublicSettings",
    "SheetsSyncConfig",
    "TokenResponse",
]
