"""Admin dashboard endpoints: analytics, sheet export and cache reset."""

import logging

from fastapi import APIRouter, Depends

from storefront.api.deps import get_current_admin, get_data_service
from storefront.schemas.analytics import DailySales
from storefront.schemas.auth import AdminUser
from storefront.services.data_service import DataService

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/analytics/sales", response_model=list[DailySales])
def sales_summary(
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> list[DailySales]:
    return data_service.get_sales_data()


@router.post("/sheets/export")
def export_orders(
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> dict[str, int]:
    """Push every order to the connected Google Sheet."""
    exported = data_service.export_orders_to_sheet()
    logger.info("[SHEETS] Manual export by %s: %s rows", current_admin.email, exported)
    return {"exported": exported}


@router.post("/reset")
def reset_local_data(
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> dict[str, str]:
    """Drop every locally cached entity."""
    data_service.clear_local_data()
    logger.warning("Local cache cleared by %s", current_admin.email)
    return {"status": "ok"}
