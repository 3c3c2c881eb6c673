"""Store settings and category endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from storefront.api.deps import get_current_admin, get_data_service
from storefront.schemas.auth import AdminUser
from storefront.schemas.menu import CategoryCreate, CategoryRename
from storefront.schemas.settings import AppSettings, PublicSettings
from storefront.services.data_service import CategoryError, DataService

router: APIRouter = APIRouter()


@router.get("", response_model=PublicSettings)
def get_public_settings(data_service: DataService = Depends(get_data_service)) -> PublicSettings:
    current = data_service.get_settings()
    return PublicSettings(whatsapp_number=current.whatsapp_number, categories=current.categories)


@router.get("/admin", response_model=AppSettings)
def get_settings(
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> AppSettings:
    return data_service.get_settings()


@router.put("/admin", response_model=AppSettings)
def update_settings(
    payload: AppSettings,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> AppSettings:
    if not payload.whatsapp_number.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="WhatsApp number is required")
    return data_service.save_settings(payload)


@router.post("/categories", response_model=AppSettings, status_code=status.HTTP_201_CREATED)
def add_category(
    payload: CategoryCreate,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> AppSettings:
    try:
        return data_service.add_category(payload.name)
    except CategoryError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.put("/categories/{name}", response_model=AppSettings)
def rename_category(
    name: str,
    payload: CategoryRename,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> AppSettings:
    """Rename a category; menu items in it follow the new name."""
    try:
        return data_service.rename_category(name, payload.new_name)
    except CategoryError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete("/categories/{name}", response_model=AppSettings)
def delete_category(
    name: str,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> AppSettings:
    try:
        return data_service.delete_category(name)
    except CategoryError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
