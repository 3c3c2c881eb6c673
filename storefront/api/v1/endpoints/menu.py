"""Menu endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from storefront.api.deps import get_current_admin, get_data_service
from storefront.schemas.auth import AdminUser
from storefront.schemas.menu import MenuItem
from storefront.services.data_service import DataService

router: APIRouter = APIRouter()
ALL_CATEGORIES: str = "All"


@router.get("", response_model=list[MenuItem])
def list_menu(
    category: str | None = None,
    search: str | None = Query(default=None),
    available_only: bool = False,
    data_service: DataService = Depends(get_data_service),
) -> list[MenuItem]:
    """Return the storefront menu, optionally filtered by category and name."""
    items = data_service.get_menu()
    if category and category != ALL_CATEGORIES:
        items = [item for item in items if item.category == category]
    if search:
        needle = search.lower()
        items = [item for item in items if needle in item.name.lower()]
    if available_only:
        items = [item for item in items if item.is_available]
    return items


@router.post("", response_model=MenuItem, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    payload: MenuItem,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> MenuItem:
    return data_service.save_menu_item(payload.model_copy(update={"id": ""}))


@router.put("/{item_id}", response_model=MenuItem)
def update_menu_item(
    item_id: str,
    payload: MenuItem,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> MenuItem:
    return data_service.save_menu_item(payload.model_copy(update={"id": item_id}))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(
    item_id: str,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> Response:
    data_service.delete_menu_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/seed", response_model=list[MenuItem])
def seed_menu(
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> list[MenuItem]:
    """Restore the seed menu."""
    return data_service.seed_initial_menu()
