"""Admin order endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from storefront.api.deps import get_current_admin, get_data_service
from storefront.schemas.auth import AdminUser
from storefront.schemas.order import Order, OrderStatusUpdate
from storefront.services.data_service import DataService, OrderNotFoundError
from storefront.services.order_status import InvalidStatusTransitionError

router: APIRouter = APIRouter()


@router.get("", response_model=list[Order])
def list_orders(
    status_filter: str | None = None,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> list[Order]:
    """Return orders, newest first."""
    orders = data_service.get_orders()
    if status_filter and status_filter != "all":
        orders = [order for order in orders if order.status == status_filter]
    return orders


@router.get("/{order_id}", response_model=Order)
def get_order(
    order_id: str,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> Order:
    order = data_service.orders.find(order_id)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


@router.patch("/{order_id}/status", response_model=Order)
def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    data_service: DataService = Depends(get_data_service),
    current_admin: AdminUser = Depends(get_current_admin),
) -> Order:
    try:
        return data_service.update_order_status(order_id, payload.status)
    except OrderNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found") from exc
    except InvalidStatusTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
