"""Session cart and checkout endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from storefront.api.deps import get_data_service
from storefront.schemas.menu import CartAddRequest, CartResponse
from storefront.schemas.order import CheckoutResponse, CustomerInfo
from storefront.services.cart import Cart, EmptyCartError, ItemUnavailableError
from storefront.services.checkout import checkout
from storefront.services.data_service import DataService

router: APIRouter = APIRouter()


def _serialize_cart(cart: Cart) -> CartResponse:
    return CartResponse(items=cart.items, total=cart.total, count=cart.count)


@router.get("", response_model=CartResponse)
def get_cart(request: Request) -> CartResponse:
    return _serialize_cart(Cart.from_session(request.session))


@router.post("/items", response_model=CartResponse)
def add_cart_item(
    payload: CartAddRequest,
    request: Request,
    data_service: DataService = Depends(get_data_service),
) -> CartResponse:
    """Add one unit of a menu item."""
    menu_item = next((item for item in data_service.get_menu() if item.id == payload.item_id), None)
    if menu_item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")

    cart = Cart.from_session(request.session)
    try:
        cart.add(menu_item)
    except ItemUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    cart.store(request.session)
    return _serialize_cart(cart)


@router.delete("/items/{item_id}", response_model=CartResponse)
def remove_cart_item(item_id: str, request: Request) -> CartResponse:
    """Remove one unit of a cart line."""
    cart = Cart.from_session(request.session)
    cart.remove(item_id)
    cart.store(request.session)
    return _serialize_cart(cart)


@router.delete("", response_model=CartResponse)
def clear_cart(request: Request) -> CartResponse:
    cart = Cart.from_session(request.session)
    cart.clear()
    cart.store(request.session)
    return _serialize_cart(cart)


@router.post("/checkout", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED)
def checkout_cart(
    customer: CustomerInfo,
    request: Request,
    data_service: DataService = Depends(get_data_service),
) -> CheckoutResponse:
    """Place the order and return the WhatsApp hand-off link."""
    cart = Cart.from_session(request.session)
    try:
        order, whatsapp_url = checkout(data_service, cart, customer)
    except EmptyCartError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    cart.store(request.session)
    return CheckoutResponse(order_id=order.id, total_amount=order.total_amount, whatsapp_url=whatsapp_url)
