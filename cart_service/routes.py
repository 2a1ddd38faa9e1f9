"""
routes.py
Endpoints /cart. Las reglas de campos se declaran acá y corren antes
de que la operación toque la brewery API.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from cart_service.auth import verify_token
from cart_service.brewery_client import BreweryClient
from cart_service.cart_operations import CartOperations
from cart_service.config import Settings, get_settings
from cart_service.gate import validate_payload
from cart_service.schemas import Caller, CartItemCreate, CartItemUpdate

router = APIRouter(prefix="/cart", tags=["cart"])


def get_cart_operations(settings: Settings = Depends(get_settings)) -> CartOperations:
    client = BreweryClient(settings.brewery_api_url, timeout=settings.upstream_timeout)
    return CartOperations(client)


@router.post("/add", status_code=status.HTTP_201_CREATED)
def add_to_cart(
    payload: Any = Body(default=None),
    caller: Caller = Depends(verify_token),
    operations: CartOperations = Depends(get_cart_operations),
):
    item = validate_payload(CartItemCreate, payload)
    return operations.add_to_cart(caller, item, payload)


@router.get("/{user_id}")
def get_cart(
    user_id: str,
    caller: Caller = Depends(verify_token),
    operations: CartOperations = Depends(get_cart_operations),
):
    return operations.get_cart(caller, user_id)


@router.put("/update/{item_id}")
def update_cart(
    item_id: str,
    payload: Any = Body(default=None),
    caller: Caller = Depends(verify_token),
    operations: CartOperations = Depends(get_cart_operations),
):
    update = validate_payload(CartItemUpdate, payload)
    return operations.update_cart(caller, item_id, update, payload)


@router.delete("/remove/{item_id}")
def remove_from_cart(
    item_id: str,
    caller: Caller = Depends(verify_token),
    operations: CartOperations = Depends(get_cart_operations),
):
    return operations.remove_from_cart(caller, item_id)


@router.delete("/clear/{user_id}")
def clear_cart(
    user_id: str,
    caller: Caller = Depends(verify_token),
    operations: CartOperations = Depends(get_cart_operations),
):
    return operations.clear_cart(caller, user_id)


@router.get("/{user_id}/total")
def get_cart_total(
    user_id: str,
    caller: Caller = Depends(verify_token),
    operations: CartOperations = Depends(get_cart_operations),
):
    return operations.get_cart_total(caller, user_id)
