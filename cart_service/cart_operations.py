"""
cart_operations.py
Las seis operaciones del carrito, orquestadas contra la brewery API.

Cada operación:
1. autoriza al caller contra el dueño (body, path o item ya traído)
2. hace sus llamadas upstream de a una, validando stock en el medio
3. devuelve el body a responder, o levanta un CartServiceError

Incluye:
- add_to_cart
- get_cart
- update_cart
- remove_from_cart
- clear_cart
- get_cart_total
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from cart_service.brewery_client import BreweryClient
from cart_service.errors import (
    CartServiceError,
    InsufficientStock,
    TransportError,
    UpstreamError,
)
from cart_service.gate import authorize_owner
from cart_service.schemas import Caller, CartItemCreate, CartItemUpdate, CartTotal

logger = logging.getLogger(__name__)

ADD_ERROR = "Error adding to cart"
GET_ERROR = "Error getting cart"
UPDATE_ERROR = "Error updating cart"
REMOVE_ERROR = "Error removing from cart"
CLEAR_ERROR = "Error clearing cart"
TOTAL_ERROR = "Error calculating cart total"

CART_CLEARED_MESSAGE = "Cart cleared successfully"


class MalformedUpstreamData(ValueError):
    """La brewery API respondió 2xx pero con datos que no podemos usar."""


def _response_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def upstream_failure(
    exc: requests.exceptions.RequestException, default_message: str
) -> CartServiceError:
    """
    Traduce una llamada fallida a la brewery API al error que devolvemos.

    - con response: mismo status, message del body (o el default) y
      errors del body (o nada)
    - sin response: 500, message default y el texto del fallo
    """
    # Response es falsy para 4xx/5xx, comparar contra None
    response = getattr(exc, "response", None)
    if response is None:
        logger.error("%s: %s", default_message, exc)
        return TransportError(default_message, error=str(exc))

    data = _response_json(response)
    logger.error("%s: %s", default_message, data if data is not None else exc)

    message = default_message
    error = None
    if isinstance(data, dict):
        message = data.get("message") or default_message
        error = data.get("errors")
    return UpstreamError(message, error=error, status_code=response.status_code)


def malformed_upstream(exc: MalformedUpstreamData, default_message: str) -> TransportError:
    logger.error("%s: %s", default_message, exc)
    return TransportError(default_message, error=str(exc))


def available_stock(inventory: Any) -> float:
    """stockQuantity del registro de inventario; si falta o no se lee, 0."""
    if not isinstance(inventory, dict):
        return 0
    try:
        return float(inventory.get("stockQuantity") or 0)
    except (TypeError, ValueError):
        return 0


def _owner_of(cart_item: Any) -> Optional[Any]:
    if isinstance(cart_item, dict):
        return cart_item.get("user_id")
    return None


def _required(record: Any, field: str, what: str) -> Any:
    if not isinstance(record, dict) or record.get(field) is None:
        raise MalformedUpstreamData(f"{what} has no {field}")
    return record[field]


def _number(record: Any, field: str, what: str) -> float:
    value = _required(record, field, what)
    # bool es int en Python, pero no es un número válido acá
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedUpstreamData(f"{what} has a non-numeric {field}: {value!r}")
    return value


def _as_list(items: Any, what: str) -> List[Any]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise MalformedUpstreamData(f"{what} is not a list")
    return items


class CartOperations:
    def __init__(self, client: BreweryClient):
        self.client = client

    # =====================================================
    # AGREGAR ITEM (con control de stock)
    # =====================================================

    def add_to_cart(self, caller: Caller, item: CartItemCreate, payload: Any) -> Any:
        """
        Agrega un item al carrito del caller.

        `item` es el payload ya validado; `payload` es el body original,
        que se reenvía tal cual a POST /api/cart/add.
        """
        authorize_owner(caller.actor, item.user_id)

        try:
            inventory = self.client.get_inventory(item.inventory_id, caller.token)
            if available_stock(inventory) < item.quantity:
                raise InsufficientStock()
            return self.client.add_cart_item(payload, caller.token)
        except requests.exceptions.RequestException as e:
            raise upstream_failure(e, ADD_ERROR)

    # =====================================================
    # VER CARRITO
    # =====================================================

    def get_cart(self, caller: Caller, user_id: str) -> Any:
        authorize_owner(caller.actor, user_id)

        try:
            return self.client.get_cart(user_id, caller.token)
        except requests.exceptions.RequestException as e:
            raise upstream_failure(e, GET_ERROR)

    # =====================================================
    # ACTUALIZAR ITEM (con control de stock)
    # =====================================================

    def update_cart(
        self, caller: Caller, item_id: str, update: CartItemUpdate, payload: Any
    ) -> Any:
        """
        Cambia la cantidad de un item del carrito.

        El dueño se conoce recién al traer el item, así que la autorización
        va después de la primera llamada upstream.
        """
        try:
            cart_item = self.client.get_cart_item(item_id, caller.token)
            authorize_owner(caller.actor, _owner_of(cart_item))

            inventory_id = _required(cart_item, "inventory_id", f"cart item {item_id}")
            inventory = self.client.get_inventory(inventory_id, caller.token)
            if available_stock(inventory) < update.quantity:
                raise InsufficientStock()

            return self.client.update_cart_item(item_id, payload, caller.token)
        except requests.exceptions.RequestException as e:
            raise upstream_failure(e, UPDATE_ERROR)
        except MalformedUpstreamData as e:
            raise malformed_upstream(e, UPDATE_ERROR)

    # =====================================================
    # QUITAR ITEM
    # =====================================================

    def remove_from_cart(self, caller: Caller, item_id: str) -> Any:
        try:
            cart_item = self.client.get_cart_item(item_id, caller.token)
            authorize_owner(caller.actor, _owner_of(cart_item))
            return self.client.remove_cart_item(item_id, caller.token)
        except requests.exceptions.RequestException as e:
            raise upstream_failure(e, REMOVE_ERROR)

    # =====================================================
    # VACIAR CARRITO
    # =====================================================

    def clear_cart(self, caller: Caller, user_id: str) -> Dict[str, Any]:
        authorize_owner(caller.actor, user_id)

        try:
            self.client.clear_cart(user_id, caller.token)
        except requests.exceptions.RequestException as e:
            raise upstream_failure(e, CLEAR_ERROR)

        return {"message": CART_CLEARED_MESSAGE}

    # =====================================================
    # TOTAL DEL CARRITO
    # =====================================================

    def get_cart_total(self, caller: Caller, user_id: str) -> Dict[str, Any]:
        """
        Suma de price * quantity sobre los items del carrito.

        El inventario se consulta de a un item; el primer fallo corta
        todo el cálculo. Sin redondeo.
        """
        authorize_owner(caller.actor, user_id)

        try:
            items = _as_list(self.client.get_cart(user_id, caller.token), f"cart {user_id}")
            total = 0.0
            for item in items:
                inventory_id = _required(item, "inventory_id", "cart item")
                quantity = _number(item, "quantity", f"cart item for inventory {inventory_id}")
                inventory = self.client.get_inventory(inventory_id, caller.token)
                total += _number(inventory, "price", f"inventory {inventory_id}") * quantity
        except requests.exceptions.RequestException as e:
            raise upstream_failure(e, TOTAL_ERROR)
        except MalformedUpstreamData as e:
            raise malformed_upstream(e, TOTAL_ERROR)

        return CartTotal(total=total).model_dump()
