"""
schemas.py
Modelos pydantic que comparten el gate, las operaciones y las rutas.
"""

from typing import Annotated, Any, ClassVar, Dict, Optional

from pydantic import BaseModel, BeforeValidator, Field


def _reject_bool(value: Any) -> Any:
    # en modo lax pydantic acepta true como 1
    if isinstance(value, bool):
        raise ValueError("booleans are not integers")
    return value


PositiveInt = Annotated[int, BeforeValidator(_reject_bool), Field(ge=1)]


class ActorIdentity(BaseModel):
    """Caller autenticado, armado con los claims del token verificado."""

    id: int
    email: Optional[str] = None


class Caller(BaseModel):
    """Actor + el bearer token crudo que se reenvía upstream."""

    actor: Optional[ActorIdentity] = None
    token: str


class CartItemCreate(BaseModel):
    user_id: PositiveInt
    inventory_id: PositiveInt
    quantity: PositiveInt

    error_messages: ClassVar[Dict[str, str]] = {
        "user_id": "User ID must be a positive integer",
        "inventory_id": "Inventory ID must be a positive integer",
        "quantity": "Quantity must be at least 1",
    }


class CartItemUpdate(BaseModel):
    quantity: PositiveInt

    error_messages: ClassVar[Dict[str, str]] = {
        "quantity": "Quantity must be at least 1",
    }


class FieldError(BaseModel):
    type: str = "field"
    value: Any = None
    msg: str
    path: str
    location: str = "body"


class CartTotal(BaseModel):
    total: float
