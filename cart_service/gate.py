"""
gate.py
Gate de autorización y validación que comparten todas las operaciones.

- validate_payload: corre las reglas de campos de un modelo de request
- canonical_user_id / authorize_owner: una sola regla de identidad, venga
  el dueño del body, del path o de un item traído de upstream
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from cart_service.errors import Unauthorized, ValidationFailed
from cart_service.schemas import ActorIdentity, FieldError

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_payload(model: Type[ModelT], payload: Any) -> ModelT:
    """
    Valida `payload` contra `model`.

    Lo que no sea un objeto JSON se valida como {}. Si falla, levanta
    ValidationFailed con un FieldError por campo (el primer error que
    reporta pydantic), en el orden de los campos.
    """
    body: Dict[str, Any] = payload if isinstance(payload, dict) else {}
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        messages: Dict[str, str] = getattr(model, "error_messages", {})
        errors: List[Dict[str, Any]] = []
        seen = set()
        for err in exc.errors():
            field = str(err["loc"][0]) if err.get("loc") else ""
            if field in seen:
                continue
            seen.add(field)
            errors.append(
                FieldError(
                    value=body.get(field),
                    msg=messages.get(field, err["msg"]),
                    path=field,
                ).model_dump()
            )
        raise ValidationFailed(errors)


def canonical_user_id(value: Any) -> Optional[int]:
    """
    1, 1.0, "1" y " 1 " son el mismo usuario. None para cualquier cosa
    que no sea un user id.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        s = value.strip()
        if s.isascii() and s.isdigit():
            return int(s)
    return None


def authorize_owner(actor: Optional[ActorIdentity], owner: Any) -> None:
    """Levanta Unauthorized salvo que `actor` sea el dueño del recurso."""
    if actor is None:
        raise Unauthorized()
    owner_id = canonical_user_id(owner)
    if owner_id is None or owner_id != canonical_user_id(actor.id):
        raise Unauthorized()
