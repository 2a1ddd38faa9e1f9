"""
auth.py
Verificación del bearer token (JWT HS256 firmado con JWT_SECRET).
"""

import logging
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Header
from pydantic import ValidationError

from cart_service.config import Settings, get_settings
from cart_service.errors import AuthenticationFailed
from cart_service.schemas import ActorIdentity, Caller

logger = logging.getLogger(__name__)

JWT_ALGORITHMS = ["HS256"]


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """'Bearer abc' -> 'abc'. None si no hay token usable."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def decode_token(token: str, secret: str) -> ActorIdentity:
    if not secret:
        raise AuthenticationFailed("Invalid token")
    try:
        claims: Dict[str, Any] = jwt.decode(token, secret, algorithms=JWT_ALGORITHMS)
        return ActorIdentity.model_validate(claims)
    except (jwt.InvalidTokenError, ValidationError) as e:
        logger.warning("Rejected bearer token: %s", e)
        raise AuthenticationFailed("Invalid token")


def verify_token(
    authorization: str = Header(default=""),
    settings: Settings = Depends(get_settings),
) -> Caller:
    """Dependency de FastAPI: todas las rutas /cart pasan por acá."""
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationFailed("No token provided")
    actor = decode_token(token, settings.jwt_secret)
    return Caller(actor=actor, token=token)
