"""
errors.py
Errores del cart service. Cada uno sabe su status HTTP y arma su propio
body JSON; main.py los convierte en respuestas.
"""

from typing import Any, Dict, List, Optional


class CartServiceError(Exception):
    """Clase base. El body siempre tiene al menos {"message": ...}."""

    status_code = 500

    def __init__(self, message: str, error: Any = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.error = error
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        # si no hay nada que reportar, no va la key (undefined en JS)
        if self.error is not None:
            body["error"] = self.error
        return body


class AuthenticationFailed(CartServiceError):
    status_code = 401


class ValidationFailed(CartServiceError):
    status_code = 400

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__("Validation failed")
        self.errors = errors

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class Unauthorized(CartServiceError):
    status_code = 403

    def __init__(self):
        super().__init__("Unauthorized")


class InsufficientStock(CartServiceError):
    status_code = 400

    def __init__(self):
        super().__init__("Insufficient stock")


class UpstreamError(CartServiceError):
    """La brewery API respondió con un status de error."""


class TransportError(CartServiceError):
    """No se pudo llegar a la brewery API o no se pudo leer su respuesta."""

    status_code = 500
