"""
brewery_client.py
Cliente HTTP de la brewery API (dueña de carritos, inventario y precios).

Cada llamada reenvía el bearer token del caller sin tocarlo.
- 2xx -> devuelve el JSON (None si el body viene vacío)
- otro status -> requests.HTTPError (con .response)
- problemas de red -> la excepción de requests que corresponda (sin .response)

Sin reintentos: un fallo vuelve directo al caller.
"""

from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter

# Pool de conexiones compartido, reusa sockets entre requests
_session = requests.Session()
_session.headers.update({"Connection": "keep-alive"})
_adapter = HTTPAdapter(max_retries=0, pool_connections=10, pool_maxsize=20)
_session.mount("http://", _adapter)
_session.mount("https://", _adapter)


class BreweryClient:
    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or _session

    # =====================================================
    # HTTP HELPERS
    # =====================================================

    def _auth_headers(self, token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def _request(
        self,
        method: str,
        path: str,
        token: str,
        json_data: Any = None,
        parse: bool = True,
    ) -> Any:
        url = f"{self.base_url}{path}"
        resp = self.session.request(
            method,
            url,
            json=json_data,
            headers=self._auth_headers(token),
            timeout=self.timeout,
        )
        resp.raise_for_status()
        if not parse or not resp.content:
            return None
        return resp.json()

    # =====================================================
    # INVENTARIO
    # =====================================================

    def get_inventory(self, inventory_id: Any, token: str) -> Any:
        """GET /api/inventory/{id} -> {"stockQuantity": ..., "price": ...}"""
        return self._request("GET", f"/api/inventory/{inventory_id}", token)

    # =====================================================
    # CARRITO
    # =====================================================

    def add_cart_item(self, payload: Any, token: str) -> Any:
        return self._request("POST", "/api/cart/add", token, json_data=payload)

    def get_cart(self, user_id: Any, token: str) -> Any:
        return self._request("GET", f"/api/cart/{user_id}", token)

    def get_cart_item(self, item_id: Any, token: str) -> Any:
        return self._request("GET", f"/api/cart/item/{item_id}", token)

    def update_cart_item(self, item_id: Any, payload: Any, token: str) -> Any:
        return self._request(
            "PUT", f"/api/cart/update/{item_id}", token, json_data=payload
        )

    def remove_cart_item(self, item_id: Any, token: str) -> Any:
        return self._request("DELETE", f"/api/cart/remove/{item_id}", token)

    def clear_cart(self, user_id: Any, token: str) -> None:
        # el body no se usa, solo importa el status
        self._request("DELETE", f"/api/cart/clear/{user_id}", token, parse=False)
