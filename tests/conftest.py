"""Shared test fixtures."""

import time

import jwt
import pytest
from fastapi.testclient import TestClient

import main
from cart_service.config import Settings, get_settings

JWT_SECRET = "test-jwt-secret-0123456789abcdef0123456789abcdef"
BREWERY_API_URL = "http://brewery.test"


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        brewery_api_url=BREWERY_API_URL,
        jwt_secret=JWT_SECRET,
        upstream_timeout=5,
    )


@pytest.fixture()
def make_token():
    def _make(user_id=1, email="test@example.com", secret=JWT_SECRET, expires_in=3600):
        claims = {"id": user_id, "email": email, "exp": int(time.time()) + expires_in}
        return jwt.encode(claims, secret, algorithm="HS256")

    return _make


@pytest.fixture()
def token(make_token) -> str:
    return make_token()


@pytest.fixture()
def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def client(settings: Settings):
    main.app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()
