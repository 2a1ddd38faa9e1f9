"""
config.py
Configuración del cart service, leída del entorno.

Si existe, primero se carga `.env.<ENV>` (python-dotenv); las variables
que ya están en el entorno siempre ganan.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_ENVIRONMENT = "development"
DEFAULT_BREWERY_API_URL = "http://localhost:5089"
DEFAULT_PORT = 3009
DEFAULT_UPSTREAM_TIMEOUT = 10.0


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    environment: str = DEFAULT_ENVIRONMENT
    brewery_api_url: str = DEFAULT_BREWERY_API_URL
    port: int = DEFAULT_PORT
    jwt_secret: str = ""
    upstream_timeout: float = DEFAULT_UPSTREAM_TIMEOUT
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]


def env_file_path(environment: str) -> Path:
    # .env.local, .env.production, ...
    return BASE_DIR / f".env.{environment or 'local'}"


def load_env_file(environment: str) -> bool:
    """
    Carga `.env.<environment>` si existe.
    Devuelve False si no hay archivo (no es un error).
    """
    path = env_file_path(environment)
    if not path.exists():
        return False
    return load_dotenv(path, override=False)


def _int_env(name: str, default: int) -> int:
    raw = (os.getenv(name, "") or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = (os.getenv(name, "") or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}")


def load_settings() -> Settings:
    """
    Arma los settings desde el entorno actual.

    Lee el entorno en cada llamada (los tests tocan `os.environ` y vuelven
    a llamar). La app usa `get_settings()`.
    """
    load_env_file(os.getenv("ENV", "") or "local")

    origins = [
        o.strip()
        for o in (os.getenv("CORS_ORIGINS", "*") or "*").split(",")
        if o.strip()
    ]

    return Settings(
        environment=os.getenv("ENV") or DEFAULT_ENVIRONMENT,
        # normalizar (evita //)
        brewery_api_url=(
            os.getenv("BREWERY_API_URL") or DEFAULT_BREWERY_API_URL
        ).rstrip("/"),
        port=_int_env("PORT", DEFAULT_PORT),
        jwt_secret=os.getenv("JWT_SECRET", "") or "",
        upstream_timeout=_float_env("UPSTREAM_TIMEOUT", DEFAULT_UPSTREAM_TIMEOUT),
        log_level=(os.getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
        cors_origins=origins or ["*"],
    )


@lru_cache()
def get_settings() -> Settings:
    settings = load_settings()
    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is empty: every bearer token will be rejected")
    return settings
