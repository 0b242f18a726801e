from __future__ import annotations

from typing import Any

from .deps import FastAPIJwt
from .security import (
    DEFAULT_COOKIE_NAME,
    bearer_scheme,
    extract_token_from_request,
    issuer_context_from_request,
)
from ..common.jwt_factory import JwtService, create_jwt_service
from ...config.settings import JwtSettings


def create_fastapi_jwt(
    *,
    key: Any,
    settings: JwtSettings | None = None,
    cookie_name: str = DEFAULT_COOKIE_NAME,
    audience: str | None = None,
) -> FastAPIJwt:
    """
    High-level helper for FastAPI apps:

    - Creates a JwtService from JwtSettings
    - Wraps it in FastAPIJwt, exposing dependencies like:

        fastapi_jwt.get_decoded_token
        fastapi_jwt.get_optional_token
        fastapi_jwt.get_request_service
    """
    settings = settings or JwtSettings()
    service: JwtService = create_jwt_service(settings=settings)
    return FastAPIJwt(
        service=service,
        key=key,
        cookie_name=cookie_name,
        app_name=settings.app_name,
        audience=audience,
    )


__all__ = [
    "FastAPIJwt",
    "DEFAULT_COOKIE_NAME",
    "bearer_scheme",
    "create_fastapi_jwt",
    "extract_token_from_request",
    "issuer_context_from_request",
]
