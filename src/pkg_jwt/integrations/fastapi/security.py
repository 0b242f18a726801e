from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...domain.value_objects import IssuerContext

# Expose this so apps can plug it into dependencies if they want OpenAPI security
bearer_scheme = HTTPBearer(auto_error=False)

DEFAULT_COOKIE_NAME = "access_token"


def issuer_context_from_request(request: Request, app_name: Optional[str] = None) -> IssuerContext:
    """
    Default-claim context for tokens issued while handling `request`:
    the application name becomes `sub`, `scheme://host[:port]` becomes `iss`.
    """
    host_info = f"{request.url.scheme}://{request.url.netloc}"
    if app_name is None:
        app_name = getattr(request.app, "title", None) or None
    return IssuerContext(application_name=app_name, host_info=host_info)


def extract_token_from_request(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
    cookie_name: str = DEFAULT_COOKIE_NAME,
) -> Optional[str]:
    """
    Look for a compact token in, in this order:

      1. the HTTPBearer credentials
      2. a raw `Authorization: Bearer ...` header
      3. the cookie named `cookie_name`

    Returns None when there is none.
    """
    if credentials is not None:
        token = (credentials.credentials or "").strip()
        if token:
            return token

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header.removeprefix("Bearer ").strip()
        if token:
            return token

    return request.cookies.get(cookie_name) or None


def require_token_from_request(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
    cookie_name: str = DEFAULT_COOKIE_NAME,
) -> str:
    """Like `extract_token_from_request`, but 401 when no token is found."""
    token = extract_token_from_request(request, credentials, cookie_name)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return token
