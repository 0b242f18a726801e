from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials

from .security import (
    DEFAULT_COOKIE_NAME,
    bearer_scheme,
    extract_token_from_request,
    issuer_context_from_request,
    require_token_from_request,
)
from ..common.jwt_factory import JwtService
from ...domain.entities import DecodedToken
from ...domain.exceptions import (
    ExpiredError,
    NotYetValidError,
    TokenError,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FastAPIJwt:
    """
    FastAPI integration for pkg_jwt.

    `key` is the secret (or public key) tokens are verified with. Request
    authentication is strict: expired and not-yet-valid tokens are rejected.
    """

    service: JwtService
    key: Any
    cookie_name: str = DEFAULT_COOKIE_NAME
    app_name: Optional[str] = None
    audience: Optional[str] = None

    # ------------------------------------------------------------------ #
    # Dependencies
    # ------------------------------------------------------------------ #

    async def get_decoded_token(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> DecodedToken:
        """Dependency: require a valid token."""
        token = require_token_from_request(request, credentials, self.cookie_name)
        try:
            return self._decode(token)
        except ExpiredError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token expired",
            ) from exc
        except NotYetValidError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token not yet valid",
            ) from exc
        except TokenError as exc:
            logger.debug("Rejected token: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(exc),
            ) from exc

    async def get_optional_token(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> DecodedToken | None:
        """Dependency: decode a token if there is a usable one."""
        token = extract_token_from_request(request, credentials, self.cookie_name)
        if token is None:
            return None

        try:
            return self._decode(token)
        except TokenError as exc:
            # bad token -> treat as anonymous
            logger.debug("Ignoring unusable token: %s", exc)
            return None

    def get_request_service(self, request: Request) -> JwtService:
        """Dependency: service whose default `sub`/`iss` come from the request."""
        return self.service.with_context(issuer_context_from_request(request, self.app_name))

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _decode(self, token: str) -> DecodedToken:
        return self.service.decode(
            token,
            self.key,
            throw_if_expired=True,
            throw_if_not_yet_valid=True,
            audience=self.audience,
        )
