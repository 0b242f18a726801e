from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Protocol

from .entities import IssueRequest
from .value_objects import VerificationResult

DefaultPayloadHook = Callable[[IssueRequest, Optional[int]], IssueRequest]
"""
Called once per issuance with the issue request and the configured default
lifespan in seconds (None: tokens never expire). Must return the request.
"""


class TokenSigner(Protocol):
    """
    Port for turning a payload into a signed compact token.

    Implementations live in the adapters layer (e.g. PyJWT codec).
    """

    def supported_algorithms(self) -> frozenset[str]:
        """Every algorithm the underlying library can sign and verify with."""
        ...

    def sign(self, payload: Mapping[str, Any], key: Any, algorithm: str) -> str:
        """
        Serialize and sign the payload.

        Raises:
          - TokenError when the library or the key cannot produce a token
        """
        ...


class TokenVerifier(Protocol):
    """
    Port for verifying a compact token.
    """

    def verify(
        self,
        token: str,
        key: Any,
        allowed_algorithms: Iterable[str],
        *,
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
        leeway: int = 0,
    ) -> VerificationResult:
        """
        Verify structure, algorithm and signature.

        Expired / not-yet-valid tokens are reported through the returned
        condition, not raised.
        Raises:
          - SignatureError
          - UnsupportedAlgorithmError
          - TokenError
        """
        ...

    def read_header(self, token: str) -> Dict[str, Any]:
        """Return the header without verifying anything."""
        ...
