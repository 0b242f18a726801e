from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..policies import AlgorithmPolicy
from ...domain.entities import DecodedToken
from ...domain.exceptions import ExpiredError, NotYetValidError
from ...domain.ports import TokenVerifier


@dataclass(slots=True)
class TokenDecoder:
    """
    Application use case:
    - verify a token via the TokenVerifier port, restricted to the
      algorithm allow-list
    - escalate expiry / not-yet-valid into errors only when asked to
    - wrap header and payload into a DecodedToken

    A token that is authentic but expired (or not yet valid) still decodes
    by default, so callers can see whom it belonged to. Use the predicates
    on the result to check whether it is currently usable.
    """

    verifier: TokenVerifier
    algorithm_policy: AlgorithmPolicy

    def decode(
            self,
            token: str,
            secret: Any,
            throw_if_expired: bool = False,
            throw_if_not_yet_valid: bool = False,
            *,
            audience: Optional[str] = None,
            issuer: Optional[str] = None,
            leeway: int = 0,
    ) -> DecodedToken:
        """
        Decode and verify the given token.

        If you use asymmetric keys, pass the public key as `secret`.

        Raises:
            SignatureError
            UnsupportedAlgorithmError
            ExpiredError (only with throw_if_expired)
            NotYetValidError (only with throw_if_not_yet_valid)
            TokenError
        """
        result = self.verifier.verify(
            token,
            secret,
            self.algorithm_policy.allowed_algorithms(),
            audience=audience,
            issuer=issuer,
            leeway=leeway,
        )

        if result.is_not_yet_valid and throw_if_not_yet_valid:
            raise NotYetValidError("The token is not yet valid")
        if result.is_expired and throw_if_expired:
            raise ExpiredError("The token is expired")

        return DecodedToken(result.header, result.payload)

    def read_header(self, token: str) -> Dict[str, Any]:
        """Unverified header of the token (e.g. to inspect `alg` or `typ`)."""
        return self.verifier.read_header(token)
