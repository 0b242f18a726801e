from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..defaults import DefaultPayload
from ..policies import AlgorithmPolicy
from ...domain.clock import Clock, system_clock
from ...domain.constants import DEFAULT_ALGORITHM, DEFAULT_LIFESPAN_SECONDS
from ...domain.entities import IssueRequest
from ...domain.ports import DefaultPayloadHook, TokenSigner


@dataclass(slots=True)
class TokenIssuer:
    """
    Application use case:
    - check the algorithm against the allow-list
    - merge default claims into the issue request
    - stamp `jti` (principal id) and `iat`
    - sign via the TokenSigner port

    `add_default_payload` replaces the default hook entirely when set.
    Set `default_lifespan_seconds` to None for tokens that never expire.
    """

    signer: TokenSigner
    algorithm_policy: AlgorithmPolicy
    default_lifespan_seconds: Optional[int] = DEFAULT_LIFESPAN_SECONDS
    add_default_payload: Optional[DefaultPayloadHook] = None
    clock: Clock = system_clock

    def issue(
            self,
            principal_id: Any,
            secret: Any,
            issue_request: IssueRequest | None = None,
            algorithm: str = DEFAULT_ALGORITHM,
    ) -> str:
        """
        Create a signed token for the given principal.

        If you use asymmetric keys, pass the private key as `secret`.

        Raises:
            UnsupportedAlgorithmError (before anything is signed)
            LockedMutationError (the request was locked by the caller)
            TokenError
        """
        self.algorithm_policy.ensure_allowed(algorithm)

        if issue_request is None:
            issue_request = IssueRequest()

        hook = self.add_default_payload or DefaultPayload(clock=self.clock)
        issue_request = hook(issue_request, self.default_lifespan_seconds)

        # identity and creation time are always stamped by the issuer
        issue_request.set_jti(str(principal_id))
        issue_request.set_issued_at(self.clock())

        return self.signer.sign(issue_request.payload, secret, algorithm)
