from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ...adapters.pyjwt.codec import PyJWTCodec
from ...application.defaults import DefaultPayload
from ...application.policies import AlgorithmPolicy
from ...application.use_cases.decode import TokenDecoder
from ...application.use_cases.issue import TokenIssuer
from ...config.settings import JwtSettings
from ...domain.clock import Clock, system_clock
from ...domain.entities import DecodedToken, IssueRequest
from ...domain.ports import DefaultPayloadHook
from ...domain.value_objects import IssuerContext


@dataclass(slots=True)
class JwtService:
    """
    Framework-agnostic token facade.

    Host classes (user models, API-key services, ...) hold one of these as
    a collaborator and delegate to it; integrations adapt it to their own
    dependency systems.
    """

    issuer: TokenIssuer
    decoder: TokenDecoder
    algorithm: str
    leeway_seconds: int = 0

    # --- Core operations --------------------------------------------------

    def issue(
            self,
            principal_id: Any,
            secret: Any,
            issue_request: IssueRequest | None = None,
            algorithm: str | None = None,
    ) -> str:
        """Principal id + claims -> signed token."""
        return self.issuer.issue(
            principal_id,
            secret,
            issue_request,
            algorithm or self.algorithm,
        )

    def decode(
            self,
            token: str,
            secret: Any,
            throw_if_expired: bool = False,
            throw_if_not_yet_valid: bool = False,
            *,
            audience: Optional[str] = None,
            issuer: Optional[str] = None,
            leeway: Optional[int] = None,
    ) -> DecodedToken:
        """Token -> DecodedToken (or raise token exceptions)."""
        return self.decoder.decode(
            token,
            secret,
            throw_if_expired,
            throw_if_not_yet_valid,
            audience=audience,
            issuer=issuer,
            leeway=self.leeway_seconds if leeway is None else leeway,
        )

    def read_header(self, token: str) -> Dict[str, Any]:
        return self.decoder.read_header(token)

    # --- Convenience helpers ----------------------------------------------

    @property
    def algorithm_policy(self) -> AlgorithmPolicy:
        return self.issuer.algorithm_policy

    def with_context(self, context: IssuerContext) -> "JwtService":
        """
        Copy of this service whose default claims come from `context`
        (e.g. built from the current request). A custom default-payload
        hook is kept as is.
        """
        hook = self.issuer.add_default_payload
        if hook is not None and not isinstance(hook, DefaultPayload):
            return self
        issuer = dataclasses.replace(
            self.issuer,
            add_default_payload=DefaultPayload(context=context, clock=self.issuer.clock),
        )
        return dataclasses.replace(self, issuer=issuer)


def create_jwt_service(
        *,
        settings: JwtSettings | None = None,
        add_default_payload: DefaultPayloadHook | None = None,
        algorithm_policy: AlgorithmPolicy | None = None,
        clock: Clock | None = None,
) -> JwtService:
    """
    High-level factory: JwtSettings -> JwtService.

    - builds a PyJWTCodec as signer and verifier
    - derives the algorithm policy from the codec (narrowed by
      `settings.allowed_algorithms` when given)
    - wires TokenIssuer + TokenDecoder
    """
    settings = settings or JwtSettings()
    clock = clock or system_clock
    codec = PyJWTCodec()

    if algorithm_policy is None:
        algorithm_policy = AlgorithmPolicy(codec.supported_algorithms())
        if settings.allowed_algorithms:
            algorithm_policy = algorithm_policy.restrict_to(*settings.allowed_algorithms)

    if add_default_payload is None:
        add_default_payload = DefaultPayload(context=settings.issuer_context, clock=clock)

    issuer = TokenIssuer(
        signer=codec,
        algorithm_policy=algorithm_policy,
        default_lifespan_seconds=settings.default_lifespan_seconds,
        add_default_payload=add_default_payload,
        clock=clock,
    )
    decoder = TokenDecoder(
        verifier=codec,
        algorithm_policy=algorithm_policy,
    )

    return JwtService(
        issuer=issuer,
        decoder=decoder,
        algorithm=settings.algorithm,
        leeway_seconds=settings.leeway_seconds,
    )
