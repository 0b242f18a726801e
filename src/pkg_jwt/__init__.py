"""
pkg_jwt

Framework-agnostic JSON Web Token lifecycle core: issue signed tokens from a
claim set and decode received tokens into a read-only claim set, with an
algorithm allow-list and soft handling of expired / not-yet-valid tokens.
"""

__version__ = "0.1.0"

from .domain.constants import RegisteredClaim, TemporalCondition
from .domain.entities import ClaimSet, IssueRequest, DecodedToken
from .domain.exceptions import (
    TokenError,
    UnsupportedAlgorithmError,
    SignatureError,
    NotYetValidError,
    ExpiredError,
    LockedMutationError,
)
from .domain.value_objects import IssuerContext, VerificationResult
from .domain.ports import TokenSigner, TokenVerifier, DefaultPayloadHook

from .application.policies import AlgorithmPolicy
from .application.defaults import DefaultPayload
from .application.use_cases.issue import TokenIssuer
from .application.use_cases.decode import TokenDecoder

from .config import JwtSettings, settings_from_env

# PyJWT adapter + facade
from .adapters.pyjwt.codec import PyJWTCodec
from .integrations.common.jwt_factory import JwtService, create_jwt_service

__all__ = [
    "__version__",
    # domain core
    "RegisteredClaim",
    "TemporalCondition",
    "ClaimSet",
    "IssueRequest",
    "DecodedToken",
    "IssuerContext",
    "VerificationResult",
    "TokenSigner",
    "TokenVerifier",
    "DefaultPayloadHook",
    # exceptions
    "TokenError",
    "UnsupportedAlgorithmError",
    "SignatureError",
    "NotYetValidError",
    "ExpiredError",
    "LockedMutationError",
    # use cases
    "AlgorithmPolicy",
    "DefaultPayload",
    "TokenIssuer",
    "TokenDecoder",
    # config
    "JwtSettings",
    "settings_from_env",
    # adapters
    "PyJWTCodec",
    "JwtService",
    "create_jwt_service",
]
