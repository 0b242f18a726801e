import logging
from typing import Any, Dict, Iterable, Mapping, Optional

import jwt
from jwt.algorithms import get_default_algorithms
from jwt.exceptions import (
    ExpiredSignatureError,
    ImmatureSignatureError,
    InvalidAlgorithmError,
    InvalidSignatureError,
    PyJWTError,
)

from ...domain.constants import TIMESTAMP_CLAIMS, TemporalCondition
from ...domain.exceptions import SignatureError, TokenError, UnsupportedAlgorithmError
from ...domain.ports import TokenSigner, TokenVerifier
from ...domain.value_objects import VerificationResult

logger = logging.getLogger(__name__)

# the unsecured algorithm is never offered
_UNSECURED_ALGORITHM = "none"


class PyJWTCodec(TokenSigner, TokenVerifier):
    """
    Adapter implementing the TokenSigner and TokenVerifier ports using PyJWT.

    Infrastructure layer:
    - Knows about the JWS compact serialization and PyJWT's exceptions.
    - Turns expiry / not-yet-valid failures into a VerificationResult
      condition after re-reading the (authentic) token without time checks.
    """

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def supported_algorithms(self) -> frozenset[str]:
        # RSA / EC / EdDSA only show up when `cryptography` is installed
        return frozenset(
            name for name in get_default_algorithms() if name != _UNSECURED_ALGORITHM
        )

    def sign(self, payload: Mapping[str, Any], key: Any, algorithm: str) -> str:
        try:
            return jwt.encode(dict(payload), key, algorithm=algorithm)
        except NotImplementedError as exc:
            raise UnsupportedAlgorithmError(
                f"The algorithm `{algorithm}` is not supported by the signing library"
            ) from exc
        except (PyJWTError, TypeError, ValueError) as exc:
            raise TokenError(f"Unable to sign token: {exc}") from exc

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
        algorithms = sorted(allowed_algorithms)
        try:
            return self._decode(token, key, algorithms, audience, issuer, leeway)
        except ExpiredSignatureError:
            condition = TemporalCondition.EXPIRED
        except ImmatureSignatureError:
            condition = TemporalCondition.NOT_YET_VALID
        except InvalidSignatureError as exc:
            raise SignatureError("Token signature is invalid") from exc
        except InvalidAlgorithmError as exc:
            raise UnsupportedAlgorithmError(f"Invalid token: {exc}") from exc
        except (PyJWTError, TypeError, ValueError) as exc:
            raise TokenError(f"Invalid token: {exc}") from exc

        # The signature was verified before the time claims were checked,
        # so the contents can be read back without the time checks.
        logger.debug("Recovering token contents despite condition %s", condition.value)
        try:
            result = self._decode(
                token, key, algorithms, audience, issuer, leeway, verify_time=False
            )
        except (PyJWTError, TypeError, ValueError) as exc:
            raise TokenError(f"Invalid token: {exc}") from exc

        return VerificationResult(
            header=result.header,
            payload=result.payload,
            condition=condition,
        )

    def read_header(self, token: str) -> Dict[str, Any]:
        try:
            return dict(jwt.get_unverified_header(token))
        except PyJWTError as exc:
            raise TokenError(f"Invalid token: {exc}") from exc

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _decode(
        token: str,
        key: Any,
        algorithms: list[str],
        audience: Optional[str],
        issuer: Optional[str],
        leeway: int,
        verify_time: bool = True,
    ) -> VerificationResult:
        options = {
            "verify_signature": True,
            "verify_exp": verify_time,
            "verify_nbf": verify_time,
            "verify_iat": verify_time,
            # tokens carrying `aud` are accepted when no audience is expected
            "verify_aud": audience is not None,
            "verify_iss": issuer is not None,
        }
        decoded = jwt.decode_complete(
            token,
            key,
            algorithms=algorithms,
            options=options,
            audience=audience,
            issuer=issuer,
            leeway=leeway,
        )
        payload = dict(decoded["payload"])
        # PyJWT takes booleans for timestamps (`int(True) == 1`)
        for claim in TIMESTAMP_CLAIMS.intersection(payload):
            if isinstance(payload[claim], bool):
                raise TokenError(f"Invalid token: claim '{claim}' must be an integer timestamp")
        return VerificationResult(
            header=dict(decoded["header"]),
            payload=payload,
        )
