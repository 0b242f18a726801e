from enum import Enum


class RegisteredClaim(str, Enum):
    ISSUER = "iss"
    SUBJECT = "sub"
    AUDIENCE = "aud"
    EXPIRES_AT = "exp"
    NOT_BEFORE = "nbf"
    ISSUED_AT = "iat"
    JWT_ID = "jti"


class TemporalCondition(Enum):
    VALID = "valid"
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"


DEFAULT_ALGORITHM = "HS256"

# six months
DEFAULT_LIFESPAN_SECONDS = 86400 * 30 * 6

TIMESTAMP_CLAIMS = frozenset(
    {
        RegisteredClaim.EXPIRES_AT.value,
        RegisteredClaim.NOT_BEFORE.value,
        RegisteredClaim.ISSUED_AT.value,
    }
)
