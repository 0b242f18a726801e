from __future__ import annotations

import copy
from typing import Any, Dict, Mapping, Optional

from .clock import system_clock
from .constants import RegisteredClaim, TIMESTAMP_CLAIMS
from .exceptions import LockedMutationError, TokenError

ClaimKey = str | RegisteredClaim


def _key(key: ClaimKey) -> str:
    if isinstance(key, RegisteredClaim):
        return key.value
    return key


def _as_timestamp(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise TokenError(f"Claim '{name}' must be an integer timestamp")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise TokenError(f"Claim '{name}' must be an integer timestamp") from exc


def _coerce(name: str, value: Any) -> Any:
    # a timestamp claim is either absent or an integer, never None
    if name in TIMESTAMP_CLAIMS:
        return _as_timestamp(name, value)
    return value


def _normalize(value: Any) -> Any:
    """
    Recursively convert mappings to plain dicts and tuples/lists to lists.
    Scalars are returned untouched.
    """
    if isinstance(value, Mapping):
        return {str(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    return value


class ClaimSet:
    """
    Read surface shared by issue requests and decoded tokens.

    Holds the header and payload of a token and answers the validity
    questions defined by RFC 7519 (`exp`, `nbf`, `iat`). Subclasses only
    differ in mutability.
    """

    __slots__ = ("_header", "_payload")

    def __init__(
            self,
            header: Mapping[str, Any] | None = None,
            payload: Mapping[str, Any] | None = None,
    ) -> None:
        self._header: Dict[str, Any] = dict(header or {})
        self._payload: Dict[str, Any] = dict(payload or {})

    # ---- raw access -------------------------------------------------------

    @property
    def header(self) -> Dict[str, Any]:
        return copy.deepcopy(self._header)

    @property
    def payload(self) -> Dict[str, Any]:
        return copy.deepcopy(self._payload)

    def get_header_entry(self, key: str, default: Any = None) -> Any:
        return copy.deepcopy(self._header.get(key, default))

    @property
    def algorithm(self) -> Optional[str]:
        return self._header.get("alg")

    def has_payload_entry(self, key: ClaimKey) -> bool:
        # membership, not truthiness: an entry set to 0 is present
        return _key(key) in self._payload

    def get_payload_entry(self, key: ClaimKey, default: Any = None) -> Any:
        return copy.deepcopy(self._payload.get(_key(key), default))

    def _timestamp(self, claim: RegisteredClaim) -> Optional[int]:
        value = self._payload.get(claim.value)
        if value is None:
            return None
        return _as_timestamp(claim.value, value)

    # ---- registered claims ------------------------------------------------

    @property
    def issuer(self) -> Optional[str]:
        return self.get_payload_entry(RegisteredClaim.ISSUER)

    @property
    def subject(self) -> Optional[str]:
        return self.get_payload_entry(RegisteredClaim.SUBJECT)

    @property
    def audience(self) -> Optional[str]:
        return self.get_payload_entry(RegisteredClaim.AUDIENCE)

    @property
    def expires_at(self) -> Optional[int]:
        return self._timestamp(RegisteredClaim.EXPIRES_AT)

    @property
    def not_before(self) -> Optional[int]:
        return self._timestamp(RegisteredClaim.NOT_BEFORE)

    @property
    def issued_at(self) -> Optional[int]:
        return self._timestamp(RegisteredClaim.ISSUED_AT)

    @property
    def jti(self) -> Optional[str]:
        return self.get_payload_entry(RegisteredClaim.JWT_ID)

    # ---- validity ---------------------------------------------------------

    def is_expired(self, now: int | None = None) -> bool:
        exp = self.expires_at
        if exp is None:
            return False
        return exp < (system_clock() if now is None else now)

    def is_not_yet_valid(self, now: int | None = None) -> bool:
        nbf = self.not_before
        if nbf is None:
            return False
        return nbf > (system_clock() if now is None else now)

    def is_valid(self, now: int | None = None) -> bool:
        """
        True when the token was issued in the past (or carries no `iat`) and
        `now` lies inside its `nbf`..`exp` window.
        """
        if now is None:
            now = system_clock()
        iat = self.issued_at
        issued_at_valid = iat is None or iat <= now
        return issued_at_valid and not self.is_expired(now) and not self.is_not_yet_valid(now)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(header={self._header!r}, payload={self._payload!r})"


class IssueRequest(ClaimSet):
    """
    Claims collected for a token that is about to be issued.

    Mutable until `lock()` is called; afterwards every setter raises
    `LockedMutationError`. Locking cannot be undone.
    """

    __slots__ = ("_locked",)

    def __init__(self, claims: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self._locked = False
        if claims:
            self.set_payload_entries(claims)

    def lock(self) -> None:
        self._locked = True

    @property
    def is_locked(self) -> bool:
        return self._locked

    def _ensure_unlocked(self) -> None:
        if self._locked:
            raise LockedMutationError(
                "This issue request is locked already and can not be modified"
            )

    def set_payload_entry(self, key: ClaimKey, value: Any) -> None:
        self._ensure_unlocked()
        name = _key(key)
        self._payload[name] = _coerce(name, value)

    def set_payload_entries(self, entries: Mapping[ClaimKey, Any]) -> None:
        """Set several entries at once; nothing is written if one is invalid."""
        self._ensure_unlocked()
        prepared = {_key(k): _coerce(_key(k), v) for k, v in entries.items()}
        self._payload.update(prepared)

    def set_issuer(self, issuer: str) -> None:
        self.set_payload_entry(RegisteredClaim.ISSUER, issuer)

    def set_subject(self, subject: str) -> None:
        self.set_payload_entry(RegisteredClaim.SUBJECT, subject)

    def set_audience(self, audience: str) -> None:
        self.set_payload_entry(RegisteredClaim.AUDIENCE, audience)

    def set_expires_at(self, timestamp: int) -> None:
        self.set_payload_entry(RegisteredClaim.EXPIRES_AT, timestamp)

    def set_not_before(self, timestamp: int) -> None:
        self.set_payload_entry(RegisteredClaim.NOT_BEFORE, timestamp)

    def set_issued_at(self, timestamp: int) -> None:
        self.set_payload_entry(RegisteredClaim.ISSUED_AT, timestamp)

    def set_jti(self, jti: str) -> None:
        """
        The `jti` holds the id of the principal the token belongs to (usually
        the user id). It must not identify anything else within the
        application.
        """
        self.set_payload_entry(RegisteredClaim.JWT_ID, jti)


class DecodedToken(ClaimSet):
    """
    Read-only result of decoding a token.

    Header and payload are normalized into plain dicts and lists on
    construction; `header` and `payload` hand out copies.
    """

    __slots__ = ()

    def __init__(
            self,
            header: Mapping[str, Any] | None = None,
            payload: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(_normalize(header or {}), _normalize(payload or {}))
