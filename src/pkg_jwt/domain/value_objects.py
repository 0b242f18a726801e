# src/pkg_jwt/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .constants import TemporalCondition


@dataclass(frozen=True, slots=True)
class IssuerContext:
    """
    Ambient information about the issuing application.

    The host framework decides where these values come from (app config,
    the current request, ...) and passes them in explicitly.

    - application_name: used as default `sub`
    - host_info:        used as default `iss` (e.g. "https://api.example.com")
    """
    application_name: Optional[str] = None
    host_info: Optional[str] = None


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """
    Outcome of verifying a token whose signature and structure are fine.

    `condition` tells whether the token is currently usable or was flagged
    as expired / not yet valid. Header and payload are always present.
    """
    header: Dict[str, Any] = field(default_factory=dict)
    payload: Dict[str, Any] = field(default_factory=dict)
    condition: TemporalCondition = TemporalCondition.VALID

    @property
    def is_expired(self) -> bool:
        return self.condition is TemporalCondition.EXPIRED

    @property
    def is_not_yet_valid(self) -> bool:
        return self.condition is TemporalCondition.NOT_YET_VALID
