from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..domain.constants import DEFAULT_ALGORITHM, DEFAULT_LIFESPAN_SECONDS
from ..domain.value_objects import IssuerContext


@dataclass(slots=True)
class JwtSettings:
    """
    Token issuing / decoding settings.

    Host code decides how to construct this (env, config file, etc.).
    """
    algorithm: str = DEFAULT_ALGORITHM
    # empty: every algorithm of the signing library is allowed
    allowed_algorithms: List[str] = field(default_factory=list)
    # None: issued tokens never expire
    default_lifespan_seconds: Optional[int] = DEFAULT_LIFESPAN_SECONDS
    leeway_seconds: int = 0

    # Default claims
    app_name: Optional[str] = None
    host_info: Optional[str] = None

    @property
    def issuer_context(self) -> IssuerContext:
        return IssuerContext(application_name=self.app_name, host_info=self.host_info)
