from __future__ import annotations

import os
from typing import Optional

from .settings import JwtSettings
from ..domain.constants import DEFAULT_ALGORITHM, DEFAULT_LIFESPAN_SECONDS


def settings_from_env() -> JwtSettings:
    def _int(key: str, default: Optional[int]) -> Optional[int]:
        raw = os.getenv(key)
        if raw is None:
            return default
        raw = raw.strip()
        if raw.lower() in {"", "none", "null"}:
            return None
        try:
            return int(raw)
        except ValueError as exc:
            raise RuntimeError(f"Invalid integer for {key}: {raw!r}") from exc

    def _split_csv(key: str) -> list[str]:
        raw = os.getenv(key)
        if not raw:
            return []
        return [x.strip() for x in raw.split(",") if x and x.strip()]

    leeway = _int("JWT_LEEWAY_SECONDS", 0)

    return JwtSettings(
        algorithm=(os.getenv("JWT_ALGORITHM") or DEFAULT_ALGORITHM).strip(),
        allowed_algorithms=_split_csv("JWT_ALLOWED_ALGORITHMS"),
        default_lifespan_seconds=_int("JWT_DEFAULT_LIFESPAN_SECONDS", DEFAULT_LIFESPAN_SECONDS),
        leeway_seconds=leeway or 0,
        app_name=os.getenv("APP_NAME") or None,
        host_info=os.getenv("JWT_HOST_INFO") or None,
    )
