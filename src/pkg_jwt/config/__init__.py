"""
pkg_jwt.config

- JwtSettings: algorithm, allow-list, default lifespan and default-claim
  context for issuing and decoding tokens.
- settings_from_env: builds JwtSettings from JWT_* / APP_NAME variables.
"""

from __future__ import annotations

from .env import settings_from_env
from .settings import JwtSettings

__all__ = [
    "JwtSettings",
    "settings_from_env",
]
