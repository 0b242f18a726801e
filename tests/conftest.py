"""
Shared fixtures: a fixed HMAC secret and a JwtService wired like an
application would wire it.
"""
from __future__ import annotations

import pytest

from pkg_jwt import JwtSettings, create_jwt_service

SECRET = "unit-test-secret-with-enough-bytes-for-hs512-signing-0123456789abcdef"


@pytest.fixture
def secret() -> str:
    return SECRET


@pytest.fixture
def service():
    return create_jwt_service(settings=JwtSettings(default_lifespan_seconds=3600))
