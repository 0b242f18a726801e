import pytest

from pkg_jwt import (
    AlgorithmPolicy,
    IssuerContext,
    JwtSettings,
    PyJWTCodec,
    create_jwt_service,
    settings_from_env,
)
from pkg_jwt.domain.constants import DEFAULT_LIFESPAN_SECONDS
from pkg_jwt.domain.exceptions import UnsupportedAlgorithmError

ENV_KEYS = [
    "JWT_ALGORITHM",
    "JWT_ALLOWED_ALGORITHMS",
    "JWT_DEFAULT_LIFESPAN_SECONDS",
    "JWT_LEEWAY_SECONDS",
    "APP_NAME",
    "JWT_HOST_INFO",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_env():
    settings = settings_from_env()

    assert settings.algorithm == "HS256"
    assert settings.allowed_algorithms == []
    assert settings.default_lifespan_seconds == DEFAULT_LIFESPAN_SECONDS
    assert settings.leeway_seconds == 0
    assert settings.issuer_context == IssuerContext()


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("JWT_ALGORITHM", "HS512")
    monkeypatch.setenv("JWT_ALLOWED_ALGORITHMS", "HS256, HS512,")
    monkeypatch.setenv("JWT_DEFAULT_LIFESPAN_SECONDS", "900")
    monkeypatch.setenv("JWT_LEEWAY_SECONDS", "30")
    monkeypatch.setenv("APP_NAME", "billing")
    monkeypatch.setenv("JWT_HOST_INFO", "https://api.example.com")

    settings = settings_from_env()

    assert settings.algorithm == "HS512"
    assert settings.allowed_algorithms == ["HS256", "HS512"]
    assert settings.default_lifespan_seconds == 900
    assert settings.leeway_seconds == 30
    assert settings.issuer_context == IssuerContext(
        application_name="billing",
        host_info="https://api.example.com",
    )


def test_lifespan_can_be_disabled(monkeypatch):
    monkeypatch.setenv("JWT_DEFAULT_LIFESPAN_SECONDS", "none")
    assert settings_from_env().default_lifespan_seconds is None


def test_invalid_integer_names_variable(monkeypatch):
    monkeypatch.setenv("JWT_LEEWAY_SECONDS", "soon")
    with pytest.raises(RuntimeError, match="JWT_LEEWAY_SECONDS"):
        settings_from_env()


def test_service_uses_settings(secret):
    service = create_jwt_service(
        settings=JwtSettings(
            algorithm="HS512",
            allowed_algorithms=["HS256", "HS512"],
            default_lifespan_seconds=None,
            app_name="billing",
        )
    )

    assert service.algorithm_policy.allowed_algorithms() == frozenset({"HS256", "HS512"})

    decoded = service.decode(service.issue("user-1", secret), secret)
    assert decoded.algorithm == "HS512"
    assert decoded.subject == "billing"
    assert not decoded.has_payload_entry("exp")


def test_service_rejects_unknown_allowed_algorithm():
    with pytest.raises(UnsupportedAlgorithmError):
        create_jwt_service(settings=JwtSettings(allowed_algorithms=["HS256", "XX1"]))


def test_with_context_overrides_default_claims(service, secret):
    scoped = service.with_context(IssuerContext(application_name="app", host_info="https://h"))

    decoded = scoped.decode(scoped.issue("user-1", secret), secret)
    assert decoded.subject == "app"
    assert decoded.issuer == "https://h"

    # the base service is unchanged
    plain = service.decode(service.issue("user-1", secret), secret)
    assert not plain.has_payload_entry("iss")


def test_with_context_keeps_custom_hook(secret):
    def hook(issue_request, lifespan):
        issue_request.set_payload_entry("custom", True)
        return issue_request

    service = create_jwt_service(add_default_payload=hook)
    scoped = service.with_context(IssuerContext(application_name="app"))

    decoded = scoped.decode(scoped.issue("user-1", secret), secret)
    assert decoded.get_payload_entry("custom") is True
    assert not decoded.has_payload_entry("sub")


def test_service_accepts_custom_policy(secret):
    class HmacOnly(AlgorithmPolicy):
        def allowed_algorithms(self) -> frozenset[str]:
            return frozenset({"HS256"})

    service = create_jwt_service(algorithm_policy=HmacOnly(PyJWTCodec().supported_algorithms()))

    with pytest.raises(UnsupportedAlgorithmError):
        service.issue("user-1", secret, algorithm="RS256")
    assert service.decode(service.issue("user-1", secret), secret).jti == "user-1"
