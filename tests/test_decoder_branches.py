import pytest

from pkg_jwt import AlgorithmPolicy, TemporalCondition, TokenDecoder, VerificationResult
from pkg_jwt.domain.exceptions import ExpiredError, NotYetValidError, SignatureError


class StubVerifier:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def verify(self, token, key, allowed_algorithms, *, audience=None, issuer=None, leeway=0):
        self.calls.append((token, key, frozenset(allowed_algorithms), audience, issuer, leeway))
        if self.error is not None:
            raise self.error
        return self.result

    def read_header(self, token):
        return {"alg": "HS256"}


def _decoder(verifier):
    return TokenDecoder(verifier=verifier, algorithm_policy=AlgorithmPolicy({"HS256", "HS512"}).restrict_to("HS256"))


def _result(condition):
    return VerificationResult(
        header={"alg": "HS256", "typ": "JWT"},
        payload={"jti": "user-1", "meta": {"ids": (1, 2)}},
        condition=condition,
    )


def test_verifier_receives_allow_list_and_options():
    verifier = StubVerifier(_result(TemporalCondition.VALID))

    _decoder(verifier).decode("t", "k", audience="aud", issuer="iss", leeway=5)

    assert verifier.calls == [("t", "k", frozenset({"HS256"}), "aud", "iss", 5)]


def test_valid_result_is_wrapped():
    decoded = _decoder(StubVerifier(_result(TemporalCondition.VALID))).decode("t", "k", True, True)

    assert decoded.jti == "user-1"
    assert decoded.header == {"alg": "HS256", "typ": "JWT"}
    assert decoded.get_payload_entry("meta") == {"ids": [1, 2]}


@pytest.mark.parametrize(
    "condition, flags, error",
    [
        (TemporalCondition.EXPIRED, (True, False), ExpiredError),
        (TemporalCondition.EXPIRED, (True, True), ExpiredError),
        (TemporalCondition.NOT_YET_VALID, (False, True), NotYetValidError),
        (TemporalCondition.NOT_YET_VALID, (True, True), NotYetValidError),
    ],
)
def test_escalated_conditions_raise(condition, flags, error):
    with pytest.raises(error):
        _decoder(StubVerifier(_result(condition))).decode("t", "k", *flags)


@pytest.mark.parametrize(
    "condition, flags",
    [
        (TemporalCondition.EXPIRED, (False, False)),
        (TemporalCondition.EXPIRED, (False, True)),
        (TemporalCondition.NOT_YET_VALID, (False, False)),
        (TemporalCondition.NOT_YET_VALID, (True, False)),
    ],
)
def test_soft_conditions_still_decode(condition, flags):
    decoded = _decoder(StubVerifier(_result(condition))).decode("t", "k", *flags)
    assert decoded.jti == "user-1"


def test_verifier_errors_propagate():
    with pytest.raises(SignatureError):
        _decoder(StubVerifier(error=SignatureError("bad"))).decode("t", "k")


def test_read_header_delegates():
    assert _decoder(StubVerifier()).read_header("t") == {"alg": "HS256"}
