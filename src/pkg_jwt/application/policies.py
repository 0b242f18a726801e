from __future__ import annotations

from typing import Iterable

from ..domain.exceptions import UnsupportedAlgorithmError


class AlgorithmPolicy:
    """
    Allow-list of signing algorithms trusted for issuing and decoding.

    By default every algorithm the signing library supports is allowed.
    Subclass and override `allowed_algorithms()`, or use `restrict_to()`, to
    narrow the set. Build the policy once at startup; it is immutable.
    """

    __slots__ = ("_supported",)

    def __init__(self, supported_algorithms: Iterable[str]) -> None:
        self._supported = frozenset(supported_algorithms)

    @property
    def supported_algorithms(self) -> frozenset[str]:
        return self._supported

    def allowed_algorithms(self) -> frozenset[str]:
        return self._supported

    def is_allowed(self, algorithm: str) -> bool:
        return algorithm in self.allowed_algorithms()

    def ensure_allowed(self, algorithm: str) -> None:
        if not self.is_allowed(algorithm):
            raise UnsupportedAlgorithmError(f"The algorithm `{algorithm}` is not allowed")

    def restrict_to(self, *algorithms: str) -> "AlgorithmPolicy":
        unknown = [a for a in algorithms if a not in self._supported]
        if unknown:
            raise UnsupportedAlgorithmError(
                f"Algorithms not supported by the signing library: {unknown}"
            )
        return _RestrictedAlgorithmPolicy(self._supported, algorithms)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({sorted(self.allowed_algorithms())!r})"


class _RestrictedAlgorithmPolicy(AlgorithmPolicy):
    __slots__ = ("_allowed",)

    def __init__(self, supported_algorithms: Iterable[str], allowed: Iterable[str]) -> None:
        super().__init__(supported_algorithms)
        self._allowed = frozenset(allowed)

    def allowed_algorithms(self) -> frozenset[str]:
        return self._allowed
