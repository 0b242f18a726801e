class TokenError(Exception):
    """Raised when a token cannot be created or decoded."""
    pass


class UnsupportedAlgorithmError(TokenError):
    """Raised when an algorithm is not in the allow-list."""
    pass


class SignatureError(TokenError):
    """Raised when the signature of a token is not valid."""
    pass


class NotYetValidError(TokenError):
    """Raised when a token is authentic but not valid yet (`nbf` / `iat`)."""
    pass


class ExpiredError(TokenError):
    """Raised when a token is authentic but expired (`exp`)."""
    pass


class LockedMutationError(TokenError):
    """Raised when a locked issue request is modified."""
    pass
