"""
Session module exceptions.
"""

from aura.shared.exceptions import AuthenticationError


class SignInError(AuthenticationError):
    """Raised when the identity provider rejects a sign-in attempt."""

    def __init__(self, message: str = "ログインに失敗しました。"):
        super().__init__(message, code="SIGN_IN_FAILED")


class InvalidAccessTokenError(AuthenticationError):
    """Raised when a pre-issued access token cannot be decoded."""

    def __init__(self, reason: str):
        super().__init__(
            "アクセストークンが不正です。",
            code="INVALID_TOKEN",
            details={"reason": reason},
        )
