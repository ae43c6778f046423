"""
Base exception classes for the Aura client.

Each module should define its own exceptions that inherit from these bases.
Workflows catch these at their boundary and turn them into a WorkflowError,
so user-facing messages live on the exceptions themselves.
"""

from typing import Optional, Any


# User-facing messages
CONFIGURATION_MESSAGE = "APIエンドポイントが設定されていません。"
SESSION_MISSING_MESSAGE = "認証情報が見つかりません。再度ログインしてお試しください。"
TOKEN_EXPIRED_MESSAGE = "認証エラー: トークンが無効または期限切れです。再度ログインしてください。"
UNEXPECTED_MESSAGE = "予期せぬエラーが発生しました。"
NETWORK_MESSAGE = "ネットワークエラーが発生しました。接続を確認してください。"
ACCOUNT_DELETED_MESSAGE = "このアカウントは削除されています。ログアウトします。"


class AuraError(Exception):
    """
    Base exception for all Aura errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logs and display."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(AuraError):
    """A required setting is missing. Raised before any network call."""

    def __init__(self, message: str = CONFIGURATION_MESSAGE, setting: Optional[str] = None):
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            details={"setting": setting} if setting else {},
        )


class AuthenticationError(AuraError):
    """Authentication failed (no session, or the backend rejected the token)."""

    pass


class SessionMissingError(AuthenticationError):
    """Raised when an operation needs a session and there is none."""

    def __init__(self, message: str = SESSION_MISSING_MESSAGE):
        super().__init__(message, code="SESSION_MISSING")


class TokenExpiredError(AuthenticationError):
    """Raised when the backend answers 401."""

    def __init__(self, message: str = TOKEN_EXPIRED_MESSAGE):
        super().__init__(message, code="TOKEN_EXPIRED")


class AccountDeletedError(AuthenticationError):
    """
    Raised when a valid session has no account record behind it.

    Terminal: the session must be ended, retrying cannot succeed.
    """

    def __init__(self, message: str = ACCOUNT_DELETED_MESSAGE):
        super().__init__(message, code="ACCOUNT_DELETED")


class ValidationError(AuraError):
    """A payload did not match its declared shape."""

    def __init__(self, field: str, reason: str):
        super().__init__(
            f"Invalid value for '{field}': {reason}",
            code="VALIDATION_ERROR",
            details={"field": field, "reason": reason},
        )
        self.field = field
        self.reason = reason


class ExternalServiceError(AuraError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class APIError(ExternalServiceError):
    """
    The detection backend answered with a non-2xx status.

    The message is the server-provided detail when present, otherwise
    a generic status-based message.
    """

    def __init__(
        self,
        status_code: int,
        status_text: str = "",
        detail: Optional[str] = None,
    ):
        fallback = f"APIエラー: {status_code} {status_text}".strip()
        super().__init__(
            detail or fallback,
            service="backend",
            code="API_ERROR",
            details={"status_code": status_code},
        )
        self.status_code = status_code
        self.status_text = status_text
        self.detail = detail


class NetworkError(ExternalServiceError):
    """The request never produced a response (connection failure, timeout)."""

    def __init__(self, reason: str, service: str = "backend"):
        super().__init__(
            NETWORK_MESSAGE,
            service=service,
            code="NETWORK_ERROR",
            details={"reason": reason},
        )
        self.reason = reason
