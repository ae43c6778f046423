"""Tests for shared/exceptions.py."""

from aura.shared.exceptions import (
    APIError,
    AccountDeletedError,
    AuraError,
    AuthenticationError,
    ConfigurationError,
    ExternalServiceError,
    NetworkError,
    SessionMissingError,
    TokenExpiredError,
    ValidationError,
    CONFIGURATION_MESSAGE,
    TOKEN_EXPIRED_MESSAGE,
)


class TestAuraError:
    def test_code_defaults_to_class_name(self):
        """Code should fall back to the class name."""
        error = AuraError("boom")
        assert error.code == "AuraError"
        assert error.details == {}

    def test_to_dict(self):
        """to_dict should expose code, message and details."""
        error = AuraError("boom", code="BOOM", details={"a": 1})
        assert error.to_dict() == {"error": "BOOM", "message": "boom", "details": {"a": 1}}


class TestConfigurationError:
    def test_default_message(self):
        error = ConfigurationError(setting="API_ENDPOINT")
        assert error.message == CONFIGURATION_MESSAGE
        assert error.code == "CONFIGURATION_ERROR"
        assert error.details == {"setting": "API_ENDPOINT"}


class TestAuthenticationErrors:
    def test_hierarchy(self):
        """All session problems are authentication errors."""
        assert isinstance(SessionMissingError(), AuthenticationError)
        assert isinstance(TokenExpiredError(), AuthenticationError)
        assert isinstance(AccountDeletedError(), AuthenticationError)

    def test_token_expired_message(self):
        assert TokenExpiredError().message == TOKEN_EXPIRED_MESSAGE


class TestValidationError:
    def test_names_field(self):
        error = ValidationError("score", "must be at most 1")
        assert error.field == "score"
        assert error.reason == "must be at most 1"
        assert "score" in error.message
        assert error.code == "VALIDATION_ERROR"


class TestAPIError:
    def test_uses_server_detail(self):
        """The server's detail string wins over the generic message."""
        error = APIError(402, "Payment Required", detail="月間リクエスト上限に達しました。")
        assert error.message == "月間リクエスト上限に達しました。"
        assert error.status_code == 402

    def test_status_fallback(self):
        error = APIError(500, "Internal Server Error")
        assert error.message == "APIエラー: 500 Internal Server Error"
        assert error.detail is None

    def test_fallback_without_status_text(self):
        assert APIError(503).message == "APIエラー: 503"

    def test_is_external_service_error(self):
        error = APIError(500)
        assert isinstance(error, ExternalServiceError)
        assert error.details["service"] == "backend"


class TestNetworkError:
    def test_keeps_reason(self):
        error = NetworkError("connection refused")
        assert error.reason == "connection refused"
        assert error.code == "NETWORK_ERROR"
