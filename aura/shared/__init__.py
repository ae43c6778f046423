"""
Shared infrastructure for the Aura client.

This package contains cross-cutting concerns used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- http: Detection backend client
- navigation: Redirect and in-app navigation seam
- schemas: Validation gate for inbound payloads
- workflow: Error values and request stamping for async workflows
- exceptions: Base exception classes

Note: Product logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, authorize_as, reset_client_cache
from .exceptions import (
    AuraError,
    ConfigurationError,
    AuthenticationError,
    SessionMissingError,
    AccountDeletedError,
    TokenExpiredError,
    ValidationError,
    ExternalServiceError,
    APIError,
    NetworkError,
)
from .http import BackendClient, get_backend_client, reset_backend_client
from .navigation import INavigator, BrowserNavigator, HOME_PATH, DASHBOARD_PATH
from .schemas import parse_payload
from .workflow import ErrorKind, WorkflowError, RequestGeneration, describe_error

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "authorize_as",
    "reset_client_cache",
    "AuraError",
    "ConfigurationError",
    "AuthenticationError",
    "SessionMissingError",
    "AccountDeletedError",
    "TokenExpiredError",
    "ValidationError",
    "ExternalServiceError",
    "APIError",
    "NetworkError",
    "BackendClient",
    "get_backend_client",
    "reset_backend_client",
    "INavigator",
    "BrowserNavigator",
    "HOME_PATH",
    "DASHBOARD_PATH",
    "parse_payload",
    "ErrorKind",
    "WorkflowError",
    "RequestGeneration",
    "describe_error",
]
