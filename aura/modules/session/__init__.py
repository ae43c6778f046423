"""
Session module.

Mirrors the identity provider's session locally and notifies subscribers
when it changes.

Public API:
- ISessionProvider: Interface to the identity provider
- SessionStore: Local session mirror with change subscription
- Session, SessionUser, AuthEvent: Session models
"""

from .interfaces import ISessionProvider, SessionListener, Unsubscribe
from .models import AuthEvent, Session, SessionUser
from .exceptions import SignInError, InvalidAccessTokenError
from .service import SessionStore, SupabaseSessionProvider, StaticTokenProvider

__all__ = [
    # Interface
    "ISessionProvider",
    "SessionListener",
    "Unsubscribe",
    # Models
    "AuthEvent",
    "Session",
    "SessionUser",
    # Implementations
    "SessionStore",
    "SupabaseSessionProvider",
    "StaticTokenProvider",
    # Exceptions
    "SignInError",
    "InvalidAccessTokenError",
]
