"""
Session store and identity-provider adapters.

SessionStore is the only process-wide shared state in the client. It has
exactly one mutator (the provider's change callback) and any number of
read-only subscribers.
"""

import logging
from typing import Any, Optional

import jwt
from supabase import AuthError, Client

from aura.shared.exceptions import AuraError

from .exceptions import InvalidAccessTokenError, SignInError
from .interfaces import ISessionProvider, SessionListener, Unsubscribe
from .models import AuthEvent, Session, SessionUser

logger = logging.getLogger(__name__)


def _to_session(raw: Any) -> Optional[Session]:
    """Map a Supabase Auth session object to a Session."""
    if raw is None or not getattr(raw, "access_token", None):
        return None
    user = raw.user
    return Session(
        access_token=raw.access_token,
        user=SessionUser(id=str(user.id), email=getattr(user, "email", None)),
        expires_at=getattr(raw, "expires_at", None),
    )


class SupabaseSessionProvider(ISessionProvider):
    """
    Session provider backed by Supabase Auth.

    Wraps client.auth; token refresh and persistence stay inside the
    Supabase client.
    """

    def __init__(self, client: Client):
        self._auth = client.auth

    async def get_session(self) -> Optional[Session]:
        return _to_session(self._auth.get_session())

    def on_session_change(self, listener: SessionListener) -> Unsubscribe:
        def _callback(event: Any, raw_session: Any) -> None:
            listener(AuthEvent.parse(event), _to_session(raw_session))

        subscription = self._auth.on_auth_state_change(_callback)
        return subscription.unsubscribe

    async def sign_out(self) -> None:
        self._auth.sign_out()

    async def send_password_reset(self, email: str, redirect_to: str) -> None:
        self._auth.reset_password_for_email(email, {"redirect_to": redirect_to})

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        """
        Sign in with email and password.

        The resulting SIGNED_IN event reaches subscribers through the
        regular change callback.

        Raises:
            SignInError: If the provider rejects the credentials or returns
                no session
        """
        try:
            response = self._auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as e:
            logger.warning(f"Sign-in rejected for {email}: {e}")
            raise SignInError() from e
        session = _to_session(getattr(response, "session", None))
        if session is None:
            raise SignInError()
        return session


class StaticTokenProvider(ISessionProvider):
    """
    Session provider for a pre-issued access token.

    Used by the terminal front end when a token is supplied directly.
    Token refresh is not available; once the token expires the session
    is gone.
    """

    def __init__(self, access_token: Optional[str]):
        self._token = access_token
        self._listeners: list[SessionListener] = []

    async def get_session(self) -> Optional[Session]:
        if not self._token:
            return None
        try:
            return Session.from_access_token(self._token)
        except jwt.InvalidTokenError as e:
            raise InvalidAccessTokenError(str(e)) from e

    def on_session_change(self, listener: SessionListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_out(self) -> None:
        self._token = None
        for listener in list(self._listeners):
            listener(AuthEvent.SIGNED_OUT, None)

    async def send_password_reset(self, email: str, redirect_to: str) -> None:
        raise AuraError(
            "パスワード再設定にはメールアドレスでのログインが必要です。",
            code="UNSUPPORTED_OPERATION",
        )


class SessionStore:
    """
    Local mirror of the provider's session.

    - get_current_session() pulls from the provider and fails closed
    - on_session_change() fans provider notifications out to listeners
    - sign_out() clears the remote and local session

    The store does not cascade cleanup into profile, history or detector
    state; callers own that.
    """

    def __init__(self, provider: ISessionProvider):
        self._provider = provider
        self._current: Optional[Session] = None
        self._listeners: list[SessionListener] = []
        self._provider_unsubscribe: Optional[Unsubscribe] = None

    @property
    def provider(self) -> ISessionProvider:
        return self._provider

    @property
    def current(self) -> Optional[Session]:
        """The last session seen, without a provider round trip."""
        if self._current is not None and self._current.is_expired():
            self._current = None
        return self._current

    async def get_current_session(self) -> Optional[Session]:
        """
        Return the current session, or None.

        A provider failure is treated as "signed out" so the caller falls
        back to the unauthenticated view.
        """
        try:
            session = await self._provider.get_session()
        except Exception as e:
            logger.warning(f"Session check failed, treating as signed out: {e}")
            self._current = None
            return None

        if session is not None and session.is_expired():
            logger.info("Session token has expired")
            session = None

        self._current = session
        return session

    def on_session_change(self, listener: SessionListener) -> Unsubscribe:
        """
        Register a listener for session changes.

        Returns:
            Idempotent callable that removes the listener. It must be called
            on teardown so listeners do not pile up across remounts.
        """
        self._listeners.append(listener)
        if self._provider_unsubscribe is None:
            self._provider_unsubscribe = self._provider.on_session_change(self._handle_change)

        active = True

        def unsubscribe() -> None:
            nonlocal active
            if not active:
                return
            active = False
            self._listeners.remove(listener)
            if not self._listeners and self._provider_unsubscribe is not None:
                self._provider_unsubscribe()
                self._provider_unsubscribe = None

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _handle_change(self, event: AuthEvent, session: Optional[Session]) -> None:
        if event == AuthEvent.SIGNED_OUT or (session is not None and session.is_expired()):
            session = None
        self._current = session
        logger.debug(f"Session change: {event.value} (signed_in={session is not None})")

        for listener in list(self._listeners):
            try:
                listener(event, session)
            except Exception:
                logger.exception(f"Session listener failed on {event.value}")

    async def sign_out(self) -> None:
        """Clear the remote and local session."""
        try:
            await self._provider.sign_out()
        finally:
            self._current = None
