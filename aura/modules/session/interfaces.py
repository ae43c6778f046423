"""
Session module interface.

Workflows never read ambient auth state; they receive a Session
explicitly. The identity provider sits behind ISessionProvider so it
can be replaced by a fake in tests.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from .models import AuthEvent, Session

SessionListener = Callable[[AuthEvent, Optional[Session]], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class ISessionProvider(Protocol):
    """
    Interface to the identity provider.

    The provider is the single mutator of session state; everything else
    observes it through get_session() or on_session_change().
    """

    async def get_session(self) -> Optional[Session]:
        """
        Return the provider's current session.

        Returns:
            Session if signed in, None otherwise

        Raises:
            Exception: Provider failures propagate; SessionStore fails closed on them
        """
        ...

    def on_session_change(self, listener: SessionListener) -> Unsubscribe:
        """
        Register a listener for sign-in, sign-out and token refresh.

        Args:
            listener: Called with (event, session) in emission order

        Returns:
            Callable that removes the listener
        """
        ...

    async def sign_out(self) -> None:
        """Clear the session at the provider."""
        ...

    async def send_password_reset(self, email: str, redirect_to: str) -> None:
        """
        Send a password-reset mail.

        Args:
            email: Account email
            redirect_to: Where the mail's link should land
        """
        ...
