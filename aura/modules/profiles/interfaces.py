"""
Profile module interface.

The app coordinator and the dashboard depend on IEntitlementService,
not on the Supabase-backed implementation.
"""

from typing import Protocol, runtime_checkable

from aura.modules.session.models import Session

from .models import ProfileOutcome


@runtime_checkable
class IEntitlementService(Protocol):
    """Interface for reading a user's plan record."""

    async def fetch_profile(self, session: Session) -> ProfileOutcome:
        """
        Fetch the profile of the session's user.

        Args:
            session: A live session

        Returns:
            ProfileLoaded, DeletedAccount (zero rows) or TransientError
            (query failed). Never raises.
        """
        ...
