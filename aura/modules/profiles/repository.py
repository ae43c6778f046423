"""
Profile repository for data-store access.

Reads the `profiles` table as the signed-in user, so Row Level Security
scopes the query to that user's own row.
"""

from typing import Any, Optional

from aura.shared.database import authorize_as
from aura.shared.repository import BaseRepository

from .models import Profile

PROFILE_COLUMNS = "plan, request_count, stripe_customer_id, plan_expires_at"


class ProfileRepository(BaseRepository[Profile]):
    """Repository for the `profiles` table."""

    def fetch_row(self, user_id: str, access_token: str) -> Optional[dict[str, Any]]:
        """
        Read the user's profile row.

        Args:
            user_id: Session user ID
            access_token: Session access token

        Returns:
            The raw row, or None when the table has no row for the user
        """
        authorize_as(self._db, access_token)
        result = (
            self._db.table("profiles")
            .select(PROFILE_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        return self._first_row(result)
