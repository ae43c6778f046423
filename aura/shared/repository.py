"""
Base repository class for data-store access.

Keeps Supabase client access in one place; subclasses own their table
queries and hand raw rows to the schema gate.
"""

from typing import Any, Generic, Optional, TypeVar
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides the Supabase client as self._db. Subclasses implement
    domain-specific reads and return raw rows; mapping rows to models
    goes through the schema gate in the service layer.

    Example:
        class ProfileRepository(BaseRepository[Profile]):
            def fetch_row(self, user_id: str) -> Optional[dict]:
                result = self._db.table("profiles").select("*").eq("id", user_id).execute()
                return self._first_row(result)
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _first_row(result: Any) -> Optional[dict[str, Any]]:
        """Return the first row of a query result, or None for zero rows."""
        rows = getattr(result, "data", None) or []
        return rows[0] if rows else None
