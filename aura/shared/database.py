"""
Supabase client factory.

The client only ever holds the public (anon) key. Row Level Security
decides what a query can see, so data-store reads are made with the
signed-in user's access token attached.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings
from .exceptions import ConfigurationError

# Module-level client cache
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get the shared Supabase client (anon key).

    Used both for auth (session, sign-out) and for data-store reads.

    Returns:
        Supabase client configured with the public anon key

    Raises:
        ConfigurationError: If SUPABASE_URL or SUPABASE_ANON_KEY is unset
    """
    global _client

    if _client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise ConfigurationError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables.",
                setting="SUPABASE_URL",
            )
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _client


def authorize_as(client: Client, access_token: str) -> Client:
    """
    Attach a user's access token to the client's data-store requests.

    Args:
        client: Supabase client
        access_token: JWT access token from Supabase Auth

    Returns:
        The same client, for chaining
    """
    client.postgrest.auth(access_token)
    return client


def reset_client_cache() -> None:
    """
    Reset the cached client.

    Useful for testing or when configuration changes.
    """
    global _client
    _client = None
