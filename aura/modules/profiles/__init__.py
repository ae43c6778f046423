"""
Profiles module.

Fetches the user's plan record and classifies the outcome.

Public API:
- IEntitlementService: Interface for profile reads
- EntitlementService: Supabase-backed implementation
- Profile, Plan: Plan record models
- ProfileLoaded, DeletedAccount, TransientError: fetch outcomes
"""

from .interfaces import IEntitlementService
from .models import (
    Plan,
    Profile,
    ProfileLoaded,
    DeletedAccount,
    TransientError,
    ProfileOutcome,
)
from .exceptions import ProfileUnavailableError
from .repository import ProfileRepository, PROFILE_COLUMNS
from .service import EntitlementService, require_profile

__all__ = [
    # Interface
    "IEntitlementService",
    # Models
    "Plan",
    "Profile",
    "ProfileLoaded",
    "DeletedAccount",
    "TransientError",
    "ProfileOutcome",
    # Implementations
    "ProfileRepository",
    "PROFILE_COLUMNS",
    "EntitlementService",
    "require_profile",
    # Exceptions
    "ProfileUnavailableError",
]
