"""
Profile module data models.

A Profile is the per-user plan record kept in the `profiles` table.
Fetching one yields a tagged outcome rather than raising, because the
caller must react differently to a missing row and to a failed query.
"""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, StrictInt

from aura.shared.config import Settings


class Plan(str, Enum):
    """Plan tiers."""

    FREE = "free"
    PREMIUM = "premium"


class Profile(BaseModel):
    """
    A user's plan record.

    Never mutated locally; a change means a full re-fetch.
    """

    plan: Plan = Field(..., description="Plan tier")
    request_count: StrictInt = Field(..., ge=0, description="Requests made this period")
    plan_expires_at: Optional[datetime] = Field(
        None,
        description="When a cancelled premium plan lapses",
    )
    stripe_customer_id: Optional[str] = Field(
        None,
        description="Billing customer ID (premium users only)",
    )

    model_config = {"frozen": True, "extra": "ignore"}

    @property
    def is_premium(self) -> bool:
        return self.plan == Plan.PREMIUM

    @property
    def billing_customer_id(self) -> Optional[str]:
        return self.stripe_customer_id or None

    def request_limit(self, settings: Settings) -> int:
        """Request allowance for this plan."""
        if self.is_premium:
            return settings.premium_request_limit
        return settings.free_request_limit


class ProfileLoaded(BaseModel):
    """The profile row was read."""

    kind: Literal["loaded"] = "loaded"
    profile: Profile


class DeletedAccount(BaseModel):
    """
    The query succeeded but returned no row for a valid session.

    Terminal: the caller must force sign-out and must not offer a retry.
    """

    kind: Literal["deleted_account"] = "deleted_account"


class TransientError(BaseModel):
    """The query failed. The session stays valid and a retry may succeed."""

    kind: Literal["transient_error"] = "transient_error"
    message: str


ProfileOutcome = Union[ProfileLoaded, DeletedAccount, TransientError]
