"""
Billing module data models.

The payment provider owns all payment state; these models only describe
what the backend hands back and what the billing section can offer.
"""

from enum import Enum

from pydantic import BaseModel, Field


class BillingAction(str, Enum):
    """Which billing action the plan section offers."""

    UPGRADE = "upgrade"  # free plan: hosted checkout
    MANAGE = "manage"    # premium with a billing customer: customer portal
    NONE = "none"        # premium without a billing customer: nothing to offer


class RedirectSession(BaseModel):
    """Response of the checkout and portal session endpoints."""

    url: str = Field(..., min_length=1, description="Hosted page to navigate to")


class BillingStatus(str, Enum):
    """Billing workflow states."""

    IDLE = "idle"
    REQUESTING = "requesting"
    REDIRECTING = "redirecting"  # navigation issued, control has left the app


class ReconciliationStatus(str, Enum):
    """Post-redirect reconciliation states."""

    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"
