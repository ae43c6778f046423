"""
Billing workflow.

Asks the backend for a hosted checkout or customer-portal URL and
navigates there. Navigation is irreversible within this workflow:
once issued, no further local state changes.
"""

import logging
from typing import Optional

from aura.modules.profiles.models import Profile
from aura.modules.session.models import Session
from aura.shared.exceptions import SessionMissingError
from aura.shared.http import BackendClient
from aura.shared.navigation import INavigator
from aura.shared.schemas import parse_payload
from aura.shared.workflow import WorkflowError, describe_error

from .exceptions import MissingBillingCustomerError
from .models import BillingAction, BillingStatus, RedirectSession

logger = logging.getLogger(__name__)

CHECKOUT_PATH = "/v1/payments/create-checkout-session"
PORTAL_PATH = "/v1/payments/create-portal-session"


def available_action(profile: Optional[Profile]) -> BillingAction:
    """
    Decide which billing action to offer for a profile.

    The portal needs a billing customer; without one the action is
    disabled rather than sent to fail.
    """
    if profile is None:
        return BillingAction.NONE
    if not profile.is_premium:
        return BillingAction.UPGRADE
    if profile.billing_customer_id:
        return BillingAction.MANAGE
    return BillingAction.NONE


class BillingWorkflow:
    """Requests redirect URLs from the backend and follows them."""

    def __init__(
        self,
        client: BackendClient,
        navigator: INavigator,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self._navigator = navigator
        self._timeout = timeout

        self.status = BillingStatus.IDLE
        self.error: Optional[WorkflowError] = None

    @property
    def is_busy(self) -> bool:
        return self.status != BillingStatus.IDLE

    async def start_upgrade(self, session: Optional[Session]) -> bool:
        """
        Open the hosted checkout page.

        Returns:
            True if navigation was issued
        """
        return await self._redirect_via(session, CHECKOUT_PATH)

    async def manage_billing(
        self,
        session: Optional[Session],
        profile: Optional[Profile],
    ) -> bool:
        """
        Open the hosted customer portal.

        Requires a profile carrying a billing customer ID; otherwise no
        request is made and a local error is recorded.

        Returns:
            True if navigation was issued
        """
        if available_action(profile) != BillingAction.MANAGE:
            self.error = describe_error(MissingBillingCustomerError(), "billing")
            return False
        return await self._redirect_via(session, PORTAL_PATH)

    async def _redirect_via(self, session: Optional[Session], path: str) -> bool:
        if self.is_busy:
            logger.debug(f"Billing request to {path} ignored: already {self.status.value}")
            return False

        self.error = None
        if session is None:
            self.error = describe_error(SessionMissingError(), "billing")
            return False

        self.status = BillingStatus.REQUESTING
        try:
            raw = await self._client.post(
                path,
                token=session.access_token,
                timeout=self._timeout,
            )
            redirect = parse_payload(RedirectSession, raw)
        except Exception as e:
            self.error = describe_error(e, "billing")
            self.status = BillingStatus.IDLE
            return False

        self.status = BillingStatus.REDIRECTING
        self._navigator.redirect(redirect.url)
        return True
