"""
Post-redirect reconciliation.

Runs when the user comes back from the hosted payment pages: re-checks
the session, asks the backend to verify the checkout (or to sync the
subscription) so the plan record matches the payment provider, and only
then navigates back into the application. Failures are reported, never
retried automatically.
"""

import logging
from typing import Any, Optional

from aura.modules.session.service import SessionStore
from aura.shared.exceptions import APIError, SessionMissingError
from aura.shared.http import BackendClient
from aura.shared.navigation import DASHBOARD_PATH, HOME_PATH, INavigator
from aura.shared.workflow import WorkflowError, describe_error

from .exceptions import VerificationError
from .models import ReconciliationStatus

logger = logging.getLogger(__name__)

VERIFY_PATH = "/v1/payments/verify-session"
SYNC_PATH = "/v1/payments/sync-subscription"

SERVER_ERROR_MESSAGE = "サーバーでエラーが発生しました。"


class PaymentReconciler:
    """Verifies a finished checkout or syncs the subscription after a portal visit."""

    def __init__(
        self,
        client: BackendClient,
        sessions: SessionStore,
        navigator: INavigator,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self._sessions = sessions
        self._navigator = navigator
        self._timeout = timeout
        self._return_path = HOME_PATH

        self.status = ReconciliationStatus.PENDING
        self.error: Optional[WorkflowError] = None

    async def verify_checkout(self, checkout_session_id: Optional[str]) -> ReconciliationStatus:
        """
        Confirm a completed checkout, then go home.

        Without a checkout session ID there is nothing to verify and the
        user is sent home straight away.
        """
        if not checkout_session_id:
            logger.info("No checkout session to verify; returning home")
            self._navigator.replace(HOME_PATH)
            return self.status

        return await self._reconcile(
            "GET",
            VERIFY_PATH,
            destination=HOME_PATH,
            params={"session_id": checkout_session_id},
        )

    async def sync_subscription(self) -> ReconciliationStatus:
        """Pull the latest subscription state, then go to the dashboard."""
        return await self._reconcile("POST", SYNC_PATH, destination=DASHBOARD_PATH)

    def return_to_app(self) -> None:
        """Navigate back after a failure; the user decides whether to try again."""
        self._navigator.replace(self._return_path)

    async def _reconcile(
        self,
        method: str,
        path: str,
        destination: str,
        params: Optional[dict[str, Any]] = None,
    ) -> ReconciliationStatus:
        self.status = ReconciliationStatus.PENDING
        self.error = None
        self._return_path = destination

        session = await self._sessions.get_current_session()
        if session is None:
            return self._fail(SessionMissingError())

        try:
            await self._client.request(
                method,
                path,
                token=session.access_token,
                params=params,
                timeout=self._timeout,
            )
        except APIError as e:
            return self._fail(VerificationError(e.detail or SERVER_ERROR_MESSAGE, e.status_code))
        except Exception as e:
            return self._fail(e)

        self.status = ReconciliationStatus.SUCCESS
        logger.info(f"Payment state reconciled via {path}")
        self._navigator.replace(destination)
        return self.status

    def _fail(self, error: Exception) -> ReconciliationStatus:
        self.error = describe_error(error, "payment")
        self.status = ReconciliationStatus.ERROR
        return self.status
