"""
Application coordinator.

Wires the modules together (the container) and keeps auth state,
entitlement state and the per-view workflows in step:

- every session change re-reads the profile; reads are stamped so a slow
  read for an old session cannot overwrite a newer one
- a deleted account forces sign-out, a failed read keeps the session
- signing out clears profile, history and detector state
- a successful detection invalidates the history list
"""

import asyncio
import logging
from typing import Optional

from aura.modules.account.service import AccountService
from aura.modules.billing.models import BillingAction, ReconciliationStatus
from aura.modules.billing.reconciliation import PaymentReconciler
from aura.modules.billing.service import BillingWorkflow, available_action
from aura.modules.dashboard.models import DashboardSnapshot
from aura.modules.dashboard.service import DashboardAggregator
from aura.modules.detection.models import AiResponse
from aura.modules.detection.service import DetectionWorkflow
from aura.modules.history.service import HistoryWorkflow
from aura.modules.profiles.interfaces import IEntitlementService
from aura.modules.profiles.models import DeletedAccount, Profile, ProfileLoaded
from aura.modules.profiles.repository import ProfileRepository
from aura.modules.profiles.service import EntitlementService
from aura.modules.session.interfaces import ISessionProvider, Unsubscribe
from aura.modules.session.models import AuthEvent, Session
from aura.modules.session.service import SessionStore, StaticTokenProvider, SupabaseSessionProvider
from aura.shared.config import Settings, get_settings
from aura.shared.database import get_supabase_client
from aura.shared.http import BackendClient
from aura.shared.navigation import BrowserNavigator, HOME_PATH, INavigator
from aura.shared.workflow import ErrorKind, RequestGeneration, WorkflowError

logger = logging.getLogger(__name__)


class AuraApp:
    """
    Container and coordinator for one signed-in (or signed-out) user.

    Workflows are created once and share the backend client; the session
    store is the only state they share.
    """

    def __init__(
        self,
        sessions: SessionStore,
        entitlements: IEntitlementService,
        client: BackendClient,
        navigator: INavigator,
        settings: Settings,
    ) -> None:
        self.settings = settings
        self.sessions = sessions
        self.entitlements = entitlements
        self.navigator = navigator

        self.history = HistoryWorkflow(client, limit=settings.history_page_limit)
        self.detector = DetectionWorkflow(client, on_success=self.history.invalidate)
        self.billing = BillingWorkflow(client, navigator)
        self.reconciler = PaymentReconciler(client, sessions, navigator)
        self.dashboard = DashboardAggregator(
            client,
            entitlements,
            recent_limit=settings.recent_detections_limit,
        )
        self.account = AccountService(client, sessions, navigator, settings.app_url)

        self.session: Optional[Session] = None
        self.profile: Optional[Profile] = None
        self.profile_error: Optional[WorkflowError] = None
        self.deleted_account = False
        self.is_loading = True

        self._profile_generation = RequestGeneration()
        self._unsubscribe: Optional[Unsubscribe] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._tasks: set[asyncio.Task] = set()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self) -> Optional[Session]:
        """Subscribe to session changes and apply the current session."""
        self._loop = asyncio.get_running_loop()
        if self._unsubscribe is None:
            self._unsubscribe = self.sessions.on_session_change(self._on_session_change)

        session = await self.sessions.get_current_session()
        await self.apply_session(session)
        self.is_loading = False
        return session

    def close(self) -> None:
        """Release the session subscription."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def drain(self) -> None:
        """Wait for session-change work scheduled from provider callbacks."""
        await asyncio.sleep(0)
        pending = [t for t in self._tasks if not t.done()]
        while pending:
            await asyncio.gather(*pending)
            pending = [t for t in self._tasks if not t.done()]

    def _on_session_change(self, event: AuthEvent, session: Optional[Session]) -> None:
        # Providers may call back from their own thread
        if self._loop is None or self._loop.is_closed():
            logger.warning(f"Session change {event.value} arrived before start()")
            return
        self._loop.call_soon_threadsafe(self._schedule_apply, session)

    def _schedule_apply(self, session: Optional[Session]) -> None:
        task = asyncio.ensure_future(self.apply_session(session))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    # -------------------------------------------------------------------------
    # Session and entitlement sync
    # -------------------------------------------------------------------------

    def _clear_user_state(self) -> None:
        self.profile = None
        self.profile_error = None
        self.history.invalidate()
        self.detector.reset()

    async def apply_session(self, session: Optional[Session]) -> None:
        """
        Make local state match a session value.

        Args:
            session: The latest session; None means signed out
        """
        stamp = self._profile_generation.next()
        previous = self.session
        self.session = session

        if session is None:
            self._clear_user_state()
            return

        if previous is None or previous.user.id != session.user.id:
            self._clear_user_state()

        outcome = await self.entitlements.fetch_profile(session)
        if not self._profile_generation.is_current(stamp):
            logger.debug("Discarding profile read for a superseded session")
            return

        if isinstance(outcome, ProfileLoaded):
            self.profile = outcome.profile
            self.profile_error = None
        elif isinstance(outcome, DeletedAccount):
            await self._force_sign_out()
        else:
            self.profile_error = WorkflowError(
                kind=ErrorKind.TRANSIENT,
                message=outcome.message,
                code="PROFILE_UNAVAILABLE",
            )

    async def _force_sign_out(self) -> None:
        logger.warning("Account record is gone; signing out")
        self.deleted_account = True
        await self.sign_out()

    async def refresh_profile(self) -> None:
        """Re-read the profile for the current session (user-initiated retry)."""
        await self.apply_session(self.session)

    async def sign_out(self) -> None:
        """End the session and clear everything that belonged to it."""
        self._profile_generation.invalidate()
        try:
            await self.sessions.sign_out()
        except Exception as e:
            logger.warning(f"Provider sign-out failed, clearing local state anyway: {e}")
        self.session = None
        self._clear_user_state()

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    @property
    def billing_action(self) -> BillingAction:
        return available_action(self.profile)

    async def detect(self, text: str) -> Optional[AiResponse]:
        return await self.detector.submit(self.session, text)

    async def open_history(self) -> bool:
        """Called when the history view becomes visible."""
        return await self.history.ensure_loaded(self.session)

    async def load_more_history(self) -> bool:
        return await self.history.load_more(self.session)

    async def upgrade(self) -> bool:
        return await self.billing.start_upgrade(self.session)

    async def manage_billing(self) -> bool:
        return await self.billing.manage_billing(self.session, self.profile)

    async def load_dashboard(self) -> Optional[DashboardSnapshot]:
        """Load the dashboard; without a session the user is sent home."""
        if self.session is None:
            self.navigator.replace(HOME_PATH)
            return None

        snapshot = await self.dashboard.load(self.session)
        error = self.dashboard.error
        if error is not None and error.kind == ErrorKind.DELETED_ACCOUNT:
            await self._force_sign_out()
        return snapshot

    async def verify_payment(self, checkout_session_id: Optional[str]) -> ReconciliationStatus:
        return await self.reconciler.verify_checkout(checkout_session_id)

    async def sync_subscription(self) -> ReconciliationStatus:
        return await self.reconciler.sync_subscription()

    async def delete_account(self) -> bool:
        deleted = await self.account.delete_account(self.session)
        if deleted:
            self.session = None
            self._clear_user_state()
        return deleted

    async def send_password_reset(self) -> bool:
        return await self.account.send_password_reset(self.session)


def create_app(
    settings: Optional[Settings] = None,
    navigator: Optional[INavigator] = None,
    access_token: Optional[str] = None,
) -> AuraApp:
    """
    Build an AuraApp backed by Supabase and the configured backend.

    Args:
        settings: Settings to use (defaults to get_settings())
        navigator: Navigation seam (defaults to BrowserNavigator)
        access_token: Pre-issued token; when set, sessions come from the
            token instead of Supabase Auth

    Returns:
        Configured, not yet started AuraApp
    """
    settings = settings or get_settings()
    db = get_supabase_client()

    token = access_token or settings.access_token
    provider: ISessionProvider
    if token:
        provider = StaticTokenProvider(token)
    else:
        provider = SupabaseSessionProvider(db)

    return AuraApp(
        sessions=SessionStore(provider),
        entitlements=EntitlementService(ProfileRepository(db)),
        client=BackendClient(settings.api_endpoint, timeout=settings.request_timeout),
        navigator=navigator or BrowserNavigator(),
        settings=settings,
    )
