"""
Dashboard aggregator.

Fires the stats, recent-detections and profile reads concurrently and
waits for all of them. Any failure replaces the whole dashboard with a
single error; a partial dashboard is never shown.
"""

import asyncio
import logging
from typing import Optional

from aura.modules.history.service import fetch_detections
from aura.modules.profiles.interfaces import IEntitlementService
from aura.modules.profiles.models import Profile
from aura.modules.profiles.service import require_profile
from aura.modules.session.models import Session
from aura.shared.exceptions import SessionMissingError
from aura.shared.http import BackendClient
from aura.shared.schemas import parse_payload
from aura.shared.workflow import RequestGeneration, WorkflowError, describe_error

from .models import DashboardSnapshot, DashboardStats

logger = logging.getLogger(__name__)

STATS_PATH = "/v1/dashboard/stats"


class DashboardAggregator:
    """Loads the dashboard summary for one session."""

    def __init__(
        self,
        client: BackendClient,
        entitlements: IEntitlementService,
        recent_limit: int = 5,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self._entitlements = entitlements
        self._recent_limit = recent_limit
        self._timeout = timeout
        self._generation = RequestGeneration()

        self.snapshot: Optional[DashboardSnapshot] = None
        self.is_loading = False
        self.error: Optional[WorkflowError] = None

    async def _fetch_stats(self, session: Session) -> DashboardStats:
        raw = await self._client.get(
            STATS_PATH,
            token=session.access_token,
            timeout=self._timeout,
        )
        return parse_payload(DashboardStats, raw)

    async def _fetch_profile(self, session: Session) -> Profile:
        return require_profile(await self._entitlements.fetch_profile(session))

    async def load(self, session: Optional[Session]) -> Optional[DashboardSnapshot]:
        """
        Load stats, recent detections and profile together.

        Returns:
            The snapshot, or None when any part failed
        """
        if session is None:
            self.snapshot = None
            self.error = describe_error(SessionMissingError(), "dashboard")
            return None

        stamp = self._generation.next()
        self.is_loading = True
        self.error = None

        results = await asyncio.gather(
            self._fetch_stats(session),
            fetch_detections(
                self._client,
                session,
                skip=0,
                limit=self._recent_limit,
                timeout=self._timeout,
            ),
            self._fetch_profile(session),
            return_exceptions=True,
        )

        if not self._generation.is_current(stamp):
            logger.debug("Discarding superseded dashboard load")
            return None
        self.is_loading = False

        for result in results:
            if isinstance(result, Exception):
                self.snapshot = None
                self.error = describe_error(result, "dashboard")
                return None

        stats, detections, profile = results
        self.snapshot = DashboardSnapshot(
            stats=stats,
            recent_detections=list(detections.items),
            profile=profile,
        )
        return self.snapshot
