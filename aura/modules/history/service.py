"""
History workflow.

Keeps an append-only list of the user's detections, a zero-based page
cursor and a has-more flag. A short page is the only end-of-list
signal; the reported total is never consulted for paging.
"""

import logging
from typing import Optional

from aura.modules.session.models import Session
from aura.shared.exceptions import SessionMissingError
from aura.shared.http import BackendClient
from aura.shared.schemas import parse_payload
from aura.shared.workflow import RequestGeneration, WorkflowError, describe_error

from .models import Detection, ListDetectionsResponse

logger = logging.getLogger(__name__)

DETECTIONS_PATH = "/v1/detections"


async def fetch_detections(
    client: BackendClient,
    session: Session,
    skip: int,
    limit: int,
    timeout: Optional[float] = None,
) -> ListDetectionsResponse:
    """
    Fetch and validate one page of detections.

    Raises:
        AuraError: On configuration, HTTP or validation failure
    """
    raw = await client.get(
        DETECTIONS_PATH,
        token=session.access_token,
        params={"skip": skip, "limit": limit},
        timeout=timeout,
    )
    return parse_payload(ListDetectionsResponse, raw)


class HistoryWorkflow:
    """
    Paginated detection history for the current session.

    Page fetches are stamped; invalidate() makes any outstanding fetch
    stale so a late response cannot append to a cleared list.
    """

    def __init__(
        self,
        client: BackendClient,
        limit: int = 3,
        timeout: Optional[float] = None,
    ):
        if limit < 1:
            raise ValueError("limit must be positive")
        self._client = client
        self._limit = limit
        self._timeout = timeout
        self._generation = RequestGeneration()

        self.items: list[Detection] = []
        self.page = 0
        self.has_more = True
        self.is_loading = False
        self.error: Optional[WorkflowError] = None

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def needs_refresh(self) -> bool:
        """True when the list was cleared and should be refetched on view."""
        return not self.items and self.has_more and not self.is_loading

    async def fetch_page(
        self,
        session: Optional[Session],
        page: int,
        fresh: bool = False,
    ) -> bool:
        """
        Fetch one page and apply it.

        Args:
            session: Current session
            page: Zero-based page; requested at offset page * limit
            fresh: Replace the list instead of appending

        Returns:
            True if the page was applied
        """
        if session is None:
            self.error = describe_error(SessionMissingError(), "history")
            return False

        stamp = self._generation.next()
        self.is_loading = True
        self.error = None
        try:
            response = await fetch_detections(
                self._client,
                session,
                skip=page * self._limit,
                limit=self._limit,
                timeout=self._timeout,
            )
        except Exception as e:
            if self._generation.is_current(stamp):
                # Previously loaded pages stay intact
                self.error = describe_error(e, "history")
            return False
        finally:
            if self._generation.is_current(stamp):
                self.is_loading = False

        if not self._generation.is_current(stamp):
            logger.debug(f"Discarding superseded history page {page}")
            return False

        if fresh:
            self.items = list(response.items)
        else:
            self.items = self.items + list(response.items)
        self.page = page
        self.has_more = len(response.items) == self._limit
        logger.debug(
            f"History page {page} applied: {len(response.items)} items, has_more={self.has_more}"
        )
        return True

    async def load_more(self, session: Optional[Session]) -> bool:
        """Fetch the page after the cursor in append mode."""
        if self.is_loading or not self.has_more:
            logger.debug("Load more ignored: fetch outstanding or list complete")
            return False
        return await self.fetch_page(session, self.page + 1)

    async def ensure_loaded(self, session: Optional[Session]) -> bool:
        """Refetch page 0 when the history view opens on a cleared list."""
        if not self.needs_refresh:
            return False
        return await self.fetch_page(session, 0, fresh=True)

    def invalidate(self) -> None:
        """Clear the list and reset paging. Does not refetch."""
        self._generation.invalidate()
        self.items = []
        self.page = 0
        self.has_more = True
        self.is_loading = False
        self.error = None
