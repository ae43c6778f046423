"""Tests for the dashboard aggregator."""

import asyncio
from unittest.mock import AsyncMock

import httpx
import pytest

from aura.modules.dashboard.service import STATS_PATH, DashboardAggregator
from aura.modules.history.service import DETECTIONS_PATH
from aura.modules.profiles.models import DeletedAccount, ProfileLoaded, TransientError
from aura.shared.exceptions import UNEXPECTED_MESSAGE
from aura.shared.workflow import ErrorKind

from tests.conftest import make_detection

STATS = {
    "total_requests": 42,
    "ai_detection_rate": 0.25,
    "average_score": 0.4,
    "daily_activity": [
        {"date": "2025-05-06", "count": 3},
        {"date": "2025-05-07", "count": 5},
    ],
}


def entitlements_returning(outcome):
    entitlements = AsyncMock()
    entitlements.fetch_profile.return_value = outcome
    return entitlements


class TestDashboardAggregator:
    @pytest.fixture
    def recent(self):
        return {"items": [make_detection(i) for i in range(5)], "total": 12}

    @pytest.mark.asyncio
    async def test_load_combines_all_three(self, backend, client, session, free_profile, recent):
        backend.respond("GET", STATS_PATH, json=STATS)
        backend.respond("GET", DETECTIONS_PATH, json=recent)
        aggregator = DashboardAggregator(client, entitlements_returning(ProfileLoaded(profile=free_profile)))

        snapshot = await aggregator.load(session)

        assert snapshot.stats.total_requests == 42
        assert len(snapshot.recent_detections) == 5
        assert snapshot.profile == free_profile
        assert aggregator.error is None
        assert aggregator.is_loading is False

        detections_request = next(r for r in backend.requests if r.url.path == DETECTIONS_PATH)
        assert detections_request.url.params["skip"] == "0"
        assert detections_request.url.params["limit"] == "5"

    @pytest.mark.asyncio
    async def test_one_failure_fails_everything(self, backend, client, session, free_profile, recent):
        """A partial dashboard is never produced."""
        backend.respond("GET", STATS_PATH, status=500, json={"detail": "stats unavailable"})
        backend.respond("GET", DETECTIONS_PATH, json=recent)
        aggregator = DashboardAggregator(client, entitlements_returning(ProfileLoaded(profile=free_profile)))

        assert await aggregator.load(session) is None
        assert aggregator.snapshot is None
        assert aggregator.error.message == "stats unavailable"

    @pytest.mark.asyncio
    async def test_malformed_stats(self, backend, client, session, free_profile, recent):
        backend.respond("GET", STATS_PATH, json={**STATS, "total_requests": "42"})
        backend.respond("GET", DETECTIONS_PATH, json=recent)
        aggregator = DashboardAggregator(client, entitlements_returning(ProfileLoaded(profile=free_profile)))

        assert await aggregator.load(session) is None
        assert aggregator.error.message == UNEXPECTED_MESSAGE

    @pytest.mark.asyncio
    async def test_deleted_account(self, backend, client, session, recent):
        backend.respond("GET", STATS_PATH, json=STATS)
        backend.respond("GET", DETECTIONS_PATH, json=recent)
        aggregator = DashboardAggregator(client, entitlements_returning(DeletedAccount()))

        assert await aggregator.load(session) is None
        assert aggregator.error.kind == ErrorKind.DELETED_ACCOUNT

    @pytest.mark.asyncio
    async def test_profile_unavailable(self, backend, client, session, recent):
        backend.respond("GET", STATS_PATH, json=STATS)
        backend.respond("GET", DETECTIONS_PATH, json=recent)
        aggregator = DashboardAggregator(client, entitlements_returning(TransientError(message="down")))

        assert await aggregator.load(session) is None
        assert aggregator.error.kind == ErrorKind.TRANSIENT
        assert aggregator.error.message == "down"

    @pytest.mark.asyncio
    async def test_no_session(self, backend, client):
        aggregator = DashboardAggregator(client, entitlements_returning(DeletedAccount()))
        assert await aggregator.load(None) is None
        assert aggregator.error.kind == ErrorKind.AUTHENTICATION
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_requests_run_concurrently(self, backend, client, session, free_profile, recent):
        """Stats and detections are in flight at the same time."""
        in_flight = 0
        peak = 0

        def tracked(payload):
            async def handler(request):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return httpx.Response(200, json=payload)
            return handler

        backend.respond_with("GET", STATS_PATH, tracked(STATS))
        backend.respond_with("GET", DETECTIONS_PATH, tracked(recent))
        aggregator = DashboardAggregator(client, entitlements_returning(ProfileLoaded(profile=free_profile)))

        assert await aggregator.load(session) is not None
        assert peak == 2
