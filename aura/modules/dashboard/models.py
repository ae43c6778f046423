"""
Dashboard module data models.

DashboardStats is a read-only aggregate computed by the backend.
"""

from pydantic import BaseModel, Field, StrictInt, StrictStr

from aura.modules.history.models import Detection
from aura.modules.profiles.models import Profile


class DailyActivity(BaseModel):
    """Detections run on one day."""

    date: StrictStr = Field(..., description="ISO date")
    count: StrictInt = Field(..., ge=0)


class DashboardStats(BaseModel):
    """Response of GET /v1/dashboard/stats."""

    total_requests: StrictInt = Field(..., ge=0)
    ai_detection_rate: float = Field(..., strict=True, description="Share of AI verdicts")
    average_score: float = Field(..., strict=True, description="Mean detection score")
    daily_activity: list[DailyActivity] = Field(..., description="Oldest day first")


class DashboardSnapshot(BaseModel):
    """Everything the dashboard renders, loaded together or not at all."""

    stats: DashboardStats
    recent_detections: list[Detection]
    profile: Profile


class ChartPoint(BaseModel):
    label: str
    count: int


class UsageView(BaseModel):
    """Display-ready usage overview."""

    plan_label: str
    total_requests: int
    request_limit: int
    progress_percent: float
    ai_detection_rate: str
    average_score: str
    chart: list[ChartPoint] = Field(default_factory=list)
    cancellation_pending: bool = False
