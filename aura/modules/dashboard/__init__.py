"""
Dashboard module.

Read-only usage summary: statistics, recent detections and the plan.

Public API:
- DashboardAggregator: all-or-nothing concurrent load
- DashboardStats, DailyActivity: declared response shapes
- build_usage_view: display model for the usage overview
"""

from .models import (
    ChartPoint,
    DailyActivity,
    DashboardSnapshot,
    DashboardStats,
    UsageView,
)
from .presenter import build_usage_view, chart_label
from .service import DashboardAggregator, STATS_PATH

__all__ = [
    "ChartPoint",
    "DailyActivity",
    "DashboardSnapshot",
    "DashboardStats",
    "UsageView",
    "build_usage_view",
    "chart_label",
    "DashboardAggregator",
    "STATS_PATH",
]
