"""Builds the usage overview from a dashboard snapshot."""

from dateutil import parser as date_parser

from aura.shared.config import Settings

from .models import ChartPoint, DailyActivity, DashboardSnapshot, UsageView


def chart_label(day: DailyActivity) -> str:
    """Short M/d label for a day, e.g. 5/7. Unparseable dates are shown as sent."""
    try:
        parsed = date_parser.isoparse(day.date)
    except ValueError:
        return day.date
    return f"{parsed.month}/{parsed.day}"


def build_usage_view(snapshot: DashboardSnapshot, settings: Settings) -> UsageView:
    stats = snapshot.stats
    profile = snapshot.profile
    limit = profile.request_limit(settings)
    progress = min(stats.total_requests / limit * 100, 100.0) if limit else 100.0

    return UsageView(
        plan_label="PREMIUM" if profile.is_premium else "FREE",
        total_requests=stats.total_requests,
        request_limit=limit,
        progress_percent=progress,
        ai_detection_rate=f"{stats.ai_detection_rate * 100:.1f}%",
        average_score=f"{stats.average_score:.3f}",
        chart=[ChartPoint(label=chart_label(d), count=d.count) for d in stats.daily_activity],
        cancellation_pending=profile.plan_expires_at is not None,
    )
