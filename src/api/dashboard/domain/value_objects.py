"""Value objects for the admin dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum

RECENT_WINDOW = timedelta(days=7)


class ActivityType(StrEnum):
    UPLOAD = "upload"
    USER_SIGNUP = "user_signup"


@dataclass(frozen=True)
class ReportingWindow:
    """Date boundaries the dashboard counts against.

    ``last_month_start <= t < month_start`` is "last month" and
    ``t >= month_start`` is "this month".
    """

    now: datetime
    month_start: datetime
    last_month_start: datetime
    recent_since: datetime

    @classmethod
    def at(cls, now: datetime) -> ReportingWindow:
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        last_month_start = (month_start - timedelta(days=1)).replace(day=1)
        return cls(
            now=now,
            month_start=month_start,
            last_month_start=last_month_start,
            recent_since=now - RECENT_WINDOW,
        )


@dataclass(frozen=True)
class ActivityItem:
    id: str
    type: ActivityType
    description: str
    occurred_at: datetime
    relative_time: str


@dataclass(frozen=True)
class DashboardStats:
    total_songs: int
    total_albums: int
    total_users: int
    catalog_value: float
    recent_uploads: int


@dataclass(frozen=True)
class GrowthMetrics:
    songs_this_month: int
    songs_last_month: int
    albums_this_month: int
    albums_last_month: int
    song_growth: float
    album_growth: float
    recent_songs: int
    recent_albums: int
    recent_users: int


@dataclass(frozen=True)
class DashboardSummary:
    stats: DashboardStats
    metrics: GrowthMetrics
    recent_activity: list[ActivityItem] = field(default_factory=list)


def growth_percentage(current: int, previous: int) -> float:
    """Month-over-month growth in percent.

    With no previous activity, any current activity counts as 100% growth.
    """
    if previous > 0:
        return round((current - previous) / previous * 100, 2)
    return 100.0 if current > 0 else 0.0


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''} ago"


def format_relative_time(moment: datetime, now: datetime) -> str:
    """Describe how long ago ``moment`` was, e.g. ``"3 hours ago"``."""
    seconds = int((now - moment).total_seconds())
    if seconds < 60:
        return f"{max(seconds, 0)} seconds ago"
    if seconds < 3600:
        return _plural(seconds // 60, "minute")
    if seconds < 86_400:
        return _plural(seconds // 3600, "hour")
    if seconds < 2_592_000:
        return _plural(seconds // 86_400, "day")
    return _plural(seconds // 2_592_000, "month")
