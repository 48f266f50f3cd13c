"""Response models for the admin dashboard."""

from __future__ import annotations

from datetime import datetime

from dashboard.domain.value_objects import ActivityItem, DashboardSummary
from shared_kernel.api_models import CamelModel

class StatsResponse(CamelModel):
    total_songs: int
    total_albums: int
    total_users: int
    catalog_value: float
    recent_uploads: int


class MetricsResponse(CamelModel):
    songs_this_month: int
    songs_last_month: int
    albums_this_month: int
    albums_last_month: int
    song_growth: float
    album_growth: float
    recent_songs: int
    recent_albums: int
    recent_users: int


class ActivityResponse(CamelModel):
    id: str
    type: str
    description: str
    occurred_at: datetime
    timestamp: str

    @classmethod
    def from_domain(cls, item: ActivityItem) -> ActivityResponse:
        return cls(
            id=item.id,
            type=item.type.value,
            description=item.description,
            occurred_at=item.occurred_at,
            timestamp=item.relative_time,
        )


class DashboardResponse(CamelModel):
    stats: StatsResponse
    recent_activity: list[ActivityResponse]
    additional_metrics: MetricsResponse

    @classmethod
    def from_domain(cls, summary: DashboardSummary) -> DashboardResponse:
        stats, metrics = summary.stats, summary.metrics
        return cls(
            stats=StatsResponse(
                total_songs=stats.total_songs,
                total_albums=stats.total_albums,
                total_users=stats.total_users,
                catalog_value=stats.catalog_value,
                recent_uploads=stats.recent_uploads,
            ),
            recent_activity=[
                ActivityResponse.from_domain(item) for item in summary.recent_activity
            ],
            additional_metrics=MetricsResponse(
                songs_this_month=metrics.songs_this_month,
                songs_last_month=metrics.songs_last_month,
                albums_this_month=metrics.albums_this_month,
                albums_last_month=metrics.albums_last_month,
                song_growth=metrics.song_growth,
                album_growth=metrics.album_growth,
                recent_songs=metrics.recent_songs,
                recent_albums=metrics.recent_albums,
                recent_users=metrics.recent_users,
            ),
        )

