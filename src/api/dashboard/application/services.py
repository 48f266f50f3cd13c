"""Application service assembling the admin dashboard summary."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

from dashboard.application.observability import (
    DashboardServiceProbe,
    DefaultDashboardServiceProbe,
)
from dashboard.domain.value_objects import (
    ActivityItem,
    ActivityType,
    DashboardStats,
    DashboardSummary,
    GrowthMetrics,
    ReportingWindow,
    format_relative_time,
    growth_percentage,
)
from dashboard.ports.repositories import IDashboardRepository, RecentDocument

SONGS = "songs"
ALBUMS = "albums"
USERS = "user_profiles"

RECENT_SONG_LIMIT = 5
RECENT_ALBUM_LIMIT = 3
RECENT_USER_LIMIT = 5
ACTIVITY_LIMIT = 10


class DashboardService:
    """Computes catalog statistics and recent activity for admins."""

    def __init__(
        self,
        repository: IDashboardRepository,
        probe: DashboardServiceProbe | None = None,
    ):
        self._repository = repository
        self._probe = probe or DefaultDashboardServiceProbe()

    async def build_summary(self, now: datetime | None = None) -> DashboardSummary:
        window = ReportingWindow.at(now or datetime.now(UTC))
        repo = self._repository

        (
            total_songs,
            total_albums,
            total_users,
            songs_this_month,
            songs_last_month,
            albums_this_month,
            albums_last_month,
            recent_songs,
            recent_albums,
            recent_users,
            song_value,
            album_value,
        ) = await asyncio.gather(
            repo.count(SONGS),
            repo.count(ALBUMS),
            repo.count(USERS),
            repo.count(SONGS, since=window.month_start),
            repo.count(SONGS, since=window.last_month_start, until=window.month_start),
            repo.count(ALBUMS, since=window.month_start),
            repo.count(ALBUMS, since=window.last_month_start, until=window.month_start),
            repo.count(SONGS, since=window.recent_since),
            repo.count(ALBUMS, since=window.recent_since),
            repo.count(USERS, since=window.recent_since),
            repo.total_price(SONGS),
            repo.total_price(ALBUMS),
        )

        summary = DashboardSummary(
            stats=DashboardStats(
                total_songs=total_songs,
                total_albums=total_albums,
                total_users=total_users,
                catalog_value=song_value + album_value,
                recent_uploads=recent_songs + recent_albums,
            ),
            metrics=GrowthMetrics(
                songs_this_month=songs_this_month,
                songs_last_month=songs_last_month,
                albums_this_month=albums_this_month,
                albums_last_month=albums_last_month,
                song_growth=growth_percentage(songs_this_month, songs_last_month),
                album_growth=growth_percentage(albums_this_month, albums_last_month),
                recent_songs=recent_songs,
                recent_albums=recent_albums,
                recent_users=recent_users,
            ),
            recent_activity=await self._recent_activity(window),
        )
        self._probe.summary_built(
            total_songs=total_songs,
            total_albums=total_albums,
            total_users=total_users,
            activity_items=len(summary.recent_activity),
        )
        return summary

    async def _recent_activity(self, window: ReportingWindow) -> list[ActivityItem]:
        songs, albums, users = await asyncio.gather(
            self._repository.recent(SONGS, window.recent_since, RECENT_SONG_LIMIT),
            self._repository.recent(ALBUMS, window.recent_since, RECENT_ALBUM_LIMIT),
            self._repository.recent(USERS, window.recent_since, RECENT_USER_LIMIT),
        )

        items = [
            *(self._upload(doc, "song", window.now) for doc in songs),
            *(self._upload(doc, "album", window.now) for doc in albums),
            *(self._signup(doc, window.now) for doc in users),
        ]
        items.sort(key=lambda item: item.occurred_at, reverse=True)
        return items[:ACTIVITY_LIMIT]

    @staticmethod
    def _upload(doc: RecentDocument, kind: str, now: datetime) -> ActivityItem:
        return ActivityItem(
            id=doc.id,
            type=ActivityType.UPLOAD,
            description=f'New {kind} uploaded: "{doc.title}" by {doc.artist}',
            occurred_at=doc.created_at,
            relative_time=format_relative_time(doc.created_at, now),
        )

    @staticmethod
    def _signup(doc: RecentDocument, now: datetime) -> ActivityItem:
        name = " ".join(part for part in (doc.first_name, doc.last_name) if part)
        return ActivityItem(
            id=doc.id,
            type=ActivityType.USER_SIGNUP,
            description=f"New user registered: {name or 'unnamed user'}",
            occurred_at=doc.created_at,
            relative_time=format_relative_time(doc.created_at, now),
        )
