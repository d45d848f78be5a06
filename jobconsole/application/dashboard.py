from __future__ import annotations

from jobconsole.core.errors import ConsoleError
from jobconsole.core.schema import DashboardResponse
from jobconsole.infrastructure import JobsApi

from .notifications import NotificationChannel


class DashboardAggregator:
    """Holds the latest summary counters; refreshed explicitly by callers."""

    def __init__(self, api: JobsApi, notifications: NotificationChannel) -> None:
        self._api = api
        self._notifications = notifications
        self._snapshot: DashboardResponse | None = None

    @property
    def snapshot(self) -> DashboardResponse | None:
        return self._snapshot

    async def refresh(self) -> DashboardResponse | None:
        try:
            snapshot = await self._api.dashboard()
        except ConsoleError as exc:
            self._notifications.error(str(exc) or "Failed to load dashboard")
            return None
        self._snapshot = snapshot
        return snapshot
