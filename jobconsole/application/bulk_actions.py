from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable, Sequence

from jobconsole.core.errors import ConsoleError
from jobconsole.infrastructure import JobsApi

from .dashboard import DashboardAggregator
from .job_list import JobListController
from .notifications import NotificationChannel

BulkCall = Callable[[Sequence[str]], Awaitable[int]]


class BulkActionCoordinator:
    """Runs bulk retry/delete over the selection of the visible page."""

    def __init__(
        self,
        api: JobsApi,
        jobs: JobListController,
        dashboard: DashboardAggregator,
        notifications: NotificationChannel,
    ) -> None:
        self._api = api
        self._jobs = jobs
        self._dashboard = dashboard
        self._notifications = notifications

    async def bulk_delete(self, ids: Iterable[str] | None = None) -> int | None:
        return await self._run(ids, self._api.bulk_delete, "Deleted {count} jobs", "Failed to delete jobs")

    async def bulk_retry(self, ids: Iterable[str] | None = None) -> int | None:
        return await self._run(ids, self._api.bulk_retry, "Queued {count} jobs for retry", "Failed to queue retries")

    async def _run(self, ids: Iterable[str] | None, call: BulkCall, done: str, failed: str) -> int | None:
        targets = list(self._jobs.selection.ids if ids is None else dict.fromkeys(ids))
        if not targets:
            return None

        try:
            count = await call(targets)
        except ConsoleError as exc:
            self._notifications.error(str(exc) or failed)
            return None

        self._notifications.success(done.format(count=count))
        self._jobs.clear_selection()
        await asyncio.gather(self._jobs.refresh(), self._dashboard.refresh())
        return count
