from __future__ import annotations

import asyncio
from typing import Any, Mapping

from jobconsole.core.errors import ConsoleError
from jobconsole.core.schema import Job
from jobconsole.core.validation import validate_job_draft
from jobconsole.infrastructure import JobsApi

from .dashboard import DashboardAggregator
from .job_list import JobListController
from .notifications import NotificationChannel


class JobEditor:
    """Single-record view, create, update and delete.

    Nothing is applied locally before the remote API confirms; afterwards the
    list and the dashboard are refetched.
    """

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

    async def view(self, job_id: str) -> Job | None:
        try:
            return await self._api.get_job(job_id)
        except ConsoleError as exc:
            self._notifications.error(str(exc) or "Failed to load job details")
            return None

    async def create(self, draft: Mapping[str, Any]) -> Job | None:
        try:
            job = await self._api.create_job(validate_job_draft(draft))
        except ConsoleError as exc:
            self._notifications.error(str(exc) or "Failed to create job")
            return None
        await self._committed("Job created successfully")
        return job

    async def update(self, job_id: str, draft: Mapping[str, Any]) -> Job | None:
        try:
            job = await self._api.update_job(job_id, validate_job_draft(draft))
        except ConsoleError as exc:
            self._notifications.error(str(exc) or "Failed to update job")
            return None
        await self._committed("Job updated successfully")
        return job

    async def delete(self, job_id: str) -> bool:
        try:
            await self._api.delete_job(job_id)
        except ConsoleError as exc:
            self._notifications.error(str(exc) or "Failed to delete job")
            return False
        await self._committed("Job deleted successfully")
        return True

    async def _committed(self, message: str) -> None:
        self._notifications.success(message)
        await asyncio.gather(self._jobs.refresh(), self._dashboard.refresh())
