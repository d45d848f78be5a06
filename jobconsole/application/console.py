from __future__ import annotations

import asyncio
import logging

import httpx

from jobconsole.core.settings import ConsoleSettings
from jobconsole.infrastructure import JobsApi, RemoteGatewayClient

from .bulk_actions import BulkActionCoordinator
from .dashboard import DashboardAggregator
from .history import ImportHistory
from .imports import CsvImportEngine
from .job_list import JobListController
from .jobs import JobEditor
from .notifications import NotificationChannel

logger = logging.getLogger(__name__)


class Console:
    """Wires the operator console views around one gateway and one channel."""

    def __init__(self, settings: ConsoleSettings, *, http_client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings
        self.gateway = RemoteGatewayClient(settings.api_url, timeout=settings.timeout, http_client=http_client)
        self.api = JobsApi(self.gateway)
        self.notifications = NotificationChannel(ttl=settings.notification_ttl)
        self.dashboard = DashboardAggregator(self.api, self.notifications)
        self.jobs = JobListController(self.api, self.notifications, debounce=settings.debounce_seconds)
        self.history = ImportHistory(self.api, self.notifications)
        self.bulk = BulkActionCoordinator(self.api, self.jobs, self.dashboard, self.notifications)
        self.editor = JobEditor(self.api, self.jobs, self.dashboard, self.notifications)
        self.imports = CsvImportEngine(self.api, self.notifications, on_queued=self.reload)

    async def start(self, *, initial_load: bool = True) -> None:
        self.notifications.start()
        logger.info("console started against %s", self.gateway.base_url)
        if initial_load:
            await asyncio.gather(self.dashboard.refresh(), self.jobs.refresh(), self.history.load(1))

    async def reload(self) -> None:
        """Refetch every view after the job collection changed remotely."""

        await asyncio.gather(self.dashboard.refresh(), self.jobs.refresh(), self.history.load())

    async def close(self) -> None:
        await self.jobs.close()
        self.notifications.close()
        await self.gateway.aclose()
