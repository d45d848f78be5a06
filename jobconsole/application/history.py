from __future__ import annotations

import logging

from jobconsole.core.errors import ConsoleError
from jobconsole.core.schema import ImportLogPage, empty_page
from jobconsole.core.settings import LOGS_PAGE_LIMIT
from jobconsole.infrastructure import JobsApi

from .notifications import NotificationChannel

logger = logging.getLogger(__name__)


class ImportHistory:
    """Paginated list of import runs written by the remote worker."""

    def __init__(self, api: JobsApi, notifications: NotificationChannel) -> None:
        self._api = api
        self._notifications = notifications
        self._page: ImportLogPage = empty_page(ImportLogPage, LOGS_PAGE_LIMIT)
        self._current = 1
        self._issued = 0
        self._loading = False

    @property
    def page(self) -> ImportLogPage:
        return self._page

    @property
    def current_page(self) -> int:
        return self._current

    @property
    def loading(self) -> bool:
        return self._loading

    async def load(self, page: int | None = None) -> ImportLogPage | None:
        target = page or self._current
        self._issued += 1
        token = self._issued
        self._loading = True
        try:
            result = await self._api.list_import_logs(target)
        except ConsoleError as exc:
            if token == self._issued:
                self._loading = False
                self._notifications.error(str(exc) or "Failed to load logs")
            return None

        if token != self._issued:
            logger.debug("dropping stale import log page %s", target)
            return None
        self._loading = False
        self._current = target
        self._page = result
        return result
