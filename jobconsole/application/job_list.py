"""Paginated, filtered and sorted view over the remote job collection."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from jobconsole.core.errors import ConsoleError
from jobconsole.core.schema import JobPage, empty_page
from jobconsole.core.scheduling import Debouncer
from jobconsole.core.settings import DEBOUNCE_SECONDS, JOBS_PAGE_LIMIT
from jobconsole.domain import ListQuery, Selection
from jobconsole.domain.queries import is_page_only
from jobconsole.infrastructure import JobsApi

from .notifications import NotificationChannel

logger = logging.getLogger(__name__)


class JobListController:
    """Keeps the visible page consistent with the latest requested query.

    Search, status and sort changes are coalesced by a debounce timer; page
    changes fetch straight away. Every fetch is tagged with a sequence number
    and only the response to the most recently issued fetch is applied, so a
    slow answer to an older query can never overwrite a newer one.
    """

    def __init__(
        self,
        api: JobsApi,
        notifications: NotificationChannel,
        *,
        debounce: float = DEBOUNCE_SECONDS,
    ) -> None:
        self._api = api
        self._notifications = notifications
        self._debouncer = Debouncer(debounce)
        self._query = ListQuery()
        self._page: JobPage = empty_page(JobPage, JOBS_PAGE_LIMIT)
        self._selection = Selection()
        self._issued = 0
        self._inflight: set[asyncio.Task] = set()
        self._latest: asyncio.Task | None = None

    # ------------------------------------------------------------------
    # observable state
    # ------------------------------------------------------------------
    @property
    def query(self) -> ListQuery:
        return self._query

    @property
    def page(self) -> JobPage:
        return self._page

    @property
    def loading(self) -> bool:
        return self._latest is not None and not self._latest.done()

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def snapshot(self) -> dict[str, Any]:
        return {
            "query": self._query.params(),
            "data": [job.to_wire() for job in self._page.data],
            "pagination": self._page.pagination.model_dump(),
            "loading": self.loading,
            "selected": list(self._selection.ids),
        }

    # ------------------------------------------------------------------
    # query transitions
    # ------------------------------------------------------------------
    def set_query(self, **changes: Any) -> ListQuery | None:
        """Merge ``changes`` into the query and schedule exactly one fetch.

        Invalid changes are reported and leave the query untouched.
        """

        try:
            query = self._query.apply(changes)
        except ConsoleError as exc:
            self._notifications.error(str(exc))
            return None

        self._query = query
        self._selection = Selection()
        if is_page_only(changes):
            self._debouncer.cancel()
            self._spawn_fetch()
        else:
            # anything still in flight answers a query that no longer exists
            self._issued += 1
            self._debouncer.schedule(self._spawn_fetch)
        return query

    async def refresh(self) -> None:
        """Refetch the current query now; used after mutations elsewhere."""

        self._debouncer.cancel()
        await asyncio.wait({self._spawn_fetch()})

    async def wait_idle(self) -> None:
        while True:
            await self._debouncer.wait()
            pending = {task for task in self._inflight if not task.done()}
            if not pending and not self._debouncer.pending:
                return
            if pending:
                await asyncio.wait(pending)

    async def close(self) -> None:
        self._debouncer.cancel()
        for task in list(self._inflight):
            task.cancel()
        if self._inflight:
            await asyncio.wait(set(self._inflight))

    # ------------------------------------------------------------------
    # selection
    # ------------------------------------------------------------------
    def toggle(self, job_id: str) -> Selection:
        if job_id in {job.id for job in self._page.data}:
            self._selection = self._selection.toggle(job_id)
        return self._selection

    def select_all(self) -> Selection:
        self._selection = Selection.of(job.id for job in self._page.data)
        return self._selection

    def toggle_all(self) -> Selection:
        if self._page.data and len(self._selection) == len(self._page.data):
            return self.clear_selection()
        return self.select_all()

    def clear_selection(self) -> Selection:
        self._selection = Selection()
        return self._selection

    # ------------------------------------------------------------------
    # fetching
    # ------------------------------------------------------------------
    def _spawn_fetch(self) -> asyncio.Task:
        self._issued += 1
        task = asyncio.get_running_loop().create_task(self._fetch(self._query, self._issued))
        self._inflight.add(task)
        self._latest = task
        task.add_done_callback(self._inflight.discard)
        return task

    async def _fetch(self, query: ListQuery, token: int) -> None:
        try:
            page = await self._api.list_jobs(query)
        except ConsoleError as exc:
            if token != self._issued:
                logger.debug("dropping failure of superseded jobs query %s: %s", query, exc)
                return
            self._notifications.error(str(exc) or "Failed to load jobs")
            return

        if token != self._issued:
            logger.debug("dropping stale jobs response for %s", query)
            return
        self._page = page
        self._selection = self._selection.keep(job.id for job in page.data)
