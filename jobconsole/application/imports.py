"""CSV upload: parse, map columns, queue the batch."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable

from jobconsole.core.csvio import CsvSource, read_csv_rows
from jobconsole.core.errors import ConsoleError, NetworkError, SubmissionError, ValidationError
from jobconsole.core.settings import DEFAULT_SOURCE_LABEL, PREVIEW_ROWS
from jobconsole.domain import ImportDraft
from jobconsole.extractors import column_mapping
from jobconsole.infrastructure import JobsApi

from .notifications import NotificationChannel

logger = logging.getLogger(__name__)

Invalidate = Callable[[], Awaitable[None]]


class CsvImportEngine:
    """Holds the one file currently being mapped and hands it to the importer.

    The draft survives failed submissions so the operator can fix the mapping
    or retry without uploading again; it is discarded once the batch has been
    queued.
    """

    def __init__(
        self,
        api: JobsApi,
        notifications: NotificationChannel,
        *,
        on_queued: Invalidate | None = None,
    ) -> None:
        self._api = api
        self._notifications = notifications
        self._on_queued = on_queued
        self._draft = ImportDraft()

    @property
    def draft(self) -> ImportDraft:
        return self._draft

    @property
    def mapping(self) -> dict[str, str]:
        return dict(self._draft.mapping)

    @property
    def is_valid(self) -> bool:
        return column_mapping.validate_mapping(self._draft.mapping)

    def preview(self, limit: int = PREVIEW_ROWS) -> list[dict[str, str]]:
        return list(self._draft.rows[:limit])

    def parse(self, source: CsvSource) -> ImportDraft:
        parsed = read_csv_rows(source)
        self._draft = ImportDraft(
            rows=tuple(parsed.rows),
            columns=tuple(parsed.columns),
            mapping=column_mapping.infer_mapping(parsed.columns),
        )
        logger.info("parsed %d rows with columns %s", len(parsed.rows), parsed.columns)
        return self._draft

    def set_mapping(self, field: str, column: str | None) -> dict[str, str]:
        if column and column not in self._draft.columns:
            raise ValidationError(f"unknown column: {column}")
        mapping = column_mapping.set_mapping(self._draft.mapping, field, column)
        self._draft = ImportDraft(rows=self._draft.rows, columns=self._draft.columns, mapping=mapping)
        return dict(mapping)

    def reset(self) -> None:
        self._draft = ImportDraft()

    async def submit_batch(self, source_label: str = DEFAULT_SOURCE_LABEL) -> int:
        """Queue the mapped rows; returns the count the importer accepted.

        Mapping and upload failures raise and leave the draft in place. A
        successful submission is announced and invalidates the dependent views.
        """

        jobs = column_mapping.build_batch(self._draft.rows, self._draft.mapping)
        queued = 0
        if jobs:
            source = source_label.strip() or DEFAULT_SOURCE_LABEL
            try:
                queued = await self._api.upload_import(jobs, source)
            except NetworkError as exc:
                raise SubmissionError(str(exc) or "Failed to queue import") from exc
            self.reset()

        self._notifications.success(f"Queued {queued} jobs for import")
        if queued and self._on_queued is not None:
            await self._on_queued()
        return queued

    async def queue_import(self, source_label: str = DEFAULT_SOURCE_LABEL) -> int | None:
        try:
            return await self.submit_batch(source_label)
        except ConsoleError as exc:
            self._notifications.error(str(exc))
            return None
