from __future__ import annotations

from datetime import datetime
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

JobStatus = Literal["imported", "updated", "failed", "retrying"]
ImportStatus = Literal["completed", "partial", "failed"]

T = TypeVar("T")


class WireModel(BaseModel):
    """Remote payloads use camelCase keys and ``_id`` identifiers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Job(WireModel):
    id: str = Field(alias="_id")
    title: str
    company: str | None = None
    job_type: str | None = None
    job_location: str | None = None
    description: str | None = None
    link: str | None = None
    source: str | None = None
    published_at: datetime | None = None
    last_imported_at: datetime | None = None
    status: JobStatus = "imported"
    error_reason: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def _unique_tags(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))


class FailedJob(WireModel):
    job_id: str
    reason: str = ""


class ImportLog(WireModel):
    id: str = Field(alias="_id")
    timestamp: datetime
    total_fetched: int = 0
    total_imported: int = 0
    new_jobs: int = 0
    updated_jobs: int = 0
    failed_jobs: list[FailedJob] = Field(default_factory=list)
    duration_ms: int | None = None
    status: ImportStatus


class QueueCounts(WireModel):
    waiting: int = 0
    active: int = 0
    completed: int = 0
    failed: int = 0
    delayed: int = 0
    paused: int = 0


class DashboardSummary(WireModel):
    total_jobs: int = 0
    last_import_at: datetime | None = None
    last_import_duration: int | None = None
    last_import_status: str | None = None
    failed_jobs: int = 0
    retrying_jobs: int = 0


class DashboardResponse(WireModel):
    summary: DashboardSummary = Field(default_factory=DashboardSummary)
    queue: QueueCounts = Field(default_factory=QueueCounts)
    recent_imports: list[ImportLog] = Field(default_factory=list)


class Pagination(WireModel):
    page: int = 1
    pages: int = 1
    limit: int = 20
    total: int = 0


class PaginatedResponse(WireModel, Generic[T]):
    data: list[T] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


JobPage = PaginatedResponse[Job]
ImportLogPage = PaginatedResponse[ImportLog]


def empty_page(model: type[PaginatedResponse], limit: int) -> PaginatedResponse:
    return model(data=[], pagination=Pagination(page=1, pages=1, limit=limit, total=0))
