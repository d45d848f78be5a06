"""Typed endpoints of the remote job-import API."""
from __future__ import annotations

from typing import Any, Sequence, TypeVar
from urllib.parse import quote

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from jobconsole.core.errors import NetworkError
from jobconsole.core.schema import DashboardResponse, ImportLogPage, Job, JobPage
from jobconsole.domain import ListQuery

from .gateway import RemoteGatewayClient

M = TypeVar("M", bound=BaseModel)


def _parse(model: type[M], payload: Any, what: str) -> M:
    try:
        return model.model_validate(payload)
    except SchemaError as exc:
        raise NetworkError(f"Unexpected {what} response from the API") from exc


def _count(payload: Any, key: str, fallback: int) -> int:
    if isinstance(payload, dict):
        value = payload.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return fallback


def _job_path(job_id: str) -> str:
    return f"/api/jobs/{quote(job_id, safe='')}"


class JobsApi:
    def __init__(self, gateway: RemoteGatewayClient) -> None:
        self._gateway = gateway

    async def list_jobs(self, query: ListQuery) -> JobPage:
        payload = await self._gateway.get("/api/jobs", query.params())
        return _parse(JobPage, payload, "jobs")

    async def get_job(self, job_id: str) -> Job:
        return _parse(Job, await self._gateway.get(_job_path(job_id)), "job")

    async def create_job(self, body: dict[str, Any]) -> Job:
        return _parse(Job, await self._gateway.post("/api/jobs", body), "job")

    async def update_job(self, job_id: str, body: dict[str, Any]) -> Job:
        return _parse(Job, await self._gateway.put(_job_path(job_id), body), "job")

    async def delete_job(self, job_id: str) -> int:
        return _count(await self._gateway.delete(_job_path(job_id)), "deleted", 1)

    async def bulk_delete(self, ids: Sequence[str]) -> int:
        payload = await self._gateway.post("/api/jobs/bulk/delete", {"ids": list(ids)})
        return _count(payload, "deleted", len(ids))

    async def bulk_retry(self, ids: Sequence[str]) -> int:
        payload = await self._gateway.post("/api/jobs/bulk/retry", {"ids": list(ids)})
        return _count(payload, "queued", len(ids))

    async def upload_import(self, jobs: Sequence[dict[str, str]], source: str) -> int:
        payload = await self._gateway.post("/api/imports/upload", {"jobs": list(jobs), "source": source})
        return _count(payload, "queued", len(jobs))

    async def list_import_logs(self, page: int) -> ImportLogPage:
        payload = await self._gateway.get("/api/import-logs", {"page": page})
        return _parse(ImportLogPage, payload, "import log")

    async def dashboard(self) -> DashboardResponse:
        return _parse(DashboardResponse, await self._gateway.get("/api/dashboard"), "dashboard")
