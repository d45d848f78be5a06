from __future__ import annotations

import inspect
import json
import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio

sys.path.append(str(Path(__file__).resolve().parents[1]))

from jobconsole.application import NotificationChannel
from jobconsole.infrastructure import JobsApi, RemoteGatewayClient

BASE_URL = "http://remote.test"


def make_job(job_id: str, title: str | None = None, **extra: Any) -> dict:
    payload = {"_id": job_id, "title": title or f"Job {job_id}", "status": "imported"}
    payload.update(extra)
    return payload


def page_of(jobs: list[dict], *, page: int = 1, pages: int = 1, limit: int = 20, total: int | None = None) -> dict:
    return {
        "data": jobs,
        "pagination": {"page": page, "pages": pages, "limit": limit, "total": len(jobs) if total is None else total},
    }


DASHBOARD = {
    "summary": {"totalJobs": 3, "failedJobs": 1, "retryingJobs": 0},
    "queue": {"waiting": 2, "active": 1, "completed": 10, "failed": 1, "delayed": 0, "paused": 0},
    "recentImports": [],
}


class FakeRemote:
    """In-memory stand-in for the remote import API, served via MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Callable[[httpx.Request], Any]] = {}

    def on(self, method: str, path: str, responder: Any) -> None:
        if not callable(responder):
            payload = responder
            responder = lambda _request: payload  # noqa: E731
        self._routes[(method, path)] = responder

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self._routes.get((request.method, request.url.path))
        if responder is None:
            return httpx.Response(404, text="Not found")
        result = responder(request)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, json=result)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [req for req in self.requests if req.method == method and req.url.path == path]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content.decode("utf-8"))

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture()
def remote() -> FakeRemote:
    fake = FakeRemote()
    fake.on("GET", "/api/dashboard", DASHBOARD)
    fake.on("GET", "/api/import-logs", page_of([], limit=10))
    return fake


@pytest.fixture()
def api(remote: FakeRemote) -> JobsApi:
    return JobsApi(RemoteGatewayClient(BASE_URL, http_client=remote.client()))


@pytest_asyncio.fixture
async def notifications():
    channel = NotificationChannel(ttl=60)
    channel.start()
    yield channel
    channel.close()


def messages(channel: NotificationChannel) -> list[tuple[str, str]]:
    return [(entry.kind, entry.message) for entry in channel.entries]
