import httpx
import pytest

from conftest import make_job, messages, page_of
from jobconsole.application import DashboardAggregator, JobEditor, JobListController
from jobconsole.core.errors import ValidationError
from jobconsole.core.validation import validate_job_draft


def test_validate_job_draft_normalises_payload():
    payload = validate_job_draft(
        {
            "title": "  Backend Engineer ",
            "company": "",
            "jobLocation": " Berlin ",
            "link": "https://jobs.example.com/1",
            "publishedAt": "2025-01-06",
            "status": "updated",
            "tags": ["python", " python ", "", "api"],
        }
    )

    assert payload == {
        "title": "Backend Engineer",
        "jobLocation": "Berlin",
        "link": "https://jobs.example.com/1",
        "publishedAt": "2025-01-06T00:00:00",
        "status": "updated",
        "tags": ["python", "api"],
    }


@pytest.mark.parametrize(
    "draft",
    [
        {"title": "   "},
        {"title": "x", "link": "jobs.example.com/1"},
        {"title": "x", "publishedAt": "yesterday"},
        {"title": "x", "status": "deleted"},
    ],
)
def test_validate_job_draft_rejects_invalid_forms(draft):
    with pytest.raises(ValidationError):
        validate_job_draft(draft)


def _editor(api, notifications):
    jobs = JobListController(api, notifications, debounce=0.01)
    dashboard = DashboardAggregator(api, notifications)
    return JobEditor(api, jobs, dashboard, notifications)


@pytest.mark.asyncio
async def test_invalid_form_is_reported_without_network_call(api, remote, notifications):
    editor = _editor(api, notifications)

    assert await editor.create({"title": "Ops", "link": "not a url"}) is None

    assert remote.requests == []
    assert messages(notifications) == [("error", "Please enter a valid URL")]


@pytest.mark.asyncio
async def test_create_refreshes_list_and_dashboard(api, remote, notifications):
    remote.on("POST", "/api/jobs", make_job("new", "Ops"))
    remote.on("GET", "/api/jobs", page_of([make_job("new", "Ops")]))
    editor = _editor(api, notifications)

    job = await editor.create({"title": "Ops", "company": "Acme"})

    assert job is not None and job.id == "new"
    assert remote.body(remote.calls("POST", "/api/jobs")[0]) == {"title": "Ops", "company": "Acme"}
    assert messages(notifications) == [("success", "Job created successfully")]
    assert len(remote.calls("GET", "/api/jobs")) == 1
    assert len(remote.calls("GET", "/api/dashboard")) == 1


@pytest.mark.asyncio
async def test_partial_update_leaves_tags_alone(api, remote, notifications):
    remote.on("PUT", "/api/jobs/a", make_job("a", "Renamed", tags=["python"]))
    remote.on("GET", "/api/jobs", page_of([make_job("a", "Renamed")]))
    editor = _editor(api, notifications)

    job = await editor.update("a", {"title": "Renamed"})
    assert job is not None and job.tags == ["python"]
    await editor.update("a", {"title": "Renamed", "tags": []})

    bodies = [remote.body(request) for request in remote.calls("PUT", "/api/jobs/a")]
    assert bodies == [{"title": "Renamed"}, {"title": "Renamed", "tags": []}]
    assert messages(notifications) == [("success", "Job updated successfully")] * 2


@pytest.mark.asyncio
async def test_update_failure_leaves_views_untouched(api, remote, notifications):
    remote.on("PUT", "/api/jobs/a", httpx.Response(409, text="job is being imported"))
    editor = _editor(api, notifications)

    assert await editor.update("a", {"title": "Renamed"}) is None

    assert messages(notifications) == [("error", "job is being imported")]
    assert remote.calls("GET", "/api/jobs") == []


@pytest.mark.asyncio
async def test_view_and_delete(api, remote, notifications):
    remote.on("GET", "/api/jobs/a", make_job("a", "Ops", errorReason="timeout", status="failed"))
    remote.on("DELETE", "/api/jobs/a", {"message": "deleted", "deleted": 1})
    remote.on("GET", "/api/jobs", page_of([]))
    editor = _editor(api, notifications)

    job = await editor.view("a")
    assert job is not None and job.error_reason == "timeout"

    assert await editor.view("missing") is None
    assert await editor.delete("a") is True

    assert messages(notifications) == [("error", "Not found"), ("success", "Job deleted successfully")]
