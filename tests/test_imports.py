import httpx
import pytest

from conftest import messages
from jobconsole.application import CsvImportEngine
from jobconsole.core.errors import ParseError, SubmissionError, ValidationError

SAMPLE = b"Job Title,Employer,Location\nBackend Engineer , Acme,Berlin\nData Analyst,Globex,\n"
NO_TITLE = b"Name,Company,Location\nA,Acme,Berlin\nB,Globex,Paris\nC,Initech,Austin\n"


def _engine(api, notifications, calls=None) -> CsvImportEngine:
    async def on_queued():
        if calls is not None:
            calls.append("reload")

    return CsvImportEngine(api, notifications, on_queued=on_queued)


@pytest.mark.asyncio
async def test_parse_infers_mapping_and_preview(api, notifications):
    engine = _engine(api, notifications)

    draft = engine.parse(SAMPLE)

    assert draft.columns == ("Job Title", "Employer", "Location")
    assert engine.mapping == {"title": "Job Title"}
    assert engine.is_valid
    assert engine.preview(limit=1) == [{"Job Title": "Backend Engineer ", "Employer": " Acme", "Location": "Berlin"}]


@pytest.mark.asyncio
async def test_submit_batch_posts_mapped_rows_and_clears_draft(api, remote, notifications):
    remote.on("POST", "/api/imports/upload", {"queued": 2})
    engine = _engine(api, notifications)
    engine.parse(SAMPLE)
    engine.set_mapping("company", "Employer")

    queued = await engine.submit_batch("  ")

    assert queued == 2
    body = remote.body(remote.calls("POST", "/api/imports/upload")[0])
    assert body == {
        "jobs": [
            {"title": "Backend Engineer", "company": "Acme"},
            {"title": "Data Analyst", "company": "Globex"},
        ],
        "source": "csv-upload",
    }
    assert engine.draft.empty
    assert engine.mapping == {}


@pytest.mark.asyncio
async def test_missing_title_column_blocks_submission(api, remote, notifications):
    engine = _engine(api, notifications)
    engine.parse(NO_TITLE)

    assert "title" not in engine.mapping
    assert engine.is_valid is False
    with pytest.raises(ValidationError):
        await engine.submit_batch("board")

    assert await engine.queue_import("board") is None
    assert remote.requests == []
    assert [kind for kind, _ in messages(notifications)] == ["error"]
    assert len(engine.draft.rows) == 3


@pytest.mark.asyncio
async def test_failed_submission_preserves_draft_for_retry(api, remote, notifications):
    remote.on("POST", "/api/imports/upload", httpx.Response(502, text="redis unavailable"))
    engine = _engine(api, notifications)
    engine.parse(SAMPLE)

    with pytest.raises(SubmissionError):
        await engine.submit_batch("board")

    assert len(engine.draft.rows) == 2
    assert engine.mapping == {"title": "Job Title"}


@pytest.mark.asyncio
async def test_queue_import_notifies_and_invalidates_views(api, remote, notifications):
    remote.on("POST", "/api/imports/upload", {"queued": 2})
    calls: list[str] = []
    engine = _engine(api, notifications, calls)
    engine.parse(SAMPLE)

    assert await engine.queue_import("board") == 2

    assert messages(notifications) == [("success", "Queued 2 jobs for import")]
    assert calls == ["reload"]
    assert remote.body(remote.requests[-1])["source"] == "board"


@pytest.mark.asyncio
async def test_header_only_file_queues_nothing(api, remote, notifications):
    calls: list[str] = []
    engine = _engine(api, notifications, calls)
    engine.parse(b"title,company\n")

    assert await engine.queue_import() == 0

    assert remote.requests == []
    assert messages(notifications) == [("success", "Queued 0 jobs for import")]
    assert calls == []


@pytest.mark.asyncio
async def test_set_mapping_rejects_columns_not_in_file(api, notifications):
    engine = _engine(api, notifications)
    engine.parse(SAMPLE)

    with pytest.raises(ValidationError):
        engine.set_mapping("company", "Salary")

    assert engine.set_mapping("title", "") == {}


@pytest.mark.asyncio
async def test_parse_error_keeps_previous_draft(api, notifications):
    engine = _engine(api, notifications)
    engine.parse(SAMPLE)

    with pytest.raises(ParseError):
        engine.parse(b"")

    assert len(engine.draft.rows) == 2
    assert messages(notifications) == []
