from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from jobconsole.application import Console
from jobconsole.core.csvio import jobs_to_csv

from .dependencies import get_console

router = APIRouter(prefix="/console/jobs", tags=["jobs"])


@router.get("")
async def get_jobs_view(console: Console = Depends(get_console)) -> dict:
    return console.jobs.snapshot()


@router.post("/query")
async def update_query(payload: dict, console: Console = Depends(get_console)) -> dict:
    """Apply a partial query change; ``wait`` blocks until the page has settled."""
    changes = {key: payload[key] for key in ("page", "search", "status", "sort") if key in payload}
    if not changes:
        raise HTTPException(status_code=400, detail="at least one of page, search, status, sort is required")
    if console.jobs.set_query(**changes) is None:
        raise HTTPException(status_code=400, detail="invalid query")
    if payload.get("wait"):
        await console.jobs.wait_idle()
    return console.jobs.snapshot()


@router.post("/selection")
async def update_selection(payload: dict, console: Console = Depends(get_console)) -> dict:
    action = payload.get("action")
    if action == "toggle":
        job_id = payload.get("id")
        if not job_id:
            raise HTTPException(status_code=400, detail="id is required")
        selection = console.jobs.toggle(str(job_id))
    elif action == "all":
        selection = console.jobs.toggle_all()
    elif action == "clear":
        selection = console.jobs.clear_selection()
    else:
        raise HTTPException(status_code=400, detail="action must be toggle, all or clear")
    return {"selected": list(selection.ids)}


@router.post("/bulk/{action}")
async def run_bulk_action(action: str, console: Console = Depends(get_console)) -> dict:
    if action == "delete":
        count = await console.bulk.bulk_delete()
    elif action == "retry":
        count = await console.bulk.bulk_retry()
    else:
        raise HTTPException(status_code=404, detail="unknown bulk action")
    return {"action": action, "count": count, "selected": list(console.jobs.selection.ids)}


@router.get("/export")
async def export_jobs(console: Console = Depends(get_console)) -> Response:
    filename = f"jobs-export-{date.today().isoformat()}.csv"
    return Response(
        content=jobs_to_csv(console.jobs.page.data),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{job_id}")
async def view_job(job_id: str, console: Console = Depends(get_console)) -> dict:
    job = await console.editor.view(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="job could not be loaded")
    return job.to_wire()


@router.post("")
async def create_job(payload: dict, console: Console = Depends(get_console)) -> dict:
    job = await console.editor.create(payload)
    if job is None:
        raise HTTPException(status_code=400, detail="job was not created")
    return job.to_wire()


@router.put("/{job_id}")
async def update_job(job_id: str, payload: dict, console: Console = Depends(get_console)) -> dict:
    job = await console.editor.update(job_id, payload)
    if job is None:
        raise HTTPException(status_code=400, detail="job was not updated")
    return job.to_wire()


@router.delete("/{job_id}")
async def delete_job(job_id: str, console: Console = Depends(get_console)) -> dict:
    if not await console.editor.delete(job_id):
        raise HTTPException(status_code=400, detail="job was not deleted")
    return {"deleted": 1}
