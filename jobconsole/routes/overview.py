from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from jobconsole.application import Console

from .dependencies import get_console

router = APIRouter(prefix="/console", tags=["overview"])


@router.get("/dashboard")
async def get_dashboard(console: Console = Depends(get_console)) -> dict:
    snapshot = console.dashboard.snapshot
    return {"dashboard": snapshot.to_wire() if snapshot else None}


@router.post("/dashboard/refresh")
async def refresh_dashboard(console: Console = Depends(get_console)) -> dict:
    await console.dashboard.refresh()
    return await get_dashboard(console)


@router.get("/history")
async def get_history(page: int | None = Query(default=None, ge=1), console: Console = Depends(get_console)) -> dict:
    if page is not None:
        await console.history.load(page)
    current = console.history.page
    return {
        "data": [log.to_wire() for log in current.data],
        "pagination": current.pagination.model_dump(),
        "loading": console.history.loading,
    }


@router.get("/notifications")
async def list_notifications(console: Console = Depends(get_console)) -> dict:
    return {"items": [entry.as_dict() for entry in console.notifications.entries]}


@router.delete("/notifications/{entry_id}")
async def dismiss_notification(entry_id: str, console: Console = Depends(get_console)) -> dict:
    if not console.notifications.dismiss(entry_id):
        raise HTTPException(status_code=404, detail="notification not found")
    return {"dismissed": entry_id}
