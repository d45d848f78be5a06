from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from jobconsole.application import Console
from jobconsole.core.errors import ParseError, SubmissionError, ValidationError
from jobconsole.core.settings import DEFAULT_SOURCE_LABEL
from jobconsole.extractors.column_mapping import OPTIONAL_FIELDS, REQUIRED_FIELDS

from .dependencies import get_console

router = APIRouter(prefix="/console/imports", tags=["imports"])


def _draft_state(console: Console) -> dict:
    engine = console.imports
    return {
        "columns": list(engine.draft.columns),
        "mapping": engine.mapping,
        "required": list(REQUIRED_FIELDS),
        "optional": list(OPTIONAL_FIELDS),
        "preview": engine.preview(),
        "total_rows": len(engine.draft.rows),
        "valid": engine.is_valid,
    }


@router.post("/preview")
async def preview_upload(file: UploadFile = File(...), console: Console = Depends(get_console)) -> dict:
    """Parse an uploaded CSV and return the inferred column mapping."""
    try:
        content = await file.read()
    finally:
        await file.close()

    try:
        console.imports.parse(content)
    except ParseError as exc:
        console.notifications.error(str(exc))
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _draft_state(console)


@router.get("")
async def get_draft(console: Console = Depends(get_console)) -> dict:
    return _draft_state(console)


@router.put("/mapping")
async def update_mapping(payload: dict, console: Console = Depends(get_console)) -> dict:
    field = payload.get("field")
    if not field:
        raise HTTPException(status_code=400, detail="field is required")
    try:
        console.imports.set_mapping(field, payload.get("column") or None)
    except ValidationError as exc:
        console.notifications.error(str(exc))
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _draft_state(console)


@router.post("/submit")
async def submit_import(payload: dict, console: Console = Depends(get_console)) -> dict:
    source = str(payload.get("source") or DEFAULT_SOURCE_LABEL)
    try:
        queued = await console.imports.submit_batch(source)
    except ValidationError as exc:
        console.notifications.error(str(exc))
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except SubmissionError as exc:
        console.notifications.error(str(exc))
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return {"queued": queued}
