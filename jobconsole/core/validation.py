from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping
from urllib.parse import urlparse

from jobconsole.core.errors import ValidationError

JOB_STATUSES = ("imported", "updated", "failed", "retrying")
TEXT_FIELDS = ("company", "jobType", "jobLocation", "description", "source")


def is_absolute_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme and parsed.netloc)


def parse_date(value: str) -> datetime:
    text = value.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"Please enter a valid date: {value!r}") from exc


def validate_job_draft(draft: Mapping[str, Any]) -> dict[str, Any]:
    """Validate a job form payload and return the normalised body to send.

    Blank optional fields are dropped rather than sent as empty strings.
    """

    title = str(draft.get("title") or "").strip()
    if not title:
        raise ValidationError("Title is required")
    payload: dict[str, Any] = {"title": title}

    for key in TEXT_FIELDS:
        value = str(draft.get(key) or "").strip()
        if value:
            payload[key] = value

    link = str(draft.get("link") or "").strip()
    if link:
        if not is_absolute_url(link):
            raise ValidationError("Please enter a valid URL")
        payload["link"] = link

    published = str(draft.get("publishedAt") or "").strip()
    if published:
        payload["publishedAt"] = parse_date(published).isoformat()

    status = draft.get("status")
    if status:
        if status not in JOB_STATUSES:
            raise ValidationError(f"status must be one of {', '.join(JOB_STATUSES)}")
        payload["status"] = status

    if "tags" in draft:
        tags = [str(tag).strip() for tag in draft["tags"] or []]
        payload["tags"] = list(dict.fromkeys(tag for tag in tags if tag))
    return payload
