"""Client-side state of the paginated job list."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable

from jobconsole.core.errors import ValidationError

STATUS_FILTERS = ("all", "imported", "updated", "retrying", "failed")
SORT_DIRECTIONS = ("asc", "desc")
QUERY_KEYS = ("page", "search", "status", "sort")
RESULT_SET_KEYS = frozenset({"search", "status", "sort"})


@dataclass(frozen=True, slots=True)
class ListQuery:
    """Immutable (page, search, status, sort) tuple for the jobs view."""

    page: int = 1
    search: str = ""
    status: str = "all"
    sort: str = "desc"

    def apply(self, changes: dict[str, Any]) -> "ListQuery":
        """Return a new query with ``changes`` merged in.

        Touching search, status or sort invalidates the current pagination,
        so the page goes back to 1.
        """

        unknown = set(changes) - set(QUERY_KEYS)
        if unknown:
            raise ValidationError(f"unknown query keys: {', '.join(sorted(unknown))}")

        updates = dict(changes)
        if "page" in updates:
            page = updates["page"]
            if not isinstance(page, int) or isinstance(page, bool) or page < 1:
                raise ValidationError("page must be a positive integer")
        if "search" in updates:
            updates["search"] = str(updates["search"] or "")
        if "status" in updates and updates["status"] not in STATUS_FILTERS:
            raise ValidationError(f"status must be one of {', '.join(STATUS_FILTERS)}")
        if "sort" in updates and updates["sort"] not in SORT_DIRECTIONS:
            raise ValidationError("sort must be asc or desc")

        if RESULT_SET_KEYS & set(updates):
            updates["page"] = 1
        return replace(self, **updates)

    def params(self) -> dict[str, Any]:
        return {"page": self.page, "search": self.search, "status": self.status, "sort": self.sort}


def is_page_only(changes: dict[str, Any]) -> bool:
    return set(changes) == {"page"}


@dataclass(frozen=True, slots=True)
class Selection:
    """Ids ticked on the currently rendered page, in the order they were picked."""

    ids: tuple[str, ...] = ()

    def __contains__(self, job_id: object) -> bool:
        return job_id in self.ids

    def __len__(self) -> int:
        return len(self.ids)

    def toggle(self, job_id: str) -> "Selection":
        if job_id in self.ids:
            return Selection(tuple(item for item in self.ids if item != job_id))
        return Selection(self.ids + (job_id,))

    @classmethod
    def of(cls, ids: Iterable[str]) -> "Selection":
        return cls(tuple(dict.fromkeys(ids)))

    def keep(self, visible: Iterable[str]) -> "Selection":
        allowed = set(visible)
        return Selection(tuple(item for item in self.ids if item in allowed))
