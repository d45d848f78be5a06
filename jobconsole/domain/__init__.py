"""Domain layer definitions."""

from .imports import ImportDraft
from .queries import SORT_DIRECTIONS, STATUS_FILTERS, ListQuery, Selection

__all__ = [
    "ImportDraft",
    "ListQuery",
    "SORT_DIRECTIONS",
    "STATUS_FILTERS",
    "Selection",
]
