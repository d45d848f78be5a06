"""Ephemeral state of one CSV upload."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ImportDraft:
    """Rows, columns and mapping of the file currently being imported.

    A new draft is created for every file selection and dropped once the
    batch has been queued.
    """

    rows: tuple[dict[str, str], ...] = ()
    columns: tuple[str, ...] = ()
    mapping: dict[str, str] = field(default_factory=dict)

    @property
    def empty(self) -> bool:
        return not self.rows and not self.columns
