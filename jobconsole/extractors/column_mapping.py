"""Heuristic mapping from uploaded CSV columns to job fields.

Each logical field claims the first column whose header contains the field
name, compared case-insensitively. Required fields are matched before
optional ones and both lists keep a fixed order, so the same header always
yields the same mapping. Operators can override any field afterwards.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from jobconsole.core.errors import ValidationError

REQUIRED_FIELDS: tuple[str, ...] = ("title",)
OPTIONAL_FIELDS: tuple[str, ...] = (
    "company",
    "jobType",
    "jobLocation",
    "description",
    "link",
    "publishedAt",
)
ALL_FIELDS: tuple[str, ...] = REQUIRED_FIELDS + OPTIONAL_FIELDS


def _find_column(columns: Sequence[str], keyword: str) -> str | None:
    lowered = keyword.lower()
    for column in columns:
        if lowered in str(column).lower():
            return column
    return None


def infer_mapping(columns: Iterable[str]) -> dict[str, str]:
    candidates = list(columns)
    mapping: dict[str, str] = {}
    for field in ALL_FIELDS:
        column = _find_column(candidates, field)
        if column is not None:
            mapping[field] = column
    return mapping


def set_mapping(mapping: Mapping[str, str], field: str, column: str | None) -> dict[str, str]:
    """Return a copy of ``mapping`` with ``field`` pointed at ``column``.

    An empty column unmaps the field.
    """

    if field not in ALL_FIELDS:
        raise ValidationError(f"unknown import field: {field}")
    updated = dict(mapping)
    if column:
        updated[field] = column
    else:
        updated.pop(field, None)
    return updated


def validate_mapping(mapping: Mapping[str, str]) -> bool:
    return all(isinstance(mapping.get(field), str) and bool(mapping.get(field)) for field in REQUIRED_FIELDS)


def missing_fields(mapping: Mapping[str, str]) -> list[str]:
    return [field for field in REQUIRED_FIELDS if not mapping.get(field)]


def build_batch(rows: Iterable[Mapping[str, str]], mapping: Mapping[str, str]) -> list[dict[str, str]]:
    """Project every row onto the mapped job fields.

    Values are trimmed; unmapped fields are left out of the payload. Rows are
    never dropped here, even when the title cell is blank.
    """

    if not validate_mapping(mapping):
        raise ValidationError(f"Please map all required fields before importing: {', '.join(missing_fields(mapping))}")
    selected = [(field, column) for field, column in mapping.items() if column]
    batch: list[dict[str, str]] = []
    for row in rows:
        batch.append({field: str(row.get(column) or "").strip() for field, column in selected})
    return batch
