from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterable, Union

import pandas as pd

from jobconsole.core.errors import ParseError
from jobconsole.core.schema import Job

CsvSource = Union[str, Path, bytes, bytearray, IO]

EXPORT_HEADER = [
    "Title",
    "Company",
    "Job Type",
    "Location",
    "Status",
    "Published Date",
    "Link",
    "Description",
]


@dataclass
class ParsedCsv:
    rows: list[dict[str, str]] = field(default_factory=list)
    columns: list[str] = field(default_factory=list)


def read_csv_rows(source: CsvSource) -> ParsedCsv:
    """Parse a header-delimited file into string rows.

    Blank lines are skipped and empty cells become ``""``. Repeated header
    names are kept apart by pandas (``Title``, ``Title.1``) so a name lookup
    always resolves to the first occurrence.
    """

    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(bytes(source))
    try:
        frame = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
            on_bad_lines="error",
        )
    except pd.errors.EmptyDataError as exc:
        raise ParseError("Failed to parse CSV: file has no header row") from exc
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as exc:
        raise ParseError(f"Failed to parse CSV: {exc}") from exc

    frame = frame.fillna("")
    columns = [str(column) for column in frame.columns]
    frame.columns = columns
    rows = [{column: str(value) for column, value in record.items()} for record in frame.to_dict(orient="records")]
    return ParsedCsv(rows=rows, columns=columns)


def _export_frame(jobs: Iterable[Job]) -> pd.DataFrame:
    records = []
    for job in jobs:
        records.append(
            [
                job.title or "",
                job.company or "",
                job.job_type or "",
                job.job_location or "",
                job.status or "",
                job.published_at.date().isoformat() if job.published_at else "",
                job.link or "",
                " ".join((job.description or "").splitlines()),
            ]
        )
    return pd.DataFrame(records, columns=EXPORT_HEADER)


def jobs_to_csv(jobs: Iterable[Job]) -> str:
    return _export_frame(jobs).to_csv(index=False, quoting=csv.QUOTE_ALL)


def write_jobs_csv(path: Path, jobs: Iterable[Job]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _export_frame(jobs).to_csv(path, index=False, quoting=csv.QUOTE_ALL)
    return path
