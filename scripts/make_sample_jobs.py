#!/usr/bin/env python
from __future__ import annotations

import argparse
import csv
from pathlib import Path


HEADER = [
    "Job Title",
    "Company",
    "JobType",
    "JobLocation",
    "Description",
    "Link",
    "PublishedAt",
]

SAMPLES = [
    ["Backend Engineer", "Acme", "Full-time", "Berlin", "APIs and queues", "https://jobs.example.com/1", "2025-01-06"],
    ["Data Analyst", "Globex", "Contract", "Remote", "Dashboards, SQL", "https://jobs.example.com/2", "2025-01-07"],
    ["SRE", "Initech", "Full-time", "Austin", "On-call rotation", "", ""],
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a sample CSV for the manual job import")
    parser.add_argument("--output", required=True, help="output path (.csv)")
    parser.add_argument("--rows", type=int, default=len(SAMPLES), help="number of data rows")
    args = parser.parse_args()

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", newline="", encoding="utf-8") as fp:
        writer = csv.writer(fp)
        writer.writerow(HEADER)
        for index in range(args.rows):
            writer.writerow(SAMPLES[index % len(SAMPLES)])

    print(f"sample import CSV written: {output}")


if __name__ == "__main__":
    main()
