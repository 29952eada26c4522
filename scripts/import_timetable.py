#!/usr/bin/env python3
"""
Import a timetable into the database.

Usage:
    python scripts/import_timetable.py [timetable-file] [--replace]

The file is CSV with a header row, or YAML holding a list of mappings.
Either way every entry has the fields:
    classroom, slot, day, class, subject

Options:
    --replace         - Remove existing timetable entries before importing

Environment variables:
    DATABASE_URL / POSTGRES_* - Database to import into (see coraserver settings)
    CORASERVER_URL    - Running server to verify the import against
                        (default: http://localhost:42069)
"""

import csv
import os
import sys
from pathlib import Path

import requests
import yaml
from pydantic import ValidationError

from coraserver.core.db import get_session, init_db
from coraserver.crud.timetable import add_timetable_entries, clear_timetable
from coraserver.models import TimetableEntryBase

# Configuration
PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_TIMETABLE = PROJECT_ROOT / "config" / "timetable.csv"
CORASERVER_URL = os.environ.get("CORASERVER_URL", "http://localhost:42069")

REQUIRED_FIELDS = ("classroom", "slot", "day", "class", "subject")


def log_info(msg: str) -> None:
    print(f"\033[0;32m[INFO]\033[0m {msg}")


def log_warn(msg: str) -> None:
    print(f"\033[1;33m[WARN]\033[0m {msg}")


def log_error(msg: str) -> None:
    print(f"\033[0;31m[ERROR]\033[0m {msg}")


def read_rows(path: Path) -> list[dict]:
    """Read raw timetable rows from a CSV or YAML file."""
    if path.suffix in (".yaml", ".yml"):
        with open(path) as f:
            data = yaml.safe_load(f) or []
        if not isinstance(data, list):
            raise ValueError("YAML timetable must be a list of entries")
        return data

    with open(path, newline="") as f:
        return list(csv.DictReader(f))


def parse_slot(value) -> int:
    """Accept an integer or a string of digits; anything else is an error."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        return int(value.strip())
    raise ValueError(f"slot must be a whole number, got {value!r}")


def parse_entries(rows: list[dict]) -> tuple[list[TimetableEntryBase], int]:
    """
    Validate raw rows into timetable entries.

    Returns:
        Tuple of (valid entries, number of rejected rows)
    """
    entries = []
    rejected = 0
    for line, row in enumerate(rows, start=1):
        if not isinstance(row, dict):
            log_warn(f"  Entry {line}: not a mapping, skipped")
            rejected += 1
            continue
        # csv.DictReader fills the fields of a short row with None
        missing = [
            name
            for name in REQUIRED_FIELDS
            if row.get(name) is None or not str(row[name]).strip()
        ]
        if missing:
            log_warn(f"  Entry {line}: missing {', '.join(missing)}, skipped")
            rejected += 1
            continue
        try:
            entries.append(
                TimetableEntryBase.model_validate(
                    {
                        "classroom": str(row["classroom"]).strip(),
                        "slot": parse_slot(row["slot"]),
                        "day": str(row["day"]).strip(),
                        "class_name": str(row["class"]).strip(),
                        "subject": str(row["subject"]).strip(),
                    }
                )
            )
        except (ValueError, ValidationError) as e:
            log_warn(f"  Entry {line}: {e}, skipped")
            rejected += 1
    return entries, rejected


def verify_import(sample: TimetableEntryBase) -> None:
    """Ask a running server for one imported day, if a server is up."""
    try:
        resp = requests.get(
            f"{CORASERVER_URL}/db/daytimetable",
            params={"class": sample.class_name, "day": sample.day},
            timeout=5,
        )
    except requests.RequestException:
        log_warn(f"Server not reachable at {CORASERVER_URL}, skipping verification")
        return

    if resp.ok:
        log_info(f"Verification: {sample.class_name} on {sample.day} -> {resp.json()}")
    else:
        log_warn(f"Verification request failed: HTTP {resp.status_code}")


def main() -> None:
    print("=" * 40)
    print("Timetable Importer")
    print("=" * 40)
    print()

    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    replace = "--replace" in sys.argv[1:]

    timetable_file = Path(args[0]) if args else DEFAULT_TIMETABLE
    if not timetable_file.exists():
        log_error(f"Timetable file not found: {timetable_file}")
        sys.exit(1)

    try:
        rows = read_rows(timetable_file)
    except (OSError, ValueError, yaml.YAMLError, csv.Error) as e:
        log_error(f"Failed to read {timetable_file}: {e}")
        sys.exit(1)

    entries, rejected = parse_entries(rows)
    log_info(f"Parsed {len(entries)} entries from {timetable_file} ({rejected} rejected)")

    init_db()
    with get_session() as session:
        if replace:
            removed = clear_timetable(session=session)
            log_info(f"Removed {removed} existing entries")
        added = add_timetable_entries(session=session, entries=entries)

    print()
    print("=" * 40)
    print(f"Import complete! ({added} imported, {rejected} rejected)")
    print("=" * 40)

    if entries:
        verify_import(entries[0])
    if rejected > 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
