"""Import gym visits from a CSV file into members' attendance history."""

from __future__ import annotations

import argparse
import csv
import sys
from collections.abc import Iterator, Sequence
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Append visits to public.gym_members.attendance_history.",
    )
    parser.add_argument(
        "csv_path",
        type=Path,
        help="CSV file with member_id and visited_at columns.",
    )
    parser.add_argument(
        "--member-column",
        type=str,
        default="member_id",
        help="Column holding the member id (default: member_id).",
    )
    parser.add_argument(
        "--visited-column",
        type=str,
        default="visited_at",
        help="Column holding the visit timestamp (default: visited_at).",
    )
    return parser.parse_args()


def read_rows(path: Path, member_column: str, visited_column: str) -> Iterator[tuple[str, str]]:
    """Yield ``(member_id, visited_at)`` pairs, skipping rows missing either."""
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        missing = {member_column, visited_column} - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"CSV is missing column(s): {', '.join(sorted(missing))}")
        for row in reader:
            member_id = (row.get(member_column) or "").strip()
            visited_at = (row.get(visited_column) or "").strip()
            if member_id and visited_at:
                yield member_id, visited_at


def print_report(imported: int, rejected: Sequence[tuple[str, str]]) -> None:
    """Print an import summary with every rejected row."""
    print(f"Imported {imported} visit(s).")
    if rejected:
        print(f"Rejected {len(rejected)} row(s):")
        for member_id, visited_at in rejected:
            print(f"  {member_id},{visited_at}")


def main() -> None:
    """CLI entry point."""
    args = parse_args()

    from app.config import settings
    from app.services.attendance_service import AttendanceService
    from app.utils.supabase_client import get_service_client

    service = AttendanceService(get_service_client())
    rows = read_rows(args.csv_path, args.member_column, args.visited_column)
    imported, rejected = service.import_rows(rows, tz=settings.tzinfo)
    print_report(imported, rejected)


if __name__ == "__main__":
    main()
