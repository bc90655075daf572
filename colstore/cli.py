"""Command line entry point: load a CSV file into a relation and print it."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from colstore.database import Database
from colstore.errors import RelationError

DATABASE_NAME = "colstore"
DEFAULT_CSV = "test_data.csv"
DEFAULT_TABLE = "Students"
DEFAULT_COLUMNS = ("id", "first_name", "last_name", "email", "grade")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="colstore", description="Load a CSV file into a relation and print it."
    )
    parser.add_argument("path", nargs="?", default=DEFAULT_CSV, help="CSV file to load")
    parser.add_argument("--table", default=DEFAULT_TABLE, help="relation name")
    parser.add_argument(
        "--columns",
        default=",".join(DEFAULT_COLUMNS),
        help="comma separated columns to load",
    )
    parser.add_argument("--delimiter", default=",", help="field delimiter")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; return the exit status."""
    args = _parser().parse_args(argv)
    columns = [name.strip() for name in args.columns.split(",") if name.strip()]
    database = Database(DATABASE_NAME)
    try:
        database.create_relation(args.table)
        database.load_from_csv(args.table, args.path, args.delimiter, columns)
        database.pretty_print_relation(args.table)
    except RelationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())