"""
Refresh the cached faculty JSON from Google Sheets
- Reads every configured worksheet
- Assembles one document per faculty
- Replaces the cached collection in one step (old data is kept on any failure)

Example Usage:
    python etl/refresh_data.py
    python etl/refresh_data.py --out data/facultyData.json --range A1:Z200
"""

import argparse
import datetime as dt
import sys
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

PROJECT_ROOT = Path(__file__).parent.parent.absolute()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.config import SHEETS, get_data_path, get_sheet_range
from etl.data_store import FacultyStore
from etl.faculty_builder import assemble_faculty_documents
from etl.sheets_reader import SheetsReader, fetch_all_tables

TableFetcher = Callable[[], Dict[str, List[List[str]]]]

_refresh_lock = threading.Lock()


class RefreshInProgressError(RuntimeError):
    """Another refresh is already running."""


@dataclass
class RefreshResult:
    total_faculty: int
    faculty_ids: List[str] = field(default_factory=list)
    timestamp: str = ""


def sheets_fetcher(cell_range: Optional[str] = None) -> TableFetcher:
    """Fetcher reading all SHEETS from the configured spreadsheet."""
    def fetch():
        reader = SheetsReader.from_config()
        return fetch_all_tables(reader, SHEETS, cell_range or get_sheet_range())
    return fetch


def refresh_faculty_data(store: FacultyStore, fetch_tables: TableFetcher) -> RefreshResult:
    """
    Fetch, assemble and replace the stored collection.

    Only one refresh runs at a time; a concurrent call raises RefreshInProgressError
    instead of waiting. Errors from fetching or assembling propagate and the store
    is left untouched.
    """
    if not _refresh_lock.acquire(blocking=False):
        raise RefreshInProgressError("A refresh is already in progress")
    try:
        raw_tables = fetch_tables()
        documents = assemble_faculty_documents(raw_tables)
        store.replace(documents)
    finally:
        _refresh_lock.release()

    return RefreshResult(
        total_faculty=len(documents),
        faculty_ids=[FacultyStore.faculty_id_of(d) for d in documents],
        timestamp=dt.datetime.now(dt.timezone.utc).isoformat().replace("+00:00", "Z"),
    )


# -------------- CLI ----------------
def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Pull faculty data from Google Sheets and rewrite the cached JSON.")
    ap.add_argument("-o", "--out", help="Output JSON filepath (defaults to FACULTY_DATA_PATH)")
    ap.add_argument("--range", dest="cell_range", help="Cell range read from every sheet (e.g. A1:Z100)")
    return ap.parse_args(argv)


def _print_funding_summary(doc: Dict) -> None:
    funding = (doc.get("research") or {}).get("fundingInfo") or {}
    if not funding:
        return
    print("\nFunding Info:")
    for key, value in funding.items():
        if key in ("faculty_id", "requirements"):
            continue
        print(f"  {key}: {value or '(empty)'}")
    print(f"  requirements: {len(funding.get('requirements', []))}")


def main(argv=None) -> int:
    args = parse_args(argv)
    store = FacultyStore(args.out or get_data_path())

    print("[INFO] Fetching fresh data from Google Sheets...")
    try:
        result = refresh_faculty_data(store, sheets_fetcher(args.cell_range))
    except Exception as e:
        print(f"[ERROR] Error refreshing data: {e}", file=sys.stderr)
        return 1

    print(f"[OK] Data refreshed successfully. Saved JSON to {store.path}")
    print(f"  total faculty: {result.total_faculty}, ids: {', '.join(map(str, result.faculty_ids))}")
    documents = store.load()
    if documents:
        _print_funding_summary(documents[0])
    return 0


if __name__ == "__main__":
    sys.exit(main())
