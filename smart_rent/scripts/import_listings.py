"""
Bulk-import listings from a CSV file straight into the database.

Run this from the project root:

    (.venv) python -m smart_rent.scripts.import_listings listings.csv

Rows go through the same validation as POST /api/listings/bulk: a row
missing title, city, size_m2 or rent_cold aborts the import, rows breaking
another constraint or repeating a known url are skipped.
"""

import argparse
import logging
import sys
from pathlib import Path

from smart_rent.core.logging_config import setup_logging
from smart_rent.db.init_db import init_db
from smart_rent.db.session import SessionLocal
from smart_rent.services.csv_import import CsvImportError, parse_listing_csv
from smart_rent.services.listing_service import ListingValidationError, bulk_create_listings

logger = logging.getLogger(__name__)


def import_file(csv_path: Path, source: str = "csv") -> int:
    init_db()
    rows = parse_listing_csv(csv_path.read_bytes())
    logger.info("Read %d rows from %s", len(rows), csv_path)

    db = SessionLocal()
    try:
        inserted = bulk_create_listings(db, rows, default_source=source)
    finally:
        db.close()

    logger.info("Inserted %d new listings", inserted)
    return inserted


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Import listings from a CSV file")
    parser.add_argument("csv_path", type=Path, help="CSV file with a header row")
    parser.add_argument(
        "--source",
        default="csv",
        choices=["manual", "csv", "scrape"],
        help="source recorded for rows without one (default=csv)",
    )
    args = parser.parse_args(argv)

    setup_logging()
    if not args.csv_path.exists():
        logger.error("CSV file does not exist: %s", args.csv_path)
        return 1

    try:
        import_file(args.csv_path, source=args.source)
    except (CsvImportError, ListingValidationError) as exc:
        logger.error("Import aborted: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
