# File: smart_rent/services/csv_import.py

"""
CSV parsing for listing imports.

Produces plain row dicts for listing_service.bulk_create_listings, so a file
upload and a JSON array go through the same validation.
"""

import csv
import io
import logging
from typing import Dict, List, Union

from smart_rent.schemas.listing import LISTING_FIELDS

logger = logging.getLogger(__name__)


class CsvImportError(ValueError):
    pass


def parse_listing_csv(content: Union[bytes, str]) -> List[Dict[str, str]]:
    """
    Read a listing CSV with a header row.

    Columns that are not listing fields are ignored, blank lines skipped.
    """
    if isinstance(content, bytes):
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CsvImportError("CSV file must be UTF-8 encoded") from exc
    else:
        text = content.lstrip("\ufeff")

    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames:
        raise CsvImportError("CSV file has no header row")
    reader.fieldnames = [(name or "").strip() for name in reader.fieldnames]

    ignored = [name for name in reader.fieldnames if name and name not in LISTING_FIELDS]
    if ignored:
        logger.info("Ignoring CSV columns: %s", ", ".join(ignored))

    rows: List[Dict[str, str]] = []
    for record in reader:
        row = {
            key: value
            for key, value in record.items()
            if key in LISTING_FIELDS and value is not None
        }
        if not any(value.strip() for value in row.values()):
            continue
        rows.append(row)

    if not rows:
        raise CsvImportError("No rows found.")
    return rows
