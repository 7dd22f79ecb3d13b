# File: smart_rent/services/listing_service.py

"""
Listing query and ingest service.

Search turns a ListingFilter into SQL predicates. Ingest validates single
submissions strictly and CSV-style batches in two passes: a required-field
check that rejects the whole batch, then per-row normalization where rows
that break a field constraint or repeat a known url are skipped.
"""

import logging
import math
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from smart_rent.models.listing import Listing
from smart_rent.schemas.listing import LISTING_FIELDS, ListingCreate, ListingFilter

logger = logging.getLogger(__name__)

# Fixed cap, there is no pagination
MAX_RESULTS = 100


class ListingValidationError(ValueError):
    pass


class ListingNotFound(LookupError):
    pass


# -----------------------------
# Query
# -----------------------------

def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_filter_clauses(filters: ListingFilter) -> list:
    clauses = []
    if filters.city is not None:
        clauses.append(Listing.city == filters.city)
    if filters.min_rent is not None:
        clauses.append(Listing.rent_cold >= filters.min_rent)
    if filters.max_rent is not None:
        clauses.append(Listing.rent_cold <= filters.max_rent)
    if filters.min_size is not None:
        clauses.append(Listing.size_m2 >= filters.min_size)
    if filters.max_size is not None:
        clauses.append(Listing.size_m2 <= filters.max_size)
    if filters.furnished is not None:
        clauses.append(Listing.furnished == filters.furnished)
    if filters.q is not None:
        clauses.append(Listing.title.ilike(_like_pattern(filters.q), escape="\\"))
    return clauses


def search_listings(db: Session, filters: ListingFilter) -> List[Listing]:
    stmt = (
        select(Listing)
        .where(*build_filter_clauses(filters))
        .order_by(Listing.created_at.desc(), Listing.id.desc())
        .limit(MAX_RESULTS)
    )
    return list(db.scalars(stmt))


# -----------------------------
# Single create
# -----------------------------

def url_exists(db: Session, url: Optional[str]) -> bool:
    if not url:
        return False
    return db.scalar(select(Listing.id).where(Listing.url == url)) is not None


def create_listing(db: Session, payload: ListingCreate) -> Listing:
    if url_exists(db, payload.url):
        raise ListingValidationError("A listing with this url already exists")

    listing = Listing(**payload.model_dump())
    db.add(listing)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ListingValidationError("A listing with this url already exists") from exc
    db.refresh(listing)
    logger.info("Created listing %s (%s, %s)", listing.id, listing.title, listing.city)
    return listing


# -----------------------------
# Bulk create
# -----------------------------

def as_number(value: Any) -> Optional[float]:
    """Return value as a finite float, or None when it is not numeric."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def check_required_fields(rows: Sequence[Any]) -> None:
    """
    Reject the whole batch when any row lacks a required field, has a
    non-numeric size or rent, or carries fields a listing does not have.
    """
    if not rows:
        raise ListingValidationError("Expected an array of listings")

    for index, row in enumerate(rows, start=1):
        if not isinstance(row, dict):
            raise ListingValidationError(f"Row {index} is not an object")

        unknown = sorted(set(row) - set(LISTING_FIELDS))
        if unknown:
            raise ListingValidationError(f"Row {index} has unknown fields: {', '.join(unknown)}")

        has_text = all(isinstance(row.get(key), str) and row[key].strip() for key in ("title", "city"))
        has_numbers = all(as_number(row.get(key)) is not None for key in ("size_m2", "rent_cold"))
        if not (has_text and has_numbers):
            raise ListingValidationError(
                f"Each item needs title, city, size_m2, rent_cold (row {index})"
            )


def normalize_rows(rows: Iterable[dict], default_source: str = "csv") -> Tuple[List[ListingCreate], int]:
    """Validate each row on its own; returns the valid payloads and how many were dropped."""
    payloads: List[ListingCreate] = []
    rejected = 0
    for index, row in enumerate(rows, start=1):
        data = dict(row)
        if not str(data.get("source") or "").strip():
            data["source"] = default_source
        try:
            payloads.append(ListingCreate.model_validate(data))
        except ValidationError as exc:
            rejected += 1
            logger.info("Skipping row %d: %s", index, exc.errors()[0].get("msg"))
    return payloads, rejected


def drop_duplicate_urls(db: Session, payloads: List[ListingCreate]) -> Tuple[List[ListingCreate], int]:
    urls = {p.url for p in payloads if p.url}
    known = set()
    if urls:
        known = set(db.scalars(select(Listing.url).where(Listing.url.in_(urls))))

    kept: List[ListingCreate] = []
    for payload in payloads:
        if payload.url:
            if payload.url in known:
                continue
            known.add(payload.url)
        kept.append(payload)
    return kept, len(payloads) - len(kept)


def _insert_batch(db: Session, payloads: List[ListingCreate]) -> int:
    db.add_all([Listing(**p.model_dump()) for p in payloads])
    try:
        db.commit()
        return len(payloads)
    except IntegrityError:
        db.rollback()
        logger.warning("Batch insert hit a constraint, retrying %d rows one by one", len(payloads))

    inserted = 0
    for payload in payloads:
        db.add(Listing(**payload.model_dump()))
        try:
            db.commit()
            inserted += 1
        except IntegrityError:
            db.rollback()
    return inserted


def bulk_create_listings(db: Session, rows: Sequence[Any], default_source: str = "csv") -> int:
    """
    Insert a batch of listings and return how many rows were stored.

    Raises ListingValidationError before touching the store when the batch
    is empty or a row misses a required field.
    """
    check_required_fields(rows)
    payloads, rejected = normalize_rows(rows, default_source=default_source)
    payloads, duplicates = drop_duplicate_urls(db, payloads)

    inserted = _insert_batch(db, payloads) if payloads else 0
    logger.info(
        "Bulk import: %d rows received, %d inserted, %d rejected, %d duplicates",
        len(rows), inserted, rejected, duplicates + len(payloads) - inserted,
    )
    return inserted


# -----------------------------
# Delete
# -----------------------------

def delete_listing(db: Session, listing_id: int) -> None:
    listing = db.get(Listing, listing_id)
    if listing is None:
        raise ListingNotFound(f"Listing {listing_id} not found")
    db.delete(listing)
    db.commit()
    logger.info("Deleted listing %s", listing_id)
