# File: smart_rent/api/v1/routes_listings.py

"""
Listing endpoints.

Search is public; creating, importing and deleting listings need a
landlord token.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, File, HTTPException, Query, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from smart_rent.api.deps import DbSession, Landlord
from smart_rent.api.errors import format_validation_errors
from smart_rent.schemas.listing import (
    BulkInsertResult,
    DeleteListingResponse,
    ListingCreate,
    ListingFilter,
    ListingRead,
)
from smart_rent.services import listing_service
from smart_rent.services.csv_import import CsvImportError, parse_listing_csv
from smart_rent.services.listing_service import ListingNotFound, ListingValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


def _store_failure(db, action: str) -> HTTPException:
    logger.exception("Store failure while trying to %s", action)
    db.rollback()
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )


@router.get("", response_model=List[ListingRead], summary="Search listings")
def list_listings(
    db: DbSession,
    city: Optional[str] = None,
    min_rent: Optional[str] = Query(None, alias="minRent"),
    max_rent: Optional[str] = Query(None, alias="maxRent"),
    min_size: Optional[str] = Query(None, alias="minSize"),
    max_size: Optional[str] = Query(None, alias="maxSize"),
    furnished: Optional[str] = None,
    q: Optional[str] = None,
):
    """
    Up to 100 listings, newest first. Every supplied filter must match.
    """
    try:
        filters = ListingFilter.model_validate(
            {
                "city": city,
                "min_rent": min_rent,
                "max_rent": max_rent,
                "min_size": min_size,
                "max_size": max_size,
                "furnished": furnished,
                "q": q,
            }
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=format_validation_errors(exc.errors()))

    try:
        return listing_service.search_listings(db, filters)
    except SQLAlchemyError:
        raise _store_failure(db, "fetch listings")


@router.post(
    "",
    response_model=ListingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a listing",
)
def create_listing(payload: ListingCreate, db: DbSession, landlord: Landlord):
    try:
        return listing_service.create_listing(db, payload)
    except ListingValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except SQLAlchemyError:
        raise _store_failure(db, "create listing")


@router.post(
    "/bulk",
    response_model=BulkInsertResult,
    status_code=status.HTTP_201_CREATED,
    summary="Import many listings",
)
def bulk_create_listings(
    db: DbSession,
    landlord: Landlord,
    rows: List[Dict[str, Any]] = Body(...),
):
    """
    Rows missing title, city, size_m2 or rent_cold fail the whole request.
    Rows that break another constraint, or repeat a known url, are skipped.
    """
    try:
        inserted = listing_service.bulk_create_listings(db, rows)
    except ListingValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except SQLAlchemyError:
        raise _store_failure(db, "bulk insert listings")
    return BulkInsertResult(inserted=inserted)


@router.post(
    "/import-csv",
    response_model=BulkInsertResult,
    status_code=status.HTTP_201_CREATED,
    summary="Import listings from a CSV file",
)
def import_listings_csv(
    db: DbSession,
    landlord: Landlord,
    file: UploadFile = File(...),
):
    try:
        rows = parse_listing_csv(file.file.read())
        inserted = listing_service.bulk_create_listings(db, rows)
    except (CsvImportError, ListingValidationError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except SQLAlchemyError:
        raise _store_failure(db, "import listings")
    logger.info("CSV import %r by user %s: %d listings", file.filename, landlord.user_id, inserted)
    return BulkInsertResult(inserted=inserted)


@router.delete(
    "/{listing_id}",
    response_model=DeleteListingResponse,
    summary="Delete a listing",
)
def delete_listing(listing_id: str, db: DbSession, landlord: Landlord):
    # A malformed id names no listing, same as an unknown one
    try:
        pk = int(listing_id)
    except ValueError:
        raise HTTPException(status_code=404, detail="Listing not found")

    try:
        listing_service.delete_listing(db, pk)
    except ListingNotFound:
        raise HTTPException(status_code=404, detail="Listing not found")
    except SQLAlchemyError:
        raise _store_failure(db, "delete listing")
    return DeleteListingResponse(message="Listing deleted successfully", id=pk)
