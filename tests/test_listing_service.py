# File: tests/test_listing_service.py

import pytest

from smart_rent.schemas.listing import ListingCreate, ListingFilter
from smart_rent.services.listing_service import (
    ListingNotFound,
    ListingValidationError,
    as_number,
    build_filter_clauses,
    bulk_create_listings,
    check_required_fields,
    delete_listing,
    drop_duplicate_urls,
    normalize_rows,
    search_listings,
)


def row(**fields):
    return {"title": "Zimmer", "city": "Marburg", "size_m2": "16", "rent_cold": "290", **fields}


@pytest.mark.parametrize(
    "value, expected",
    [(22, 22.0), ("18.5", 18.5), (" 300 ", 300.0), ("", None), ("abc", None), (None, None), (True, None), ("nan", None)],
)
def test_as_number(value, expected):
    assert as_number(value) == expected


def test_required_field_check():
    check_required_fields([row(), row(rooms="2")])

    with pytest.raises(ListingValidationError, match="Expected an array"):
        check_required_fields([])
    with pytest.raises(ListingValidationError, match="row 2"):
        check_required_fields([row(), row(title="  ")])
    with pytest.raises(ListingValidationError, match="row 1"):
        check_required_fields([row(rent_cold=None)])
    with pytest.raises(ListingValidationError, match="unknown fields: lat"):
        check_required_fields([row(lat="50.8")])


def test_normalize_rows_defaults_source_and_counts_rejects():
    payloads, rejected = normalize_rows([row(), row(size_m2="2"), row(source="scrape"), row(source="fax")])
    assert rejected == 2
    assert [p.source for p in payloads] == ["csv", "scrape"]


def test_normalize_rows_rejects_booleans_and_non_finite_numbers():
    payloads, rejected = normalize_rows(
        [row(), row(rent_warm="inf"), row(rent_warm="-Infinity"), row(rooms=True), row(size_m2="NaN")]
    )
    assert rejected == 4
    assert len(payloads) == 1
    assert payloads[0].rooms == 1


def test_drop_duplicate_urls_within_batch(db_session):
    payloads = [
        ListingCreate.model_validate(row(url="https://example.org/1")),
        ListingCreate.model_validate(row(url="https://example.org/1")),
        ListingCreate.model_validate(row()),
        ListingCreate.model_validate(row()),
    ]
    kept, duplicates = drop_duplicate_urls(db_session, payloads)
    assert duplicates == 1
    assert len(kept) == 3


def test_build_filter_clauses_only_for_supplied_values():
    assert build_filter_clauses(ListingFilter()) == []
    clauses = build_filter_clauses(ListingFilter(city="Marburg", min_rent=200, furnished=False))
    assert len(clauses) == 3


def test_bulk_then_search_and_delete(db_session):
    inserted = bulk_create_listings(db_session, [row(title="A", rent_cold="250"), row(title="B", rent_cold="500")])
    assert inserted == 2

    found = search_listings(db_session, ListingFilter(max_rent=300))
    assert [listing.title for listing in found] == ["A"]

    delete_listing(db_session, found[0].id)
    with pytest.raises(ListingNotFound):
        delete_listing(db_session, found[0].id)
