# File: tests/test_import_listings.py

import pytest
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from smart_rent.models.listing import Listing
from smart_rent.scripts import import_listings

CSV = (
    "title,city,size_m2,rent_cold,url\n"
    "Studio Nordstadt,Kassel,25,390,https://example.org/k1\n"
    "Zimmer Wehlheiden,Kassel,14,280,\n"
    "Abstellkammer,Kassel,3,90,\n"
)


@pytest.fixture
def script_db(engine, monkeypatch):
    """Point the import script at the test engine; its tables already exist."""
    monkeypatch.setattr(import_listings, "SessionLocal", sessionmaker(bind=engine, autoflush=False))
    monkeypatch.setattr(import_listings, "init_db", lambda: None)
    return engine


def test_import_file_inserts_valid_rows(script_db, db_session, tmp_path):
    csv_path = tmp_path / "kassel.csv"
    csv_path.write_text(CSV, encoding="utf-8")

    assert import_listings.import_file(csv_path) == 2

    listings = db_session.scalars(select(Listing).order_by(Listing.id)).all()
    assert [item.title for item in listings] == ["Studio Nordstadt", "Zimmer Wehlheiden"]
    assert {item.source for item in listings} == {"csv"}

    # Known urls are skipped on a second run, rows without one are not
    assert import_listings.import_file(csv_path) == 1


def test_main_records_requested_source(script_db, db_session, tmp_path):
    csv_path = tmp_path / "scraped.csv"
    csv_path.write_text(CSV, encoding="utf-8")

    assert import_listings.main([str(csv_path), "--source", "scrape"]) == 0
    assert set(db_session.scalars(select(Listing.source))) == {"scrape"}


def test_main_fails_for_missing_file(script_db, tmp_path):
    assert import_listings.main([str(tmp_path / "nope.csv")]) == 1


def test_main_fails_for_file_without_rows(script_db, db_session, tmp_path):
    csv_path = tmp_path / "empty.csv"
    csv_path.write_text("title,city,size_m2,rent_cold\n", encoding="utf-8")

    assert import_listings.main([str(csv_path)]) == 1
    assert db_session.scalars(select(Listing)).all() == []
