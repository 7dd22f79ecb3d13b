# File: tests/conftest.py

import os
import tempfile

# Settings are read at import time, so point them at throwaway resources first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="smart_rent_uploads_"))
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from smart_rent.api.deps import get_db, get_upload_dir
from smart_rent.db.init_db import init_db
from smart_rent.main import app


@pytest.fixture(scope="function")
def engine():
    """In-memory SQLite shared by every connection of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    sess = Session()
    try:
        yield sess
    finally:
        sess.close()


@pytest.fixture(scope="function")
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture(scope="function")
def client(engine, upload_dir):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_upload_dir] = lambda: upload_dir
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def signup_token(client, *, name, email, role, password="s3cret-pass"):
    resp = client.post(
        "/api/auth/signup",
        json={"name": name, "email": email, "password": password, "role": role},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["token"]


@pytest.fixture
def landlord_headers(client):
    token = signup_token(client, name="Lena Vermieter", email="lena@vermieter.de", role="landlord")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def tenant_headers(client):
    token = signup_token(client, name="Tim Mieter", email="tim@mieter.de", role="user")
    return {"Authorization": f"Bearer {token}"}
