# File: tests/test_auth.py

from sqlalchemy import select

from smart_rent.core.security import decode_access_token
from smart_rent.models.user import User

SIGNUP = {"name": "Lena Vermieter", "email": "lena@vermieter.de", "password": "s3cret-pass", "role": "landlord"}


def test_signup_returns_token_and_public_user(client):
    resp = client.post("/api/auth/signup", json=SIGNUP)
    assert resp.status_code == 201
    data = resp.json()
    assert data["user"] == {"name": "Lena Vermieter", "role": "landlord"}
    assert "password" not in resp.text

    identity = decode_access_token(data["token"])
    assert identity.role == "landlord"


def test_signup_stores_only_a_hash(client, db_session):
    client.post("/api/auth/signup", json=SIGNUP)
    user = db_session.scalar(select(User).where(User.email == "lena@vermieter.de"))
    assert user is not None
    assert user.password_hash != SIGNUP["password"]
    assert user.password_hash.startswith("$2")
    assert user.documents == []
    assert user.is_verified is False


def test_signup_defaults_to_user_role(client):
    body = {k: v for k, v in SIGNUP.items() if k != "role"}
    resp = client.post("/api/auth/signup", json=body)
    assert resp.json()["user"]["role"] == "user"


def test_signup_missing_fields(client):
    for field in ("name", "email", "password"):
        body = {k: v for k, v in SIGNUP.items() if k != field}
        resp = client.post("/api/auth/signup", json=body)
        assert resp.status_code == 400, field
        assert field in resp.json()["error"]


def test_signup_blank_name_and_unknown_role(client):
    assert client.post("/api/auth/signup", json={**SIGNUP, "name": "   "}).status_code == 400
    assert client.post("/api/auth/signup", json={**SIGNUP, "role": "admin"}).status_code == 400


def test_signup_duplicate_email(client):
    assert client.post("/api/auth/signup", json=SIGNUP).status_code == 201
    resp = client.post("/api/auth/signup", json={**SIGNUP, "email": "LENA@vermieter.de"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "User already exists"}


def test_login_success(client):
    client.post("/api/auth/signup", json=SIGNUP)
    resp = client.post("/api/auth/login", json={"email": "lena@vermieter.de", "password": "s3cret-pass"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["user"] == {"name": "Lena Vermieter", "role": "landlord"}
    assert decode_access_token(data["token"]).role == "landlord"


def test_login_failures_are_indistinguishable(client):
    client.post("/api/auth/signup", json=SIGNUP)
    wrong_password = client.post("/api/auth/login", json={"email": "lena@vermieter.de", "password": "nope"})
    unknown_email = client.post("/api/auth/login", json={"email": "ghost@vermieter.de", "password": "s3cret-pass"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


def test_login_token_grants_landlord_access(client):
    client.post("/api/auth/signup", json=SIGNUP)
    token = client.post("/api/auth/login", json={"email": "lena@vermieter.de", "password": "s3cret-pass"}).json()["token"]
    resp = client.post(
        "/api/listings",
        json={"title": "Studio", "city": "Marburg", "size_m2": 22, "rent_cold": 350},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 201
