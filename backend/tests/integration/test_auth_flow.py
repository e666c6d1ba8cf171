"""Session lifecycle through HTTP: create, login, refresh, logout."""

from __future__ import annotations

from sqlalchemy import func, select

from firehearts.models import RefreshCredential
from tests.factories.profile import ProfileFactory

PROFILE_BODY = {
    "id": "firebase-uid-1",
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "image": {"url": "http://localhost/profile/image/a.jpg", "blurhash": "LKO2?U%2Tw=w"},
    "yearOfStudy": 2,
}


def _auth(app, token: str) -> dict[str, str]:
    return {app.config["AUTH_HEADER_NAME"]: f"Bearer {token}"}


def test_create_profile_returns_token_pair(client, app, session):
    resp = client.post("/profile", json=PROFILE_BODY)

    assert resp.status_code == 201
    body = resp.get_json()
    assert set(body) == {"accessToken", "refreshToken"}
    stored = session.execute(select(func.count()).select_from(RefreshCredential)).scalar_one()
    assert stored == 1

    me = client.get("/user/firebase-uid-1", headers=_auth(app, body["accessToken"]))
    assert me.status_code == 200
    assert me.get_json()["rank"] == 1


def test_create_profile_duplicate_id_conflicts(client):
    assert client.post("/profile", json=PROFILE_BODY).status_code == 201
    resp = client.post("/profile", json=PROFILE_BODY)
    assert resp.status_code == 409
    assert resp.get_json()["code"] == "conflict"


def test_create_profile_validation_error(client):
    resp = client.post("/profile", json={"id": "x", "name": "Ada"})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["code"] == "validation_error"
    assert "email" in body["details"]["errors"]


def test_login_unknown_profile_is_404(client):
    resp = client.post("/login", json={"id": "ghost"})
    assert resp.status_code == 404
    assert resp.get_json()["code"] == "not_found"


def test_login_refresh_logout_cycle(client, app):
    ProfileFactory(user_id="p1")

    login = client.post("/login", json={"id": "p1"})
    assert login.status_code == 201
    pair = login.get_json()

    refreshed = client.post("/token", json={"token": pair["refreshToken"]})
    assert refreshed.status_code == 201
    assert refreshed.get_json()["refreshToken"] == pair["refreshToken"]

    logout = client.delete("/logout", headers=_auth(app, pair["accessToken"]))
    assert logout.status_code == 200
    assert logout.get_json() == {"message": "Logged out successfully"}

    again = client.post("/token", json={"token": pair["refreshToken"]})
    assert again.status_code == 403
    assert again.get_json()["code"] == "credential_not_found"


def test_refresh_without_token_is_401(client):
    resp = client.post("/token", json={})
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "unauthorized"


def test_protected_route_without_header_is_401(client):
    resp = client.get("/random")
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Unauthorized"


def test_protected_route_with_bad_token_is_403(client, app):
    resp = client.get("/random", headers=_auth(app, "garbage"))
    assert resp.status_code == 403
    body = resp.get_json()
    assert body["code"] == "token_invalid"
    assert body["message"] == "Token Invalid"


def test_access_token_cannot_be_used_as_refresh(client):
    ProfileFactory(user_id="p1")
    pair = client.post("/login", json={"id": "p1"}).get_json()
    resp = client.post("/token", json={"token": pair["accessToken"]})
    assert resp.status_code == 403


def test_request_id_is_echoed(client):
    resp = client.get("/health", headers={"X-Request-ID": "rid-42"})
    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"] == "rid-42"
    assert resp.get_json() == {"status": "ok", "db": "ok"}
