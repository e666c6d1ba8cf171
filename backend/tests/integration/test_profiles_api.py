"""Profile endpoints over HTTP."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from tests.factories.profile import ProfileFactory


def test_get_user_includes_rank_and_wire_names(client, auth_headers):
    ProfileFactory(user_id="top", firehearts=900)
    me = ProfileFactory(user_id="me", firehearts=650, year_of_study=3)

    resp = client.get("/user/me", headers=auth_headers(me))

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["id"] == "me"
    assert body["_id"] == me.id
    assert body["rank"] == 2
    assert body["yearOfStudy"] == 3
    assert "lastEdited" in body


def test_get_user_missing_is_404(client, auth_headers):
    me = ProfileFactory()
    resp = client.get("/user/ghost", headers=auth_headers(me))
    assert resp.status_code == 404


def test_leaderboard_count_two_returns_oldest_top_scores(client):
    base = datetime(2024, 1, 1, tzinfo=UTC)
    ProfileFactory(user_id="b", firehearts=900, last_edited=base + timedelta(minutes=5))
    ProfileFactory(user_id="a", firehearts=900, last_edited=base)
    ProfileFactory(user_id="c", firehearts=700, last_edited=base - timedelta(days=1))

    resp = client.get("/leaderboard?count=2")

    assert resp.status_code == 200
    assert [p["id"] for p in resp.get_json()] == ["a", "b"]


def test_leaderboard_count_from_json_body(client):
    ProfileFactory.create_batch(4)
    resp = client.get("/leaderboard", json={"count": 3})
    assert len(resp.get_json()) == 3


def test_leaderboard_defaults_to_ten(client):
    ProfileFactory.create_batch(12)
    assert len(client.get("/leaderboard").get_json()) == 10


def test_leaderboard_rejects_bad_count(client):
    resp = client.get("/leaderboard?count=zero")
    assert resp.status_code == 400


def test_random_defaults_to_five(client, auth_headers):
    profiles = ProfileFactory.create_batch(8)
    resp = client.get("/random", headers=auth_headers(profiles[0]))
    assert resp.status_code == 200
    assert len(resp.get_json()) == 5


def test_update_only_year_of_study(client, auth_headers):
    me = ProfileFactory(user_id="me", name="Ada", year_of_study=1)
    before = client.get("/user/me", headers=auth_headers(me)).get_json()

    resp = client.patch("/update", json={"yearOfStudy": 4}, headers=auth_headers(me))

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["yearOfStudy"] == 4
    for key in ("name", "email", "image", "firehearts"):
        assert body[key] == before[key]
    assert body["lastEdited"] != before["lastEdited"]


def test_update_targets_the_caller(client, auth_headers):
    me = ProfileFactory(user_id="me")
    ProfileFactory(user_id="other", name="Other")
    resp = client.patch("/update", json={"name": "Renamed"}, headers=auth_headers(me))
    assert resp.get_json()["id"] == "me"
    assert resp.get_json()["name"] == "Renamed"


def test_update_image_deletes_previous_file(client, auth_headers, upload_dir):
    upload_dir.mkdir(parents=True, exist_ok=True)
    (upload_dir / "old.jpg").write_bytes(b"old")
    me = ProfileFactory(user_id="me", image={"url": "http://localhost/profile/image/old.jpg"})

    resp = client.patch(
        "/update",
        json={"image": {"url": "http://localhost/profile/image/new.jpg", "blurhash": "x"}},
        headers=auth_headers(me),
    )

    assert resp.status_code == 201
    assert not (upload_dir / "old.jpg").exists()


def test_update_succeeds_when_previous_file_is_gone(client, auth_headers):
    me = ProfileFactory(user_id="me", image={"url": "http://localhost/profile/image/gone.jpg"})
    resp = client.patch(
        "/update",
        json={"image": {"url": "http://localhost/profile/image/new.jpg"}},
        headers=auth_headers(me),
    )
    assert resp.status_code == 201
    assert resp.get_json()["image"]["url"].endswith("new.jpg")


@pytest.mark.parametrize(("delta", "expected"), [(10000, 620), (-10000, 580), (7, 607)])
def test_increment_is_clamped(client, auth_headers, delta, expected):
    me = ProfileFactory(user_id="me")
    target = ProfileFactory(user_id="target", firehearts=600)

    resp = client.patch(
        "/increment", json={"id": target.user_id, "increment": delta}, headers=auth_headers(me)
    )

    assert resp.status_code == 201
    assert resp.get_json()["firehearts"] == expected


def test_increment_null_keeps_score(client, auth_headers):
    me = ProfileFactory(user_id="me", firehearts=640)
    resp = client.patch("/increment", json={"id": "me", "increment": None}, headers=auth_headers(me))
    assert resp.get_json()["firehearts"] == 640


def test_increment_unknown_target_is_404(client, auth_headers):
    me = ProfileFactory(user_id="me")
    resp = client.patch("/increment", json={"id": "ghost", "increment": 1}, headers=auth_headers(me))
    assert resp.status_code == 404
