from __future__ import annotations

import pytest

from src.mess_system.mess_system.main import create_app
from tests.fakes import FakeConnection, build_fake_container


@pytest.fixture
def client(container):
    app = create_app(container=container)
    return app.test_client()


def _login(client, email, password="secret123"):
    res = client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.get_json()
    return {"Authorization": f"Bearer {res.get_json()['data']['token']}"}


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.get_json()["status"] == "ok"

    db = client.get("/health/db")
    assert db.status_code == 200
    assert db.get_json()["status"] == "connected"


def test_health_db_reports_outage(store, tokens):
    app = create_app(container=build_fake_container(store, tokens, conn=FakeConnection(healthy=False)))
    res = app.test_client().get("/health/db")
    assert res.status_code == 500
    assert res.get_json()["status"] == "error"


def test_register_and_me(client):
    res = client.post(
        "/api/auth/register",
        json={"name": "Asha", "email": "asha@example.com", "password": "secret123"},
    )
    assert res.status_code == 201
    body = res.get_json()
    assert body["success"] is True
    assert body["data"]["user"]["role"] == "user"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['data']['token']}"})
    assert me.status_code == 200
    assert me.get_json()["data"]["email"] == "asha@example.com"


def test_error_envelopes(client, student):
    missing = client.get("/api/auth/me")
    assert missing.status_code == 401
    assert missing.get_json() == {"success": False, "error": "No token provided"}

    bad = client.get("/api/auth/me", headers={"Authorization": "Bearer nope"})
    assert bad.status_code == 401

    assert client.post("/api/auth/login", json={"email": "student@mess.local", "password": "x"}).status_code == 401
    assert client.get("/api/nowhere").get_json() == {"success": False, "error": "Route not found"}


def test_owner_routes_require_owner_role(client, student, owner, mess):
    headers = _login(client, "student@mess.local")

    res = client.post("/api/messes", json={"name": "X", "location": "Y"}, headers=headers)
    assert res.status_code == 403
    assert res.get_json()["error"].startswith("Access denied")

    assert client.get(f"/api/messes/{mess.mess_id}/today-summary", headers=headers).status_code == 403


def test_public_catalog(client, mess, monthly_plan):
    listed = client.get("/api/messes").get_json()["data"]
    assert [m["name"] for m in listed] == ["Annapurna Mess"]
    assert listed[0]["plans"][0]["price"] == "3000.00"

    plans = client.get(f"/api/messes/{mess.mess_id}/plans").get_json()["data"]
    assert [p["id"] for p in plans] == [monthly_plan.plan_id]

    assert client.get("/api/messes/999").status_code == 404


def test_owner_builds_catalog(client, owner):
    headers = _login(client, "owner@mess.local")

    created = client.post(
        "/api/messes",
        json={"name": "Sai Mess", "location": "Kothrud", "vegAvailable": True},
        headers=headers,
    )
    assert created.status_code == 201
    mess_id = created.get_json()["data"]["id"]

    plan = client.post(
        f"/api/messes/{mess_id}/plans",
        json={"name": "Veg Weekly", "price": 800, "durationType": "weekly", "mealType": "veg", "mealsPerDay": 2},
        headers=headers,
    )
    assert plan.status_code == 201
    assert plan.get_json()["data"]["mealsPerDay"] == 2

    updated = client.put(f"/api/messes/{mess_id}", json={"description": "Home food"}, headers=headers)
    assert updated.get_json()["data"]["description"] == "Home food"

    mine = client.get("/api/messes/my", headers=headers).get_json()["data"]
    assert [m["id"] for m in mine] == [mess_id]


def test_subscription_flow(client, owner, student, mess, monthly_plan):
    headers = _login(client, "student@mess.local")

    created = client.post(
        "/api/subscriptions",
        json={"planId": monthly_plan.plan_id, "startDate": "2024-01-15"},
        headers=headers,
    )
    assert created.status_code == 201
    sub = created.get_json()["data"]
    assert (sub["startDate"], sub["endDate"], sub["status"]) == ("2024-01-15", "2024-02-15", "active")

    dup = client.post(
        "/api/subscriptions",
        json={"planId": monthly_plan.plan_id, "startDate": "2024-01-20"},
        headers=headers,
    )
    assert dup.status_code == 409

    url = f"/api/subscriptions/{sub['id']}/attendance"
    assert client.post(url, json={"date": "2024-01-20", "lunch": True}, headers=headers).status_code == 200
    merged = client.post(url, json={"date": "2024-01-20", "breakfast": True}, headers=headers).get_json()["data"]
    assert (merged["breakfast"], merged["lunch"], merged["dinner"]) == (True, True, False)

    outside = client.post(url, json={"date": "2024-03-01", "lunch": True}, headers=headers)
    assert outside.status_code == 400

    history = client.get(url, query_string={"startDate": "2024-01-01", "endDate": "2024-01-31"}, headers=headers)
    body = history.get_json()
    assert [r["date"] for r in body["data"]] == ["2024-01-20"]
    assert body["stats"] == {"totalDays": 1, "breakfastCount": 1, "lunchCount": 1, "dinnerCount": 0}

    mine = client.get("/api/subscriptions/my", headers=headers).get_json()["data"]
    assert mine[0]["plan"]["mess"]["name"] == "Annapurna Mess"
    assert mine[0]["attendance"][0]["date"] == "2024-01-20"

    cancelled = client.patch(f"/api/subscriptions/{sub['id']}/cancel", headers=headers)
    assert cancelled.get_json()["data"]["status"] == "cancelled"
    assert client.patch(f"/api/subscriptions/{sub['id']}/cancel", headers=headers).status_code == 400


def test_other_user_cannot_touch_subscription(store, client, student, monthly_plan):
    store.add_user("Other", "other@mess.local")
    mine = _login(client, "student@mess.local")
    theirs = _login(client, "other@mess.local")

    sub = client.post(
        "/api/subscriptions",
        json={"planId": monthly_plan.plan_id, "startDate": "2024-01-15"},
        headers=mine,
    ).get_json()["data"]

    assert client.get(f"/api/subscriptions/{sub['id']}/attendance", headers=theirs).status_code == 403
    assert client.patch(f"/api/subscriptions/{sub['id']}/cancel", headers=theirs).status_code == 403
    assert client.patch("/api/subscriptions/999/cancel", headers=theirs).status_code == 404
