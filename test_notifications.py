"""
Functional tests for notifications.
Run: pytest test_notifications.py
"""

import pytest
from fastapi import HTTPException

from youniverse.services.notification_service import notification_service


def _connect(client, headers, addressee_id):
    response = client.post("/api/v1/connections", headers=headers, json={"addressee_id": addressee_id})
    assert response.status_code == 201, response.text
    return response.json()


def test_list_and_mark_read(client, register):
    ana, ana_h = register("ana@example.com", name="Ana")
    ben, ben_h = register("ben@example.com", name="Ben")
    cy, cy_h = register("cy@example.com", name="Cy")

    _connect(client, ben_h, ana["id"])
    _connect(client, cy_h, ana["id"])

    listing = client.get("/api/v1/notifications", headers=ana_h).json()
    assert listing["total"] == 2
    assert listing["unread_count"] == 2
    # Newest first
    assert [n["related_user_id"] for n in listing["notifications"]] == [cy["id"], ben["id"]]

    first_id = listing["notifications"][0]["id"]
    marked = client.post(f"/api/v1/notifications/{first_id}/read", headers=ana_h)
    assert marked.status_code == 200
    assert marked.json()["is_read"] is True
    assert marked.json()["read_at"] is not None

    unread = client.get("/api/v1/notifications", headers=ana_h, params={"unread_only": True}).json()
    assert [n["related_user_id"] for n in unread["notifications"]] == [ben["id"]]
    assert unread["unread_count"] == 1


def test_mark_read_access_checks(client, register):
    ana, ana_h = register("ana@example.com")
    _, ben_h = register("ben@example.com")
    _connect(client, ben_h, ana["id"])

    note_id = client.get("/api/v1/notifications", headers=ana_h).json()["notifications"][0]["id"]

    assert client.post(f"/api/v1/notifications/{note_id}/read", headers=ben_h).status_code == 403
    assert client.post("/api/v1/notifications/9999/read", headers=ana_h).status_code == 404


def test_read_all(client, register):
    ana, ana_h = register("ana@example.com")
    _, ben_h = register("ben@example.com")
    _, cy_h = register("cy@example.com")
    _connect(client, ben_h, ana["id"])
    _connect(client, cy_h, ana["id"])

    response = client.post("/api/v1/notifications/read-all", headers=ana_h)
    assert response.json() == {"marked_read": 2}

    assert client.get("/api/v1/notifications", headers=ana_h).json()["unread_count"] == 0
    assert client.post("/api/v1/notifications/read-all", headers=ana_h).json() == {"marked_read": 0}


def test_requires_authentication(client):
    assert client.get("/api/v1/notifications").status_code == 401


def test_service_rejects_unknown_type(db, register):
    ana, _ = register("ana@example.com")

    with pytest.raises(HTTPException) as exc:
        notification_service.create_notification(
            db,
            user_id=ana["id"],
            title="Hi",
            message="Hello",
            notification_type="reminder",
        )

    assert exc.value.status_code == 400
