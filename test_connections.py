"""
Functional tests for connection requests.
Run: pytest test_connections.py
"""


def _request(client, headers, addressee_id):
    return client.post("/api/v1/connections", headers=headers, json={"addressee_id": addressee_id})


def test_request_accept_flow(client, register):
    alice, alice_h = register("alice@example.com", name="Alice")
    bob, bob_h = register("bob@example.com", name="Bob")

    response = _request(client, alice_h, bob["id"])
    assert response.status_code == 201
    connection_id = response.json()["id"]
    assert response.json()["status"] == "pending"

    pending = client.get("/api/v1/connections/pending", headers=bob_h).json()
    assert pending["total"] == 1
    assert pending["connections"][0]["requester"]["name"] == "Alice"

    # Only the addressee may respond
    assert client.post(f"/api/v1/connections/{connection_id}/accept", headers=alice_h).status_code == 403

    response = client.post(f"/api/v1/connections/{connection_id}/accept", headers=bob_h)
    assert response.status_code == 200
    assert response.json()["status"] == "accepted"

    for headers in (alice_h, bob_h):
        accepted = client.get("/api/v1/connections", headers=headers).json()
        assert accepted["total"] == 1
    assert client.get("/api/v1/connections/pending", headers=bob_h).json()["total"] == 0

    # Already answered
    assert client.post(f"/api/v1/connections/{connection_id}/reject", headers=bob_h).status_code == 409


def test_request_creates_notifications(client, register):
    alice, alice_h = register("alice@example.com", name="Alice")
    bob, bob_h = register("bob@example.com", name="Bob")

    connection_id = _request(client, alice_h, bob["id"]).json()["id"]
    notes = client.get("/api/v1/notifications", headers=bob_h).json()["notifications"]
    assert [n["notification_type"] for n in notes] == ["connection_request"]
    assert notes[0]["message"] == "Alice sent you a connection request"
    assert notes[0]["related_user_id"] == alice["id"]

    client.post(f"/api/v1/connections/{connection_id}/accept", headers=bob_h)
    notes = client.get("/api/v1/notifications", headers=alice_h).json()["notifications"]
    assert [n["notification_type"] for n in notes] == ["connection_accepted"]


def test_invalid_requests(client, register):
    alice, alice_h = register("alice@example.com")
    bob, bob_h = register("bob@example.com")

    assert _request(client, alice_h, alice["id"]).status_code == 400
    assert _request(client, alice_h, 9999).status_code == 404

    assert _request(client, alice_h, bob["id"]).status_code == 201
    assert _request(client, alice_h, bob["id"]).status_code == 409
    assert _request(client, bob_h, alice["id"]).status_code == 409

    assert client.post("/api/v1/connections/9999/accept", headers=bob_h).status_code == 404


def test_rejected_request_can_be_reopened(client, register):
    alice, alice_h = register("alice@example.com")
    bob, bob_h = register("bob@example.com")

    connection_id = _request(client, alice_h, bob["id"]).json()["id"]
    response = client.post(f"/api/v1/connections/{connection_id}/reject", headers=bob_h)
    assert response.json()["status"] == "rejected"

    response = _request(client, bob_h, alice["id"])
    assert response.status_code == 201
    assert response.json()["id"] == connection_id
    assert response.json()["requester_id"] == bob["id"]
    assert response.json()["status"] == "pending"
