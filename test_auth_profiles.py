"""
Functional tests for registration, login and student profiles.
Run: pytest test_auth_profiles.py
"""


def test_register_sets_onboarding_defaults(register):
    user, _ = register("Priya@Example.com", name="Priya")

    assert user["email"] == "priya@example.com"
    assert user["role"] == "student_in_india"
    assert user["country"] == "India"
    assert user["profile_completed"] is False
    assert user["is_new_user"] is True


def test_register_duplicate_email_rejected(client, register):
    register("dup@example.com")

    response = client.post(
        "/api/v1/auth/register",
        json={"email": "dup@example.com", "password": "secret123", "name": "Again"},
    )

    assert response.status_code == 400


def test_login_and_me(client, register):
    register("login@example.com", name="Login User")

    response = client.post(
        "/api/v1/auth/login",
        data={"username": "login@example.com", "password": "secret123"},
    )
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["name"] == "Login User"


def test_login_wrong_password(client, register):
    register("wrong@example.com")

    response = client.post(
        "/api/v1/auth/login",
        data={"username": "wrong@example.com", "password": "nope-nope"},
    )

    assert response.status_code == 401


def test_requests_without_token_are_rejected(client):
    assert client.get("/api/v1/profiles/me").status_code == 401
    bad = {"Authorization": "Bearer not-a-jwt"}
    assert client.get("/api/v1/profiles/me", headers=bad).status_code == 401


def test_complete_and_update_profile(client, register):
    _, headers = register("setup@example.com")

    response = client.post(
        "/api/v1/profiles/me/complete",
        headers=headers,
        json={"role": "student_abroad", "country": "Germany", "course": "Physics"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "student_abroad"
    assert body["profile_completed"] is True
    assert body["is_new_user"] is False

    response = client.put("/api/v1/profiles/me", headers=headers, json={"bio": "Hello"})
    assert response.status_code == 200
    assert response.json()["bio"] == "Hello"
    assert response.json()["country"] == "Germany"


def test_complete_profile_rejects_unknown_role(client, register):
    _, headers = register("badrole@example.com")

    response = client.post(
        "/api/v1/profiles/me/complete",
        headers=headers,
        json={"role": "professor", "country": "India"},
    )

    assert response.status_code == 422


def test_update_cannot_clear_required_fields(client, register):
    _, headers = register("nulls@example.com", name="Keeps Name")

    for field in ("name", "role", "country"):
        response = client.put("/api/v1/profiles/me", headers=headers, json={field: None})
        assert response.status_code == 422, field

    me = client.get("/api/v1/profiles/me", headers=headers).json()
    assert me["name"] == "Keeps Name"
    assert me["country"] == "India"


def test_register_validates_and_normalizes_email(client):
    for bad in ("not-an-email", "two@@example.com", "missing-domain@"):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": bad, "password": "secret123", "name": "Bad"},
        )
        assert response.status_code == 422, bad

    response = client.post(
        "/api/v1/auth/register",
        json={"email": "  Mixed.Case@Example.com ", "password": "secret123", "name": "Mixed"},
    )
    assert response.status_code == 201
    assert response.json()["user"]["email"] == "mixed.case@example.com"


def test_get_profile_not_found(client, register):
    _, headers = register("viewer@example.com")

    assert client.get("/api/v1/profiles/9999", headers=headers).status_code == 404


def test_search_composes_filters_and_excludes_viewer(client, register):
    _, viewer = register("viewer@example.com", name="Viewer")
    _, h1 = register("ana@example.com", name="Ana")
    _, h2 = register("ben@example.com", name="Ben")
    _, h3 = register("cy@example.com", name="Cy")

    client.put("/api/v1/profiles/me", headers=h1, json={"country": "Germany", "course": "Physics", "university": "TU Munich"})
    client.put("/api/v1/profiles/me", headers=h2, json={"country": "Germany", "course": "History"})
    client.put("/api/v1/profiles/me", headers=h3, json={"country": "Canada", "course": "Physics", "bio": "Loves munich beer"})

    def names(**params):
        response = client.get("/api/v1/profiles", headers=viewer, params=params)
        assert response.status_code == 200
        return sorted(s["name"] for s in response.json()["students"])

    assert names() == ["Ana", "Ben", "Cy"]
    assert names(country="Germany") == ["Ana", "Ben"]
    assert names(country="Germany", course="Physics") == ["Ana"]
    assert names(search="MUNICH") == ["Ana", "Cy"]
    assert names(search="munich", country="Canada") == ["Cy"]
    assert names(role="student_abroad") == []


def test_search_reports_connection_status(client, register):
    _, viewer = register("viewer@example.com", name="Viewer")
    friend, friend_headers = register("friend@example.com", name="Friend")
    asked, _ = register("asked@example.com", name="Asked")
    register("stranger@example.com", name="Stranger")

    request = client.post("/api/v1/connections", headers=viewer, json={"addressee_id": friend["id"]})
    client.post(f"/api/v1/connections/{request.json()['id']}/accept", headers=friend_headers)
    client.post("/api/v1/connections", headers=viewer, json={"addressee_id": asked["id"]})

    students = client.get("/api/v1/profiles", headers=viewer).json()["students"]
    statuses = {s["name"]: s["connection_status"] for s in students}

    assert statuses == {"Friend": "connected", "Asked": "pending", "Stranger": "none"}
