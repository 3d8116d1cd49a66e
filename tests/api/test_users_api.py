def register(client, **overrides):
    payload = {
        "username": "octocat",
        "email": "octocat@example.com",
        "password": "hunter22",
        "firstName": "Mona",
        "lastName": "Lisa",
        "title": "Mascot",
        "experienceLevel": "professional",
        "skills": ["Git", "Actions"],
    }
    payload.update(overrides)
    return client.post("/api/users", json=payload)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_register_returns_camel_case_without_password(client):
    resp = register(client)

    assert resp.status_code == 201
    body = resp.json()
    assert body["firstName"] == "Mona"
    assert body["experienceLevel"] == "professional"
    assert body["isOnline"] is False
    assert body["openToCollaborate"] is True
    assert "password" not in body
    assert "createdAt" in body


def test_register_duplicate_username(client):
    register(client)
    resp = register(client, email="other@example.com")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Username already exists"


def test_register_invalid_payload(client):
    resp = register(client, experienceLevel="wizard")
    assert resp.status_code == 422


def test_get_update_and_missing_user(client):
    user_id = register(client).json()["id"]

    assert client.get(f"/api/users/{user_id}").json()["username"] == "octocat"

    resp = client.patch(f"/api/users/{user_id}", json={"bio": "I like forks"})
    assert resp.status_code == 200
    assert resp.json()["bio"] == "I like forks"

    assert client.get("/api/users/999").status_code == 404
    assert client.patch("/api/users/999", json={"bio": "x"}).status_code == 404


def test_online_status(client):
    user_id = register(client).json()["id"]

    resp = client.post(f"/api/users/{user_id}/online-status", json={"isOnline": True})

    assert resp.status_code == 200
    assert client.get(f"/api/users/{user_id}").json()["isOnline"] is True


def test_search(client):
    register(client)
    register(
        client,
        username="newbie",
        email="newbie@example.com",
        experienceLevel="beginner",
        skills=["HTML/CSS"],
    )

    resp = client.get("/api/users/search", params={"experienceLevel": ["beginner", "intermediate"]})
    assert [u["username"] for u in resp.json()] == ["newbie"]

    resp = client.get("/api/users/search", params={"skills": "git"})
    assert [u["username"] for u in resp.json()] == ["octocat"]

    assert len(client.get("/api/users").json()) == 2


def test_login(client):
    register(client)

    ok = client.post("/api/auth/login", json={"username": "octocat", "password": "hunter22"})
    bad = client.post("/api/auth/login", json={"username": "octocat", "password": "nope"})

    assert ok.status_code == 200
    assert ok.json()["username"] == "octocat"
    assert bad.status_code == 401


def test_update_rejects_null_for_required_fields(client):
    user_id = register(client).json()["id"]

    for field in ("firstName", "experienceLevel", "skills", "openToCollaborate"):
        resp = client.patch(f"/api/users/{user_id}", json={field: None})
        assert resp.status_code == 422, field

    body = client.get(f"/api/users/{user_id}").json()
    assert body["firstName"] == "Mona"
    assert body["skills"] == ["Git", "Actions"]
    assert client.get("/api/users").status_code == 200


def test_update_allows_clearing_optional_fields(client):
    user_id = register(client, bio="temporary").json()["id"]

    resp = client.patch(f"/api/users/{user_id}", json={"bio": None})

    assert resp.status_code == 200
    assert resp.json()["bio"] is None
