# File: tests/test_auth.py

from conftest import auth_headers, register


def test_register_returns_user_without_password(client):
    data = register(client, phone="555-0100", address={"city": "Lisbon", "zipCode": "1000"})

    assert data["message"] == "User registered successfully"
    assert data["token"]
    user = data["user"]
    assert user["email"] == "alice@example.com"
    assert user["phone"] == "555-0100"
    assert user["address"]["zipCode"] == "1000"
    assert "createdAt" in user and "updatedAt" in user
    assert "password" not in user and "password_hash" not in user and "passwordHash" not in user


def test_register_missing_fields(client):
    resp = client.post("/api/auth/register", json={"email": "alice@example.com", "password": "password123"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Bad Request"


def test_register_short_password(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "alice@example.com", "password": "short", "name": "Alice"},
    )
    assert resp.status_code == 400
    assert "at least 8 characters" in resp.json()["message"]


def test_register_duplicate_email(client):
    register(client)
    resp = client.post(
        "/api/auth/register",
        json={"email": "alice@example.com", "password": "password456", "name": "Other"},
    )
    assert resp.status_code == 409
    assert resp.json()["error"] == "Conflict"


def test_login(client):
    registered = register(client)
    resp = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "password123"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Login successful"
    assert body["user"]["id"] == registered["user"]["id"]
    assert body["token"]


def test_login_wrong_password_and_unknown_email_look_the_same(client):
    register(client)
    wrong = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope-nope"})
    unknown = client.post("/api/auth/login", json={"email": "bob@example.com", "password": "password123"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"error": "Unauthorized", "message": "Invalid email or password"}
    assert "token" not in wrong.json()


def test_login_missing_fields(client):
    resp = client.post("/api/auth/login", json={"email": "alice@example.com"})
    assert resp.status_code == 400


def test_logout_invalidates_token(client):
    token = register(client)["token"]

    resp = client.post("/api/auth/logout", headers=auth_headers(token))
    assert resp.status_code == 200
    assert resp.json() == {"message": "Logout successful"}

    again = client.get("/api/users/profile", headers=auth_headers(token))
    assert again.status_code == 401
    assert again.json()["message"] == "Token has been invalidated. Please login again."


def test_logout_requires_token(client):
    resp = client.post("/api/auth/logout")
    assert resp.status_code == 401


def test_new_login_after_logout_works(client):
    token = register(client)["token"]
    client.post("/api/auth/logout", headers=auth_headers(token))

    login = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "password123"})
    fresh = login.json()["token"]

    assert client.get("/api/users/profile", headers=auth_headers(fresh)).status_code == 200


def test_mixed_case_email_is_stored_and_matched_exactly(client, db):
    registered = register(client, email="Alice@Example.COM")
    assert registered["user"]["email"] == "Alice@Example.COM"
    assert db.users.find_by_email("Alice@Example.COM") is not None

    resp = client.post("/api/auth/login", json={"email": "Alice@Example.COM", "password": "password123"})
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == registered["user"]["id"]

    other_case = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "password123"})
    assert other_case.status_code == 401


def test_differently_cased_local_part_is_another_account(client):
    first = register(client, email="Alice@example.com")
    second = register(client, email="alice@example.com", name="Other Alice")
    assert first["user"]["id"] != second["user"]["id"]


def test_register_rejects_malformed_email(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "not-an-email", "password": "password123", "name": "Alice"},
    )
    assert resp.status_code == 400


def test_profile_email_change_is_stored_as_sent(client):
    headers = auth_headers(register(client)["token"])
    resp = client.put("/api/users/profile", json={"email": "Alice.B@Work.Example.com"}, headers=headers)
    assert resp.json()["user"]["email"] == "Alice.B@Work.Example.com"

    login = client.post("/api/auth/login", json={"email": "Alice.B@Work.Example.com", "password": "password123"})
    assert login.status_code == 200
