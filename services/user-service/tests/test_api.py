from __future__ import annotations

import pytest

ALICE = {"username": "alice123", "email": "a@x.com", "password": "Abcdef1"}


def _create(client, body=ALICE):
    response = client.post("/v1/users", json=body)
    assert response.status_code == 201
    return response.json()


def _login(client, email="a@x.com", password="Abcdef1"):
    return client.post("/v1/users/login", json={"email": email, "password": password})


def test_create_user_returns_sanitized_record(api_client):
    body = _create(api_client)

    assert body["username"] == "alice123"
    assert body["email"] == "a@x.com"
    assert body["role"] == "user"
    assert body["active"] is True
    assert "password" not in body
    assert set(body) == {"id", "username", "email", "role", "active", "created_at", "updated_at"}


def test_create_user_ignores_role_in_payload(api_client):
    body = _create(api_client, {**ALICE, "role": "admin"})

    assert body["role"] == "user"


@pytest.mark.parametrize(
    "payload, field",
    [
        ({**ALICE, "username": "al"}, "username"),
        ({**ALICE, "email": "not-an-email"}, "email"),
        ({**ALICE, "password": "short"}, "password"),
        ({**ALICE, "password": "alllowercase1"}, "password"),
    ],
)
def test_create_user_validation_errors(api_client, payload, field):
    response = api_client.post("/v1/users", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Validation failed"
    assert field in [error["field"] for error in body["errors"]]


def test_login_returns_user_and_token(api_client):
    created = _create(api_client)

    response = _login(api_client)

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["id"] == created["id"]
    assert "password" not in body["user"]
    assert body["token"]


def test_login_failures_share_one_response(api_client):
    _create(api_client)

    wrong_password = _login(api_client, password="Wrongpass1")
    unknown_email = _login(api_client, email="nobody@x.com")

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"detail": "Invalid credentials"}


def test_email_is_stored_and_matched_exactly_as_sent(api_client):
    body = _create(api_client, {**ALICE, "email": "Alice@X.COM"})

    assert body["email"] == "Alice@X.COM"
    assert _login(api_client, email="Alice@X.COM").status_code == 200
    assert _login(api_client, email="Alice@x.com").status_code == 401

    other = _create(api_client, {**ALICE, "username": "alice456", "email": "Alice@x.com"})
    assert other["id"] != body["id"]
    assert other["email"] == "Alice@x.com"


def test_check_status_with_token(api_client):
    created = _create(api_client)
    token = _login(api_client).json()["token"]

    response = api_client.get(
        "/v1/users/check-status", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == created["email"]
    assert body["username"] == created["username"]
    assert body["token"]


def test_check_status_requires_bearer_token(api_client):
    missing = api_client.get("/v1/users/check-status")
    wrong_scheme = api_client.get(
        "/v1/users/check-status", headers={"Authorization": "Basic YWxpY2U6cHc="}
    )

    assert missing.status_code == 401
    assert missing.headers["www-authenticate"] == "Bearer"
    assert wrong_scheme.status_code == 401


def test_token_stops_working_after_soft_delete(api_client):
    created = _create(api_client)
    token = _login(api_client).json()["token"]

    assert api_client.delete(f"/v1/users/{created['id']}").status_code == 200
    response = api_client.get(
        "/v1/users/check-status", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "User is inactive, talk with an admin"


def test_get_list_update_and_remove(api_client):
    created = _create(api_client)
    user_id = created["id"]

    assert api_client.get(f"/v1/users/{user_id}").json()["id"] == user_id
    assert [user["id"] for user in api_client.get("/v1/users").json()] == [user_id]

    patched = api_client.patch(f"/v1/users/{user_id}", json={"username": "alice999"})
    assert patched.status_code == 200
    assert patched.json()["username"] == "alice999"
    assert patched.json()["email"] == "a@x.com"

    removed = api_client.delete(f"/v1/users/{user_id}")
    assert removed.status_code == 200
    assert removed.json()["active"] is False

    assert api_client.get(f"/v1/users/{user_id}").status_code == 404
    assert api_client.get("/v1/users").json() == []
    assert api_client.patch(f"/v1/users/{user_id}", json={"username": "again"}).status_code == 404
    second_delete = api_client.delete(f"/v1/users/{user_id}")
    assert second_delete.status_code == 404
    assert second_delete.json() == {"detail": f'User with ID "{user_id}" not found'}


def test_password_change_via_patch(api_client):
    created = _create(api_client)

    response = api_client.patch(f"/v1/users/{created['id']}", json={"password": "Newpass9"})

    assert response.status_code == 200
    assert _login(api_client).status_code == 401
    assert _login(api_client, password="Newpass9").status_code == 200


def test_store_failure_returns_generic_500(api_client, repository):
    repository.fail_with = RuntimeError("could not connect to server at 10.0.0.5")

    response = api_client.get("/v1/users")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
