from __future__ import annotations

import pytest

from conftest import auth_headers, register


@pytest.fixture()
def owner(client):
    return register(client)


@pytest.mark.parametrize(
    "method,path",
    [("get", "/users"), ("get", "/users/abc"), ("put", "/users/abc"), ("delete", "/users/abc")],
)
def test_protected_routes_require_a_token(client, method, path):
    response = client.request(method, path, json={"name": "x"})
    assert response.status_code == 401
    assert response.json() == {"error": "No token provided"}


def test_malformed_authorization_header(client):
    response = client.get("/users", headers={"Authorization": "Token abc"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token format"}


def test_invalid_token(client):
    response = client.get("/users", headers=auth_headers("not.a.jwt"))
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_unauthenticated_update_changes_nothing(client, owner):
    user_id = owner["user"]["id"]
    response = client.put(f"/users/{user_id}", json={"name": "Hacked"})
    assert response.status_code == 401
    fetched = client.get(f"/users/{user_id}", headers=auth_headers(owner["token"]))
    assert fetched.json()["user"]["name"] == "Owner"


def test_list_users(client, owner):
    register(client, email="second@example.com", name="Second")
    response = client.get("/users", headers=auth_headers(owner["token"]))
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    emails = [user["email"] for user in body["users"]]
    assert emails == ["owner@example.com", "second@example.com"]
    assert all("passwordHash" not in user and "mobilerunApiKey" not in user for user in body["users"])


def test_get_user(client, owner):
    user_id = owner["user"]["id"]
    response = client.get(f"/users/{user_id}", headers=auth_headers(owner["token"]))
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["id"] == user_id
    assert user["hasMobilerunApiKey"] is False
    assert user["deviceId"] is None


def test_get_missing_user(client, owner):
    response = client.get("/users/does-not-exist", headers=auth_headers(owner["token"]))
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_update_name_and_credentials(client, owner):
    user_id = owner["user"]["id"]
    response = client.put(
        f"/users/{user_id}",
        json={"name": "New Name", "mobilerunApiKey": "mr_key", "deviceId": "pixel-8"},
        headers=auth_headers(owner["token"]),
    )
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["name"] == "New Name"
    assert user["deviceId"] == "pixel-8"
    assert user["hasMobilerunApiKey"] is True
    assert user["email"] == "owner@example.com"


def test_update_password_allows_login_with_new_one(client, owner):
    user_id = owner["user"]["id"]
    response = client.put(
        f"/users/{user_id}", json={"password": "brand-new-pass"}, headers=auth_headers(owner["token"])
    )
    assert response.status_code == 200
    old = client.post("/auth/login", json={"email": "owner@example.com", "password": "secret123"})
    new = client.post("/auth/login", json={"email": "owner@example.com", "password": "brand-new-pass"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_update_to_taken_email_conflicts(client, owner):
    register(client, email="taken@example.com", name="Taken")
    response = client.put(
        f"/users/{owner['user']['id']}", json={"email": "taken@example.com"}, headers=auth_headers(owner["token"])
    )
    assert response.status_code == 409


def test_update_to_own_email_is_allowed(client, owner):
    response = client.put(
        f"/users/{owner['user']['id']}", json={"email": "owner@example.com"}, headers=auth_headers(owner["token"])
    )
    assert response.status_code == 200


def test_update_validates_fields(client, owner):
    response = client.put(
        f"/users/{owner['user']['id']}", json={"email": "bad", "password": "1"}, headers=auth_headers(owner["token"])
    )
    assert response.status_code == 400
    assert {issue["path"][0] for issue in response.json()["details"]} == {"email", "password"}


def test_update_missing_user(client, owner):
    response = client.put("/users/missing", json={"name": "X"}, headers=auth_headers(owner["token"]))
    assert response.status_code == 404


def test_delete_user(client, owner):
    user_id = owner["user"]["id"]
    response = client.delete(f"/users/{user_id}", headers=auth_headers(owner["token"]))
    assert response.status_code == 200
    assert response.json()["user"]["id"] == user_id
    again = client.delete(f"/users/{user_id}", headers=auth_headers(owner["token"]))
    assert again.status_code == 404
