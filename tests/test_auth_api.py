from __future__ import annotations

import pytest
from conftest import register

from guardian.core.errors import ConfigurationError
from guardian.repositories.sql_repository import SQLRepository


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
    assert response.headers["x-content-type-options"] == "nosniff"


def test_register_returns_user_and_token(client):
    body = register(client, email="Owner@Example.com ")
    assert body["message"] == "User registered successfully"
    assert body["user"]["email"] == "owner@example.com"
    assert body["user"]["name"] == "Owner"
    assert body["token"]
    assert "password" not in body["user"]


def test_duplicate_registration_conflicts_and_keeps_one_record(client):
    register(client)
    response = client.post(
        "/auth/register", json={"email": "OWNER@example.com", "name": "Other", "password": "another123"}
    )
    assert response.status_code == 409
    assert response.json() == {"error": "User with this email already exists"}
    users = SQLRepository().list_users()
    assert len(users) == 1
    assert users[0].name == "Owner"


def test_register_validation_reports_each_field(client):
    response = client.post("/auth/register", json={"email": "nope", "name": "", "password": "123"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    paths = sorted(issue["path"][0] for issue in body["details"])
    assert paths == ["email", "name", "password"]
    assert SQLRepository().list_users() == []


def test_register_requires_a_json_object(client):
    response = client.post("/auth/register", json=["not", "an", "object"])
    assert response.status_code == 400


def test_login_success(client):
    register(client)
    response = client.post("/auth/login", json={"email": "owner@example.com", "password": "secret123"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["email"] == "owner@example.com"
    assert body["token"]


def test_login_email_is_case_insensitive(client):
    register(client)
    response = client.post("/auth/login", json={"email": "OWNER@EXAMPLE.COM", "password": "secret123"})
    assert response.status_code == 200


def test_login_with_wrong_password_is_unauthorized(client):
    register(client)
    response = client.post("/auth/login", json={"email": "owner@example.com", "password": "wrong-pass"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_login_for_unknown_user_is_unauthorized(client):
    response = client.post("/auth/login", json={"email": "ghost@example.com", "password": "secret123"})
    assert response.status_code == 401


def test_login_requires_both_fields(client):
    response = client.post("/auth/login", json={"email": "owner@example.com"})
    assert response.status_code == 400
    assert response.json() == {"error": "Email and password are required"}


def test_login_with_blank_password_has_no_details(client):
    response = client.post("/auth/login", json={"email": "owner@example.com", "password": ""})
    assert response.status_code == 400
    assert response.json() == {"error": "Email and password are required"}


def test_prod_refuses_to_start_without_jwt_secret(make_client):
    with pytest.raises(ConfigurationError, match="JWT_SECRET"):
        make_client(APP_ENV="prod", JWT_SECRET="")


def test_prod_starts_with_jwt_secret(make_client):
    client = make_client(APP_ENV="prod")
    assert client.get("/health").status_code == 200


def test_dev_falls_back_to_development_secret(make_client):
    client = make_client(APP_ENV="dev", JWT_SECRET="")
    register(client)
    response = client.post("/auth/login", json={"email": "owner@example.com", "password": "secret123"})
    assert response.status_code == 200
