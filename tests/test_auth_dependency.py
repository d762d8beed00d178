"""
Tests for the API key and bearer token request schemes.
"""
from datetime import datetime, timedelta, timezone

from recruitdesk.core import config
from recruitdesk.core.security import create_access_token


def test_bearer_missing_header(client):
    response = client.get("/api/candidates")

    assert response.status_code == 401
    assert response.json()["status"] == "error"


def test_bearer_malformed_header(client, operator):
    token = create_access_token(operator.id)

    response = client.get("/api/candidates", headers={"Authorization": f"Token {token}"})
    assert response.status_code == 401

    response = client.get("/api/candidates", headers={"Authorization": "Bearer"})
    assert response.status_code == 401


def test_bearer_invalid_signature(client):
    response = client.get("/api/candidates", headers={"Authorization": "Bearer abc.def.ghi"})
    assert response.status_code == 401


def test_bearer_expired_token(client, operator):
    issued = datetime.now(timezone.utc) - timedelta(hours=1, seconds=5)
    token = create_access_token(operator.id, now=issued)

    response = client.get("/api/candidates", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_bearer_missing_secret_is_500(client, auth_headers, monkeypatch):
    monkeypatch.setattr(config, "JWT_SECRET", None)

    response = client.get("/api/candidates", headers=auth_headers)
    assert response.status_code == 500
    assert "configuration" in response.json()["message"].lower()


def test_api_key_wrong_value(client, make_message_body):
    body = {"uuid": "u-1", "sender": "+39", "message_body": make_message_body({"fullName": "X"})}

    response = client.post("/api/candidates", json=body, headers={"X-API-Key": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"status": "error", "message": "Unauthorized: Invalid API Key"}


def test_api_key_missing(client, make_message_body):
    body = {"uuid": "u-1", "sender": "+39", "message_body": make_message_body({"fullName": "X"})}

    response = client.post("/api/candidates", json=body)
    assert response.status_code == 401


def test_api_key_not_configured_is_500(client, api_key_headers, make_message_body, monkeypatch):
    monkeypatch.setattr(config, "API_KEY", None)
    body = {"uuid": "u-1", "sender": "+39", "message_body": make_message_body({"fullName": "X"})}

    response = client.post("/api/candidates", json=body, headers=api_key_headers)
    assert response.status_code == 500


def test_api_key_does_not_open_operator_routes(client, api_key_headers):
    response = client.get("/api/candidates", headers=api_key_headers)
    assert response.status_code == 401


def test_bearer_token_does_not_open_ingestion(client, auth_headers, make_message_body):
    body = {"uuid": "u-1", "sender": "+39", "message_body": make_message_body({"fullName": "X"})}

    response = client.post("/api/candidates", json=body, headers=auth_headers)
    assert response.status_code == 401
