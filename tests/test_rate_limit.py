"""
Tests for the in-memory rate limiter.
"""
from recruitdesk.core import config


def _ingest(client, headers, body):
    return client.post("/api/candidates", json=body, headers=headers)


def test_bot_limit(client, api_key_headers, make_message_body, monkeypatch):
    monkeypatch.setattr(config, "BOT_RATE_LIMIT", 2)
    body = {"uuid": "u", "sender": "+39", "message_body": make_message_body({"fullName": "A"})}

    assert _ingest(client, api_key_headers, body).status_code == 201
    assert _ingest(client, api_key_headers, body).status_code == 201
    response = _ingest(client, api_key_headers, body)

    assert response.status_code == 429
    assert response.json()["status"] == "error"


def test_bot_and_user_limits_are_separate(client, api_key_headers, auth_headers, make_message_body, monkeypatch):
    monkeypatch.setattr(config, "BOT_RATE_LIMIT", 1)
    body = {"uuid": "u", "sender": "+39", "message_body": make_message_body({"fullName": "A"})}

    assert _ingest(client, api_key_headers, body).status_code == 201
    assert _ingest(client, api_key_headers, body).status_code == 429
    assert client.get("/api/candidates", headers=auth_headers).status_code == 200


def test_limit_is_per_client_ip(client, auth_headers, monkeypatch):
    monkeypatch.setattr(config, "USER_RATE_LIMIT", 1)

    first = {**auth_headers, "X-Forwarded-For": "10.0.0.1"}
    second = {**auth_headers, "X-Forwarded-For": "10.0.0.2, 172.16.0.1"}

    assert client.get("/api/tags", headers=first).status_code == 200
    assert client.get("/api/tags", headers=first).status_code == 429
    assert client.get("/api/tags", headers=second).status_code == 200


def test_login_is_rate_limited(client, operator, monkeypatch):
    monkeypatch.setattr(config, "USER_RATE_LIMIT", 1)
    credentials = {"username": "admin", "password": "wrong"}

    assert client.post("/api/auth/login", json=credentials).status_code == 401
    assert client.post("/api/auth/login", json=credentials).status_code == 429
