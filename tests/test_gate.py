import logging

import pytest

from conftest import bearer
from tasktrack import config
from tasktrack.main import create_app
from tasktrack.utils.auth import InvalidTokenError, issue_token, verify_token


def test_missing_header_is_rejected(client):
    r = client.get("/tasks")
    assert r.status_code == 401
    assert r.json()["success"] is False


def test_non_bearer_header_is_rejected(client, token):
    r = client.get("/tasks", headers={"Authorization": f"Token {token}"})
    assert r.status_code == 401

    r = client.get("/tasks", headers={"Authorization": "Bearer"})
    assert r.status_code == 401


def test_garbage_token_is_rejected(client):
    r = client.post("/tasks", json={"title": "x"}, headers=bearer("not.a.jwt"))
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid or expired token"


def test_token_signed_with_another_secret_is_rejected(client, token, monkeypatch):
    monkeypatch.setattr(config, "SECRET_KEY", "some-other-secret")
    r = client.get("/tasks", headers=bearer(token))
    assert r.status_code == 401


def test_expired_token_gets_same_response_as_malformed(client, monkeypatch, caplog):
    r = client.post("/auth/register", json={"name": "Ada", "email": "ada@example.com", "password": "SecurePass123"})
    user_id = r.json()["user"]["id"]

    monkeypatch.setattr(config, "ACCESS_TOKEN_EXPIRE_MINUTES", -1)
    expired = issue_token(user_id, "ada@example.com")

    with caplog.at_level(logging.INFO, logger="tasktrack.routers.deps"):
        r_expired = client.get("/tasks", headers=bearer(expired))
        r_malformed = client.get("/tasks", headers=bearer("abc.def.ghi"))

    assert r_expired.status_code == r_malformed.status_code == 401
    assert r_expired.json() == r_malformed.json()
    assert "expired" in caplog.text
    assert "malformed" in caplog.text


def test_token_for_unknown_user_is_rejected(client):
    r = client.get("/tasks", headers=bearer(issue_token("0" * 32, "ghost@example.com")))
    assert r.status_code == 401
    assert r.json()["message"] == "User not found"


def test_valid_token_passes(client, token):
    r = client.get("/tasks", headers=bearer(token))
    assert r.status_code == 200


def test_verify_token_reasons(monkeypatch):
    token = issue_token("a" * 32, "a@example.com")
    claims = verify_token(token)
    assert claims["sub"] == "a" * 32
    assert claims["email"] == "a@example.com"
    assert claims["exp"] > claims["iat"]

    with pytest.raises(InvalidTokenError) as exc:
        verify_token(token + "tampered")
    assert exc.value.reason == "malformed"

    monkeypatch.setattr(config, "ACCESS_TOKEN_EXPIRE_MINUTES", -5)
    with pytest.raises(InvalidTokenError) as exc:
        verify_token(issue_token("a" * 32, "a@example.com"))
    assert exc.value.reason == "expired"


def test_default_token_lifetime_is_seven_days():
    claims = verify_token(issue_token("a" * 32, "a@example.com"))
    assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60


def test_app_refuses_to_start_without_secret(monkeypatch):
    monkeypatch.setattr(config, "SECRET_KEY", None)
    with pytest.raises(RuntimeError, match="JWT_SECRET"):
        create_app()


@pytest.mark.parametrize(
    "method, url",
    [("post", "/tasks"), ("put", "/tasks/" + "a" * 32)],
)
def test_gate_runs_before_body_is_read(client, token, method, url):
    r = client.request(method.upper(), url, content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 401
    assert r.json()["message"] == "No token provided"

    r = client.request(method.upper(), url, content=b"{not json", headers={**bearer(token), "Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["errors"] == [{"field": "body", "message": "Request body must be valid JSON"}]
