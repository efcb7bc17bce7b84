from datetime import datetime, timedelta

import jwt
import pytest
from fastapi import FastAPI, Request, Response
from fastapi.testclient import TestClient

from chateo.core.config import Settings, ConfigurationError
from chateo.application.services.session_service import SessionService

SECRET = "test-secret-key-that-is-long-enough-for-hs256"


def test_token_round_trip():
    svc = SessionService(secret=SECRET)
    token = svc.create_session_token("user-1")
    assert svc.verify_token(token) == "user-1"


def test_token_claims():
    svc = SessionService(secret=SECRET)
    payload = jwt.decode(svc.create_session_token("user-1"), SECRET, algorithms=["HS256"])
    assert payload["sub"] == "user-1"
    assert payload["exp"] - payload["iat"] == 30 * 24 * 3600


def test_expired_token_returns_none():
    issued = datetime.utcnow() - timedelta(days=31)
    old = SessionService(secret=SECRET, now=lambda: issued)
    token = old.create_session_token("user-1")
    assert SessionService(secret=SECRET).verify_token(token) is None


def test_tampered_token_returns_none():
    svc = SessionService(secret=SECRET)
    token = svc.create_session_token("user-1")
    header, payload, signature = token.split(".")
    forged = jwt.encode({"sub": "user-2", "iat": datetime.utcnow(), "exp": datetime.utcnow() + timedelta(days=1)},
                        SECRET, algorithm="HS256").split(".")[1]
    assert svc.verify_token(f"{header}.{forged}.{signature}") is None


def test_token_signed_with_other_secret_returns_none():
    other = SessionService(secret="another-secret-key-that-is-long-enough-too")
    assert SessionService(secret=SECRET).verify_token(other.create_session_token("user-1")) is None


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c", None, 42])
def test_malformed_token_returns_none(token):
    assert SessionService(secret=SECRET).verify_token(token) is None


def test_token_without_subject_returns_none():
    now = datetime.utcnow()
    token = jwt.encode({"iat": now, "exp": now + timedelta(days=1)}, SECRET, algorithm="HS256")
    assert SessionService(secret=SECRET).verify_token(token) is None


def test_missing_secret_is_configuration_error():
    svc = SessionService(settings=Settings(JWT_SECRET=None))
    with pytest.raises(ConfigurationError):
        svc.create_session_token("user-1")


def test_secret_is_loaded_once():
    s = Settings(JWT_SECRET=SECRET)
    svc = SessionService(settings=s)
    token = svc.create_session_token("user-1")
    s.JWT_SECRET = "rotated-secret-that-should-not-be-picked-up"
    assert svc.verify_token(token) == "user-1"


def _cookie_app(svc: SessionService) -> FastAPI:
    app = FastAPI()

    @app.post("/login")
    def login(response: Response):
        svc.create_session(response, "user-1")
        return {}

    @app.get("/whoami")
    def whoami(request: Request):
        return {"user_id": svc.get_session_user_id(request)}

    @app.post("/logout")
    def logout(response: Response):
        svc.clear_session(response)
        return {}

    return app


def test_session_cookie_attributes():
    svc = SessionService(settings=Settings(JWT_SECRET=SECRET, ENVIRONMENT="development"))
    client = TestClient(_cookie_app(svc))
    header = client.post("/login").headers["set-cookie"]
    assert header.startswith("chateo-session=")
    assert "HttpOnly" in header
    assert "Max-Age=2592000" in header
    assert "Path=/" in header
    assert "SameSite=lax" in header
    assert "Secure" not in header


def test_session_cookie_secure_in_production():
    svc = SessionService(settings=Settings(JWT_SECRET=SECRET, ENVIRONMENT="production"))
    client = TestClient(_cookie_app(svc))
    assert "Secure" in client.post("/login").headers["set-cookie"]


def test_get_session_user_id_and_clear():
    svc = SessionService(settings=Settings(JWT_SECRET=SECRET))
    client = TestClient(_cookie_app(svc))
    assert client.get("/whoami").json() == {"user_id": None}
    client.post("/login")
    assert client.get("/whoami").json() == {"user_id": "user-1"}
    client.post("/logout")
    assert client.get("/whoami").json() == {"user_id": None}
