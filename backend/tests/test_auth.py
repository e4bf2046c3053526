from sqlmodel import Session, select

from handnotes.api.auth import CONFIRM, create_token
from handnotes.config import settings
from handnotes.db import engine
from handnotes.models.user import User

from conftest import PASSWORD


def _sign_in(client, email, password=PASSWORD):
    return client.post("/api/auth/token", data={"username": email, "password": password})


def _confirmation_token(email: str) -> str:
    with Session(engine) as db:
        user = db.exec(select(User).where(User.email == email)).one()
    return create_token({"sub": str(user.id), "purpose": CONFIRM}, 5)


def test_signup_requires_confirmation_before_sign_in(client):
    response = client.post("/api/auth/signup", json={"email": "Sam@Example.com", "password": PASSWORD})
    assert response.status_code == 201
    assert response.json() == {
        "msg": "Check your email to confirm your account",
        "confirmation_required": True,
    }

    blocked = _sign_in(client, "sam@example.com")
    assert blocked.status_code == 401
    assert blocked.json() == {"error": "Email not confirmed"}

    confirmed = client.post("/api/auth/confirm", json={"token": _confirmation_token("sam@example.com")})
    assert confirmed.status_code == 200
    assert confirmed.json()["email"] == "sam@example.com"

    signed_in = _sign_in(client, "sam@example.com")
    assert signed_in.status_code == 200
    assert signed_in.json()["token_type"] == "bearer"


def test_auto_confirm(client, monkeypatch):
    monkeypatch.setattr(settings, "auto_confirm_signups", True)

    response = client.post("/api/auth/signup", json={"email": "sam@example.com", "password": PASSWORD})

    assert response.json()["confirmation_required"] is False
    assert _sign_in(client, "sam@example.com").status_code == 200


def test_duplicate_signup(client):
    body = {"email": "sam@example.com", "password": PASSWORD}
    client.post("/api/auth/signup", json=body)

    response = client.post("/api/auth/signup", json=body)

    assert response.status_code == 401
    assert response.json() == {"error": "User already registered"}


def test_short_password_is_rejected(client):
    response = client.post("/api/auth/signup", json={"email": "sam@example.com", "password": "12345"})
    assert response.status_code == 422


def test_wrong_password(client, login):
    login("sam@example.com")

    response = _sign_in(client, "sam@example.com", "not-the-password")

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid login credentials"}


def test_me_and_sign_out(client, login):
    headers = login("sam@example.com")

    me = client.get("/api/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["email"] == "sam@example.com"

    assert client.post("/api/auth/signout", headers=headers).status_code == 204

    after = client.get("/api/auth/me", headers=headers)
    assert after.status_code == 401
    assert after.json() == {"error": "Session has ended"}


def test_access_token_cannot_confirm(client, login):
    headers = login("sam@example.com")
    access_token = headers["Authorization"].split()[1]

    response = client.post("/api/auth/confirm", json={"token": access_token})

    assert response.status_code == 401


def test_garbage_bearer_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer nonsense"})
    assert response.status_code == 401
