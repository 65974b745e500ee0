"""User Routes — signup, login, current user, and logout over HTTP.

Tests cover:
    - POST /users returns the user and a token header, never the hash
    - Invalid email, weak password, and duplicate email are 400s
    - GET /users/me requires a valid active token
    - POST /users/login issues a fresh token; bad credentials are 401
    - DELETE /users/me/token revokes only the presented token
"""

import pytest
from sqlalchemy import select

from todo_api.models.user import User
from todo_api.models.user_token import UserToken


# ─── POST /users ─────────────────────────────────────────────────

async def test_signup_creates_user(client, settings, test_session_factory):
    """POST /users returns the user, sets x-auth, and never exposes the hash."""
    response = await client.post(
        "/users", json={"email": "example@example.com", "password": "123mnb!"},
    )
    assert response.status_code == 200
    assert response.headers[settings.auth_header]
    body = response.json()
    assert body["email"] == "example@example.com"
    assert "id" in body
    assert "password" not in body
    assert "password_hash" not in body
    assert "tokens" not in body

    async with test_session_factory() as db:
        user = (await db.execute(
            select(User).where(User.email == "example@example.com"),
        )).scalar_one()
    assert user.password_hash != "123mnb!"
    assert [t.token for t in user.tokens] == [response.headers[settings.auth_header]]


async def test_signup_token_authenticates(client, settings):
    """The signup token works immediately on /users/me."""
    response = await client.post(
        "/users", json={"email": "fresh@example.com", "password": "123mnb!"},
    )
    token = response.headers[settings.auth_header]

    me = await client.get("/users/me", headers={settings.auth_header: token})
    assert me.status_code == 200
    assert me.json()["email"] == "fresh@example.com"


@pytest.mark.parametrize("payload", [
    {"email": "and", "password": "123"},
    {"email": "not-an-email", "password": "longenough"},
    {"email": "ok@example.com", "password": "123"},
    {"email": "ok@example.com"},
    {},
])
async def test_signup_invalid_request(client, test_session_factory, payload):
    """Bad email, weak password, or missing fields return 400 and store nothing."""
    response = await client.post("/users", json=payload)
    assert response.status_code == 400

    async with test_session_factory() as db:
        users = (await db.execute(select(User))).scalars().all()
    assert users == []


async def test_signup_duplicate_email(client, seed):
    """Signing up with a taken email returns DUPLICATE_EMAIL."""
    response = await client.post(
        "/users", json={"email": "mike@example.com", "password": "Password123!"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "DUPLICATE_EMAIL"


# ─── GET /users/me ───────────────────────────────────────────────

async def test_me_authenticated(client, auth_headers, seed):
    """GET /users/me returns the token's owner."""
    response = await client.get("/users/me", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == str(seed.user_one.id)
    assert body["email"] == seed.user_one.email


async def test_me_unauthenticated(client, seed):
    """GET /users/me without a token returns 401."""
    response = await client.get("/users/me")
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


async def test_me_token_of_user_without_session(client, seed, settings, token_service):
    """A correctly signed token that was never stored returns 401."""
    token = token_service.issue(seed.user_two.id, "auth")
    response = await client.get("/users/me", headers={settings.auth_header: token})
    assert response.status_code == 401


# ─── POST /users/login ───────────────────────────────────────────

async def test_login_issues_token(client, seed, settings, test_session_factory):
    """POST /users/login returns a fresh token and stores it."""
    response = await client.post(
        "/users/login",
        json={"email": seed.user_two.email, "password": "userTwoPass"},
    )
    assert response.status_code == 200
    token = response.headers[settings.auth_header]
    assert response.json()["id"] == str(seed.user_two.id)

    async with test_session_factory() as db:
        stored = (await db.execute(
            select(UserToken).where(UserToken.user_id == seed.user_two.id),
        )).scalars().all()
    assert [t.token for t in stored] == [token]


async def test_login_wrong_password(client, seed, settings, test_session_factory):
    """A wrong password returns 401 and stores no token."""
    response = await client.post(
        "/users/login",
        json={"email": seed.user_two.email, "password": "userTwoPass1"},
    )
    assert response.status_code == 401
    assert settings.auth_header not in response.headers

    async with test_session_factory() as db:
        stored = (await db.execute(
            select(UserToken).where(UserToken.user_id == seed.user_two.id),
        )).scalars().all()
    assert stored == []


async def test_login_unknown_email_matches_wrong_password(client, seed):
    """Unknown email and wrong password look the same to the client."""
    unknown = await client.post(
        "/users/login", json={"email": "nobody@example.com", "password": "whatever"},
    )
    wrong = await client.post(
        "/users/login", json={"email": seed.user_two.email, "password": "whatever"},
    )
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json()["error"]["message"] == wrong.json()["error"]["message"]


# ─── DELETE /users/me/token ──────────────────────────────────────

async def test_logout_revokes_token(client, auth_headers, seed, test_session_factory):
    """DELETE /users/me/token revokes the presented token."""
    response = await client.delete("/users/me/token", headers=auth_headers)
    assert response.status_code == 200

    async with test_session_factory() as db:
        stored = (await db.execute(
            select(UserToken).where(UserToken.user_id == seed.user_one.id),
        )).scalars().all()
    assert stored == []

    again = await client.get("/users/me", headers=auth_headers)
    assert again.status_code == 401


async def test_logout_keeps_other_sessions(client, auth_headers, seed, settings):
    """Logout leaves the user's other tokens active."""
    login = await client.post(
        "/users/login",
        json={"email": seed.user_one.email, "password": "userOnePass"},
    )
    second = {settings.auth_header: login.headers[settings.auth_header]}

    await client.delete("/users/me/token", headers=auth_headers)

    assert (await client.get("/users/me", headers=second)).status_code == 200
    assert (await client.get("/users/me", headers=auth_headers)).status_code == 401


async def test_logout_requires_token(client, seed):
    """Logout without a token returns 401."""
    response = await client.delete("/users/me/token")
    assert response.status_code == 401
