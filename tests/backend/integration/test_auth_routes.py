import pytest

from storefront.config import settings


pytestmark = pytest.mark.asyncio

COOKIE_NAME = settings.session_cookie_name


async def register_user(client, name: str, email: str, password: str):
    return await client.post(
        "/auth/register",
        json={"name": name, "email": email, "password": password},
    )


async def login_user(client, email: str, password: str):
    return await client.post(
        "/auth/login",
        json={"email": email, "password": password},
    )


def _with_session(sid: str) -> dict[str, str]:
    return {"Cookie": f"{COOKIE_NAME}={sid}"}


async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


async def test_register_sets_cookie_and_returns_sanitized_user(client):
    resp = await register_user(client, "Alice", " Alice@Example.com ", "Secret123")
    assert resp.status_code == 201
    user = resp.json()["user"]
    assert set(user) == {"id", "name", "email", "createdAt"}
    assert user["email"] == "alice@example.com"
    assert user["createdAt"].endswith("Z")

    set_cookie = resp.headers["set-cookie"].lower()
    assert f"{COOKIE_NAME}=" in set_cookie
    assert "httponly" in set_cookie
    assert "samesite=lax" in set_cookie
    assert f"max-age={settings.session_max_age_seconds}" in set_cookie

    # Register implies login
    me = await client.get("/auth/me")
    assert me.status_code == 200
    assert me.json()["user"] == user


async def test_register_validation_and_conflict(client):
    missing = await client.post("/auth/register", json={"name": "A", "email": "a@x.com"})
    assert missing.status_code == 400
    assert set(missing.json()) == {"error"}

    first = await register_user(client, "A", "a@x.com", "Secret123")
    assert first.status_code == 201
    dup = await register_user(client, "B", "A@X.COM", "Other456")
    assert dup.status_code == 409
    assert dup.json() == {"error": "email already registered"}


async def test_non_json_body_is_bad_request(client):
    resp = await client.post("/auth/register", content=b"not json",
                             headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "invalid request body"}


async def test_login_flow_and_uniform_failures(client):
    await register_user(client, "A", "a@x.com", "Secret123")
    client.cookies.clear()

    ok = await login_user(client, "A@X.COM", "Secret123")
    assert ok.status_code == 200
    assert ok.json()["user"]["email"] == "a@x.com"
    assert COOKIE_NAME in ok.cookies

    wrong_password = await login_user(client, "a@x.com", "wrong")
    unknown_email = await login_user(client, "nouser@x.com", "whatever")
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "invalid credentials"}

    missing = await login_user(client, "", "Secret123")
    assert missing.status_code == 400


async def test_logout_revokes_session(client):
    resp = await register_user(client, "A", "a@x.com", "Secret123")
    sid = resp.cookies[COOKIE_NAME]

    out = await client.post("/auth/logout")
    assert out.status_code == 200
    assert out.json() == {"ok": True}
    assert "max-age=0" in out.headers["set-cookie"].lower()

    # Replaying the old token no longer works anywhere
    client.cookies.clear()
    me = await client.get("/auth/me", headers=_with_session(sid))
    assert me.status_code == 401
    assert me.json() == {"error": "not authenticated"}
    orders = await client.get("/orders/me", headers=_with_session(sid))
    assert orders.status_code == 401


async def test_logout_without_session_never_fails(client):
    resp = await client.post("/auth/logout")
    assert resp.status_code == 200
    resp = await client.post("/auth/logout", headers=_with_session("unknown"))
    assert resp.status_code == 200


async def test_me_requires_session(client):
    resp = await client.get("/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"error": "not authenticated"}
