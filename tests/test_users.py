# tests/test_users.py
from datetime import timedelta

import pytest

from app.core.config import get_settings
from app.core.security import create_access_token, decode_access_token


def register_payload(**overrides):
    payload = {
        "first_name": "Jane",
        "last_name": "Doe",
        "birthdate": "1992-04-01",
        "username": "jane",
        "email": "jane@example.com",
        "password": "secret123",
        "confirm_password": "secret123",
    }
    payload.update(overrides)
    return payload


def test_root_redirects_to_login(client):
    r = client.get("/", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/User/Login"


def test_login_view_carries_return_url(client):
    r = client.get("/User/Login?returnUrl=/Ticket/Details/3")
    assert r.status_code == 200
    assert r.json() == {"return_url": "/Ticket/Details/3", "email_or_username": "", "remember_me": False}


def test_register_view_is_empty(client):
    r = client.get("/User/Register")
    assert r.status_code == 200
    assert r.json()["username"] == ""
    assert r.json()["birthdate"] is None


def test_register_signs_in_and_redirects(client):
    r = client.post("/User/Register", json=register_payload(), follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/Ticket"
    assert get_settings().AUTH_COOKIE_NAME in r.cookies

    # the new account is usable right away
    assert client.get("/Ticket").status_code == 200
    profile = client.get("/profile/jane").json()
    assert profile["display_name"] == "Jane Doe"
    assert profile["can_edit"] is True


@pytest.mark.parametrize(
    "overrides",
    [
        {"confirm_password": "different"},
        {"email": "not-an-email"},
        {"password": "short", "confirm_password": "short"},
        {"first_name": ""},
    ],
)
def test_register_validation(client, overrides):
    r = client.post("/User/Register", json=register_payload(**overrides))
    assert r.status_code == 422


def test_register_duplicate_username(client, make_user):
    make_user("jane", email="other@example.com")

    r = client.post("/User/Register", json=register_payload())
    assert r.status_code == 422
    body = r.json()
    assert body["errors"] == {"username": ["The username is already taken."]}
    assert "password" not in body["model"]
    assert body["model"]["email"] == "jane@example.com"


def test_register_duplicate_email(client, make_user):
    make_user("someone", email="jane@example.com")

    r = client.post("/User/Register", json=register_payload())
    assert r.status_code == 422
    assert r.json()["errors"] == {"email": ["The email address is already registered."]}


def test_login_with_username_or_email(client, user, login):
    r = login(user.username)
    assert r.status_code == 303
    assert r.headers["location"] == "/Ticket"

    client.cookies.clear()
    r = login(user.email)
    assert r.status_code == 303


def test_login_unknown_user(login):
    r = login("ghost")
    assert r.status_code == 422
    assert r.json()["errors"] == {"": ["Invalid email or username."]}


def test_login_wrong_password(user, login):
    r = login(user.email, password="wrong-password")
    assert r.status_code == 422
    body = r.json()
    assert body["errors"] == {"": ["Invalid login attempt."]}
    assert body["model"] == {"email_or_username": user.email, "remember_me": False}


def test_remember_me_sets_persistent_cookie(client, user, login):
    r = login(user.username, remember_me=True)
    assert "max-age" in r.headers["set-cookie"].lower()

    client.cookies.clear()
    r = login(user.username)
    assert "max-age" not in r.headers["set-cookie"].lower()


def test_login_honours_local_return_url(client, user, password):
    r = client.post(
        "/User/Login?returnUrl=/Ticket/Details/7",
        json={"email_or_username": user.username, "password": password},
        follow_redirects=False,
    )
    assert r.headers["location"] == "/Ticket/Details/7"


def test_login_ignores_external_return_url(client, user, password):
    r = client.post(
        "/User/Login?returnUrl=https://evil.example.com/",
        json={"email_or_username": user.username, "password": password},
        follow_redirects=False,
    )
    assert r.headers["location"] == "/Ticket"


def test_login_page_redirects_when_signed_in(auth_client):
    r = auth_client.get("/User/Login", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/Ticket"


def test_logout(auth_client):
    r = auth_client.post("/User/Logout", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/User/Login"

    auth_client.cookies.clear()
    assert auth_client.get("/Ticket", follow_redirects=False).status_code == 302


def test_access_token_round_trip():
    assert decode_access_token(create_access_token(42)) == 42
    assert decode_access_token("not-a-token") is None
    assert decode_access_token(create_access_token(42, expires_delta=timedelta(minutes=-1))) is None


# ---------- Profile ----------


def test_profile_anonymous_view(client, user):
    r = client.get(f"/profile/{user.username}")
    assert r.status_code == 200
    data = r.json()
    assert data["username"] == user.username
    assert data["display_name"] == "Test User"
    assert data["can_edit"] is False
    assert data["role"] == "User"
    assert "password_hash" not in data
    assert "email" not in data


def test_profile_of_another_user_is_read_only(auth_client, make_user):
    other = make_user("other")
    assert auth_client.get(f"/profile/{other.username}").json()["can_edit"] is False


def test_profile_unknown_user(client):
    r = client.get("/profile/nobody")
    assert r.status_code == 404
    assert r.json()["detail"] == "User not found"


def test_profile_edit_requires_login(client):
    r = client.get("/Profile/Edit", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/User/Login?returnUrl=%2FProfile%2FEdit"


def test_profile_edit_form(auth_client, user):
    data = auth_client.get("/Profile/Edit").json()
    assert data["id"] == user.id
    assert data["username"] == user.username
    assert data["first_name"] == "Test"


def test_profile_partial_update(auth_client, user):
    r = auth_client.post("/Profile/Edit", json={"bio": "Plumber"}, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == f"/profile/{user.username}"

    data = auth_client.get(f"/profile/{user.username}").json()
    assert data["bio"] == "Plumber"
    assert data["first_name"] == "Test"


def test_profile_rename_keeps_session(auth_client):
    r = auth_client.post("/Profile/Edit", json={"username": "renamed"}, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/profile/renamed"

    assert auth_client.get("/profile/renamed").json()["can_edit"] is True
    assert auth_client.get("/Ticket").status_code == 200


def test_profile_rename_to_taken_username(auth_client, make_user):
    make_user("taken")
    r = auth_client.post("/Profile/Edit", json={"username": "taken"})
    assert r.status_code == 422
    assert r.json()["errors"] == {"username": ["The username is already taken."]}
