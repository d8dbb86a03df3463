import httpx
import pytest

from paydesk.auth import service as svc
from paydesk.auth.models import build_session_dict, make_auth_response
from paydesk.auth.repository import auth_login_request, response_json
from paydesk.errors import AuthUnavailableError
from paydesk.infra.local_state import LocalState
from paydesk.infra.storage import MemoryStore

LOGIN_BODY = {
    "id": 1,
    "username": "emilys",
    "email": "emily@example.com",
    "firstName": "Emily",
    "lastName": "Johnson",
    "accessToken": "acc",
    "refreshToken": "ref",
}


@pytest.fixture
def state():
    return LocalState(MemoryStore())


def test_login_success_persists_tokens_and_profile(monkeypatch, state):
    calls = {}

    def fake_request(username, password):
        calls["username"] = username
        calls["password"] = password
        return httpx.Response(200, json=LOGIN_BODY)

    monkeypatch.setattr(svc, "auth_login_request", fake_request)
    res = svc.login(state, " emilys ", "pwd")
    assert res.success is True
    assert calls == {"username": "emilys", "password": "pwd"}
    assert state.auth_token == "acc"
    assert state.refresh_token == "ref"
    assert state.user_profile()["firstName"] == "Emily"
    assert "accessToken" not in state.user_profile()


def test_login_accepts_legacy_token_field(monkeypatch, state):
    body = {"id": 2, "username": "kminchelle", "token": "legacy"}
    monkeypatch.setattr(svc, "auth_login_request", lambda u, p: httpx.Response(200, json=body))
    res = svc.login(state, "kminchelle", "pwd")
    assert res.success is True
    assert state.auth_token == "legacy"
    assert state.refresh_token is None


def test_login_rejected_uses_api_message(monkeypatch, state):
    monkeypatch.setattr(
        svc, "auth_login_request",
        lambda u, p: httpx.Response(400, json={"message": "Invalid credentials"}),
    )
    res = svc.login(state, "x", "y")
    assert res.success is False
    assert res.error == "Invalid credentials"
    assert state.auth_token is None


def test_login_rejected_without_message(monkeypatch, state):
    monkeypatch.setattr(svc, "auth_login_request", lambda u, p: httpx.Response(401, content=b""))
    res = svc.login(state, "x", "y")
    assert res.error == svc.INVALID_CREDENTIALS


def test_login_network_error(monkeypatch, state):
    def unreachable(u, p):
        raise AuthUnavailableError("dns")

    monkeypatch.setattr(svc, "auth_login_request", unreachable)
    res = svc.login(state, "x", "y")
    assert res.success is False
    assert res.error == svc.NETWORK_ERROR


def test_login_success_without_token_is_failure(monkeypatch, state):
    monkeypatch.setattr(svc, "auth_login_request", lambda u, p: httpx.Response(200, json={"id": 3}))
    res = svc.login(state, "x", "y")
    assert res.success is False
    assert state.auth_token is None


def test_logout_clears_auth_context(state):
    state.save_auth_token("t")
    state.save_user_profile({"id": 1})
    svc.logout(state)
    assert state.auth_token is None
    assert state.user_profile() is None


@pytest.mark.parametrize("profile, expected", [
    ({"firstName": "Emily", "username": "emilys"}, "EMILY"),
    ({"username": "emilys"}, "EMILYS"),
    ({"email": "e@x.io"}, "E@X.IO"),
    ({}, "USER"),
    (None, "USER"),
])
def test_display_name(profile, expected):
    assert svc.display_name(profile) == expected


@pytest.mark.parametrize("profile, expected", [
    ({"id": 1, "firstName": "Emily", "lastName": "Johnson"}, "Emily Johnson - 1"),
    ({"id": 9, "username": "emilys"}, "emilys - 9"),
    ({"firstName": "Emily"}, "Emily - 12345678"),
    (None, "Customer - 12345678"),
])
def test_customer_label(profile, expected):
    assert svc.customer_label(profile) == expected


def test_build_session_dict_prefers_access_token():
    assert build_session_dict({"accessToken": "a", "token": "b"})["access_token"] == "a"


def test_make_auth_response_filters_profile_fields():
    res = make_auth_response(LOGIN_BODY)
    assert res.user["id"] == 1
    assert set(res.user) == {"id", "username", "email", "firstName", "lastName", "gender", "image"}


def test_auth_login_request_posts_credentials():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = request.content
        return httpx.Response(200, json={"accessToken": "acc"})

    resp = auth_login_request("emilys", "pwd", transport=httpx.MockTransport(handler))
    assert resp.status_code == 200
    assert seen["path"] == "/auth/login"
    assert b'"username"' in seen["body"]
    assert response_json(resp) == {"accessToken": "acc"}


def test_auth_login_request_network_failure():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(AuthUnavailableError):
        auth_login_request("u", "p", transport=httpx.MockTransport(handler))


def test_response_json_non_object():
    assert response_json(httpx.Response(200, json=[1])) == {}
    assert response_json(httpx.Response(200, content=b"nope")) == {}
