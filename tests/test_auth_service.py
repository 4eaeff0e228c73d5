from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from yoga_admin.config import settings
from yoga_admin.modules.auth.service import AuthService, clear_auth_cache, identity_cache


class FakeAuth:
    def __init__(self, users):
        self.users = users
        self.calls = 0

    def get_user(self, jwt):
        self.calls += 1
        if jwt == "boom":
            raise RuntimeError("JWT expired")
        user = self.users.get(jwt)
        return SimpleNamespace(user=user)


def auth_service(**users):
    auth = FakeAuth({
        token: SimpleNamespace(id=user_id, email=f"{user_id}@x.com", user_metadata=None, created_at=None)
        for token, user_id in users.items()
    })
    return AuthService(SimpleNamespace(auth=auth)), auth


@pytest.fixture(autouse=True)
def _empty_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


def test_token_resolves_identity_and_is_cached() -> None:
    service, auth = auth_service(tok="u-1")

    first = service.get_current_user("tok")
    second = service.get_current_user("tok")

    assert first == {"id": "u-1", "email": "u-1@x.com", "user_metadata": {}, "created_at": None}
    assert second == first
    assert auth.calls == 1


def test_cache_disabled_with_zero_ttl(monkeypatch) -> None:
    monkeypatch.setattr(settings, "auth_cache_ttl_seconds", 0)
    service, auth = auth_service(tok="u-1")

    service.get_current_user("tok")
    service.get_current_user("tok")

    assert auth.calls == 2
    assert len(identity_cache) == 0


def test_cache_respects_max_size(monkeypatch) -> None:
    monkeypatch.setattr(settings, "auth_cache_max_size", 1)
    service, _ = auth_service(a="u-a", b="u-b")

    service.get_current_user("a")
    service.get_current_user("b")

    assert len(identity_cache) == 1


def test_unknown_token_is_401() -> None:
    service, _ = auth_service()

    with pytest.raises(HTTPException) as excinfo:
        service.get_current_user("nope")

    assert excinfo.value.status_code == 401


def test_auth_backend_error_is_401() -> None:
    service, _ = auth_service()

    with pytest.raises(HTTPException) as excinfo:
        service.get_current_user("boom")

    assert excinfo.value.detail == "Invalid or expired token"
