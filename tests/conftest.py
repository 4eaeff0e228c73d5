import pytest
from fastapi import HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.testclient import TestClient

from yoga_admin.config import settings
from yoga_admin.core import dependencies
from yoga_admin.database.supabase_client import get_supabase
from yoga_admin.main import app
from tests.fakes import seeded_supabase


def _user_from_token(token: str) -> dict:
    # Test tokens are "<user_id>:<email>"
    user_id, _, email = token.partition(":")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return {"id": user_id, "email": email or None}


def fake_current_user(
    credentials: HTTPAuthorizationCredentials = Security(dependencies.security),
) -> dict:
    return _user_from_token(credentials.credentials)


def fake_optional_user(
    credentials: HTTPAuthorizationCredentials = Security(dependencies.optional_security),
):
    if credentials is None:
        return None
    return _user_from_token(credentials.credentials)


def bearer(user_id: str, email: str = "") -> dict:
    return {"Authorization": f"Bearer {user_id}:{email}"}


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch):
    monkeypatch.setattr(settings, "legacy_admin_fallback", True)
    monkeypatch.setattr(settings, "validate_role_catalog", False)


@pytest.fixture
def supabase():
    return seeded_supabase()


@pytest.fixture
def client(supabase):
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[dependencies.get_current_user] = fake_current_user
    app.dependency_overrides[dependencies.get_optional_user] = fake_optional_user
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
