import pytest

from tests.conftest import bearer
from tests.fakes import grant, legacy_admin, role_id

API = "/api/v1"


def booking(booking_id, user_id, email, created_at, status="pending", **extra):
    row = {
        "id": booking_id,
        "user_id": user_id,
        "class_name": "Hatha Flow",
        "first_name": "Asha",
        "last_name": "Rao",
        "email": email,
        "status": status,
        "created_at": created_at,
    }
    row.update(extra)
    return row


@pytest.fixture
def bookings(supabase):
    supabase.tables["bookings"] = [
        booking("b1", "u-alice", "a@x.com", "2025-07-01T10:00:00+00:00"),
        booking("b2", "u-bob", "b@x.com", "2025-07-02T10:00:00+00:00", first_name="Bodhi"),
    ]
    supabase.tables["yoga_queries"] = [
        {"id": "q1", "name": "Carol", "email": "c@x.com", "message": "Prenatal?", "status": "new",
         "created_at": "2025-07-03T09:00:00+00:00"},
    ]
    supabase.tables["contact_messages"] = [
        {"id": "m1", "name": "Dev", "email": "d@x.com", "message": "Hi", "status": "new",
         "created_at": "2025-07-03T09:00:00+00:00"},
    ]
    return supabase


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/ready").json() == {"status": "ready"}


def test_me_without_token_is_rejected(client) -> None:
    assert client.get(f"{API}/auth/me").status_code in (401, 403)


def test_me_reports_modern_admin(client, supabase) -> None:
    grant(supabase, "u-alice", "admin", "zen_analyst")

    body = client.get(f"{API}/auth/me", headers=bearer("u-alice", "a@x.com")).json()

    assert body == {
        "id": "u-alice",
        "email": "a@x.com",
        "roles": ["admin", "zen_analyst"],
        "is_admin": True,
        "can_manage_roles": False,
        "admin_source": "modern",
    }


def test_me_reports_legacy_admin(client, supabase) -> None:
    legacy_admin(supabase, "a@x.com", "super_admin")

    body = client.get(f"{API}/auth/me", headers=bearer("u-alice", "a@x.com")).json()

    assert body["roles"] == []
    assert body["is_admin"]
    assert body["admin_source"] == "legacy"
    # legacy entries never grant role management
    assert not body["can_manage_roles"]


def test_me_fails_closed_when_store_is_down(client, supabase) -> None:
    grant(supabase, "u-alice", "super_admin")
    supabase.unavailable.add("user_roles")

    response = client.get(f"{API}/auth/me", headers=bearer("u-alice", "a@x.com"))

    assert response.status_code == 200
    assert response.json()["roles"] == []
    assert not response.json()["is_admin"]


def test_onboard_grants_default_role(client, supabase) -> None:
    headers = bearer("u-new", "n@x.com")

    first = client.post(f"{API}/auth/me/onboard", headers=headers)
    second = client.post(f"{API}/auth/me/onboard", headers=headers)

    assert first.json()["roles"] == ["yogi_in_training"]
    assert second.json()["roles"] == ["yogi_in_training"]
    assert len(supabase.rows("user_roles")) == 1


def test_roles_list_is_public(client) -> None:
    response = client.get(f"{API}/roles")

    assert response.status_code == 200
    assert "super_admin" in [role["name"] for role in response.json()]


def test_role_writes_need_super_admin(client, supabase) -> None:
    grant(supabase, "u-admin", "admin")
    grant(supabase, "u-super", "super_admin")
    payload = {"name": "retreat_host", "description": "Runs retreats"}

    denied = client.post(f"{API}/roles", json=payload, headers=bearer("u-admin"))
    created = client.post(f"{API}/roles", json=payload, headers=bearer("u-super"))
    duplicate = client.post(f"{API}/roles", json=payload, headers=bearer("u-super"))

    assert denied.status_code == 403
    assert denied.json()["detail"] == "Cannot write role: requires the super_admin role"
    assert created.status_code == 201
    assert duplicate.status_code == 409


def test_predefined_role_delete_conflicts(client, supabase) -> None:
    grant(supabase, "u-super", "super_admin")

    response = client.delete(f"{API}/roles/{role_id('admin')}", headers=bearer("u-super"))

    assert response.status_code == 409


def test_super_admin_assigns_and_revokes(client, supabase) -> None:
    grant(supabase, "u-super", "super_admin")
    headers = bearer("u-super")

    assigned = client.post(
        f"{API}/assignments", json={"user_id": "u-bob", "role_name": "sangha_guide"}, headers=headers,
    )
    assert assigned.status_code == 201
    assert assigned.json() == {"user_id": "u-bob", "roles": ["sangha_guide"]}
    assert supabase.rows("user_roles")[-1]["assigned_by"] == "u-super"

    revoked = client.delete(f"{API}/assignments/users/u-bob/roles/sangha_guide", headers=headers)
    assert revoked.status_code == 204
    assert client.get(f"{API}/assignments/users/u-bob", headers=headers).json()["roles"] == []


def test_curator_cannot_assign(client, supabase) -> None:
    grant(supabase, "u-curator", "mantra_curator")

    response = client.post(
        f"{API}/assignments",
        json={"user_id": "u-curator", "role_name": "admin"},
        headers=bearer("u-curator"),
    )

    assert response.status_code == 403
    assert [r["role_id"] for r in supabase.rows("user_roles")] == [role_id("mantra_curator")]


def test_assign_unknown_role_is_404(client, supabase) -> None:
    grant(supabase, "u-super", "super_admin")

    response = client.post(
        f"{API}/assignments", json={"user_id": "u-bob", "role_name": "grand_poobah"}, headers=bearer("u-super"),
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Role not found: grand_poobah"


def test_assignment_write_is_503_when_store_down(client, supabase) -> None:
    grant(supabase, "u-super", "super_admin")
    supabase.unavailable.add("roles")

    response = client.post(
        f"{API}/assignments", json={"user_id": "u-bob", "role_name": "admin"}, headers=bearer("u-super"),
    )

    assert response.status_code == 503


def test_assignment_reads(client, supabase) -> None:
    grant(supabase, "u-alice", "yogi_in_training")
    grant(supabase, "u-admin", "admin")

    own = client.get(f"{API}/assignments", headers=bearer("u-alice")).json()
    other = client.get(f"{API}/assignments/users/u-admin", headers=bearer("u-alice"))
    everything = client.get(f"{API}/assignments", headers=bearer("u-admin")).json()

    assert own == [{"user_id": "u-alice", "roles": ["yogi_in_training"]}]
    assert other.status_code == 403
    assert [a["user_id"] for a in everything] == ["u-admin", "u-alice"]


def test_bookings_scoped_to_owner(client, bookings) -> None:
    own = client.get(f"{API}/bookings", headers=bearer("u-alice", "a@x.com"))
    foreign = client.get(f"{API}/bookings/b2", headers=bearer("u-alice", "a@x.com"))

    assert [b["id"] for b in own.json()] == ["b1"]
    assert foreign.status_code == 403


def test_admin_sees_and_searches_all_bookings(client, bookings) -> None:
    grant(bookings, "u-admin", "admin")
    headers = bearer("u-admin")

    everything = client.get(f"{API}/bookings", headers=headers).json()
    searched = client.get(f"{API}/bookings", params={"search": "bodhi"}, headers=headers).json()

    assert [b["id"] for b in everything] == ["b2", "b1"]
    assert [b["id"] for b in searched] == ["b2"]


def test_booking_status_update_is_admin_only(client, bookings) -> None:
    legacy_admin(bookings, "boss@x.com")
    payload = {"status": "confirmed"}

    owner = client.patch(f"{API}/bookings/b1/status", json=payload, headers=bearer("u-alice", "a@x.com"))
    admin = client.patch(f"{API}/bookings/b1/status", json=payload, headers=bearer("u-boss", "boss@x.com"))
    missing = client.patch(f"{API}/bookings/nope/status", json=payload, headers=bearer("u-boss", "boss@x.com"))

    assert owner.status_code == 403
    assert admin.status_code == 200
    assert admin.json()["status"] == "confirmed"
    assert missing.status_code == 404


def test_booking_delete(client, bookings) -> None:
    grant(bookings, "u-admin", "admin")

    assert client.delete(f"{API}/bookings/b1", headers=bearer("u-admin")).status_code == 204
    assert [b["id"] for b in bookings.rows("bookings")] == ["b2"]


@pytest.mark.parametrize("path", ["queries", "messages"])
def test_inquiries_are_admin_only(client, bookings, path) -> None:
    grant(bookings, "u-analyst", "zen_analyst")
    grant(bookings, "u-admin", "admin")

    denied = client.get(f"{API}/{path}", headers=bearer("u-analyst"))
    listed = client.get(f"{API}/{path}", headers=bearer("u-admin"))

    assert denied.status_code == 403
    assert len(listed.json()) == 1


def test_query_response(client, bookings) -> None:
    grant(bookings, "u-admin", "admin")

    response = client.patch(
        f"{API}/queries/q1", json={"status": "answered", "response": "Yes, Tuesdays"}, headers=bearer("u-admin"),
    )

    assert response.status_code == 200
    assert response.json()["response"] == "Yes, Tuesdays"
    assert bookings.rows("yoga_queries")[0]["status"] == "answered"


def test_articles_public_read_and_curator_write(client, supabase) -> None:
    supabase.tables["articles"] = []
    grant(supabase, "u-curator", "mantra_curator")
    payload = {"title": "Breath", "content": "Inhale, exhale", "category": "pranayama"}

    anonymous = client.post(f"{API}/articles", json=payload)
    regular = client.post(f"{API}/articles", json=payload, headers=bearer("u-alice"))
    created = client.post(f"{API}/articles", json=payload, headers=bearer("u-curator"))

    assert anonymous.status_code in (401, 403)
    assert regular.status_code == 403
    assert created.status_code == 201
    assert created.json()["author_id"] == "u-curator"

    listed = client.get(f"{API}/articles")
    assert [a["title"] for a in listed.json()] == ["Breath"]
    article_id = created.json()["id"]
    assert client.get(f"{API}/articles/{article_id}").status_code == 200
    assert client.delete(f"{API}/articles/{article_id}", headers=bearer("u-curator")).status_code == 204


def test_user_directory_reports_admin_status(client, bookings) -> None:
    grant(bookings, "u-bob", "admin")
    legacy_admin(bookings, "a@x.com")
    grant(bookings, "u-viewer", "admin")

    users = client.get(f"{API}/users", headers=bearer("u-viewer")).json()
    by_email = {u["email"]: u for u in users}

    assert by_email["a@x.com"]["is_admin"]
    assert by_email["a@x.com"]["roles"] == []
    assert by_email["b@x.com"]["is_admin"]
    assert by_email["b@x.com"]["roles"] == ["admin"]
    assert not by_email["c@x.com"]["is_admin"]
    assert by_email["c@x.com"]["queries_count"] == 1

    regular = client.get(f"{API}/users", params={"filter_by": "regular"}, headers=bearer("u-viewer")).json()
    assert [u["email"] for u in regular] == ["c@x.com"]


def test_user_directory_is_admin_only(client, bookings) -> None:
    grant(bookings, "u-guide", "sangha_guide", "yoga_acharya")

    assert client.get(f"{API}/users", headers=bearer("u-guide")).status_code == 403


def test_onboard_cannot_undo_a_revocation(client, supabase) -> None:
    grant(supabase, "u-super", "super_admin")
    user = bearer("u-1", "one@x.com")
    client.post(f"{API}/auth/me/onboard", headers=user)

    revoked = client.delete(f"{API}/assignments/users/u-1/roles/yogi_in_training", headers=bearer("u-super"))
    again = client.post(f"{API}/auth/me/onboard", headers=user)

    assert revoked.status_code == 204
    assert again.status_code == 200
    assert again.json()["roles"] == []
    assert [r["user_id"] for r in supabase.rows("user_roles")] == ["u-super"]


def test_legacy_admin_status_agrees_between_me_and_directory(client, bookings) -> None:
    legacy_admin(bookings, "A@X.com", "admin")
    grant(bookings, "u-viewer", "admin")

    me = client.get(f"{API}/auth/me", headers=bearer("u-alice", "a@x.com")).json()
    users = client.get(f"{API}/users", headers=bearer("u-viewer")).json()
    directory = {u["email"]: u["is_admin"] for u in users}

    assert me["is_admin"] is False
    assert directory["a@x.com"] is False
