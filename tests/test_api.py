"""API-level tests for the HTTP surface."""

from datetime import timedelta

import pytest

from conftest import TEST_SECRET
from support_desk.core import NotificationInbox
from support_desk.db.services import UserService
from support_desk.schemas.notifications import NotificationCreate
from support_desk.security import TokenService
from support_desk.security.tokens import utc_now


def register(client, **overrides) -> dict:
    payload = {
        "email": "alice@x.com",
        "password": "pw1",
        "first_name": "Alice",
        "last_name": "Liddell",
    }
    payload.update(overrides)
    response = client.post("/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def create_ticket(client, customer_id: int, **overrides) -> dict:
    payload = {
        "title": "Printer on fire",
        "description": "Smoke everywhere",
        "priority": "high",
        "customer_id": customer_id,
    }
    payload.update(overrides)
    response = client.post("/tickets", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def login(client, email="alice@x.com", password="pw1"):
    return client.post("/login", json={"email": email, "password": password})


class TestAccounts:
    def test_register_hides_password_hash(self, client):
        user = register(client)

        assert user["email"] == "alice@x.com"
        assert user["role"] == "customer"
        assert user["email_verified"] is False
        assert "password" not in user
        assert "password_hash" not in user

    def test_register_sends_welcome(self, client, sink):
        register(client)
        assert [to for to, _, _ in sink.sent] == ["alice@x.com"]

    def test_duplicate_registration_conflicts(self, client):
        register(client)

        response = client.post(
            "/register",
            json={"email": "alice@x.com", "password": "x", "first_name": "A", "last_name": "B"},
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_register_rejects_unknown_role(self, client):
        response = client.post(
            "/register",
            json={
                "email": "eve@x.com",
                "password": "pw",
                "first_name": "Eve",
                "last_name": "E",
                "role": "superuser",
            },
        )
        assert response.status_code == 422

    def test_login_returns_verifiable_token(self, client, token_service):
        user = register(client)

        response = login(client)

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["id"] == user["id"]
        assert "password_hash" not in body["user"]
        claims = token_service.verify(body["token"])
        assert claims.sub == user["id"]
        assert claims.email == "alice@x.com"

    def test_wrong_password_is_unauthorized(self, client):
        register(client)

        response = login(client, password="pw2")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_unknown_email_is_unauthorized(self, client):
        response = login(client, email="nobody@x.com")
        assert response.status_code == 401

    def test_corrupt_hash_is_internal_error_without_details(self, client, session_factory):
        db = session_factory()
        try:
            UserService(db).create(
                email="broken@x.com",
                password_hash="not-a-hash",
                first_name="Bro",
                last_name="Ken",
                role="customer",
            )
        finally:
            db.close()

        response = login(client, email="broken@x.com")

        assert response.status_code == 500
        assert response.json() == {
            "error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}
        }

    def test_list_users(self, client):
        register(client)
        register(client, email="bob@x.com", first_name="Bob")

        response = client.get("/users")

        assert response.status_code == 200
        assert [u["email"] for u in response.json()] == ["bob@x.com", "alice@x.com"]


class TestMe:
    def test_me_with_token(self, client):
        user = register(client)
        token = login(client).json()["token"]

        response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        body = response.json()
        assert body["user_id"] == user["id"]
        assert body["email"] == "alice@x.com"
        assert body["role"] == "customer"

    def test_me_without_header(self, client):
        response = client.get("/me")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "TOKEN_INVALID"
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.parametrize(
        "header",
        ["Bearer", "Bearer not.a.token", "Basic YWxpY2U6cHcx", "token-without-scheme"],
    )
    def test_me_with_bad_header(self, client, header):
        response = client.get("/me", headers={"Authorization": header})
        assert response.status_code == 401

    def test_me_with_expired_token(self, client):
        stale = TokenService(TEST_SECRET, clock=lambda: utc_now() - timedelta(hours=25))
        token = stale.issue(1, "alice@x.com", "customer")

        response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "TOKEN_EXPIRED"

    def test_me_with_foreign_signature(self, client):
        token = TokenService("some-other-secret").issue(1, "alice@x.com", "admin")

        response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "TOKEN_INVALID"


class TestTickets:
    def test_ticket_lifecycle(self, client, sink):
        user = register(client)
        assert login(client).status_code == 200

        ticket = create_ticket(client, user["id"], status="closed")
        assert ticket["status"] == "open"
        assert ticket["priority"] == "high"
        assert ticket["updated_at"] is None
        assert sink.sent[-1][1] == f"New Ticket Created - #{ticket['id']}"

        response = client.put(f"/tickets/{ticket['id']}", json={"status": "closed"})
        assert response.status_code == 200
        updated = response.json()
        assert updated["status"] == "closed"
        assert updated["title"] == ticket["title"]
        assert updated["description"] == ticket["description"]
        assert updated["priority"] == ticket["priority"]
        assert updated["updated_at"] is not None

        response = client.delete(f"/tickets/{ticket['id']}")
        assert response.status_code == 204
        assert response.content == b""

        response = client.get(f"/tickets/{ticket['id']}")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_assign_agent_keeps_other_fields(self, client):
        customer = register(client)
        agent = register(client, email="agent@x.com", first_name="Ann", role="agent")
        ticket = create_ticket(client, customer["id"])

        response = client.put(
            f"/tickets/{ticket['id']}", json={"assigned_agent_id": agent["id"]}
        )
        fetched = client.get(f"/tickets/{ticket['id']}").json()

        assert response.status_code == 200
        assert fetched["assigned_agent_id"] == agent["id"]
        for field in ("title", "description", "status", "priority", "customer_id", "created_at"):
            assert fetched[field] == ticket[field], field

    def test_empty_update_is_bad_request(self, client):
        user = register(client)
        ticket = create_ticket(client, user["id"])

        response = client.put(f"/tickets/{ticket['id']}", json={})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"
        assert client.get(f"/tickets/{ticket['id']}").json()["updated_at"] is None

    def test_update_missing_ticket(self, client):
        response = client.put("/tickets/999", json={"title": "x"})
        assert response.status_code == 404

    def test_delete_missing_ticket(self, client):
        assert client.delete("/tickets/999").status_code == 404

    def test_create_for_unknown_customer_is_internal_error(self, client):
        response = client.post(
            "/tickets",
            json={"title": "t", "description": "d", "priority": "low", "customer_id": 999},
        )

        assert response.status_code == 500
        assert "FOREIGN KEY" not in response.text
        assert "tickets" not in response.text

    def test_list_with_filters(self, client):
        user = register(client)
        low = create_ticket(client, user["id"], priority="low")
        high = create_ticket(client, user["id"], priority="high")
        client.put(f"/tickets/{low['id']}", json={"status": "resolved"})

        everything = client.get("/tickets").json()
        assert [t["id"] for t in everything] == [high["id"], low["id"]]

        resolved = client.get("/tickets", params={"status": "resolved"}).json()
        assert [t["id"] for t in resolved] == [low["id"]]

        urgent = client.get("/tickets", params={"priority": "urgent"}).json()
        assert urgent == []

    def test_list_empty(self, client):
        response = client.get("/tickets")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize(
        "params",
        [{"status": "bogus"}, {"priority": "critical"}, {"status": "OPEN"}],
    )
    def test_list_rejects_unknown_filter_values(self, client, params):
        response = client.get("/tickets", params=params)
        assert response.status_code == 422

    def test_create_requires_priority(self, client):
        user = register(client)

        response = client.post(
            "/tickets",
            json={"title": "t", "description": "d", "customer_id": user["id"]},
        )

        assert response.status_code == 422
        assert client.get("/tickets").json() == []


class TestComments:
    def test_comments_in_order(self, client):
        user = register(client)
        ticket = create_ticket(client, user["id"])

        for text in ("first", "second"):
            response = client.post(
                f"/tickets/{ticket['id']}/comments",
                json={"content": text, "user_id": user["id"]},
            )
            assert response.status_code == 201
            assert response.json()["ticket_id"] == ticket["id"]

        response = client.get(f"/tickets/{ticket['id']}/comments")

        assert response.status_code == 200
        assert [c["content"] for c in response.json()] == ["first", "second"]

    def test_comments_removed_with_ticket(self, client):
        user = register(client)
        ticket = create_ticket(client, user["id"])
        client.post(
            f"/tickets/{ticket['id']}/comments",
            json={"content": "bye", "user_id": user["id"]},
        )

        client.delete(f"/tickets/{ticket['id']}")

        assert client.get(f"/tickets/{ticket['id']}/comments").json() == []

    def test_comment_on_missing_ticket(self, client):
        user = register(client)

        response = client.post(
            "/tickets/999/comments", json={"content": "hello", "user_id": user["id"]}
        )

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"


class TestNotifications:
    @pytest.fixture
    def recorded(self, client, session_factory):
        user = register(client)
        db = session_factory()
        try:
            inbox = NotificationInbox(db)
            first = inbox.record(
                NotificationCreate(
                    user_id=user["id"],
                    notification_type="system",
                    title="Maintenance",
                    message="Down at midnight",
                )
            )
            second = inbox.record(
                NotificationCreate(
                    user_id=user["id"],
                    notification_type="welcome",
                    title="Hello",
                    message="Welcome aboard",
                )
            )
            return user, first.id, second.id
        finally:
            db.close()

    def test_list_and_mark_read(self, client, recorded):
        user, first_id, second_id = recorded

        listed = client.get("/notifications", params={"user_id": user["id"]}).json()
        assert [n["id"] for n in listed] == [second_id, first_id]
        assert all(n["read"] is False for n in listed)

        response = client.put(f"/notifications/{first_id}/read")
        assert response.status_code == 200
        assert response.json()["read"] is True

        unread = client.get(
            "/notifications", params={"user_id": user["id"], "unread_only": True}
        ).json()
        assert [n["id"] for n in unread] == [second_id]

    def test_mark_read_is_idempotent(self, client, recorded):
        _, first_id, _ = recorded

        assert client.put(f"/notifications/{first_id}/read").json()["read"] is True
        assert client.put(f"/notifications/{first_id}/read").json()["read"] is True

    def test_mark_missing_notification(self, client):
        assert client.put("/notifications/999/read").status_code == 404

    def test_other_users_notifications_filtered(self, client, recorded):
        assert client.get("/notifications", params={"user_id": 999}).json() == []


def test_customer_files_ticket_and_comments(client):
    """Register, log in, file a ticket and comment on it as the same customer."""
    alice = register(client)
    assert alice["role"] == "customer"

    response = login(client)
    assert response.status_code == 200

    ticket = create_ticket(client, alice["id"], priority="high")
    assert ticket["customer_id"] == alice["id"]
    assert ticket["priority"] == "high"
    assert ticket["status"] == "open"
    assert ticket["assigned_agent_id"] is None
    assert ticket["resolved_at"] is None

    response = client.post(
        f"/tickets/{ticket['id']}/comments",
        json={"content": "Any update?", "user_id": alice["id"]},
    )
    assert response.status_code == 201

    comments = client.get(f"/tickets/{ticket['id']}/comments").json()
    assert len(comments) == 1
    assert comments[0]["user_id"] == alice["id"]
    assert comments[0]["ticket_id"] == ticket["id"]
    assert comments[0]["content"] == "Any update?"
