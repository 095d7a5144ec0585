"""Tests for API endpoints using FastAPI TestClient (DB layer faked)."""

import asyncio

import asyncpg
import bcrypt

from core import db


class TestServiceEndpoints:
    def test_root(self, client):
        resp = client.get("/")

        assert resp.status_code == 200
        assert resp.json() == {"message": "Welcome to CRM-Café's server"}

    def test_health(self, client):
        resp = client.get("/health")

        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_health_db(self, client, fake_db):
        fake_db.value.append(1)

        resp = client.get("/health/db")

        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "database": "ok"}
        assert fake_db.statements == ["SELECT 1 AS ok"]

    def test_health_db_unreachable(self, client, fake_db):
        fake_db.value.append(ConnectionRefusedError("connection refused"))

        resp = client.get("/health/db")

        assert resp.status_code == 503

    def test_health_db_timeout(self, client, fake_db):
        fake_db.value.append(asyncio.TimeoutError())

        assert client.get("/health/db").status_code == 503

    def test_health_db_without_pool(self, client, monkeypatch):
        async def no_pool():
            raise RuntimeError("DB pool is not initialized.")

        monkeypatch.setattr(db, "ping", no_pool)

        assert client.get("/health/db").status_code == 503


class TestListEndpoints:
    def test_filters_and_pagination(self, client, fake_db):
        fake_db.value.append(25)
        fake_db.all.append([{"customer_id": 11, "company_name": "Acme"}])

        resp = client.get(
            "/customers",
            params=[
                ("company_name", "acme*"),
                ("assigned_user_id", "3"),
                ("assigned_user_id", "4"),
                ("page", "2"),
                ("limit", "10"),
            ],
        )

        assert resp.status_code == 200
        where = 'WHERE "company_name" ILIKE $1 AND "assigned_user_id" IN ($2, $3)'
        assert fake_db.statements == [
            f"SELECT COUNT(*) AS total FROM customers {where}",
            f"SELECT * FROM customers {where} ORDER BY customer_id LIMIT $4 OFFSET $5",
        ]
        assert fake_db.args == [("acme%", 3, 4), ("acme%", 3, 4, 10, 10)]
        assert resp.json() == {
            "data": [{"customer_id": 11, "company_name": "Acme"}],
            "pagination": {"page": 2, "limit": 10, "total": 25, "pages": 3},
        }

    def test_bad_pagination_is_normalized(self, client, fake_db):
        fake_db.value.append(0)

        resp = client.get("/tasks?limit=abc&page=-2")

        assert resp.status_code == 200
        assert fake_db.args[1] == (20, 0)
        assert resp.json()["pagination"] == {"page": 1, "limit": 20, "total": 0, "pages": 0}

    def test_limit_capped(self, client, fake_db):
        fake_db.value.append(1000)

        resp = client.get("/calls?limit=5000")

        assert fake_db.args[1] == (100, 0)
        assert resp.json()["pagination"]["pages"] == 10

    def test_huge_page_offset_fits_bigint(self, client, fake_db):
        fake_db.value.append(0)

        resp = client.get("/tags?page=1e30&limit=100")

        assert resp.status_code == 200
        assert fake_db.args[1] == (100, 2**63 - 1)

    def test_empty_filter_values_ignored(self, client, fake_db):
        fake_db.value.append(0)

        client.get("/messages?channel=&status=sent")

        assert fake_db.statements[0] == 'SELECT COUNT(*) AS total FROM messages WHERE "status" = $1'

    def test_timestamp_column_is_quoted(self, client, fake_db):
        fake_db.value.append(0)

        resp = client.get("/messages?timestamp=2024-03-01T10:00:00")

        assert resp.status_code == 200
        assert 'WHERE "timestamp" = $1' in fake_db.statements[0]

    def test_unknown_filter(self, client, fake_db):
        resp = client.get("/tags?bogus=1")

        assert resp.status_code == 400
        assert resp.json() == {"detail": "Unknown filter field: bogus"}
        assert fake_db.calls == []

    def test_bad_filter_value(self, client, fake_db):
        resp = client.get("/customers?assigned_user_id=abc")

        assert resp.status_code == 400
        assert fake_db.calls == []

    def test_hidden_column_not_filterable(self, client, fake_db):
        resp = client.get("/users?password_hash=x")

        assert resp.status_code == 400

    def test_json_column_not_filterable(self, client, fake_db):
        resp = client.get("/calls?embedding_vector=1")

        assert resp.status_code == 400

    def test_users_list_hides_password_hash(self, client, fake_db):
        fake_db.value.append(1)
        fake_db.all.append([{"user_id": 1, "email": "a@b.c", "password_hash": "$2b$..."}])

        resp = client.get("/users")

        assert resp.json()["data"] == [{"user_id": 1, "email": "a@b.c"}]


class TestItemEndpoints:
    def test_get(self, client, fake_db):
        fake_db.one.append({"tag_id": 3, "name": "vip"})

        resp = client.get("/tags/3")

        assert resp.status_code == 200
        assert resp.json() == {"tag_id": 3, "name": "vip"}
        assert fake_db.calls == [("fetch_one", "SELECT * FROM tags WHERE tag_id = $1", (3,))]

    def test_get_missing(self, client, fake_db):
        resp = client.get("/tags/3")

        assert resp.status_code == 404
        assert resp.json() == {"detail": "Not found"}

    def test_get_non_integer_id(self, client, fake_db):
        assert client.get("/tags/abc").status_code == 422

    def test_patch(self, client, fake_db):
        fake_db.one.append({"customer_id": 7, "name": "Bob", "email": None})

        resp = client.patch("/customers/7", json={"name": "Bob", "email": None})

        assert resp.status_code == 200
        assert fake_db.calls == [
            (
                "fetch_one",
                'UPDATE customers SET "name" = $1, "email" = $2 WHERE customer_id = $3 RETURNING *',
                ("Bob", None, 7),
            )
        ]

    def test_patch_no_fields(self, client, fake_db):
        resp = client.patch("/customers/7", json={})

        assert resp.status_code == 400
        assert resp.json() == {"detail": "No fields to update"}
        assert fake_db.calls == []

    def test_patch_unknown_field(self, client, fake_db):
        resp = client.patch("/customers/7", json={"customer_id": 8})

        assert resp.status_code == 422
        assert fake_db.calls == []

    def test_patch_missing_row(self, client, fake_db):
        resp = client.patch("/tasks/7", json={"status": "done"})

        assert resp.status_code == 404

    def test_patch_date_field(self, client, fake_db):
        fake_db.one.append({"task_id": 7})

        client.patch("/tasks/7", json={"due_date": "2024-06-30"})

        _, sql, args = fake_db.calls[0]
        assert sql == 'UPDATE tasks SET "due_date" = $1 WHERE task_id = $2 RETURNING *'
        assert str(args[0]) == "2024-06-30"

    def test_delete(self, client, fake_db):
        fake_db.all.append([{"message_id": 5}])

        resp = client.delete("/messages/5")

        assert resp.json() == {"deleted": True}

    def test_delete_missing(self, client, fake_db):
        assert client.delete("/messages/5").json() == {"deleted": False}


class TestCreateEndpoints:
    def test_task_defaults_to_pending(self, client, fake_db):
        fake_db.one.append({"task_id": 1, "status": "pending"})

        resp = client.post("/tasks", json={"customer_id": 2, "task_description": "call back"})

        assert resp.status_code == 200
        assert fake_db.args == [(2, None, "call back", None, "pending")]

    def test_message_defaults_to_sent(self, client, fake_db):
        fake_db.one.append({"message_id": 1})

        client.post("/messages", json={"customer_id": 2, "channel": "sms", "message_body": "hi"})

        _, sql, args = fake_db.calls[0]
        assert '"timestamp"' in sql
        assert args == (2, None, "sms", "hi", "sent", None)

    def test_customer_missing_fields_are_null(self, client, fake_db):
        fake_db.one.append({"customer_id": 1, "name": "Acme"})

        client.post("/customers", json={"name": "Acme"})

        assert fake_db.args == [(None, "Acme", None, None, None, None)]

    def test_call_embedding_passed_through(self, client, fake_db):
        fake_db.one.append({"call_id": 1})

        client.post("/calls", json={"customer_id": 1, "embedding_vector": [0.1, 0.2]})

        assert fake_db.args[0][8] == [0.1, 0.2]

    def test_tag_requires_name(self, client, fake_db):
        assert client.post("/tags", json={}).status_code == 422
        assert fake_db.calls == []

    def test_duplicate_tag(self, client, fake_db):
        fake_db.one.append(asyncpg.exceptions.UniqueViolationError("duplicate key"))

        resp = client.post("/tags", json={"name": "vip"})

        assert resp.status_code == 409


class TestUserEndpoints:
    def test_create_hashes_password(self, client, fake_db):
        fake_db.one.append({"user_id": 1, "email": "ann@example.com", "password_hash": "h", "role": "agent"})

        resp = client.post(
            "/users",
            json={"name": "Ann", "email": " Ann@Example.com ", "password": "correct horse"},
        )

        assert resp.status_code == 200
        assert "password_hash" not in resp.json()
        name, email, password_hash, role = fake_db.args[0]
        assert (name, email, role) == ("Ann", "ann@example.com", "agent")
        assert bcrypt.checkpw(b"correct horse", password_hash.encode("utf-8"))

    def test_create_rejects_unknown_role(self, client, fake_db):
        resp = client.post("/users", json={"name": "Ann", "role": "root"})

        assert resp.status_code == 422

    def test_update_password(self, client, fake_db):
        fake_db.one.append({"user_id": 1, "password_hash": "h"})

        resp = client.patch("/users/1", json={"password": "new password!"})

        assert resp.status_code == 200
        assert resp.json() == {"user_id": 1}
        _, sql, args = fake_db.calls[0]
        assert sql == 'UPDATE users SET "password_hash" = $1 WHERE user_id = $2 RETURNING *'
        assert bcrypt.checkpw(b"new password!", args[0].encode("utf-8"))
        assert args[1] == 1

    def test_update_name_and_email(self, client, fake_db):
        fake_db.one.append({"user_id": 1})

        client.patch("/users/1", json={"name": "Ann", "email": "ANN@example.com"})

        assert fake_db.calls[0][1] == 'UPDATE users SET "name" = $1, "email" = $2 WHERE user_id = $3 RETURNING *'
        assert fake_db.args[0] == ("Ann", "ann@example.com", 1)

    def test_null_password_rejected(self, client, fake_db):
        resp = client.patch("/users/1", json={"password": None})

        assert resp.status_code == 400
        assert fake_db.calls == []

    def test_null_role_rejected(self, client, fake_db):
        resp = client.patch("/users/1", json={"role": None})

        assert resp.status_code == 400


class TestCustomerTagEndpoints:
    def test_list(self, client, fake_db):
        fake_db.all.append([{"customer_id": 1, "tag_id": 2}])

        resp = client.get("/customer-tags")

        assert resp.json() == [{"customer_id": 1, "tag_id": 2}]
        assert fake_db.statements == ["SELECT * FROM customer_tags ORDER BY customer_id, tag_id"]

    def test_add(self, client, fake_db):
        fake_db.one.append({"customer_id": 1, "tag_id": 2})

        resp = client.post("/customer-tags", json={"customer_id": 1, "tag_id": 2})

        assert resp.json() == {"customer_id": 1, "tag_id": 2}
        assert "ON CONFLICT (customer_id, tag_id) DO NOTHING" in fake_db.statements[0]

    def test_add_existing(self, client, fake_db):
        resp = client.post("/customer-tags", json={"customer_id": 1, "tag_id": 2})

        assert resp.json() == {"inserted": False}

    def test_remove(self, client, fake_db):
        fake_db.one.append({"customer_id": 1, "tag_id": 2})

        resp = client.request("DELETE", "/customer-tags", json={"customer_id": 1, "tag_id": 2})

        assert resp.json() == {"deleted": True}
        assert fake_db.args == [(1, 2)]

    def test_remove_requires_body(self, client, fake_db):
        resp = client.request("DELETE", "/customer-tags")

        assert resp.status_code == 422
