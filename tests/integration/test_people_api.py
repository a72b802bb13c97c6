"""
Integration tests for the people API.

Drives the full app (middleware, validation, route table, Access Object,
SQLite) through TestClient.
"""

import uuid
from datetime import datetime

import pytest

pytestmark = pytest.mark.integration


def _create(client, payload):
    response = client.post("/people", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def _instant(value: str) -> datetime:
    """Parse a wire timestamp; string order breaks when the fraction is omitted."""
    return datetime.fromisoformat(value)


def _payload(index: int) -> dict:
    return {
        "firstName": f"First{index}",
        "lastName": f"Last{index}",
        "email": f"person{index}@example.com",
        "age": 20 + index,
        "city": "Oslo",
        "country": "Norway",
    }


class TestPersonLifecycle:
    """Create, read, update, delete over HTTP."""

    def test_ann_lee_scenario(self, client, person_payload):
        # POST -> 201
        created = client.post("/people", json=person_payload)
        assert created.status_code == 201
        person = created.json()
        person_id = person["id"]
        uuid.UUID(person_id)
        assert person["createdAt"] == person["updatedAt"]

        # GET -> 200, same record
        fetched = client.get(f"/people/{person_id}")
        assert fetched.status_code == 200
        assert fetched.json() == person

        # PUT {age: 31} -> 200, only age and updatedAt change
        updated = client.put(f"/people/{person_id}", json={"age": 31})
        assert updated.status_code == 200
        body = updated.json()
        assert body["age"] == 31
        assert _instant(body["updatedAt"]) > _instant(person["updatedAt"])
        assert body["createdAt"] == person["createdAt"]
        for field in ("id", "firstName", "lastName", "email", "city", "country"):
            assert body[field] == person[field]

        # DELETE -> 204, then 404 for GET and DELETE
        deleted = client.delete(f"/people/{person_id}")
        assert deleted.status_code == 204
        assert deleted.content == b""

        missing = client.get(f"/people/{person_id}")
        assert missing.status_code == 404
        assert missing.json() == {
            "error": "Not Found",
            "message": f"Person with id {person_id} not found",
        }
        assert client.delete(f"/people/{person_id}").status_code == 404

    def test_response_fields(self, client, person_payload):
        body = _create(client, person_payload)

        assert set(body) == {
            "id",
            "firstName",
            "lastName",
            "email",
            "age",
            "city",
            "country",
            "createdAt",
            "updatedAt",
        }

    def test_empty_update_advances_timestamp(self, client, person_payload):
        person = _create(client, person_payload)

        body = client.put(f"/people/{person['id']}", json={}).json()

        assert _instant(body["updatedAt"]) > _instant(person["updatedAt"])
        assert body["age"] == person["age"]

    def test_update_missing_person(self, client):
        person_id = uuid.uuid4()

        response = client.put(f"/people/{person_id}", json={"age": 40})

        assert response.status_code == 404
        assert response.json()["message"] == f"Person with id {person_id} not found"


class TestValidation:
    """Requests rejected before any handler runs."""

    def test_duplicate_email(self, client, person_payload):
        _create(client, person_payload)

        response = client.post("/people", json=dict(person_payload, firstName="Other"))

        assert response.status_code == 400
        assert response.json() == {
            "error": "Bad Request",
            "message": "Person with this email already exists",
        }

    @pytest.mark.parametrize(
        "field,value",
        [("email", "not-an-email"), ("age", -1), ("age", 200), ("firstName", ""), ("city", None)],
    )
    def test_invalid_create_body(self, client, person_payload, field, value):
        person_payload[field] = value

        response = client.post("/people", json=person_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Bad Request"
        assert field in body["message"]

    def test_missing_field(self, client, person_payload):
        del person_payload["lastName"]

        response = client.post("/people", json=person_payload)

        assert response.status_code == 400
        assert "lastName" in response.json()["message"]

    def test_malformed_id(self, client):
        for method in ("get", "delete"):
            response = getattr(client, method)("/people/not-a-uuid")
            assert response.status_code == 400
            assert response.json()["error"] == "Bad Request"

    def test_explicit_null_in_update(self, client, person_payload):
        person = _create(client, person_payload)

        response = client.put(f"/people/{person['id']}", json={"firstName": None})

        assert response.status_code == 400
        assert client.get(f"/people/{person['id']}").json()["firstName"] == "Ann"

    def test_update_email_to_taken(self, client, person_payload):
        _create(client, person_payload)
        other = _create(client, _payload(1))

        response = client.put(f"/people/{other['id']}", json={"email": "ann@example.com"})

        assert response.status_code == 400
        assert response.json()["error"] == "Bad Request"

    @pytest.mark.parametrize(
        "query",
        ["limit=0", "limit=101", "offset=-1", "limit=abc", "offset=9223372036854775808", f"offset={10**20}"],
    )
    def test_invalid_list_query(self, client, query):
        response = client.get(f"/people?{query}")

        assert response.status_code == 400
        assert response.json()["error"] == "Bad Request"


class TestListPeople:
    """Listing, paging and search."""

    def test_largest_offset(self, client, person_payload):
        _create(client, person_payload)

        response = client.get("/people", params={"offset": 2**63 - 1})

        assert response.status_code == 200
        assert response.json()["data"] == []
        assert response.json()["total"] == 1

    def test_empty_list(self, client):
        response = client.get("/people")

        assert response.status_code == 200
        assert response.json() == {"data": [], "total": 0, "limit": 10, "offset": 0}

    def test_pagination(self, client):
        created = [_create(client, _payload(i)) for i in range(12)]

        first = client.get("/people", params={"limit": 5}).json()
        second = client.get("/people", params={"limit": 5, "offset": 5}).json()
        third = client.get("/people", params={"limit": 5, "offset": 10}).json()

        assert first["total"] == 12
        assert (len(first["data"]), len(second["data"]), len(third["data"])) == (5, 5, 2)
        ids = [p["id"] for page in (first, second, third) for p in page["data"]]
        assert sorted(ids) == sorted(p["id"] for p in created)
        assert second["limit"] == 5
        assert second["offset"] == 5

    def test_search(self, client, person_payload):
        _create(client, person_payload)
        _create(client, dict(_payload(1), city="Bergen"))

        response = client.get("/people", params={"search": "ann"})

        body = response.json()
        assert body["total"] == 1
        assert body["data"][0]["email"] == "ann@example.com"


class TestPlatform:
    """Error bodies, health and headers."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["database"] == "connected"
        assert body["uptime"] >= 0
        assert body["timestamp"].endswith("Z")

    def test_unknown_route(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"

    def test_method_not_allowed(self, client):
        response = client.patch("/people")

        assert response.status_code == 405
        assert response.json()["error"] == "Method Not Allowed"

    def test_request_id_propagated(self, client):
        response = client.get("/people", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"
        assert "X-Process-Time" in response.headers

    def test_request_id_generated(self, client):
        response = client.get("/people")

        assert len(response.headers["X-Request-ID"]) == 32

    def test_docs_served(self, client):
        assert client.get("/docs").status_code == 200

    def test_unsafe_request_id_replaced(self, client):
        response = client.get("/people", headers={"X-Request-ID": "a b"})

        assert response.headers["X-Request-ID"] != "a b"
