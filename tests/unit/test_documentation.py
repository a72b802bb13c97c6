"""Unit tests for the OpenAPI publisher."""

import json

import pytest

from backend.api.documentation import build_openapi, export_openapi, render_openapi

pytestmark = pytest.mark.unit


@pytest.fixture
def document(app):
    return build_openapi(app)


def test_document_metadata(document):
    """Test info, servers and tags."""
    assert document["openapi"].startswith("3.")
    assert document["info"]["title"] == "Backend API"
    assert document["info"]["version"] == "1.0.0"
    assert document["servers"][0]["url"] == "http://localhost:3001"
    assert [t["name"] for t in document["tags"]] == ["health", "people"]


def test_every_route_published(document):
    """Test each (path, verb) is in the document."""
    paths = document["paths"]

    assert set(paths) == {"/health", "/people", "/people/{person_id}"}
    assert set(paths["/people"]) == {"get", "post"}
    assert set(paths["/people/{person_id}"]) == {"get", "put", "delete"}


def test_response_statuses(document):
    """Test success and error statuses per operation."""
    people = document["paths"]["/people"]
    person = document["paths"]["/people/{person_id}"]

    assert set(people["get"]["responses"]) == {"200", "400", "500"}
    assert set(people["post"]["responses"]) == {"201", "400", "500"}
    assert set(person["get"]["responses"]) == {"200", "400", "404", "500"}
    assert set(person["put"]["responses"]) == {"200", "400", "404", "500"}
    assert set(person["delete"]["responses"]) == {"204", "400", "404", "500"}


def test_no_framework_validation_responses(document):
    """Test 422 is never advertised; validation failures are 400."""
    for operations in document["paths"].values():
        for operation in operations.values():
            assert "422" not in operation["responses"]
    assert "HTTPValidationError" not in document["components"]["schemas"]


def test_error_schema_shared(document):
    """Test every error response uses ErrorResponse."""
    ref = "#/components/schemas/ErrorResponse"
    not_found = document["paths"]["/people/{person_id}"]["get"]["responses"]["404"]

    assert not_found["content"]["application/json"]["schema"]["$ref"] == ref
    assert document["components"]["schemas"]["ErrorResponse"]["required"] == ["error", "message"]


def test_camel_case_schemas(document):
    """Test published field names are camelCase."""
    schemas = document["components"]["schemas"]

    assert "firstName" in schemas["PersonResponse"]["properties"]
    assert "createdAt" in schemas["PersonResponse"]["properties"]
    assert "first_name" not in schemas["PersonResponse"]["properties"]
    assert set(schemas["PersonCreate"]["required"]) == {
        "firstName",
        "lastName",
        "email",
        "age",
        "city",
        "country",
    }
    assert "id" not in schemas["PersonCreate"]["properties"]


def test_list_query_parameters(document):
    """Test limit, offset and search are published as query parameters."""
    parameters = document["paths"]["/people"]["get"]["parameters"]
    by_name = {p["name"]: p for p in parameters}

    assert set(by_name) == {"limit", "offset", "search"}
    assert all(p["in"] == "query" for p in parameters)
    assert by_name["limit"]["schema"]["maximum"] == 100


def test_render_is_deterministic(app):
    """Test two builds render byte-identical JSON."""
    first = render_openapi(build_openapi(app))
    second = render_openapi(build_openapi(app))

    assert first == second
    assert json.loads(first)["info"]["title"] == "Backend API"


def test_export_openapi(app, tmp_path):
    """Test the document is written to disk."""
    path = export_openapi(app, tmp_path / "openapi" / "openapi.json")

    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8"))["paths"]


def test_served_document_matches(client, document):
    """Test /openapi.json serves the same document."""
    response = client.get("/openapi.json")

    assert response.status_code == 200
    assert response.json() == document
