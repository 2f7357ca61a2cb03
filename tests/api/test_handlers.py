"""Exception handler tests."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from agents_manage.api.exceptions import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    UnprocessableEntityError,
)
from agents_manage.api.handlers import (
    MAX_MESSAGE_LENGTH,
    PROBLEM_CONTENT_TYPE,
    redact,
    register_exception_handlers,
    truncate_message,
)
from agents_manage.api.middleware import RequestIDMiddleware
from agents_manage.core import GraphValidationError, ProjectHasResourcesError


class Body(BaseModel):
    name: str
    count: int


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers registered."""
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers, raise_server_exceptions=False)


class TestProblemDetails:
    """Tests for the problem details body."""

    def test_not_found_error(self, app_with_handlers: FastAPI, client: TestClient) -> None:
        """NotFoundError becomes a 404 problem document."""

        @app_with_handlers.get("/things/{thing_id}")
        async def get_thing(thing_id: str) -> None:
            raise NotFoundError("Thing", thing_id)

        response = client.get("/things/abc", headers={"X-Request-ID": "req-1"})

        assert response.status_code == 404
        assert response.headers["content-type"].startswith(PROBLEM_CONTENT_TYPE)
        data = response.json()
        assert data["title"] == "Not Found"
        assert data["status"] == 404
        assert data["code"] == "not_found"
        assert data["detail"] == "Thing 'abc' not found"
        assert data["instance"] == "/things/abc"
        assert data["requestId"] == "req-1"
        assert data["error"] == {"code": "not_found", "message": "Thing 'abc' not found"}

    @pytest.mark.parametrize(
        ("error", "status", "title", "code"),
        [
            (BadRequestError("bad"), 400, "Bad Request", "bad_request"),
            (ConflictError("taken"), 409, "Conflict", "conflict"),
            (UnprocessableEntityError("dup"), 422, "Unprocessable Entity", "unprocessable_entity"),
        ],
    )
    def test_api_errors(
        self,
        app_with_handlers: FastAPI,
        client: TestClient,
        error: Exception,
        status: int,
        title: str,
        code: str,
    ) -> None:
        @app_with_handlers.get("/fail")
        async def fail() -> None:
            raise error

        response = client.get("/fail")

        assert response.status_code == status
        assert response.json()["title"] == title
        assert response.json()["code"] == code

    def test_custom_code(self, app_with_handlers: FastAPI, client: TestClient) -> None:
        """An explicit code overrides the class default."""

        @app_with_handlers.get("/fail")
        async def fail() -> None:
            raise BadRequestError("Graph ID mismatch", code="id_mismatch")

        data = client.get("/fail").json()

        assert data["code"] == "id_mismatch"
        assert data["error"]["code"] == "id_mismatch"

    def test_long_message_truncated(self, app_with_handlers: FastAPI, client: TestClient) -> None:
        """error.message is capped while detail keeps the full text."""
        message = "x" * 150

        @app_with_handlers.get("/fail")
        async def fail() -> None:
            raise BadRequestError(message)

        data = client.get("/fail").json()

        assert data["detail"] == message
        assert len(data["error"]["message"]) == MAX_MESSAGE_LENGTH
        assert data["error"]["message"].endswith("...")

    def test_unknown_route(self, client: TestClient) -> None:
        """Framework 404s use the same format."""
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"


class TestValidationErrors:
    """Tests for request validation failures."""

    def test_body_validation_is_bad_request(
        self, app_with_handlers: FastAPI, client: TestClient
    ) -> None:
        @app_with_handlers.post("/things")
        async def create_thing(body: Body) -> Body:
            return body

        response = client.post("/things", json={"name": "a", "count": "many"})

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "bad_request"
        assert "body.count" in data["detail"]


class TestDomainErrors:
    """Tests for errors raised below the HTTP layer."""

    def test_graph_validation_error(self, app_with_handlers: FastAPI, client: TestClient) -> None:
        @app_with_handlers.get("/fail")
        async def fail() -> None:
            raise GraphValidationError("Default agent 'x' does not exist in agents")

        response = client.get("/fail")

        assert response.status_code == 400
        assert response.json()["detail"] == "Default agent 'x' does not exist in agents"

    def test_project_has_resources(self, app_with_handlers: FastAPI, client: TestClient) -> None:
        @app_with_handlers.get("/fail")
        async def fail() -> None:
            raise ProjectHasResourcesError("p1", {"agentGraphs": 1})

        response = client.get("/fail")

        assert response.status_code == 409
        assert "p1" in response.json()["detail"]

    def test_integrity_error(self, app_with_handlers: FastAPI, client: TestClient) -> None:
        @app_with_handlers.get("/fail")
        async def fail() -> None:
            raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

        response = client.get("/fail")

        assert response.status_code == 409
        assert response.json()["code"] == "conflict"


class TestUnhandledErrors:
    """Tests for the catch-all handler."""

    def test_secrets_redacted(self, app_with_handlers: FastAPI, client: TestClient) -> None:
        @app_with_handlers.get("/boom")
        async def boom() -> None:
            raise RuntimeError("connect failed with password=hunter2 and api_key=abc")

        response = client.get("/boom")

        assert response.status_code == 500
        data = response.json()
        assert data["code"] == "internal_server_error"
        assert data["detail"].startswith("Server error occurred: ")
        assert "hunter2" not in data["detail"]
        assert "abc" not in data["detail"]
        assert "[REDACTED]" in data["detail"]


class TestHelpers:
    """Tests for message helpers."""

    def test_truncate_short_message(self) -> None:
        assert truncate_message("short") == "short"

    def test_truncate_exact_limit(self) -> None:
        message = "y" * MAX_MESSAGE_LENGTH

        assert truncate_message(message) == message

    def test_truncate_long_message(self) -> None:
        assert truncate_message("z" * 101) == "z" * 97 + "..."

    def test_redact(self) -> None:
        assert redact("Bearer token=abc failed") == "Bearer [REDACTED] failed"
        assert redact("nothing sensitive") == "nothing sensitive"
