"""API exception tests."""

from __future__ import annotations

import pytest

from agents_manage.api.exceptions import (
    APIError,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    InternalServerError,
    NotFoundError,
    UnauthorizedError,
    UnprocessableEntityError,
)


class TestAPIExceptions:
    """API exception tests."""

    def test_api_error_base(self) -> None:
        """APIError carries message, code and status."""
        error = APIError("Something went wrong", code="test_error", status_code=503)

        assert error.message == "Something went wrong"
        assert error.detail == "Something went wrong"
        assert error.code == "test_error"
        assert error.status_code == 503

    def test_api_error_defaults(self) -> None:
        error = APIError("Boom")

        assert error.code == "internal_server_error"
        assert error.status_code == 500

    @pytest.mark.parametrize(
        ("error_class", "status_code", "code"),
        [
            (BadRequestError, 400, "bad_request"),
            (UnauthorizedError, 401, "unauthorized"),
            (ForbiddenError, 403, "forbidden"),
            (ConflictError, 409, "conflict"),
            (UnprocessableEntityError, 422, "unprocessable_entity"),
            (InternalServerError, 500, "internal_server_error"),
        ],
    )
    def test_subclass_defaults(
        self, error_class: type[APIError], status_code: int, code: str
    ) -> None:
        error = error_class("message")

        assert error.status_code == status_code
        assert error.code == code

    def test_not_found_with_id(self) -> None:
        """NotFoundError names the resource and its id."""
        error = NotFoundError("Agent", "router")

        assert error.message == "Agent 'router' not found"
        assert error.status_code == 404
        assert error.code == "not_found"
        assert error.resource == "Agent"
        assert error.resource_id == "router"

    def test_not_found_without_id(self) -> None:
        error = NotFoundError("Association")

        assert error.message == "Association not found"
        assert error.resource_id is None
