"""Custom exceptions for the API layer."""

from fastapi import HTTPException


class APIError(HTTPException):
    """Base exception for API errors.

    Extends HTTPException for native FastAPI integration. The message
    becomes the problem details ``detail``.
    """

    status: int = 500
    code: str = "internal_server_error"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize API error.

        Args:
            message: Human readable error message
            code: Machine readable error code, defaults to the class code
            status_code: HTTP status code, defaults to the class status
        """
        status = status_code or type(self).status
        super().__init__(status_code=status, detail=message)
        self.message = message
        self.code = code or type(self).code


class BadRequestError(APIError):
    """Malformed or inconsistent request."""

    status = 400
    code = "bad_request"


class UnauthorizedError(APIError):
    """Missing or invalid credentials."""

    status = 401
    code = "unauthorized"


class ForbiddenError(APIError):
    """Access to the resource is not allowed."""

    status = 403
    code = "forbidden"


class NotFoundError(APIError):
    """Resource not found."""

    status = 404
    code = "not_found"

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        """Initialize not found error.

        Args:
            resource: Resource type (e.g. "Agent", "Tool")
            resource_id: Resource identifier
        """
        if resource_id is None:
            super().__init__(f"{resource} not found")
        else:
            super().__init__(f"{resource} '{resource_id}' not found")
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(APIError):
    """Resource already exists or is still in use."""

    status = 409
    code = "conflict"


class UnprocessableEntityError(APIError):
    """Request is well formed but cannot be applied."""

    status = 422
    code = "unprocessable_entity"


class InternalServerError(APIError):
    """Unexpected server-side failure."""

    status = 500
    code = "internal_server_error"
