"""Global exception handlers producing RFC 7807 problem details."""

import re

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from agents_manage.core.exceptions import GraphValidationError, ProjectHasResourcesError

from .exceptions import APIError
from .schemas import ErrorBody, ProblemDetails

logger = structlog.get_logger()

PROBLEM_CONTENT_TYPE = "application/problem+json"

MAX_MESSAGE_LENGTH = 100

TITLES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
}

CODES: dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    422: "unprocessable_entity",
    500: "internal_server_error",
}

_SENSITIVE = re.compile(r"\S*(password|token|key|secret|auth)\S*", re.IGNORECASE)


def truncate_message(message: str) -> str:
    """Shorten a message to fit the ``error.message`` field."""
    if len(message) > MAX_MESSAGE_LENGTH:
        return message[: MAX_MESSAGE_LENGTH - 3] + "..."
    return message


def redact(message: str) -> str:
    """Replace words that may carry secrets with ``[REDACTED]``."""
    return _SENSITIVE.sub("[REDACTED]", message)


def problem_response(
    request: Request,
    status_code: int,
    detail: str,
    code: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a problem details response.

    Args:
        request: Request being answered
        status_code: HTTP status code
        detail: Full error description
        code: Machine readable error code, derived from the status when omitted
        headers: Extra response headers

    Returns:
        JSON response with the problem details content type
    """
    code = code or CODES.get(status_code, f"http_{status_code}")
    body = ProblemDetails(
        title=TITLES.get(status_code, "Error"),
        status=status_code,
        detail=detail,
        code=code,
        instance=request.url.path,
        request_id=getattr(request.state, "request_id", None),
        error=ErrorBody(code=code, message=truncate_message(detail)),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
        media_type=PROBLEM_CONTENT_TYPE,
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        """Handle custom API errors."""
        logger.warning(
            "api_error",
            request_id=getattr(request.state, "request_id", None),
            code=exc.code,
            message=exc.message,
        )
        return problem_response(request, exc.status_code, exc.message, exc.code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions raised by the framework (404 routes, 405, ...)."""
        logger.warning(
            "http_error",
            request_id=getattr(request.state, "request_id", None),
            status_code=exc.status_code,
            detail=exc.detail,
        )
        return problem_response(
            request, exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle request validation errors as 400 Bad Request."""
        errors = []
        for error in exc.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        logger.warning(
            "validation_error",
            request_id=getattr(request.state, "request_id", None),
            errors=errors,
        )
        return problem_response(request, 400, "; ".join(errors) or "Invalid request")

    @app.exception_handler(GraphValidationError)
    async def graph_validation_handler(
        request: Request,
        exc: GraphValidationError,
    ) -> JSONResponse:
        """Handle invalid graph definitions."""
        logger.warning("graph_validation_failed", path=request.url.path, error=str(exc))
        return problem_response(request, 400, str(exc))

    @app.exception_handler(ProjectHasResourcesError)
    async def project_has_resources_handler(
        request: Request,
        exc: ProjectHasResourcesError,
    ) -> JSONResponse:
        """Handle deletion of a project that still owns resources."""
        logger.warning("project_delete_refused", project_id=exc.project_id, counts=exc.counts)
        return problem_response(request, 409, str(exc))

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        """Handle constraint violations that were not translated by a service."""
        logger.warning("integrity_error", path=request.url.path, error=str(exc.orig))
        return problem_response(request, 409, "Resource already exists or violates a constraint")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unhandled exceptions, redacting anything that looks secret."""
        logger.exception(
            "unhandled_error",
            request_id=getattr(request.state, "request_id", None),
            error_type=type(exc).__name__,
        )
        return problem_response(
            request,
            500,
            f"Server error occurred: {redact(str(exc))}",
        )
