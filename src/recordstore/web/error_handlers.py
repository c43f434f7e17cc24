import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from recordstore.errors import AuthenticationError

logger = logging.getLogger(__name__)


def create_client_error_response(status_code: int, message: str) -> JSONResponse:
    """4xx error body: {"err": message}."""
    return JSONResponse(status_code=status_code, content={"err": message})


def create_server_error_response(message: str) -> JSONResponse:
    """5xx error body: {"error": message}."""
    return JSONResponse(status_code=500, content={"error": message})


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, AuthenticationError):
        # Unauthorized responses carry no body
        return Response(status_code=401)
    return create_client_error_response(status_code=400, message=str(exc))


async def request_validation_error_handler(_: Request, exc: Exception) -> Response:
    """Turn FastAPI's 422 body/path validation errors into 400 {"err": ...}."""
    if not isinstance(exc, RequestValidationError):
        return create_client_error_response(status_code=400, message=str(exc))
    problems = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    ]
    return create_client_error_response(status_code=400, message="; ".join(problems) or "Invalid request")


async def upstream_error_handler(_: Request, exc: Exception) -> Response:
    """Handle database timeouts and lost connections (500)."""
    logger.error("Upstream unavailable: %s", exc, exc_info=exc)
    return create_server_error_response("Upstream service unavailable.")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_server_error_response("An unexpected error occurred.")
