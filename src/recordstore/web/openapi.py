from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

API_TITLE = "Record Store API"
API_VERSION = "0.1.0"


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=API_TITLE,
            version=API_VERSION,
            summary="Album catalog, purchases and session-token authentication",
            routes=app.routes,
        )

        # The authorization header holds the full "Bearer <digits>" value, so describe it as an API key
        scheme = openapi_schema.get("components", {}).get("securitySchemes", {}).get("APIKeyHeader")
        if scheme is not None:
            scheme["description"] = "Value of the authorization header returned by /signup or /login"

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ClientErrorResponse(BaseModel):
    """Error response for rejected requests (4xx)."""

    err: str = Field(..., description="Human-readable error message")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"err": "user field is required!"},
                {"err": "User with email 'someone@example.com' already exists"},
            ]
        }
    }


class ServerErrorResponse(BaseModel):
    """Error response for server faults (5xx)."""

    error: str = Field(..., description="Generic error message; details are only logged")


class DataResponse[T](BaseModel):
    """Success envelope used by every resource endpoint."""

    data: T = Field(..., description="Requested record(s); null when a record does not exist")


# Attached to every router so each operation documents the 5xx body
SERVER_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    500: {"model": ServerErrorResponse, "description": "Unexpected error or database unavailable"},
}
