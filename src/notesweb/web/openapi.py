from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from notesweb.session import SESSION_TOKEN_COOKIE


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Notes Web",
            version="0.1.0",
            summary="Server-side pages and form actions for the notes application",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionTokenCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": SESSION_TOKEN_COOKIE,
                "description": "Session token issued by the notes API, forwarded to it as a bearer token",
            },
        }
        openapi_schema["security"] = [{"SessionTokenCookie": []}]

        # Remove security from public endpoints
        public_endpoints = {
            ("POST", "/signin"),
            ("POST", "/signup"),
            ("GET", "/signin"),
            ("GET", "/signup"),
            ("GET", "/signup/password"),
            ("GET", "/health"),
        }

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in public_endpoints:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "note could not be found", "type": "not_found"},
                {"message": "An unexpected error occurred.", "type": "internal_server_error"},
            ]
        }
    }


class ActionFailure(BaseModel):
    """Form action failure, shown next to the resubmitted form."""

    message: str = Field(..., description="Human-readable error message")
    username: str | None = Field(None, description="Submitted username, echoed back to refill the form")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "username must contain at least 6 characters", "username": "bob"},
                {"message": "something went wrong"},
            ]
        }
    }
