"""Render pipeline results as JSON envelope responses."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from movieshelf.services.errors import Outcome
from movieshelf.services.results import Ok, Result

STATUS_CODES = {
    Outcome.SUCCESS: 200,
    Outcome.CLIENT_ERROR: 400,
    Outcome.NOT_FOUND: 404,
    Outcome.SERVER_ERROR: 500,
}


def envelope(result: Result) -> dict[str, Any]:
    """
    Build the response body for a result.

    Optional members (pagination, message, errors) are omitted when empty.
    """
    if isinstance(result, Ok):
        body: dict[str, Any] = {"success": True, "data": jsonable_encoder(result.data, by_alias=True)}
        if result.pagination is not None:
            body["pagination"] = jsonable_encoder(result.pagination, by_alias=True)
        if result.message:
            body["message"] = result.message
        return body

    body = {"success": False, "message": result.message}
    if result.errors:
        body["errors"] = list(result.errors)
    return body


def error_body(message: str, errors: list[str] | None = None, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    body.update(extra)
    return body


def render(result: Result, success_status: int = 200) -> JSONResponse:
    """Convert a result into a JSONResponse with a matching status code."""
    status_code = success_status if isinstance(result, Ok) else STATUS_CODES[result.outcome]
    return JSONResponse(status_code=status_code, content=envelope(result))
