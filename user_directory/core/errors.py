"""
Handled failure types and how they are rendered.

Only outcomes a handler expects live here.  Anything else is left to
propagate to the error guard in ``core.pipeline``.
"""

from __future__ import annotations

from typing import Any, Iterable

from fastapi import Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

USER_NOT_FOUND = "User not found"

VALIDATION_PROBLEM_TYPE = "https://tools.ietf.org/html/rfc9110#section-15.5.1"
VALIDATION_PROBLEM_TITLE = "One or more validation errors occurred."


class UserValidationError(Exception):
    """One or more fields broke a rule. ``errors`` maps field -> messages."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__(errors)
        self.errors = errors


def field_errors(
    errors: Iterable[dict[str, Any]], prefix: tuple = ()
) -> dict[str, list[str]]:
    """
    Fold pydantic error dicts into ``{field: [messages]}``.

    ``prefix`` is stripped from each ``loc`` first (FastAPI prepends
    ``"body"``).  Errors that point at the document as a whole, such as
    unparseable JSON or a non-object body, are keyed ``"body"``.
    """
    out: dict[str, list[str]] = {}
    for err in errors:
        loc = tuple(err.get("loc", ()))[len(prefix):]
        field = loc[0] if loc and isinstance(loc[0], str) else "body"
        out.setdefault(field, []).append(f"{err['msg']}.")
    return out


def _problem(errors: dict[str, list[str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "type": VALIDATION_PROBLEM_TYPE,
            "title": VALIDATION_PROBLEM_TITLE,
            "status": status.HTTP_400_BAD_REQUEST,
            "errors": errors,
        },
        media_type="application/problem+json",
    )


async def validation_problem_handler(
    request: Request, exc: UserValidationError
) -> JSONResponse:
    return _problem(exc.errors)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Body errors become the 400 problem document.  Path / query errors
    (e.g. a non-integer id) keep FastAPI's default 422.
    """
    errors = exc.errors()
    if errors and all(tuple(e.get("loc", ()))[:1] == ("body",) for e in errors):
        return _problem(field_errors(errors, prefix=("body",)))
    return await request_validation_exception_handler(request, exc)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTPException as ``{"error": detail}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )
