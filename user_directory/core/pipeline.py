"""
Request pipeline — the stages every request passes through.

A stage is ``async (request, call_next) -> Response``.  ``PIPELINE`` lists
them outermost first and ``compose`` folds them around the endpoint, so

    error_guard -> access_log -> router / handler

The access log only writes a line when the inner call returns.  A request
that blows up produces no access line, only the error guard's ERROR record
and a 500.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]
Stage = Callable[[Request, CallNext], Awaitable[Response]]

INTERNAL_ERROR_BODY = {"error": "Internal server error"}


async def error_guard(request: Request, call_next: CallNext) -> Response:
    try:
        return await call_next(request)
    except Exception:
        logger.exception(
            "Unhandled exception while serving %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=INTERNAL_ERROR_BODY,
        )


async def access_log(request: Request, call_next: CallNext) -> Response:
    response = await call_next(request)
    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response


PIPELINE: tuple[Stage, ...] = (error_guard, access_log)


def _bind(stage: Stage, inner: CallNext) -> CallNext:
    async def call(request: Request) -> Response:
        return await stage(request, inner)

    return call


def compose(stages: Sequence[Stage], endpoint: CallNext) -> CallNext:
    """Wrap ``endpoint`` so that ``stages[0]`` runs first and sees everything."""
    handler = endpoint
    for stage in reversed(stages):
        handler = _bind(stage, handler)
    return handler


def install(app: FastAPI, stages: Sequence[Stage] = PIPELINE) -> None:
    """Register ``stages`` as a single HTTP middleware on ``app``."""
    stages = tuple(stages)

    @app.middleware("http")
    async def request_pipeline(request: Request, call_next: CallNext) -> Response:
        return await compose(stages, call_next)(request)
