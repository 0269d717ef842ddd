"""
Application factory for the User Directory service.

``create_app`` wires settings, logging, the request pipeline, exception
renderers, routers and the single in-memory UserDAO.  A module-level
``app`` is built at import time for ASGI servers::

    uvicorn user_directory.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_directory.core import pipeline
from user_directory.core.config import Settings, get_settings
from user_directory.core.errors import (
    UserValidationError,
    http_error_handler,
    request_validation_handler,
    validation_problem_handler,
)
from user_directory.core.logging_config import setup_logging
from user_directory.dao.user_dao import UserDAO, demo_users
from user_directory.models.user import HealthResponse

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    user_dao: UserDAO | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)

    if user_dao is None:
        user_dao = UserDAO(demo_users() if settings.seed_demo_users else ())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "%s %s starting with %d user(s)",
            settings.app_name,
            settings.app_version,
            app.state.user_dao.count(),
        )
        yield
        logger.info("%s shutting down", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.user_dao = user_dao

    # ── Error rendering ───────────────────────────────────────────────────────
    app.add_exception_handler(UserValidationError, validation_problem_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # ── Middleware ────────────────────────────────────────────────────────────
    # Last added runs first: CORS wraps the pipeline, so even the error
    # guard's 500 carries the CORS headers.
    pipeline.install(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────────────
    from user_directory.api.routes import users

    app.include_router(users.router, prefix="/users", tags=["Users"])

    # ── Health check ──────────────────────────────────────────────────────────
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            version=settings.app_version,
            users=app.state.user_dao.count(),
        )

    return app


app = create_app()
