"""
FastAPI dependency functions shared across route modules.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from user_directory.dao.user_dao import UserDAO
from user_directory.services.user_service import UserService


def get_user_dao(request: Request) -> UserDAO:
    """The process-wide store created by create_app()."""
    return request.app.state.user_dao


def get_user_service(
    dao: Annotated[UserDAO, Depends(get_user_dao)],
) -> UserService:
    return UserService(dao)


async def get_raw_body(request: Request) -> bytes:
    """
    The request body, undecoded.  Used where the route must check something
    else (e.g. that the target exists) before the body is allowed to fail.
    """
    return await request.body()


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
RawBody = Annotated[bytes, Depends(get_raw_body)]
