"""
Users router — mounted at /users

Handlers are plain ``def`` so FastAPI runs them on its threadpool; the DAO
does its own locking.  Unknown ids and rule violations surface as
HTTPException / UserValidationError from the service.
"""

from fastapi import APIRouter, Response, status

from user_directory.api.deps import RawBody, UserServiceDep
from user_directory.models.user import (
    ErrorResponse,
    User,
    UserCreateRequest,
    UserUpdateRequest,
    ValidationProblemResponse,
)

router = APIRouter()

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
_INVALID = {status.HTTP_400_BAD_REQUEST: {"model": ValidationProblemResponse}}


# ── GET /users  ───────────────────────────────────────────────────────────────

@router.get(
    "",
    response_model=list[User],
    summary="List users",
)
def list_users(svc: UserServiceDep) -> list[User]:
    return svc.list()


# ── GET /users/{user_id}  ─────────────────────────────────────────────────────

@router.get(
    "/{user_id}",
    response_model=User,
    responses=_NOT_FOUND,
    summary="Get user",
)
def get_user(user_id: int, svc: UserServiceDep) -> User:
    return svc.get(user_id)


# ── POST /users  ──────────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    responses=_INVALID,
    summary="Create user",
)
def create_user(
    response: Response,
    svc: UserServiceDep,
    body: UserCreateRequest | None = None,
) -> User:
    """Validate the body, store the user and point Location at it."""
    user = svc.create(body)
    response.headers["Location"] = f"/users/{user.id}"
    return user


# ── PUT /users/{user_id}  ─────────────────────────────────────────────────────

@router.put(
    "/{user_id}",
    response_model=User,
    responses={**_NOT_FOUND, **_INVALID},
    summary="Replace user name and email",
    # the body is read raw so an unknown id is a 404 before it is parsed
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": UserUpdateRequest.model_json_schema()}},
        },
    },
)
def update_user(
    user_id: int,
    raw: RawBody,
    svc: UserServiceDep,
) -> User:
    """
    Both fields are replaced. The id must exist before the body is
    parsed, so any body sent to an unknown id gets a 404; createdAt is
    never touched.
    """
    return svc.update(user_id, raw)


# ── DELETE /users/{user_id}  ──────────────────────────────────────────────────

@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_NOT_FOUND,
    summary="Delete user",
)
def delete_user(user_id: int, svc: UserServiceDep) -> None:
    svc.delete(user_id)
