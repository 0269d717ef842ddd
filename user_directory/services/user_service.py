"""
UserService — business logic for the /users routes.

Ordering rules:
  - update checks existence before it even parses the body, so an unknown
    id is a 404 whatever the request carries.
  - validation always runs before the DAO is asked to mutate anything, so
    a rejected request leaves the store untouched.

Expected outcomes are raised as HTTPException (404) or UserValidationError
(400) and rendered by the handlers registered in main.py.
"""

from __future__ import annotations

from fastapi import HTTPException, status
from pydantic import ValidationError

from user_directory.core.errors import USER_NOT_FOUND, UserValidationError, field_errors
from user_directory.core.validation import validate
from user_directory.dao.user_dao import UserDAO
from user_directory.models.user import User, UserCreateRequest, UserUpdateRequest


class UserService:

    def __init__(self, dao: UserDAO) -> None:
        self._dao = dao

    # ── Helpers ───────────────────────────────────────────────────────────────

    @staticmethod
    def _not_found() -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=USER_NOT_FOUND,
        )

    def _get_or_404(self, user_id: int) -> User:
        user = self._dao.get(user_id)
        if user is None:
            raise self._not_found()
        return user

    @staticmethod
    def _check(name: str | None, email: str | None) -> tuple[str, str]:
        """Return the pair unchanged once it passes, else raise with every failure."""
        errors = validate(name, email)
        if errors or name is None or email is None:
            raise UserValidationError(errors)
        return name, email

    @staticmethod
    def _parse_update(raw: bytes) -> UserUpdateRequest:
        # an empty body means both fields are absent
        if not raw.strip():
            return UserUpdateRequest()
        try:
            return UserUpdateRequest.model_validate_json(raw)
        except ValidationError as exc:
            raise UserValidationError(field_errors(exc.errors()))

    # ── CRUD ──────────────────────────────────────────────────────────────────

    def list(self) -> list[User]:
        return self._dao.list()

    def get(self, user_id: int) -> User:
        return self._get_or_404(user_id)

    def create(self, body: UserCreateRequest | None) -> User:
        body = body or UserCreateRequest()
        name, email = self._check(body.name, body.email)
        return self._dao.create(name, email)

    def update(self, user_id: int, raw: bytes) -> User:
        """``raw`` is the undecoded request body; it is only read once the id exists."""
        self._get_or_404(user_id)
        body = self._parse_update(raw)
        name, email = self._check(body.name, body.email)
        user = self._dao.update(user_id, name, email)
        if user is None:
            # deleted between the existence check and the write
            raise self._not_found()
        return user

    def delete(self, user_id: int) -> None:
        if not self._dao.delete(user_id):
            raise self._not_found()
