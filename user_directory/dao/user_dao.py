"""
UserDAO

In-memory layout:
  key   = user id (int)
  value = frozen User

Ids come from a per-instance AtomicCounter seeded above the highest
pre-existing id, so two DAOs never share a sequence.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from user_directory.dao.base import AtomicCounter, BaseDAO
from user_directory.models.user import User


class UserDAO(BaseDAO[int, User]):

    def __init__(self, seed: Iterable[User] = ()) -> None:
        seed = list(seed)
        super().__init__((u.id, u) for u in seed)
        self._ids = AtomicCounter(max((u.id for u in seed), default=0))

    # ── Write ─────────────────────────────────────────────────────────────────

    def create(self, name: str, email: str) -> User:
        """
        Allocate the next id and insert a new user.
        Callers validate first; this never rejects input.
        """
        user = User(
            id=self._ids.increment(),
            name=name,
            email=email,
            createdAt=datetime.now(timezone.utc),
        )
        self._table.set(user.id, user)
        return user

    def update(self, user_id: int, name: str, email: str) -> User | None:
        """Replace name/email, keeping id and createdAt. None if absent."""
        return self._table.replace(
            user_id,
            lambda existing: existing.model_copy(update={"name": name, "email": email}),
        )

    def delete(self, user_id: int) -> bool:
        return self._table.pop(user_id) is not None

    # ── Read ──────────────────────────────────────────────────────────────────

    def get(self, user_id: int) -> User | None:
        return self._table.get(user_id)

    def list(self) -> list[User]:
        return self._table.values()


def demo_users() -> list[User]:
    """The two users the service starts with when SEED_DEMO_USERS is on."""
    now = datetime.now(timezone.utc)
    return [
        User(id=1, name="Gangothri S", email="gangothri@demo.com", createdAt=now),
        User(id=2, name="Sohan Kamat", email="sohan.kamat@demo.com", createdAt=now),
    ]
