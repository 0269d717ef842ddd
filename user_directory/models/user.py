"""
Pydantic schemas for the User module.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """Stored user. Frozen — updates build a new value with model_copy()."""
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    email: str
    createdAt: datetime


# ── Request bodies ────────────────────────────────────────────────────────────
# Both fields are optional at the schema level; the validation engine
# reports missing / blank values with field-specific messages.

class UserCreateRequest(BaseModel):
    name: str | None = None
    email: str | None = None


class UserUpdateRequest(BaseModel):
    """PUT replaces both fields; there are no partial updates."""
    name: str | None = None
    email: str | None = None


# ── Responses ─────────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    error: str


class ValidationProblemResponse(BaseModel):
    type: str
    title: str
    status: int
    errors: dict[str, list[str]]


class HealthResponse(BaseModel):
    status: str
    version: str
    users: int
