"""
Field rules for user name / email.

``validate`` is pure: it never raises for bad input, it reports it.
An empty dict means the pair is acceptable.
"""

from __future__ import annotations

import re

NAME_MIN_LENGTH = 2

# one "@", no whitespace anywhere, at least one "." after the "@"
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

NAME_REQUIRED = "Name is required."
NAME_TOO_SHORT = f"Name must be at least {NAME_MIN_LENGTH} characters long."
EMAIL_REQUIRED = "Email is required."
EMAIL_INVALID = "Invalid email format."


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate(name: str | None, email: str | None) -> dict[str, list[str]]:
    """Return ``{field: [messages]}`` for every rule the pair breaks."""
    errors: dict[str, list[str]] = {}

    if _is_blank(name):
        errors["name"] = [NAME_REQUIRED]
    elif len(name.strip()) < NAME_MIN_LENGTH:
        errors["name"] = [NAME_TOO_SHORT]

    if _is_blank(email):
        errors["email"] = [EMAIL_REQUIRED]
    elif not EMAIL_PATTERN.fullmatch(email):
        errors["email"] = [EMAIL_INVALID]

    return errors
