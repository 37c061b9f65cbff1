"""Name validation for repositories and organizations.

GitHub organization names follow the same rules as repository names, so one
validator serves both. A validated name never needs shell quoting: no
metacharacters, no leading `-` that could be read as a flag, no `..`.
"""

from __future__ import annotations

import re

from core.domain.errors import InvalidName

MAX_NAME_LENGTH = 100

_VALID_NAME = re.compile(r"[A-Za-z0-9._-]+")


def validate_name(name: object, *, kind: str = "Project name") -> str:
    """Return the trimmed `name` or raise `InvalidName` for the first rule it breaks."""

    if not name or not isinstance(name, str):
        raise InvalidName(f"{kind} is required")

    trimmed = name.strip()

    if not trimmed:
        raise InvalidName(f"{kind} cannot be empty")
    if len(trimmed) > MAX_NAME_LENGTH:
        raise InvalidName(f"{kind} must be {MAX_NAME_LENGTH} characters or less")
    if trimmed.startswith("."):
        raise InvalidName(f"{kind} cannot start with a period")
    if trimmed.startswith("-"):
        raise InvalidName(f"{kind} cannot start with a hyphen")
    if not _VALID_NAME.fullmatch(trimmed):
        raise InvalidName(
            f"{kind} can only contain letters, numbers, hyphens, underscores, and periods"
        )
    # Path traversal.
    if ".." in trimmed:
        raise InvalidName(f'{kind} cannot contain ".."')

    return trimmed


def validate_org(name: object) -> str:
    return validate_name(name, kind="Organization name")
