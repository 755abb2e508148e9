from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_id(value: Any, field_name: str) -> int:
    """Parse a positive integer reference (accepts ints and digit strings)."""

    if isinstance(value, bool):
        raise ValidationError(f"{field_name} is not a valid id")
    if isinstance(value, int):
        ref = value
    elif isinstance(value, str) and value.strip().isdigit():
        ref = int(value.strip())
    elif value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    else:
        raise ValidationError(f"{field_name} is not a valid id")

    if ref <= 0:
        raise ValidationError(f"{field_name} is not a valid id")
    return ref


def optional_id(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_id(value, field_name)


def optional_trimmed(value: Any, field_name: str) -> Optional[str]:
    """Trim free text; empty strings become None."""

    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    value = value.strip()
    return value or None


def require_email(value: Any, field_name: str = "email") -> str:
    email = require_non_empty(value, field_name).lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"{field_name} is not a valid email address")
    return email


def clean_string_list(values: Any, field_name: str) -> tuple[str, ...]:
    """Trim every entry, drop blanks and duplicates, keep first-seen order."""

    if values is None:
        return ()
    if isinstance(values, str) or not isinstance(values, Iterable):
        raise ValidationError(f"{field_name} must be a list of strings")

    seen: dict[str, None] = {}
    for item in values:
        if not isinstance(item, str):
            raise ValidationError(f"{field_name} must be a list of strings")
        item = item.strip()
        if item:
            seen.setdefault(item, None)
    return tuple(seen)
