"""Naming utilities for TypeScript code generation."""

from __future__ import annotations

import re
from functools import lru_cache

_IDENTIFIER_CHARS = re.compile(r"[A-Za-z0-9_$]+")


@lru_cache(maxsize=1024)
def is_identifier(key: str) -> bool:
    """Return True if ``key`` can be written as a bare TypeScript property name.

    Uses caching for repeated calls with the same input.

    Examples:
        >>> is_identifier("users")
        True
        >>> is_identifier(":id")
        False
        >>> is_identifier("2fa")
        False
    """
    return bool(_IDENTIFIER_CHARS.fullmatch(key)) and not key[0].isdigit()


@lru_cache(maxsize=1024)
def quote_key(key: str) -> str:
    """Quote a property key with single quotes when it is not a plain identifier."""
    if is_identifier(key):
        return key
    escaped = key.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"
