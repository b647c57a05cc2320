"""Helpers for turning free-form names into valid record names."""
import re

_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9]+")
_INVALID_NAME_CHARS_WITH_DOTS = re.compile(r"[^a-z0-9.]+")


def _normalize(name: str, pattern: re.Pattern) -> str:
    sanitized = pattern.sub("-", (name or "").lower())
    return sanitized.strip("-")


def to_valid_name(name: str) -> str:
    """Lowercase the name and collapse every run of other characters into a single dash."""
    return _normalize(name, _INVALID_NAME_CHARS)


def to_valid_name_with_dots(name: str) -> str:
    """Like to_valid_name but dots are kept, so host names survive intact."""
    return _normalize(name, _INVALID_NAME_CHARS_WITH_DOTS)
