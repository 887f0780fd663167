"""Rules for checking captured route parameters.

A rule takes the raw string value and returns an error message, or
``None`` when the value is acceptable. Rules that need an argument,
like ``max_length(32)``, are factories that return such a callable, so
a rule list reads left to right:

    params_schema(username=[required, max_length(32), slug])

Any ``(str) -> str | None`` callable can sit in a rule list.
"""

import re
from collections.abc import Callable
from typing import TypeAlias

# Type alias for a validator function
Validator: TypeAlias = Callable[[str], str | None]


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(value: str) -> str | None:
    """Parameter must be present and non-empty."""
    if not value or not value.strip():
        return "This parameter is required"
    return None


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int) -> Validator:
    """String must be at most *n* characters."""

    def check(value: str) -> str | None:
        if len(value) > n:
            return f"Must be at most {n} characters"
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------


_SLUG_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._\-]*$")


def slug(value: str) -> str | None:
    """Value must be a URL-safe identifier (letters, digits, ``.``, ``_``, ``-``)."""
    if not _SLUG_RE.match(value):
        return "Must contain only letters, digits, '.', '_' or '-'"
    return None

