"""Route parameter validation — composable rules, clean results.

Usage::

    from deeplink.validation import params_schema, required, slug

    RouteEntry(
        url_pattern="/u/:username",
        router_path="/(protected)/profile/:username",
        auth="auth-required",
        params_validator=params_schema(username=[required, slug]),
        label="User Profile",
    )

A route whose validator rejects the extracted parameters is skipped by the
matcher, so a looser entry further down the table can still catch the path.
"""

from collections.abc import Callable, Mapping
from typing import TypeAlias

from deeplink.validation.result import ValidationResult
from deeplink.validation.rules import (
    Validator,
    max_length,
    required,
    slug,
)

__all__ = [
    "ParamsValidator",
    "ValidationResult",
    "Validator",
    "max_length",
    "params_schema",
    "required",
    "slug",
    "validate",
]

# Attached to a RouteEntry; a truthy return accepts the extracted parameters
ParamsValidator: TypeAlias = Callable[[Mapping[str, str]], bool | ValidationResult]


def validate(
    data: Mapping[str, str],
    rules: Mapping[str, list[Validator]],
) -> ValidationResult:
    """Validate data against a set of rules.

    Args:
        data: Any mapping of parameter names to string values.
        rules: A mapping of parameter names to lists of validator
            functions. Each validator returns an error message string
            on failure, or ``None`` on success.

    Returns:
        A ``ValidationResult`` with ``.data`` (cleaned values) and
        ``.errors`` (parameter -> list of error messages).
    """
    errors: dict[str, list[str]] = {}
    cleaned: dict[str, str] = {}

    for name, validators in rules.items():
        value = data.get(name) or ""

        field_errors: list[str] = []
        for validator in validators:
            error = validator(value)
            if error is not None:
                field_errors.append(error)
                # No point running format checks on a missing value
                if validator is required:
                    break

        if field_errors:
            errors[name] = field_errors
        else:
            cleaned[name] = value

    return ValidationResult(data=cleaned, errors=errors)


class _Schema:
    """Callable params validator built from a rule map."""

    __slots__ = ("rules",)

    def __init__(self, rules: dict[str, list[Validator]]) -> None:
        self.rules = rules

    def __call__(self, params: Mapping[str, str]) -> ValidationResult:
        return validate(params, self.rules)

    def __repr__(self) -> str:
        return f"params_schema({', '.join(self.rules)})"


def params_schema(**rules: list[Validator]) -> ParamsValidator:
    """Build a route ``ParamsValidator`` from per-parameter rule lists.

    Example::

        token_schema = params_schema(token=[required])
        bool(token_schema({"token": "abc"}))  # True
        token_schema({}).errors               # {"token": ["This parameter is required"]}
    """
    return _Schema(dict(rules))
