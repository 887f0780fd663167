"""Outcome of checking route parameters against a rule map."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Per-parameter verdict from ``validate()``.

    Truthy when every rule passed, so a result can be returned straight
    from a route's params validator; the registry only looks at its truth
    value and logs ``errors`` when an entry is skipped::

        {"token": ["This parameter is required"]}
    """

    data: dict[str, str]
    errors: dict[str, list[str]]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def failed(self) -> tuple[str, ...]:
        """Names of the parameters that failed, in rule order."""
        return tuple(self.errors)

    def __bool__(self) -> bool:
        return self.is_valid
