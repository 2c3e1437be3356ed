"""Validation result type with consistent, predictable behavior.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar

from .exceptions import ResultAccessError, SchemaParseError
from .issues import Issue

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Unified result object returned by every schema.

    A result is either a success holding exactly one value or a failure
    holding an ordered tuple of issues. The tuple may be empty: ``nullable``
    uses an empty failure to signal "absent, not wrong".

    Use the ``success`` and ``failure`` classmethods to construct results.
    """

    _value: Any = None
    _issues: tuple[Issue, ...] | None = None

    @classmethod
    def success(cls, value: T) -> ValidationResult[T]:
        """Create a successful validation result.

        Args:
            value: The validated value

        Returns:
            Successful ValidationResult
        """
        return cls(_value=value, _issues=None)

    @classmethod
    def failure(cls, issues: Iterable[Issue]) -> ValidationResult[Any]:
        """Create a failed validation result.

        Args:
            issues: Issues describing why validation failed (may be empty)

        Returns:
            Failed ValidationResult
        """
        return cls(_value=None, _issues=tuple(issues))

    @property
    def is_success(self) -> bool:
        return self._issues is None

    @property
    def is_failure(self) -> bool:
        return self._issues is not None

    @property
    def has_issues(self) -> bool:
        """True when this is a failure with at least one issue."""
        return bool(self._issues)

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.is_success

    @property
    def value(self) -> T:
        """The validated value.

        Raises:
            ResultAccessError: If the result is a failure
        """
        if self._issues is not None:
            raise ResultAccessError(
                "Cannot read the value of a failed validation result",
                context={"issue_count": len(self._issues)},
            )
        return self._value  # type: ignore[no-any-return]

    @property
    def issues(self) -> tuple[Issue, ...]:
        """The issues of a failed validation.

        Raises:
            ResultAccessError: If the result is a success
        """
        if self._issues is None:
            raise ResultAccessError("Cannot read the issues of a successful validation result")
        return self._issues

    def value_or(self, default: T) -> T:
        """Return the value on success, otherwise ``default``."""
        if self._issues is not None:
            return default
        return self._value  # type: ignore[no-any-return]

    def value_or_raise(self) -> T:
        """Return the value on success, otherwise raise ``SchemaParseError``."""
        if self._issues is not None:
            raise SchemaParseError(self._issues)
        return self._value  # type: ignore[no-any-return]

    def __repr__(self) -> str:
        if self._issues is None:
            return f"ValidationResult.success({self._value!r})"
        return f"ValidationResult.failure({list(self._issues)!r})"
