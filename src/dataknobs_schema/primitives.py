"""Leaf schemas for primitive values.

Leaf schemas are immutable dataclasses; the fluent methods return modified
copies. Each accepts an optional ``message`` that replaces the rendered
message of every issue it reports.
"""

from __future__ import annotations

import logging
import math
import re
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from re import Pattern as RegexPattern
from typing import Any, Callable, Mapping
from urllib.parse import urlparse

from .issues import Issue
from .result import ValidationResult
from .schema import Schema

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def type_name(value: Any) -> str:
    """Readable type name used in ``invalid_type`` metadata."""
    if value is None:
        return "null"
    return type(value).__name__


class _LeafSchema(Schema[Any, Any]):
    """Shared issue helpers for leaf schemas."""

    message: str | None = None

    def _issue(self, code: str, params: Mapping[str, Any] | None = None, value: Any = None) -> Issue:
        return Issue.create(code, params, value=value, message=self.message)

    def _type_failure(self, expected: str, value: Any) -> ValidationResult[Any]:
        params = {"expected": expected, "received": type_name(value)}
        return ValidationResult.failure([self._issue("invalid_type", params, value)])

    def _bound_issues(
        self, value: Any, minimum: Any, maximum: Any, actual: Any | None = None
    ) -> list[Issue]:
        # min and max are checked independently; well-formed bounds can only
        # ever produce one of the two.
        actual = value if actual is None else actual
        issues = []
        if minimum is not None and actual < minimum:
            issues.append(self._issue("too_small", {"min": minimum, "actual": actual}, value))
        if maximum is not None and actual > maximum:
            issues.append(self._issue("too_big", {"max": maximum, "actual": actual}, value))
        return issues


def _check_range(minimum: Any, maximum: Any) -> None:
    if minimum is not None and maximum is not None and minimum > maximum:
        raise ValueError(f"min ({minimum}) cannot be greater than max ({maximum})")


@dataclass(frozen=True)
class StringSchema(_LeafSchema):
    """String value with optional length, pattern, choice and format checks."""

    min_length: int | None = None
    max_length: int | None = None
    pattern: str | RegexPattern[str] | None = None
    trim: bool = False
    choices: tuple[str, ...] | None = None
    format: str | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        if self.min_length is not None and self.min_length < 0:
            raise ValueError(f"min length cannot be negative: {self.min_length}")
        _check_range(self.min_length, self.max_length)
        if self.format not in (None, "email", "url", "uuid"):
            raise ValueError(f"Unsupported string format: {self.format}")

    def validate(self, value: Any) -> ValidationResult[str]:
        if not isinstance(value, str):
            return self._type_failure("string", value)

        text = value.strip() if self.trim else value
        issues: list[Issue] = []

        if self.min_length is not None and len(text) < self.min_length:
            issues.append(self._issue("too_short", {"min": self.min_length, "actual": len(text)}, text))
        if self.max_length is not None and len(text) > self.max_length:
            issues.append(self._issue("too_long", {"max": self.max_length, "actual": len(text)}, text))

        if self.pattern is not None and not re.search(self.pattern, text):
            pattern = self.pattern if isinstance(self.pattern, str) else self.pattern.pattern
            issues.append(self._issue("invalid_format", {"pattern": pattern}, text))

        if self.choices is not None and text not in self.choices:
            issues.append(self._issue("invalid_enum", {"allowed": list(self.choices)}, text))

        if self.format is not None and not _FORMAT_CHECKS[self.format](text):
            issues.append(self._issue(f"invalid_{self.format}", None, text))

        if issues:
            return ValidationResult.failure(issues)
        return ValidationResult.success(text)

    def min(self, length: int) -> StringSchema:
        return replace(self, min_length=length)

    def max(self, length: int) -> StringSchema:
        return replace(self, max_length=length)

    def length(self, exact: int) -> StringSchema:
        return replace(self, min_length=exact, max_length=exact)

    def nonempty(self) -> StringSchema:
        return replace(self, min_length=1)

    def regex(self, pattern: str | RegexPattern[str]) -> StringSchema:
        return replace(self, pattern=pattern)

    def one_of(self, *choices: str) -> StringSchema:
        return replace(self, choices=tuple(choices))

    def trimmed(self) -> StringSchema:
        return replace(self, trim=True)

    def email(self) -> StringSchema:
        return replace(self, format="email")

    def url(self) -> StringSchema:
        return replace(self, format="url")

    def uuid(self) -> StringSchema:
        return replace(self, format="uuid")

    def with_message(self, message: str) -> StringSchema:
        return replace(self, message=message)


def _is_url(text: str) -> bool:
    parsed = urlparse(text)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _is_uuid(text: str) -> bool:
    try:
        uuid.UUID(text)
    except ValueError:
        return False
    return True


_FORMAT_CHECKS: dict[str, Callable[[str], bool]] = {
    "email": lambda text: EMAIL_PATTERN.match(text) is not None,
    "url": _is_url,
    "uuid": _is_uuid,
}


@dataclass(frozen=True)
class IntSchema(_LeafSchema):
    """Integer value (booleans are rejected) with optional bounds."""

    min: int | None = None
    max: int | None = None
    is_positive: bool = False
    is_negative: bool = False
    multiple_of: int | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        _check_range(self.min, self.max)
        if self.multiple_of == 0:
            raise ValueError("multiple_of cannot be zero")

    def validate(self, value: Any) -> ValidationResult[int]:
        if not isinstance(value, int) or isinstance(value, bool):
            return self._type_failure("int", value)

        issues = self._bound_issues(value, self.min, self.max)
        if self.is_positive and value <= 0:
            issues.append(self._issue("not_positive", {"received": value}, value))
        if self.is_negative and value >= 0:
            issues.append(self._issue("not_negative", {"received": value}, value))
        if self.multiple_of is not None and value % self.multiple_of != 0:
            issues.append(self._issue("not_multiple_of", {"multiple_of": self.multiple_of}, value))

        if issues:
            return ValidationResult.failure(issues)
        return ValidationResult.success(value)

    def gte(self, minimum: int) -> IntSchema:
        return replace(self, min=minimum)

    def lte(self, maximum: int) -> IntSchema:
        return replace(self, max=maximum)

    def positive(self) -> IntSchema:
        return replace(self, is_positive=True)

    def negative(self) -> IntSchema:
        return replace(self, is_negative=True)

    def step(self, multiple_of: int) -> IntSchema:
        return replace(self, multiple_of=multiple_of)

    def with_message(self, message: str) -> IntSchema:
        return replace(self, message=message)


@dataclass(frozen=True)
class FloatSchema(_LeafSchema):
    """Floating-point value. Integers are accepted and widened to float."""

    min: float | None = None
    max: float | None = None
    is_positive: bool = False
    is_negative: bool = False
    finite: bool = False
    message: str | None = None

    def __post_init__(self) -> None:
        _check_range(self.min, self.max)

    def validate(self, value: Any) -> ValidationResult[float]:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return self._type_failure("float", value)

        try:
            number = float(value)
        except OverflowError:
            # int beyond float range widens to a signed infinity
            number = math.inf if value > 0 else -math.inf
        issues: list[Issue] = []
        if self.finite and not math.isfinite(number):
            issues.append(self._issue("not_finite", {"received": number}, number))
        if math.isnan(number):
            # NaN never satisfies a bound comparison, so report it explicitly
            has_bounds = self.min is not None or self.max is not None
            if has_bounds and not self.finite:
                issues.append(self._issue("not_finite", {"received": number}, number))
        else:
            issues.extend(self._bound_issues(number, self.min, self.max))
        if self.is_positive and not number > 0:
            issues.append(self._issue("not_positive", {"received": number}, number))
        if self.is_negative and not number < 0:
            issues.append(self._issue("not_negative", {"received": number}, number))

        if issues:
            return ValidationResult.failure(issues)
        return ValidationResult.success(number)

    def gte(self, minimum: float) -> FloatSchema:
        return replace(self, min=minimum)

    def lte(self, maximum: float) -> FloatSchema:
        return replace(self, max=maximum)

    def positive(self) -> FloatSchema:
        return replace(self, is_positive=True)

    def negative(self) -> FloatSchema:
        return replace(self, is_negative=True)

    def finite_only(self) -> FloatSchema:
        return replace(self, finite=True)

    def with_message(self, message: str) -> FloatSchema:
        return replace(self, message=message)


@dataclass(frozen=True)
class BoolSchema(_LeafSchema):
    message: str | None = None

    def validate(self, value: Any) -> ValidationResult[bool]:
        if not isinstance(value, bool):
            return self._type_failure("bool", value)
        return ValidationResult.success(value)


@dataclass(frozen=True)
class LiteralSchema(_LeafSchema):
    """Exactly one allowed value (``True`` does not match ``1``)."""

    expected: Any = None
    message: str | None = None

    def validate(self, value: Any) -> ValidationResult[Any]:
        if type(value) is type(self.expected) and value == self.expected:
            return ValidationResult.success(self.expected)
        params = {"expected": self.expected, "received": value}
        return ValidationResult.failure([self._issue("invalid_literal", params, value)])


@dataclass(frozen=True)
class DateTimeSchema(_LeafSchema):
    """Datetime from a ``datetime``, an ISO 8601 string or a millisecond timestamp."""

    min: datetime | None = None
    max: datetime | None = None
    message: str | None = None

    def validate(self, value: Any) -> ValidationResult[datetime]:
        moment = self._to_datetime(value)
        if moment is None:
            return ValidationResult.failure([self._issue("invalid_date", {"received": type_name(value)}, value)])

        try:
            if self.min is not None and moment < self.min:
                params = {"min": self.min.isoformat(), "actual": moment.isoformat()}
                return ValidationResult.failure([self._issue("date_too_early", params, moment.isoformat())])
            if self.max is not None and moment > self.max:
                params = {"max": self.max.isoformat(), "actual": moment.isoformat()}
                return ValidationResult.failure([self._issue("date_too_late", params, moment.isoformat())])
        except TypeError:
            # naive vs aware comparison
            params = {"received": moment.isoformat(), "reason": "timezone mismatch"}
            return ValidationResult.failure([self._issue("invalid_date", params, value)])

        return ValidationResult.success(moment)

    @staticmethod
    def _to_datetime(value: Any) -> datetime | None:
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            except ValueError:
                return None
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return datetime.fromtimestamp(value / 1000)
            except (OverflowError, OSError, ValueError):
                return None
        return None

    def after(self, moment: datetime) -> DateTimeSchema:
        return replace(self, min=moment)

    def before(self, moment: datetime) -> DateTimeSchema:
        return replace(self, max=moment)

    def between(self, start: datetime, end: datetime) -> DateTimeSchema:
        return replace(self, min=start, max=end)


class CustomSchema(Schema[Any, Any]):
    """Accepts values for which ``predicate`` returns True."""

    def __init__(self, predicate: Callable[[Any], bool], message: str | None = None):
        """Initialize custom schema.

        Args:
            predicate: Callable returning True for acceptable values
            message: Message reported when the predicate rejects a value
        """
        self.predicate = predicate
        self.message = message

    def validate(self, value: Any) -> ValidationResult[Any]:
        try:
            accepted = self.predicate(value)
        except Exception as e:
            logger.debug(f"Custom predicate raised: {e!r}")
            return ValidationResult.failure([
                Issue.create("custom_validation_failed", {"message": f"Custom validation error: {e!s}"}, value=value)
            ])
        if accepted:
            return ValidationResult.success(value)
        params = {"message": self.message} if self.message else None
        return ValidationResult.failure([Issue.create("custom_validation_failed", params, value=value)])
