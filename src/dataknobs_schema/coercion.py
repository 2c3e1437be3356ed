"""Coercion schemas: normalize loosely-typed input before validating it.

Each schema accepts heterogeneous input (strings, numbers, booleans), tries
to convert it to the target type and then applies the same bound checks a
strict leaf schema would. Failed conversions never raise; they produce an
``invalid_coercion`` issue.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .primitives import _check_range, _LeafSchema, type_name
from .result import ValidationResult

TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


class _CoerceSchema(_LeafSchema):

    target: str = ""

    def _coercion_failure(self, value: Any) -> ValidationResult[Any]:
        params = {"type": self.target, "actual": type_name(value)}
        return ValidationResult.failure([self._issue("invalid_coercion", params, value)])

    def _bounded(self, parsed: Any, minimum: Any, maximum: Any) -> ValidationResult[Any]:
        issues = self._bound_issues(parsed, minimum, maximum)
        if issues:
            return ValidationResult.failure(issues)
        return ValidationResult.success(parsed)


@dataclass(frozen=True)
class CoerceBool(_CoerceSchema):
    """Coerce to ``bool``.

    Accepts booleans, the integers 1 and 0, and (trimmed, case-insensitive)
    the strings true/1/yes/on and false/0/no/off.
    """

    message: str | None = None
    target = "bool"

    def validate(self, value: Any) -> ValidationResult[bool]:
        if isinstance(value, bool):
            return ValidationResult.success(value)

        if isinstance(value, int):
            if value == 1:
                return ValidationResult.success(True)
            if value == 0:
                return ValidationResult.success(False)

        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in TRUE_STRINGS:
                return ValidationResult.success(True)
            if lowered in FALSE_STRINGS:
                return ValidationResult.success(False)

        return self._coercion_failure(value)


@dataclass(frozen=True)
class CoerceInt(_CoerceSchema):
    """Coerce to ``int``, then check optional bounds.

    Floats are accepted only when they have no fractional part; strings are
    trimmed and parsed.
    """

    min: int | None = None
    max: int | None = None
    message: str | None = None
    target = "int"

    def __post_init__(self) -> None:
        _check_range(self.min, self.max)

    def validate(self, value: Any) -> ValidationResult[int]:
        parsed: int | None = None

        if isinstance(value, bool):
            parsed = None
        elif isinstance(value, int):
            parsed = value
        elif isinstance(value, float):
            if value.is_integer():
                parsed = int(value)
        elif isinstance(value, str):
            try:
                parsed = int(value.strip())
            except ValueError:
                parsed = None

        if parsed is None:
            return self._coercion_failure(value)
        return self._bounded(parsed, self.min, self.max)


@dataclass(frozen=True)
class CoerceFloat(_CoerceSchema):
    """Coerce to ``float``, then check optional bounds."""

    min: float | None = None
    max: float | None = None
    message: str | None = None
    target = "float"

    def __post_init__(self) -> None:
        _check_range(self.min, self.max)

    def validate(self, value: Any) -> ValidationResult[float]:
        parsed: float | None = None

        if isinstance(value, bool):
            parsed = None
        elif isinstance(value, (int, float)):
            try:
                parsed = float(value)
            except OverflowError:
                parsed = None
        elif isinstance(value, str):
            try:
                parsed = float(value.strip())
            except (ValueError, OverflowError):
                parsed = None

        if parsed is None:
            return self._coercion_failure(value)
        return self._bounded(parsed, self.min, self.max)


@dataclass(frozen=True)
class CoerceString(_CoerceSchema):
    """Coerce anything to ``str`` via ``str()``."""

    message: str | None = None
    target = "string"

    def validate(self, value: Any) -> ValidationResult[str]:
        try:
            return ValidationResult.success(str(value))
        except Exception:
            return self._coercion_failure(value)


class Coerce:
    """Namespace of coercion schema constructors.

    Example:
        ```python
        port = Coerce.integer(min=1, max=65535)
        port.validate(" 8080 ").value  # 8080
        ```
    """

    @staticmethod
    def boolean() -> CoerceBool:
        return CoerceBool()

    @staticmethod
    def integer(min: int | None = None, max: int | None = None) -> CoerceInt:
        return CoerceInt(min=min, max=max)

    @staticmethod
    def float(min: float | None = None, max: float | None = None) -> CoerceFloat:
        return CoerceFloat(min=min, max=max)

    @staticmethod
    def string() -> CoerceString:
        return CoerceString()

