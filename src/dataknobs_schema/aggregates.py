"""Object, array and map schemas.

Aggregates validate every child (they never stop at the first failure),
prefix each child issue with the key or index it came from, and fail with
the complete list of issues if any child failed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping as MappingABC
from types import MappingProxyType
from typing import Any, Callable, Generic, Iterable, Mapping, TypeVar

from .issues import Issue
from .primitives import type_name
from .result import ValidationResult
from .schema import Schema

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")
T = TypeVar("T")


def _invalid_type(expected: str, value: Any) -> ValidationResult[Any]:
    params = {"expected": expected, "received": type_name(value)}
    return ValidationResult.failure([Issue.create("invalid_type", params, value=value)])


def _length_failure(size: int, min_size: int | None, max_size: int | None) -> ValidationResult[Any] | None:
    if min_size is not None and size < min_size:
        return ValidationResult.failure([Issue.create("too_small", {"min": min_size, "actual": size}, value=size)])
    if max_size is not None and size > max_size:
        return ValidationResult.failure([Issue.create("too_big", {"max": max_size, "actual": size}, value=size)])
    return None


def _check_sizes(min_size: int | None, max_size: int | None) -> None:
    if min_size is not None and min_size < 0:
        raise ValueError(f"min length cannot be negative: {min_size}")
    if min_size is not None and max_size is not None and min_size > max_size:
        raise ValueError(f"min length ({min_size}) cannot be greater than max ({max_size})")


class ObjectSchema(Schema[Any, T]):
    """Validate a mapping field by field.

    Absent fields are validated as None, so the child schema decides what
    absence means (``optional``, ``default``, ``nullable``).

    Example:
        ```python
        user = ObjectSchema({
            "name": StringSchema().min(2),
            "age": CoerceInt(min=0),
            "nickname": StringSchema().optional(),
        }, strict=True)

        result = user.validate({"name": "A", "age": "x", "admin": True})
        # issues at ("name",), ("age",) and ("admin",)
        ```
    """

    def __init__(
        self,
        shape: Mapping[str, Schema[Any, Any]],
        constructor: Callable[[dict[str, Any]], T] | None = None,
        strict: bool = False,
    ):
        """Initialize object schema.

        Args:
            shape: Field name to child schema
            constructor: Optional callable building the output from the
                cleaned dict (e.g. a dataclass)
            strict: If True, keys not declared in ``shape`` are reported
        """
        self._shape = dict(shape)
        self.constructor = constructor
        self.strict = strict

    @property
    def shape(self) -> Mapping[str, Schema[Any, Any]]:
        return MappingProxyType(self._shape)

    def _unknown_keys(self, value: Mapping[Any, Any]) -> list[Issue]:
        if not self.strict:
            return []
        return [
            Issue.create("unknown_key", {"key": str(key)}, path=(str(key),), value=value[key])
            for key in value
            if key not in self._shape
        ]

    def _finish(self, value: Mapping[Any, Any], results: Iterable[tuple[str, ValidationResult[Any]]]) -> ValidationResult[T]:
        cleaned: dict[str, Any] = {}
        issues: list[Issue] = []

        for key, result in results:
            if result.is_failure:
                issues.extend(issue.prepend_path(key) for issue in result.issues)
            else:
                cleaned[key] = result.value

        issues.extend(self._unknown_keys(value))

        if issues:
            return ValidationResult.failure(issues)

        if self.constructor is None:
            return ValidationResult.success(cleaned)  # type: ignore[arg-type]
        try:
            return ValidationResult.success(self.constructor(cleaned))
        except Exception as e:
            logger.debug(f"Object constructor raised: {e!r}")
            return ValidationResult.failure([Issue.create("transform_error")])

    def validate(self, value: Any) -> ValidationResult[T]:
        if not isinstance(value, MappingABC):
            return _invalid_type("object", value)
        results = [(key, schema.validate(value.get(key))) for key, schema in self._shape.items()]
        return self._finish(value, results)

    async def validate_async(self, value: Any) -> ValidationResult[T]:
        if not isinstance(value, MappingABC):
            return _invalid_type("object", value)
        results = []
        for key, schema in self._shape.items():
            results.append((key, await schema.validate_async(value.get(key))))
        return self._finish(value, results)

    def extend(self, shape: Mapping[str, Schema[Any, Any]]) -> ObjectSchema[dict[str, Any]]:
        """New schema with extra fields; same-named fields are replaced."""
        return ObjectSchema({**self._shape, **shape}, strict=self.strict)

    def pick(self, *keys: str) -> ObjectSchema[dict[str, Any]]:
        """New schema with only ``keys``; names not in the shape are skipped."""
        return ObjectSchema({key: self._shape[key] for key in keys if key in self._shape}, strict=self.strict)

    def omit(self, *keys: str) -> ObjectSchema[dict[str, Any]]:
        return ObjectSchema({key: schema for key, schema in self._shape.items() if key not in keys}, strict=self.strict)

    def make_strict(self) -> ObjectSchema[T]:
        return ObjectSchema(self._shape, constructor=self.constructor, strict=True)

    def passthrough(self) -> ObjectSchema[T]:
        return ObjectSchema(self._shape, constructor=self.constructor, strict=False)

    def construct(self, constructor: Callable[[dict[str, Any]], Any]) -> ObjectSchema[Any]:
        """New schema building its output with ``constructor``."""
        return ObjectSchema(self._shape, constructor=constructor, strict=self.strict)


class ArraySchema(Schema[Any, "list[T]"], Generic[T]):
    """Validate every element of a list or tuple."""

    def __init__(
        self,
        element: Schema[Any, T],
        min_length: int | None = None,
        max_length: int | None = None,
    ):
        _check_sizes(min_length, max_length)
        self.element = element
        self.min_length = min_length
        self.max_length = max_length

    def _check_input(self, value: Any) -> ValidationResult[Any] | None:
        if not isinstance(value, (list, tuple)):
            return _invalid_type("array", value)
        return _length_failure(len(value), self.min_length, self.max_length)

    @staticmethod
    def _finish(results: Iterable[ValidationResult[T]]) -> ValidationResult[list[T]]:
        items: list[T] = []
        issues: list[Issue] = []
        for index, result in enumerate(results):
            if result.is_failure:
                issues.extend(issue.prepend_path(index) for issue in result.issues)
            else:
                items.append(result.value)
        if issues:
            return ValidationResult.failure(issues)
        return ValidationResult.success(items)

    def validate(self, value: Any) -> ValidationResult[list[T]]:
        rejected = self._check_input(value)
        if rejected is not None:
            return rejected
        return self._finish([self.element.validate(item) for item in value])

    async def validate_async(self, value: Any) -> ValidationResult[list[T]]:
        rejected = self._check_input(value)
        if rejected is not None:
            return rejected
        results = []
        for item in value:
            results.append(await self.element.validate_async(item))
        return self._finish(results)

    def min(self, length: int) -> ArraySchema[T]:
        return ArraySchema(self.element, min_length=length, max_length=self.max_length)

    def max(self, length: int) -> ArraySchema[T]:
        return ArraySchema(self.element, min_length=self.min_length, max_length=length)

    def length(self, exact: int) -> ArraySchema[T]:
        return ArraySchema(self.element, min_length=exact, max_length=exact)

    def nonempty(self) -> ArraySchema[T]:
        return ArraySchema(self.element, min_length=1, max_length=self.max_length)


class MapSchema(Schema[Any, "dict[K, V]"], Generic[K, V]):
    """Validate every key and value of a mapping with arbitrary keys."""

    def __init__(
        self,
        key_schema: Schema[Any, K],
        value_schema: Schema[Any, V],
        min_size: int | None = None,
        max_size: int | None = None,
    ):
        _check_sizes(min_size, max_size)
        self.key_schema = key_schema
        self.value_schema = value_schema
        self.min_size = min_size
        self.max_size = max_size

    def _check_input(self, value: Any) -> ValidationResult[Any] | None:
        if not isinstance(value, MappingABC):
            return _invalid_type("map", value)
        return _length_failure(len(value), self.min_size, self.max_size)

    @staticmethod
    def _finish(
        entries: Iterable[tuple[Any, ValidationResult[K], ValidationResult[V]]],
    ) -> ValidationResult[dict[K, V]]:
        parsed: dict[K, V] = {}
        issues: list[Issue] = []
        for key, key_result, value_result in entries:
            segment = str(key)
            if key_result.is_failure:
                issues.extend(issue.prepend_path(segment) for issue in key_result.issues)
            if value_result.is_failure:
                issues.extend(issue.prepend_path(segment) for issue in value_result.issues)
            if key_result.is_success and value_result.is_success:
                parsed[key_result.value] = value_result.value
        if issues:
            return ValidationResult.failure(issues)
        return ValidationResult.success(parsed)

    def validate(self, value: Any) -> ValidationResult[dict[K, V]]:
        rejected = self._check_input(value)
        if rejected is not None:
            return rejected
        return self._finish(
            (key, self.key_schema.validate(key), self.value_schema.validate(item))
            for key, item in value.items()
        )

    async def validate_async(self, value: Any) -> ValidationResult[dict[K, V]]:
        rejected = self._check_input(value)
        if rejected is not None:
            return rejected
        entries = []
        for key, item in value.items():
            key_result = await self.key_schema.validate_async(key)
            entries.append((key, key_result, await self.value_schema.validate_async(item)))
        return self._finish(entries)
