"""Schemas that wrap other schemas to add behavior.

Faults raised by user callbacks (transformers, preprocessors, predicates,
catch handlers) are caught at the combinator that invoked them and turned
into a single issue; they never escape ``validate``.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Iterable, Sequence, TypeVar

from .issues import Issue
from .result import ValidationResult
from .schema import Schema

logger = logging.getLogger(__name__)

I = TypeVar("I")
M = TypeVar("M")
O = TypeVar("O")
T = TypeVar("T")


def _callback_failure(code: str, error: Exception) -> ValidationResult[Any]:
    logger.debug(f"Callback raised inside schema ({code}): {error!r}")
    return ValidationResult.failure([Issue.create(code, {"error": str(error)})])


class PipeSchema(Schema[I, O], Generic[I, M, O]):
    """Run ``first``, then feed its output into ``second``."""

    def __init__(self, first: Schema[I, M], second: Schema[M, O]):
        self.first = first
        self.second = second

    def validate(self, value: I) -> ValidationResult[O]:
        result = self.first.validate(value)
        if result.is_failure:
            return result
        return self.second.validate(result.value)

    async def validate_async(self, value: I) -> ValidationResult[O]:
        result = await self.first.validate_async(value)
        if result.is_failure:
            return result
        return await self.second.validate_async(result.value)


class TransformSchema(Schema[I, T], Generic[I, O, T]):
    """Map a successful value through ``transformer``."""

    def __init__(self, base: Schema[I, O], transformer: Callable[[O], T]):
        self.base = base
        self.transformer = transformer

    def _apply(self, result: ValidationResult[O]) -> ValidationResult[T]:
        if result.is_failure:
            return result  # type: ignore[return-value]
        try:
            return ValidationResult.success(self.transformer(result.value))
        except Exception as e:
            return _callback_failure("transform_error", e)

    def validate(self, value: I) -> ValidationResult[T]:
        return self._apply(self.base.validate(value))

    async def validate_async(self, value: I) -> ValidationResult[T]:
        return self._apply(await self.base.validate_async(value))


class PreprocessSchema(Schema[I, O], Generic[I, M, O]):
    """Map raw input through ``preprocessor`` before validating it."""

    def __init__(self, preprocessor: Callable[[I], M], base: Schema[M, O]):
        self.preprocessor = preprocessor
        self.base = base

    def validate(self, value: I) -> ValidationResult[O]:
        try:
            prepared = self.preprocessor(value)
        except Exception as e:
            return _callback_failure("preprocess_error", e)
        return self.base.validate(prepared)

    async def validate_async(self, value: I) -> ValidationResult[O]:
        try:
            prepared = self.preprocessor(value)
        except Exception as e:
            return _callback_failure("preprocess_error", e)
        return await self.base.validate_async(prepared)


class CatchSchema(Schema[I, O]):
    """Absorb failures: succeed with ``handler(issues)`` instead.

    The one way a catch can still fail is a handler that raises; that fault
    is reported as a single ``transform_error`` issue.
    """

    def __init__(self, base: Schema[I, O], handler: Callable[[tuple[Issue, ...]], O]):
        self.base = base
        self.handler = handler

    def _recover(self, result: ValidationResult[O]) -> ValidationResult[O]:
        if result.is_success:
            return result
        try:
            return ValidationResult.success(self.handler(result.issues))
        except Exception as e:
            return _callback_failure("transform_error", e)

    def validate(self, value: I) -> ValidationResult[O]:
        return self._recover(self.base.validate(value))

    async def validate_async(self, value: I) -> ValidationResult[O]:
        return self._recover(await self.base.validate_async(value))


class DefaultSchema(Schema[Any, O], Generic[I, O]):
    """Substitute ``default_value`` for None input and for invalid input.

    Note that a non-None value which fails ``base`` also yields the default;
    its issues are discarded. Use ``optional`` to keep them.
    """

    def __init__(self, base: Schema[I, O], default_value: O):
        self.base = base
        self.default_value = default_value

    def _fallback(self, result: ValidationResult[O]) -> ValidationResult[O]:
        if result.is_failure:
            return ValidationResult.success(self.default_value)
        return result

    def validate(self, value: Any) -> ValidationResult[O]:
        if value is None:
            return ValidationResult.success(self.default_value)
        return self._fallback(self.base.validate(value))

    async def validate_async(self, value: Any) -> ValidationResult[O]:
        if value is None:
            return ValidationResult.success(self.default_value)
        return self._fallback(await self.base.validate_async(value))


class NullableSchema(Schema[Any, O], Generic[I, O]):
    """None is "absent, not wrong": a failure that carries no issues.

    Inside an ``ObjectSchema`` this omits the key from the output without
    failing the object.
    """

    def __init__(self, base: Schema[I, O]):
        self.base = base

    def validate(self, value: Any) -> ValidationResult[O]:
        if value is None:
            return ValidationResult.failure([])
        return self.base.validate(value)

    async def validate_async(self, value: Any) -> ValidationResult[O]:
        if value is None:
            return ValidationResult.failure([])
        return await self.base.validate_async(value)


class OptionalSchema(Schema[Any, "O | None"], Generic[I, O]):
    """None passes through as a successful None."""

    def __init__(self, base: Schema[I, O]):
        self.base = base

    def validate(self, value: Any) -> ValidationResult[O | None]:
        if value is None:
            return ValidationResult.success(None)
        return self.base.validate(value)

    async def validate_async(self, value: Any) -> ValidationResult[O | None]:
        if value is None:
            return ValidationResult.success(None)
        return await self.base.validate_async(value)


class LazySchema(Schema[I, O]):
    """Build the wrapped schema on first use and reuse it afterwards.

    Allows self-referential schemas:

        ```python
        category = LazySchema(lambda: ObjectSchema({
            "name": StringSchema(),
            "children": ArraySchema(category),
        }))
        ```
    """

    def __init__(self, factory: Callable[[], Schema[I, O]]):
        self._factory = factory
        self._schema: Schema[I, O] | None = None
        self._lock = threading.Lock()

    @property
    def schema(self) -> Schema[I, O]:
        schema = self._schema
        if schema is None:
            with self._lock:
                if self._schema is None:
                    logger.debug("Constructing lazy schema")
                    self._schema = self._factory()
                schema = self._schema
        return schema

    def validate(self, value: I) -> ValidationResult[O]:
        return self.schema.validate(value)

    async def validate_async(self, value: I) -> ValidationResult[O]:
        return await self.schema.validate_async(value)


@dataclass(frozen=True)
class Branded(Generic[T]):
    """A validated value tagged with a nominal brand.

    Two branded values are equal only when both the value and the brand
    match, so ``Branded(5, "UserId") != Branded(5, "OrderId")``.
    """

    value: T
    brand: str

    def __str__(self) -> str:
        return str(self.value)


class BrandedSchema(Schema[I, "Branded[O]"], Generic[I, O]):
    def __init__(self, base: Schema[I, O], brand: str):
        self.base = base
        self.brand = brand

    def _wrap(self, result: ValidationResult[O]) -> ValidationResult[Branded[O]]:
        if result.is_failure:
            return result  # type: ignore[return-value]
        return ValidationResult.success(Branded(result.value, self.brand))

    def validate(self, value: I) -> ValidationResult[Branded[O]]:
        return self._wrap(self.base.validate(value))

    async def validate_async(self, value: I) -> ValidationResult[Branded[O]]:
        return self._wrap(await self.base.validate_async(value))


class RefinedSchema(Schema[I, O]):
    """Run ``predicate`` on the validated value."""

    def __init__(
        self,
        base: Schema[I, O],
        predicate: Callable[[O], bool],
        message: str | None = None,
        code: str = "custom_error",
    ):
        self.base = base
        self.predicate = predicate
        self.message = message
        self.code = code

    def _check(self, result: ValidationResult[O]) -> ValidationResult[O]:
        if result.is_failure:
            return result
        try:
            accepted = self.predicate(result.value)
        except Exception as e:
            logger.debug(f"Refinement predicate raised: {e!r}")
            accepted = False
        if accepted:
            return result
        params = {"message": self.message} if self.message else None
        return ValidationResult.failure([Issue.create(self.code, params, value=result.value, message=self.message)])

    def validate(self, value: I) -> ValidationResult[O]:
        return self._check(self.base.validate(value))

    async def validate_async(self, value: I) -> ValidationResult[O]:
        return self._check(await self.base.validate_async(value))


class SuperRefinedSchema(Schema[I, O]):
    """Run ``validator`` on the validated value; it returns issues or None."""

    def __init__(self, base: Schema[I, O], validator: Callable[[O], Iterable[Issue] | None]):
        self.base = base
        self.validator = validator

    def _check(self, result: ValidationResult[O]) -> ValidationResult[O]:
        if result.is_failure:
            return result
        try:
            issues = list(self.validator(result.value) or ())
        except Exception as e:
            return _callback_failure("custom_error", e)
        if issues:
            return ValidationResult.failure(issues)
        return result

    def validate(self, value: I) -> ValidationResult[O]:
        return self._check(self.base.validate(value))

    async def validate_async(self, value: I) -> ValidationResult[O]:
        return self._check(await self.base.validate_async(value))


class AsyncRefinedSchema(Schema[I, O]):
    """Await ``predicate`` on the validated value.

    The predicate can only be awaited by ``validate_async``; synchronous
    ``validate`` runs the base schema alone.
    """

    def __init__(
        self,
        base: Schema[I, O],
        predicate: Callable[[O], Awaitable[bool]],
        message: str | None = None,
        code: str = "async_custom_error",
    ):
        self.base = base
        self.predicate = predicate
        self.message = message
        self.code = code

    def validate(self, value: I) -> ValidationResult[O]:
        return self.base.validate(value)

    async def validate_async(self, value: I) -> ValidationResult[O]:
        result = await self.base.validate_async(value)
        if result.is_failure:
            return result
        try:
            accepted = await self.predicate(result.value)
        except Exception as e:
            return _callback_failure("async_refinement_error", e)
        if accepted:
            return result
        message = self.message or "Async validation failed"
        return ValidationResult.failure([Issue.create(self.code, {"message": message}, value=result.value, message=message)])


class UnionSchema(Schema[Any, Any]):
    """The first option that accepts the value wins."""

    def __init__(self, options: Sequence[Schema[Any, Any]]):
        if not options:
            raise ValueError("UnionSchema requires at least one option")
        self.options = tuple(options)

    def _combine(self, value: Any, failures: list[tuple[Issue, ...]]) -> ValidationResult[Any]:
        params = {
            "union_errors": failures,
            "option_count": len(self.options),
            "received": type(value).__name__,
        }
        return ValidationResult.failure([Issue.create("invalid_union", params, value=value)])

    def validate(self, value: Any) -> ValidationResult[Any]:
        failures = []
        for option in self.options:
            result = option.validate(value)
            if result.is_success:
                return result
            failures.append(result.issues)
        return self._combine(value, failures)

    async def validate_async(self, value: Any) -> ValidationResult[Any]:
        failures = []
        for option in self.options:
            result = await option.validate_async(value)
            if result.is_success:
                return result
            failures.append(result.issues)
        return self._combine(value, failures)
