"""Base schema contract with composable operators.

Every validator, leaf or combinator, implements ``validate``. Combinators
wrap child schemas; none of them keep per-call state, so one schema instance
can validate any number of inputs, from any number of threads or tasks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Generic, Iterable, TypeVar

from .result import ValidationResult

if TYPE_CHECKING:
    from .combinators import (
        AsyncRefinedSchema,
        BrandedSchema,
        CatchSchema,
        DefaultSchema,
        NullableSchema,
        OptionalSchema,
        PipeSchema,
        RefinedSchema,
        SuperRefinedSchema,
        TransformSchema,
        UnionSchema,
    )
    from .issues import Issue

I = TypeVar("I")
O = TypeVar("O")
R = TypeVar("R")


class Schema(ABC, Generic[I, O]):
    """Base class for all schemas.

    Type parameters:
        I: The input type accepted by this schema
        O: The validated (and possibly transformed) output type
    """

    @abstractmethod
    def validate(self, value: I) -> ValidationResult[O]:
        """Validate a value against this schema.

        Args:
            value: Value to validate

        Returns:
            ValidationResult with the output value or the issues found
        """
        pass

    async def validate_async(self, value: I) -> ValidationResult[O]:
        """Asynchronous variant of ``validate``.

        The default runs the synchronous validation. Schemas with children
        that may suspend override this to await them in order.
        """
        return self.validate(value)

    def parse(self, value: I) -> O:
        """Validate and return the output value.

        Raises:
            SchemaParseError: If validation fails
        """
        return self.validate(value).value_or_raise()

    async def parse_async(self, value: I) -> O:
        result = await self.validate_async(value)
        return result.value_or_raise()

    def pipe(self, other: Schema[O, R]) -> PipeSchema[I, O, R]:
        """Feed this schema's output into ``other``."""
        from .combinators import PipeSchema

        return PipeSchema(self, other)

    def transform(self, transformer: Callable[[O], R]) -> TransformSchema[I, O, R]:
        """Map the validated value through ``transformer``."""
        from .combinators import TransformSchema

        return TransformSchema(self, transformer)

    def catch(self, handler: Callable[[tuple[Issue, ...]], O]) -> CatchSchema[I, O]:
        """Replace any failure with ``handler(issues)``."""
        from .combinators import CatchSchema

        return CatchSchema(self, handler)

    def default(self, default_value: O) -> DefaultSchema[I, O]:
        """Use ``default_value`` for None input and for invalid input."""
        from .combinators import DefaultSchema

        return DefaultSchema(self, default_value)

    def nullable(self) -> NullableSchema[I, O]:
        from .combinators import NullableSchema

        return NullableSchema(self)

    def optional(self) -> OptionalSchema[I, O]:
        from .combinators import OptionalSchema

        return OptionalSchema(self)

    def brand(self, brand: str) -> BrandedSchema[I, O]:
        """Tag successful values with the nominal ``brand``."""
        from .combinators import BrandedSchema

        return BrandedSchema(self, brand)

    def refine(
        self,
        predicate: Callable[[O], bool],
        message: str | None = None,
        code: str = "custom_error",
    ) -> RefinedSchema[I, O]:
        """Add a custom check run on the validated value."""
        from .combinators import RefinedSchema

        return RefinedSchema(self, predicate, message=message, code=code)

    def super_refine(
        self, validator: Callable[[O], Iterable[Issue] | None]
    ) -> SuperRefinedSchema[I, O]:
        """Add a custom check that reports its own issues."""
        from .combinators import SuperRefinedSchema

        return SuperRefinedSchema(self, validator)

    def refine_async(
        self,
        predicate: Callable[[O], Awaitable[bool]],
        message: str | None = None,
        code: str = "async_custom_error",
    ) -> AsyncRefinedSchema[I, O]:
        """Add an awaitable check; only enforced by ``validate_async``."""
        from .combinators import AsyncRefinedSchema

        return AsyncRefinedSchema(self, predicate, message=message, code=code)

    def __or__(self, other: Schema[Any, Any]) -> UnionSchema:
        """Combine with OR: the first schema that accepts the value wins."""
        from .combinators import UnionSchema

        if isinstance(self, UnionSchema):
            return UnionSchema([*self.options, other])
        return UnionSchema([self, other])
