"""DataKnobs Schema package.

Composable validators for untyped input:

- Predictable return type (always ValidationResult, never raises)
- Path-qualified, translatable issues
- Combinators for coercion, transformation, defaults and recursion
- Schemas buildable from YAML/JSON configuration

Example:
    ```python
    from dataknobs_schema import ArraySchema, Coerce, ObjectSchema, StringSchema

    order = ObjectSchema({
        "customer": StringSchema().min(2),
        "quantity": Coerce.integer(min=1, max=100),
        "tags": ArraySchema(StringSchema()).optional(),
    })

    result = order.validate({"customer": "Ada", "quantity": "3"})
    if result:
        print(result.value)  # {'customer': 'Ada', 'quantity': 3, 'tags': None}
    ```
"""

from .aggregates import ArraySchema, MapSchema, ObjectSchema
from .coercion import Coerce, CoerceBool, CoerceFloat, CoerceInt, CoerceString
from .combinators import (
    AsyncRefinedSchema,
    Branded,
    BrandedSchema,
    CatchSchema,
    DefaultSchema,
    LazySchema,
    NullableSchema,
    OptionalSchema,
    PipeSchema,
    PreprocessSchema,
    RefinedSchema,
    SuperRefinedSchema,
    TransformSchema,
    UnionSchema,
)
from .config import SchemaSettings, load_translation_file
from .error_map import (
    DEFAULT_LOCALE,
    ErrorContext,
    apply_error_map,
    apply_error_map_all,
    clear_error_map,
    get_error_map,
    get_locale,
    set_error_map,
    set_locale,
)
from .exceptions import ConfigurationError, ResultAccessError, SchemaError, SchemaParseError
from .factory import SchemaFactory, schema_factory
from .formatting import (
    ERRORS_KEY,
    errors_at,
    first_error_at,
    flatten,
    format_issues,
    group_by_path,
    has_errors_at,
)
from .i18n import (
    available_locales,
    register_translations,
    translate,
    translate_issues,
    translations_for,
)
from .issues import Issue
from .primitives import (
    BoolSchema,
    CustomSchema,
    DateTimeSchema,
    FloatSchema,
    IntSchema,
    LiteralSchema,
    StringSchema,
)
from .result import ValidationResult
from .schema import Schema

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "Schema",
    "ValidationResult",
    "Issue",
    # Exceptions
    "SchemaError",
    "ResultAccessError",
    "SchemaParseError",
    "ConfigurationError",
    # Leaf schemas
    "StringSchema",
    "IntSchema",
    "FloatSchema",
    "BoolSchema",
    "LiteralSchema",
    "DateTimeSchema",
    "CustomSchema",
    # Coercion
    "Coerce",
    "CoerceBool",
    "CoerceInt",
    "CoerceFloat",
    "CoerceString",
    # Aggregates
    "ObjectSchema",
    "ArraySchema",
    "MapSchema",
    # Combinators
    "PipeSchema",
    "TransformSchema",
    "PreprocessSchema",
    "CatchSchema",
    "DefaultSchema",
    "NullableSchema",
    "OptionalSchema",
    "LazySchema",
    "Branded",
    "BrandedSchema",
    "RefinedSchema",
    "SuperRefinedSchema",
    "AsyncRefinedSchema",
    "UnionSchema",
    # Messages
    "DEFAULT_LOCALE",
    "ErrorContext",
    "set_locale",
    "get_locale",
    "set_error_map",
    "clear_error_map",
    "get_error_map",
    "apply_error_map",
    "apply_error_map_all",
    "register_translations",
    "translations_for",
    "available_locales",
    "translate",
    "translate_issues",
    # Formatting
    "ERRORS_KEY",
    "format_issues",
    "errors_at",
    "first_error_at",
    "has_errors_at",
    "flatten",
    "group_by_path",
    # Configuration
    "SchemaSettings",
    "load_translation_file",
    "SchemaFactory",
    "schema_factory",
]
