"""Exception hierarchy for dataknobs_schema.

Validation itself never raises: schemas report problems as issues inside a
``ValidationResult``. Exceptions are reserved for programming errors (reading
the wrong side of a result), for callers who explicitly ask for raising
behaviour via ``Schema.parse``, and for bad configuration.

Example:
    ```python
    from dataknobs_schema import SchemaParseError

    try:
        user = user_schema.parse(payload)
    except SchemaParseError as e:
        for issue in e.issues:
            logger.error(f"{issue.path_string}: {issue.message}")
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from dataknobs_common import ConfigurationError as BaseConfigurationError, DataknobsError

if TYPE_CHECKING:
    from .issues import Issue


class SchemaError(DataknobsError):
    """Base exception for the schema package."""

    pass


class ResultAccessError(SchemaError):
    """Raised when reading the value of a failure or the issues of a success."""

    pass


class SchemaParseError(SchemaError):
    """Raised by ``Schema.parse`` when validation fails.

    Carries every issue produced by the failed validation.
    """

    def __init__(self, issues: Sequence[Issue]):
        self.issues = tuple(issues)
        super().__init__(self._describe(), context={"issue_count": len(self.issues)})

    def _describe(self) -> str:
        if not self.issues:
            return "Unknown validation error"
        if len(self.issues) == 1:
            return str(self.issues[0])
        lines = "\n".join(f"  - {issue}" for issue in self.issues)
        return f"Multiple validation errors:\n{lines}"


class ConfigurationError(SchemaError, BaseConfigurationError):
    """Raised when settings, translation files or schema configs are invalid.

    Also a ``dataknobs_common.ConfigurationError``, so callers handling
    configuration problems across dataknobs packages catch it too.
    """

    pass
