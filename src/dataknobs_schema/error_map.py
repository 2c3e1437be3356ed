"""Process-wide error message configuration.

Holds the active locale and an optional global custom-message function.
Both are plain module state with last-writer-wins semantics: set them at
startup (or between validations). Code that needs a different locale per
call should pass ``locale=`` to ``translate``/``translate_issues`` instead
of flipping the global from concurrent tasks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

if TYPE_CHECKING:
    from .issues import Issue

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"


@dataclass(frozen=True)
class ErrorContext:
    """Context handed to a custom error map function."""

    default_message: str
    code: str
    metadata: Mapping[str, Any] | None = None


ErrorMapFunc = Callable[["Issue", ErrorContext], "str | None"]


class _ErrorMapState:
    locale: str = DEFAULT_LOCALE
    error_map: ErrorMapFunc | None = None


_state = _ErrorMapState()


def set_locale(locale: str) -> None:
    """Set the active locale used when rendering new issue messages."""
    logger.debug(f"Switching validation locale: {_state.locale} -> {locale}")
    _state.locale = locale


def get_locale() -> str:
    return _state.locale


def set_error_map(error_map: ErrorMapFunc) -> None:
    """Register the global custom-message function.

    The function receives each issue plus an ``ErrorContext`` and returns a
    replacement message, or ``None`` to keep the default one.
    """
    _state.error_map = error_map


def clear_error_map() -> None:
    _state.error_map = None


def get_error_map() -> ErrorMapFunc | None:
    return _state.error_map


def apply_error_map(issue: Issue) -> Issue:
    """Apply the global error map to a single issue.

    Returns the issue unchanged when no map is registered, when the map
    declines, or when the map itself raises.
    """
    error_map = _state.error_map
    if error_map is None:
        return issue

    ctx = ErrorContext(
        default_message=issue.message,
        code=issue.code,
        metadata=issue.metadata,
    )
    try:
        custom_message = error_map(issue, ctx)
    except Exception as e:
        logger.warning(f"Error map failed for code '{issue.code}': {e}")
        return issue

    if custom_message is None:
        return issue
    return issue.with_message(custom_message)


def apply_error_map_all(issues: Iterable[Issue]) -> list[Issue]:
    """Apply the global error map to every issue, returning new issues."""
    return [apply_error_map(issue) for issue in issues]
