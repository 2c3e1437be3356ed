"""Locale-aware rendering of issue messages.

Each locale owns a table mapping issue codes to renderers. A renderer is
either a callable taking the issue parameters and returning a string, or a
``str.format`` template such as ``"Must be >= {min}"``.

Lookup order for ``translate``:

1. the requested (or active) locale's table
2. the default locale (``en``) table
3. the generic ``"Validation error: <code>"`` string
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Mapping, Union

from .error_map import DEFAULT_LOCALE, get_locale
from .translations import ENGLISH, FRENCH

if TYPE_CHECKING:
    from .issues import Issue

logger = logging.getLogger(__name__)

Renderer = Callable[[Mapping[str, Any]], str]
Translations = Dict[str, Renderer]


class _TemplateParams(dict):
    """Format mapping that leaves unknown placeholders visible."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def template_renderer(template: str) -> Renderer:
    """Turn a ``str.format`` template into a renderer."""

    def render(params: Mapping[str, Any]) -> str:
        return template.format_map(_TemplateParams(params))

    return render


_lock = threading.Lock()
_tables: dict[str, Translations] = {
    "en": dict(ENGLISH),
    "fr": dict(FRENCH),
}


def register_translations(
    locale: str,
    translations: Mapping[str, Union[Renderer, str]],
    replace: bool = True,
) -> None:
    """Register a translation table for ``locale``.

    Args:
        locale: Locale identifier (e.g. ``"de"``)
        translations: Code to renderer (callable or format template)
        replace: If True the table replaces any existing one for the
            locale, otherwise entries are merged into it
    """
    table: Translations = {
        code: template_renderer(renderer) if isinstance(renderer, str) else renderer
        for code, renderer in translations.items()
    }
    with _lock:
        if replace or locale not in _tables:
            _tables[locale] = table
        else:
            _tables[locale] = {**_tables[locale], **table}
    logger.info(f"Registered {len(table)} translations for locale '{locale}'")


def available_locales() -> list[str]:
    return sorted(_tables)


def translations_for(locale: str) -> Translations | None:
    """Return a copy of the table registered for ``locale``, if any."""
    table = _tables.get(locale)
    return dict(table) if table is not None else None


def translate(
    code: str,
    params: Mapping[str, Any] | None = None,
    locale: str | None = None,
) -> str:
    """Render the message for ``code``.

    Args:
        code: Issue code
        params: Render parameters
        locale: Locale to use instead of the active one

    Returns:
        Rendered message
    """
    renderer = _find_renderer(code, locale)
    if renderer is None:
        return f"Validation error: {code}"
    return renderer(params or {})


def _find_renderer(code: str, locale: str | None) -> Renderer | None:
    renderer = _tables.get(locale or get_locale(), {}).get(code)
    if renderer is None:
        renderer = _tables.get(DEFAULT_LOCALE, {}).get(code)
    return renderer


def translate_issues(issues: Iterable[Issue], locale: str | None = None) -> list[Issue]:
    """Re-render every issue's message from its code and metadata.

    Issues whose code no table knows take the ``message`` parameter they
    were created with, or keep their current message.
    """
    translated = []
    for issue in issues:
        renderer = _find_renderer(issue.code, locale)
        params = issue.metadata or {}
        if renderer is not None:
            translated.append(issue.with_message(renderer(params)))
        elif params.get("message"):
            translated.append(issue.with_message(str(params["message"])))
        else:
            translated.append(issue)
    return translated
