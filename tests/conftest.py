"""Pytest configuration for dataknobs_schema tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_schema import clear_error_map, i18n, set_locale  # noqa: E402


@pytest.fixture(autouse=True)
def reset_messages():
    """Restore the process-wide locale, error map and translation tables."""
    tables = {locale: dict(table) for locale, table in i18n._tables.items()}
    yield
    set_locale("en")
    clear_error_map()
    i18n._tables.clear()
    i18n._tables.update(tables)
