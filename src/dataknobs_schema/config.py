"""Settings for the process-wide message configuration.

Settings files are ordinary ``dataknobs_config`` files (YAML or JSON). The
message settings live in the ``schema`` section; translation files hold a
``translations`` section with one entry per locale::

    # settings.yaml
    schema:
      locale: fr
      translation_files: [de.yaml]

    # de.yaml
    translations:
      - locale: de
        messages:
          invalid_type: "Erwartet {expected}, erhalten {received}"
          too_small: "Muss >= {min} sein"

The usual ``dataknobs_config`` environment overrides apply, e.g.::

    DATAKNOBS_SCHEMA__0__LOCALE=fr
    DATAKNOBS_SCHEMA__0__TRANSLATION_FILES=/etc/app/de.yaml:/etc/app/es.yaml
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

from dataknobs_common import DataknobsError
from dataknobs_config import Config

from .error_map import DEFAULT_LOCALE, set_locale
from .exceptions import ConfigurationError
from .i18n import register_translations

logger = logging.getLogger(__name__)

SETTINGS_TYPE = "schema"
TRANSLATIONS_TYPE = "translations"


def load_config(path: Union[str, Path]) -> Config:
    """Load a YAML or JSON file into a ``dataknobs_config.Config``.

    Raises:
        ConfigurationError: If the file is missing, has an unsupported
            format or is not organized in sections of mappings
    """
    try:
        return Config(path)
    except DataknobsError as e:
        raise ConfigurationError(f"Cannot load configuration: {e}", context={"path": str(path)}) from e
    except (AttributeError, TypeError) as e:
        # top level is not a mapping, or a section entry is not a mapping
        raise ConfigurationError(f"Malformed configuration file {path}: {e}", context={"path": str(path)}) from e


def config_entry(config: Config, type_name: str, name_or_index: Union[str, int] = 0) -> Dict[str, Any] | None:
    """Return one section entry without the ``type``/``name`` bookkeeping keys."""
    if type_name not in config.get_types():
        return None
    try:
        entry = config.get(type_name, name_or_index)
    except DataknobsError as e:
        raise ConfigurationError(str(e), context={"type": type_name, "name": name_or_index}) from e
    entry.pop("type", None)
    entry.pop("name", None)
    return entry


def load_translation_file(path: Union[str, Path], replace: bool = False) -> list[str]:
    """Register the translations defined in ``path``.

    Args:
        path: YAML or JSON file with a ``translations`` section
        replace: If True each entry replaces its locale's table instead of
            being merged into it

    Returns:
        The locales translations were registered for, in file order
    """
    config = load_config(path)
    count = config.get_count(TRANSLATIONS_TYPE)
    if count == 0:
        raise ConfigurationError(
            f"Translation file has no '{TRANSLATIONS_TYPE}' section", context={"path": str(path)}
        )

    locales = []
    for index in range(count):
        entry = config_entry(config, TRANSLATIONS_TYPE, index) or {}
        locale = entry.get("locale")
        messages = entry.get("messages")
        if not locale or not isinstance(messages, dict):
            raise ConfigurationError(
                "Each translation entry needs a 'locale' and a 'messages' mapping",
                context={"path": str(path), "index": index},
            )
        register_translations(
            str(locale), {str(code): str(template) for code, template in messages.items()}, replace=replace
        )
        locales.append(str(locale))

    logger.info(f"Loaded translations for {locales} from {path}")
    return locales


@dataclass
class SchemaSettings:
    """Message settings applied to the process-wide configuration."""

    locale: str = DEFAULT_LOCALE
    translation_files: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SchemaSettings:
        """Create settings from a dict.

        ``translation_files`` may be a list or a single ``os.pathsep``
        separated string.
        """
        unknown = set(data) - {"locale", "translation_files"}
        for key in sorted(unknown):
            logger.warning(f"Ignoring unknown schema setting: {key}")

        files = data.get("translation_files") or []
        if isinstance(files, str):
            files = [f for f in files.split(os.pathsep) if f]
        return cls(
            locale=str(data.get("locale") or DEFAULT_LOCALE),
            translation_files=[str(f) for f in files],
        )

    @classmethod
    def from_config(cls, config: Config) -> SchemaSettings:
        """Create settings from the ``schema`` section of a Config."""
        entry = config_entry(config, SETTINGS_TYPE)
        if entry is None:
            logger.debug(f"No '{SETTINGS_TYPE}' section, using default settings")
            return cls()
        return cls.from_dict(entry)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> SchemaSettings:
        """Create settings from a YAML or JSON file.

        Relative translation file paths are resolved against the settings
        file's directory.
        """
        path = Path(path)
        settings = cls.from_config(load_config(path))
        settings.translation_files = [
            str((path.parent / f).resolve()) if not Path(f).is_absolute() else f
            for f in settings.translation_files
        ]
        return settings

    @classmethod
    def from_env(cls) -> SchemaSettings:
        """Create settings from ``DATAKNOBS_SCHEMA__0__*`` environment overrides."""
        return cls.from_config(Config({SETTINGS_TYPE: {}}))

    def apply(self) -> None:
        """Register translation files, then activate the locale."""
        for path in self.translation_files:
            load_translation_file(path)
        set_locale(self.locale)
        logger.info(f"Schema messages configured for locale '{self.locale}'")
