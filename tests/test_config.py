"""
Tests for message settings and translation files.
"""

import json
import os

import pytest
import yaml
from dataknobs_common import ConfigurationError as CommonConfigurationError, DataknobsError

from dataknobs_schema import (
    ConfigurationError,
    SchemaError,
    SchemaSettings,
    get_locale,
    load_translation_file,
    translate,
)
from dataknobs_schema.config import config_entry, load_config


@pytest.fixture
def german_file(tmp_path):
    path = tmp_path / "de.yaml"
    path.write_text(yaml.safe_dump({
        "translations": [{
            "locale": "de",
            "messages": {
                "too_small": "Muss >= {min} sein",
                "invalid_type": "Erwartet {expected}, erhalten {received}",
            },
        }],
    }))
    return path


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.delenv("DATAKNOBS_SCHEMA__0__LOCALE", raising=False)
    monkeypatch.delenv("DATAKNOBS_SCHEMA__0__TRANSLATION_FILES", raising=False)
    return monkeypatch


class TestExceptions:
    """Test the exception hierarchy."""

    def test_errors_are_dataknobs_errors(self):
        error = ConfigurationError("bad", context={"path": "x"})
        assert isinstance(error, SchemaError)
        assert isinstance(error, CommonConfigurationError)
        assert isinstance(error, DataknobsError)
        assert error.context == {"path": "x"}


class TestLoadConfig:
    """Test YAML/JSON loading through dataknobs_config."""

    def test_yaml(self, tmp_path, clean_env):
        path = tmp_path / "settings.yml"
        path.write_text("schema:\n  locale: fr\n")
        assert config_entry(load_config(path), "schema") == {"locale": "fr"}

    def test_json(self, tmp_path, clean_env):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"schema": {"locale": "fr"}}))
        assert config_entry(load_config(str(path)), "schema") == {"locale": "fr"}

    def test_missing_section(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert config_entry(load_config(path), "schema") is None

    def test_missing_entry(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("schema:\n  locale: fr\n")
        with pytest.raises(ConfigurationError):
            config_entry(load_config(path), "schema", "other")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text("locale = 'fr'")
        with pytest.raises(ConfigurationError, match="Unsupported"):
            load_config(path)

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="Malformed"):
            load_config(path)

    def test_environment_override(self, tmp_path, clean_env):
        path = tmp_path / "settings.yaml"
        path.write_text("schema:\n  locale: fr\n")
        clean_env.setenv("DATAKNOBS_SCHEMA__0__LOCALE", "de")
        assert SchemaSettings.from_file(path).locale == "de"


class TestTranslationFiles:
    """Test loading translation tables from disk."""

    def test_load(self, german_file):
        assert load_translation_file(german_file) == ["de"]
        assert translate("too_small", {"min": 3}, locale="de") == "Muss >= 3 sein"
        # codes missing from the file fall back to English
        assert translate("too_big", {"max": 3}, locale="de") == "Must be <= 3"

    def test_several_locales(self, tmp_path):
        path = tmp_path / "extra.yaml"
        path.write_text(yaml.safe_dump({
            "translations": [
                {"locale": "de", "messages": {"too_big": "Höchstens {max}"}},
                {"locale": "es", "messages": {"too_big": "Como máximo {max}"}},
            ],
        }))
        assert load_translation_file(path) == ["de", "es"]
        assert translate("too_big", {"max": 2}, locale="es") == "Como máximo 2"

    def test_merge_into_existing_locale(self, tmp_path):
        path = tmp_path / "en.json"
        path.write_text(json.dumps({"translations": {"locale": "en", "messages": {"too_big": "Max {max}"}}}))
        load_translation_file(path)
        assert translate("too_big", {"max": 2}) == "Max 2"
        assert translate("too_small", {"min": 2}) == "Must be >= 2"

    def test_missing_section(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("schema:\n  locale: de\n")
        with pytest.raises(ConfigurationError, match="no 'translations' section"):
            load_translation_file(path)

    def test_invalid_entry(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("translations:\n  - messages: {}\n")
        with pytest.raises(ConfigurationError):
            load_translation_file(path)


class TestSchemaSettings:
    """Test settings construction and application."""

    def test_defaults(self):
        settings = SchemaSettings()
        assert settings.locale == "en"
        assert settings.translation_files == []

    def test_from_dict(self):
        settings = SchemaSettings.from_dict({"locale": "fr", "translation_files": "de.yaml", "extra": 1})
        assert settings.locale == "fr"
        assert settings.translation_files == ["de.yaml"]

    def test_from_dict_splits_path_list(self):
        settings = SchemaSettings.from_dict({"translation_files": os.pathsep.join(["a.yaml", "b.yaml", ""])})
        assert settings.translation_files == ["a.yaml", "b.yaml"]

    def test_from_file_resolves_relative_paths(self, tmp_path, german_file, clean_env):
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({"schema": {"locale": "de", "translation_files": ["de.yaml"]}}))

        settings = SchemaSettings.from_file(path)
        assert settings.translation_files == [str(german_file.resolve())]

        settings.apply()
        assert get_locale() == "de"
        assert translate("invalid_type", {"expected": "int", "received": "str"}) == "Erwartet int, erhalten str"

    def test_from_file_without_section(self, tmp_path, clean_env):
        path = tmp_path / "other.yaml"
        path.write_text("database:\n  host: localhost\n")
        assert SchemaSettings.from_file(path) == SchemaSettings()

    def test_from_env(self, clean_env, german_file):
        clean_env.setenv("DATAKNOBS_SCHEMA__0__LOCALE", "de")
        clean_env.setenv("DATAKNOBS_SCHEMA__0__TRANSLATION_FILES", str(german_file))

        settings = SchemaSettings.from_env()
        assert settings.locale == "de"
        assert settings.translation_files == [str(german_file)]

        settings.apply()
        assert translate("too_small", {"min": 1}) == "Muss >= 1 sein"

    def test_from_env_defaults(self, clean_env):
        assert SchemaSettings.from_env() == SchemaSettings()

    def test_apply_missing_file(self, tmp_path):
        settings = SchemaSettings(locale="de", translation_files=[str(tmp_path / "missing.yaml")])
        with pytest.raises(ConfigurationError):
            settings.apply()
        assert get_locale() == "en"
