"""Factory for building schemas from configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Union

from dataknobs_config import FactoryBase

from .aggregates import ArraySchema, MapSchema, ObjectSchema
from .coercion import CoerceBool, CoerceFloat, CoerceInt, CoerceString
from .config import config_entry, load_config
from .exceptions import ConfigurationError
from .primitives import (
    BoolSchema,
    DateTimeSchema,
    FloatSchema,
    IntSchema,
    LiteralSchema,
    StringSchema,
)
from .schema import Schema

logger = logging.getLogger(__name__)

_COMMON_KEYS = {"type", "name", "description", "nullable", "optional", "default", "message", "coerce", "factory"}

SCHEMAS_TYPE = "schemas"

_TYPE_ALIASES = {
    "str": "string",
    "int": "integer",
    "number": "float",
    "double": "float",
    "bool": "boolean",
    "list": "array",
    "dict": "map",
}


class SchemaFactory(FactoryBase):
    """Factory for creating schemas from configuration.

    Configuration Options:
        type (str): string, integer, float, boolean, literal, datetime,
            object, array or map. May be left out when ``fields`` is
            given, in which case the schema is an object.
        coerce (bool): Use the coercing variant for string/integer/float/
            boolean (default: False)
        min / max: Bounds (lengths for strings and arrays, sizes for maps)
        message (str): Custom message for leaf issues
        nullable (bool): Wrap with ``nullable()``
        optional (bool): Wrap with ``optional()``
        default (any): Wrap with ``default(value)``

    Type-specific Options:
        string: pattern, choices, format (email/url/uuid), trim
        literal: value
        object: fields (mapping of name to config, or list of configs with
            a ``name``), strict
        array: items
        map: keys, values

    Example Configuration:
        schemas:
          - name: user
            factory: dataknobs_schema.SchemaFactory
            strict: true
            fields:
              username:
                type: string
                min: 3
                pattern: "^[a-zA-Z0-9_]+$"
              age:
                type: integer
                coerce: true
                min: 13
                max: 120
              tags:
                type: array
                items: {type: string}
                optional: true

    Entries of the ``schemas`` section can be built with ``from_file`` or,
    through the ``factory`` attribute, with ``Config.get_instance``.
    """

    def __init__(self) -> None:
        self._builders: Dict[str, Callable[[Dict[str, Any]], Schema[Any, Any]]] = {
            "string": self._build_string,
            "integer": self._build_integer,
            "float": self._build_float,
            "boolean": self._build_boolean,
            "literal": self._build_literal,
            "datetime": self._build_datetime,
            "object": self._build_object,
            "array": self._build_array,
            "map": self._build_map,
        }

    def create(self, **config: Any) -> Schema[Any, Any]:
        """Create a Schema instance from configuration.

        Args:
            **config: Schema configuration

        Returns:
            Schema instance

        Raises:
            ConfigurationError: If the type is missing or unknown
        """
        raw_type = config.get("type") or ("object" if "fields" in config else None)
        if not raw_type:
            raise ConfigurationError("Schema configuration missing 'type'", context={"config": config})

        schema_type = _TYPE_ALIASES.get(str(raw_type).lower(), str(raw_type).lower())
        builder = self._builders.get(schema_type)
        if builder is None:
            raise ConfigurationError(f"Unknown schema type: {raw_type}", context={"type": raw_type})

        schema = builder(config)

        if config.get("nullable"):
            schema = schema.nullable()
        if config.get("optional"):
            schema = schema.optional()
        if "default" in config:
            schema = schema.default(config["default"])
        return schema

    def from_file(self, path: Union[str, Path], name_or_index: Union[str, int] = 0) -> Schema[Any, Any]:
        """Create a schema from an entry of the ``schemas`` section of a file.

        Args:
            path: YAML or JSON configuration file
            name_or_index: Entry name or position in the section

        Raises:
            ConfigurationError: If the file has no such entry
        """
        logger.info(f"Loading schema definition {SCHEMAS_TYPE}[{name_or_index}] from {path}")
        entry = config_entry(load_config(path), SCHEMAS_TYPE, name_or_index)
        if entry is None:
            raise ConfigurationError(
                f"No '{SCHEMAS_TYPE}' section in {path}", context={"path": str(path)}
            )
        entry.pop("factory", None)
        return self.create(**entry)

    def _warn_unknown(self, config: Dict[str, Any], allowed: set[str]) -> None:
        for key in sorted(set(config) - _COMMON_KEYS - allowed):
            logger.warning(f"Unknown option '{key}' for {config.get('type')} schema, ignoring")

    def _build_string(self, config: Dict[str, Any]) -> Schema[Any, Any]:
        self._warn_unknown(config, {"min", "max", "pattern", "choices", "format", "trim"})
        if config.get("coerce"):
            return CoerceString(message=config.get("message"))
        choices = config.get("choices")
        return StringSchema(
            min_length=config.get("min"),
            max_length=config.get("max"),
            pattern=config.get("pattern"),
            trim=bool(config.get("trim", False)),
            choices=tuple(choices) if choices else None,
            format=config.get("format"),
            message=config.get("message"),
        )

    def _build_integer(self, config: Dict[str, Any]) -> Schema[Any, Any]:
        self._warn_unknown(config, {"min", "max", "positive", "negative", "multiple_of"})
        if config.get("coerce"):
            return CoerceInt(min=config.get("min"), max=config.get("max"), message=config.get("message"))
        return IntSchema(
            min=config.get("min"),
            max=config.get("max"),
            is_positive=bool(config.get("positive", False)),
            is_negative=bool(config.get("negative", False)),
            multiple_of=config.get("multiple_of"),
            message=config.get("message"),
        )

    def _build_float(self, config: Dict[str, Any]) -> Schema[Any, Any]:
        self._warn_unknown(config, {"min", "max", "positive", "negative", "finite"})
        if config.get("coerce"):
            return CoerceFloat(min=config.get("min"), max=config.get("max"), message=config.get("message"))
        return FloatSchema(
            min=config.get("min"),
            max=config.get("max"),
            is_positive=bool(config.get("positive", False)),
            is_negative=bool(config.get("negative", False)),
            finite=bool(config.get("finite", False)),
            message=config.get("message"),
        )

    def _build_boolean(self, config: Dict[str, Any]) -> Schema[Any, Any]:
        self._warn_unknown(config, set())
        if config.get("coerce"):
            return CoerceBool(message=config.get("message"))
        return BoolSchema(message=config.get("message"))

    def _build_literal(self, config: Dict[str, Any]) -> Schema[Any, Any]:
        self._warn_unknown(config, {"value"})
        if "value" not in config:
            raise ConfigurationError("Literal schema requires a 'value'", context={"config": config})
        return LiteralSchema(config["value"], message=config.get("message"))

    def _build_datetime(self, config: Dict[str, Any]) -> Schema[Any, Any]:
        self._warn_unknown(config, {"min", "max"})
        bounds = {}
        for key in ("min", "max"):
            if config.get(key) is not None:
                bound = DateTimeSchema().validate(config[key])
                if bound.is_failure:
                    raise ConfigurationError(f"Invalid datetime bound '{key}': {config[key]}")
                bounds[key] = bound.value
        return DateTimeSchema(message=config.get("message"), **bounds)

    def _build_object(self, config: Dict[str, Any]) -> Schema[Any, Any]:
        self._warn_unknown(config, {"fields", "strict"})
        fields = config.get("fields") or {}
        if isinstance(fields, list):
            named = {}
            for field_config in fields:
                field_name = field_config.get("name")
                if not field_name:
                    logger.warning("Field configuration missing 'name', skipping")
                    continue
                named[field_name] = field_config
            fields = named

        shape = {name: self.create(**field_config) for name, field_config in fields.items()}
        logger.info(f"Creating object schema: {config.get('name', 'unnamed')} ({len(shape)} fields)")
        return ObjectSchema(shape, strict=bool(config.get("strict", False)))

    def _build_array(self, config: Dict[str, Any]) -> Schema[Any, Any]:
        self._warn_unknown(config, {"items", "min", "max"})
        items = config.get("items")
        if not isinstance(items, dict):
            raise ConfigurationError("Array schema requires an 'items' configuration", context={"config": config})
        return ArraySchema(self.create(**items), min_length=config.get("min"), max_length=config.get("max"))

    def _build_map(self, config: Dict[str, Any]) -> Schema[Any, Any]:
        self._warn_unknown(config, {"keys", "values", "min", "max"})
        values = config.get("values")
        if not isinstance(values, dict):
            raise ConfigurationError("Map schema requires a 'values' configuration", context={"config": config})
        keys = config.get("keys") or {"type": "string"}
        return MapSchema(
            self.create(**keys),
            self.create(**values),
            min_size=config.get("min"),
            max_size=config.get("max"),
        )


# Create singleton instance for registration
schema_factory = SchemaFactory()
