"""
Tests for leaf schemas.
"""

import math
import re
from datetime import datetime, timezone

import pytest

from dataknobs_schema import (
    BoolSchema,
    CustomSchema,
    DateTimeSchema,
    FloatSchema,
    IntSchema,
    LiteralSchema,
    SchemaParseError,
    StringSchema,
)


class TestStringSchema:
    """Test string validation."""

    def test_accepts_string(self):
        assert StringSchema().validate("hello").value == "hello"

    def test_rejects_non_string(self):
        result = StringSchema().validate(42)
        assert result.is_failure
        issue = result.issues[0]
        assert issue.code == "invalid_type"
        assert issue.message == "Expected string, got int"
        assert issue.metadata == {"expected": "string", "received": "int"}
        assert issue.value == 42

    def test_none_is_null(self):
        result = StringSchema().validate(None)
        assert result.issues[0].metadata["received"] == "null"

    def test_length_bounds(self):
        """Test min and max length."""
        schema = StringSchema().min(2).max(4)
        assert schema.validate("abc").is_success

        short = schema.validate("a")
        assert [i.code for i in short.issues] == ["too_short"]
        assert short.issues[0].message == "Must be at least 2 characters"

        long = schema.validate("abcde")
        assert [i.code for i in long.issues] == ["too_long"]
        assert long.issues[0].metadata == {"max": 4, "actual": 5}

    def test_exact_length_and_nonempty(self):
        assert StringSchema().length(3).validate("abc").is_success
        assert StringSchema().length(3).validate("ab").is_failure
        assert StringSchema().nonempty().validate("").issues[0].code == "too_short"

    def test_all_checks_reported(self):
        """Every failing check contributes an issue."""
        schema = StringSchema().min(5).regex(r"^\d+$").email()
        result = schema.validate("ab")
        assert [i.code for i in result.issues] == ["too_short", "invalid_format", "invalid_email"]

    def test_regex(self):
        schema = StringSchema().regex(re.compile(r"^[a-z]+$"))
        assert schema.validate("abc").is_success
        result = schema.validate("ABC")
        assert result.issues[0].code == "invalid_format"
        assert result.issues[0].metadata == {"pattern": "^[a-z]+$"}

    def test_one_of(self):
        schema = StringSchema().one_of("red", "green")
        assert schema.validate("red").is_success
        result = schema.validate("blue")
        assert result.issues[0].code == "invalid_enum"
        assert result.issues[0].message == "Must be one of: red, green"

    def test_trim(self):
        """Trimming happens before the other checks."""
        schema = StringSchema().trimmed().min(3)
        assert schema.validate("  abc  ").value == "abc"
        assert schema.validate("  a  ").issues[0].code == "too_short"

    def test_formats(self):
        """Test email, url and uuid formats."""
        assert StringSchema().email().validate("user@example.com").is_success
        assert StringSchema().email().validate("nope").issues[0].code == "invalid_email"
        assert StringSchema().url().validate("https://example.com/x").is_success
        assert StringSchema().url().validate("example.com").issues[0].code == "invalid_url"
        assert StringSchema().uuid().validate("12345678-1234-5678-1234-567812345678").is_success
        assert StringSchema().uuid().validate("1234").issues[0].code == "invalid_uuid"

    def test_custom_message(self):
        schema = StringSchema().min(3).with_message("Name is too short")
        result = schema.validate("a")
        assert result.issues[0].code == "too_short"
        assert result.issues[0].message == "Name is too short"

    def test_fluent_methods_return_copies(self):
        base = StringSchema()
        bounded = base.min(3)
        assert base.min_length is None
        assert bounded.min_length == 3

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            StringSchema(min_length=5, max_length=2)
        with pytest.raises(ValueError):
            StringSchema(min_length=-1)
        with pytest.raises(ValueError):
            StringSchema(format="phone")

    def test_parse(self):
        assert StringSchema().parse("x") == "x"
        with pytest.raises(SchemaParseError):
            StringSchema().parse(1)


class TestIntSchema:
    """Test integer validation."""

    def test_accepts_int(self):
        assert IntSchema().validate(7).value == 7

    def test_rejects_bool_and_float(self):
        assert IntSchema().validate(True).issues[0].metadata["received"] == "bool"
        assert IntSchema().validate(1.5).issues[0].code == "invalid_type"

    def test_bounds(self):
        """Test min and max with exactly one issue per violation."""
        schema = IntSchema().gte(10).lte(20)
        assert schema.validate(15).is_success
        assert schema.validate(10).is_success
        assert schema.validate(20).is_success

        low = schema.validate(5)
        assert [i.code for i in low.issues] == ["too_small"]
        assert low.issues[0].message == "Must be >= 10"

        high = schema.validate(25)
        assert [i.code for i in high.issues] == ["too_big"]

    def test_sign_and_step(self):
        assert IntSchema().positive().validate(0).issues[0].code == "not_positive"
        assert IntSchema().negative().validate(1).issues[0].code == "not_negative"
        result = IntSchema().step(5).validate(12)
        assert result.issues[0].code == "not_multiple_of"
        assert result.issues[0].message == "Must be a multiple of 5"
        assert IntSchema().step(5).validate(15).is_success

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            IntSchema(min=3, max=1)
        with pytest.raises(ValueError):
            IntSchema(multiple_of=0)


class TestFloatSchema:
    """Test float validation."""

    def test_widens_int(self):
        result = FloatSchema().validate(3)
        assert result.value == 3.0
        assert isinstance(result.value, float)

    def test_rejects_non_numbers(self):
        assert FloatSchema().validate("3.0").issues[0].code == "invalid_type"
        assert FloatSchema().validate(False).issues[0].code == "invalid_type"

    def test_bounds(self):
        schema = FloatSchema(min=0.5, max=1.5)
        assert schema.validate(1.0).is_success
        assert schema.validate(0.1).issues[0].code == "too_small"
        assert schema.validate(2.0).issues[0].code == "too_big"

    def test_finite(self):
        schema = FloatSchema().finite_only()
        assert schema.validate(math.inf).issues[0].code == "not_finite"
        assert FloatSchema().validate(math.inf).is_success

    def test_nan_with_bounds(self):
        """NaN cannot satisfy bounds and is reported once."""
        result = FloatSchema(min=0.0, max=1.0).validate(math.nan)
        assert [i.code for i in result.issues] == ["not_finite"]

        result = FloatSchema(min=0.0, finite=True).validate(math.nan)
        assert [i.code for i in result.issues] == ["not_finite"]

    def test_int_beyond_float_range(self):
        """Huge integers widen to infinity instead of raising."""
        assert FloatSchema().validate(10**400).value == math.inf
        assert FloatSchema().validate(-(10**400)).value == -math.inf
        assert [i.code for i in FloatSchema(max=1.0).validate(10**400).issues] == ["too_big"]
        assert [i.code for i in FloatSchema(min=0.0).validate(-(10**400)).issues] == ["too_small"]
        assert [i.code for i in FloatSchema().finite_only().validate(10**400).issues] == ["not_finite"]

    def test_sign(self):
        assert FloatSchema().positive().validate(-0.1).issues[0].code == "not_positive"
        assert FloatSchema().negative().validate(0.0).issues[0].code == "not_negative"


class TestBoolAndLiteral:
    """Test boolean and literal schemas."""

    def test_bool(self):
        assert BoolSchema().validate(False).value is False
        result = BoolSchema().validate(0)
        assert result.issues[0].message == "Expected bool, got int"

    def test_literal(self):
        schema = LiteralSchema("admin")
        assert schema.validate("admin").value == "admin"
        result = schema.validate("user")
        assert result.issues[0].code == "invalid_literal"
        assert result.issues[0].metadata == {"expected": "admin", "received": "user"}

    def test_literal_is_type_strict(self):
        assert LiteralSchema(1).validate(True).is_failure
        assert LiteralSchema(1).validate(1.0).is_failure
        assert LiteralSchema(True).validate(True).is_success


class TestDateTimeSchema:
    """Test datetime parsing and bounds."""

    def test_accepts_datetime(self):
        moment = datetime(2024, 1, 2, 3, 4, 5)
        assert DateTimeSchema().validate(moment).value is moment

    def test_parses_iso_string(self):
        result = DateTimeSchema().validate("2024-01-02T03:04:05Z")
        assert result.value == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_parses_millisecond_timestamp(self):
        result = DateTimeSchema().validate(0)
        assert result.value == datetime.fromtimestamp(0)

    def test_rejects_garbage(self):
        assert DateTimeSchema().validate("not a date").issues[0].code == "invalid_date"
        assert DateTimeSchema().validate(True).issues[0].code == "invalid_date"
        assert DateTimeSchema().validate([]).issues[0].code == "invalid_date"

    def test_bounds(self):
        schema = DateTimeSchema().between(datetime(2024, 1, 1), datetime(2024, 12, 31))
        assert schema.validate("2024-06-01T00:00:00").is_success
        assert schema.validate("2023-06-01T00:00:00").issues[0].code == "date_too_early"
        assert schema.validate("2025-06-01T00:00:00").issues[0].code == "date_too_late"

    def test_timezone_mismatch(self):
        """Comparing naive and aware datetimes is reported, not raised."""
        schema = DateTimeSchema().after(datetime(2024, 1, 1))
        result = schema.validate("2024-06-01T00:00:00+00:00")
        assert result.issues[0].code == "invalid_date"
        assert result.issues[0].metadata["reason"] == "timezone mismatch"


class TestCustomSchema:
    """Test predicate-based schemas."""

    def test_predicate(self):
        schema = CustomSchema(lambda v: v % 2 == 0, message="Must be even")
        assert schema.validate(4).value == 4
        result = schema.validate(3)
        assert result.issues[0].code == "custom_validation_failed"
        assert result.issues[0].message == "Must be even"

    def test_default_message(self):
        result = CustomSchema(lambda v: False).validate(1)
        assert result.issues[0].message == "Custom validation failed"

    def test_raising_predicate(self):
        result = CustomSchema(lambda v: v.missing).validate(1)
        assert result.issues[0].code == "custom_validation_failed"
        assert result.issues[0].message.startswith("Custom validation error:")
