"""Tests for scalar coercion."""

import pytest
from json_transcoder.coercion import (
    LONG_MAX,
    LONG_MIN,
    CoercionError,
    coerce_boolean,
    coerce_number,
    coerce_scalar,
)
from json_transcoder.types import DiagnosticType, ScalarType


class TestCoerceNumber:
    """Tests for number coercion."""

    def test_integer_without_dot(self):
        """Test that text without a dot is read as an integer."""
        value = coerce_number("42")

        assert value == 42
        assert isinstance(value, int)

    def test_float_with_dot(self):
        """Test that text with a dot is read as a float even if integral."""
        value = coerce_number("4.0")

        assert value == 4.0
        assert isinstance(value, float)

    @pytest.mark.parametrize("text,expected", [
        ("-7", -7),
        ("+7", 7),
        ("007", 7),
        ("3.5", 3.5),
        ("-0.25", -0.25),
        (".5", 0.5),
        ("2.", 2.0),
        ("1.5e3", 1500.0),
        (" 3.5 ", 3.5),
    ])
    def test_accepted_forms(self, text, expected):
        """Test the number forms that are accepted."""
        assert coerce_number(text) == expected

    @pytest.mark.parametrize("text", [
        "", "abc", "1e5", " 42", "4_2", "1.2.3", "nan", "1.0e999", "0x10",
    ])
    def test_rejected_forms(self, text):
        """Test that malformed or non-finite numbers are rejected."""
        with pytest.raises(CoercionError) as exc_info:
            coerce_number(text)

        assert exc_info.value.diagnostic_type == DiagnosticType.NUMBER_COERCION

    def test_signed_64_bit_range(self):
        """Test that integers must fit in a signed 64-bit value."""
        assert coerce_number(str(LONG_MAX)) == LONG_MAX
        assert coerce_number(str(LONG_MIN)) == LONG_MIN

        with pytest.raises(CoercionError):
            coerce_number(str(LONG_MAX + 1))
        with pytest.raises(CoercionError):
            coerce_number(str(LONG_MIN - 1))


class TestCoerceBoolean:
    """Tests for boolean coercion."""

    def test_literals(self):
        """Test the exact boolean literals."""
        assert coerce_boolean("true") is True
        assert coerce_boolean("false") is False

    @pytest.mark.parametrize("text", ["True", "FALSE", "yes", "1", " true", "maybe", ""])
    def test_anything_else_is_rejected(self, text):
        """Test that only exact literals are accepted."""
        with pytest.raises(CoercionError) as exc_info:
            coerce_boolean(text)

        assert exc_info.value.diagnostic_type == DiagnosticType.BOOLEAN_COERCION


class TestCoerceScalar:
    """Tests for coercion by declared type."""

    def test_null_discards_text(self):
        """Test that null ignores whatever text was collected."""
        assert coerce_scalar("anything at all", ScalarType.NULL) is None

    def test_string_and_default_keep_text(self):
        """Test that strings are passed through unchanged."""
        assert coerce_scalar("  spaced  ", ScalarType.STRING) == "  spaced  "
        assert coerce_scalar("42", ScalarType.DEFAULT) == "42"

    def test_dispatch(self):
        """Test that numbers and booleans use their coercions."""
        assert coerce_scalar("42", ScalarType.NUMBER) == 42
        assert coerce_scalar("false", ScalarType.BOOLEAN) is False

    def test_coercion_error_is_value_error(self):
        """Test that coercion errors can be handled as ValueError."""
        with pytest.raises(ValueError):
            coerce_scalar("x", ScalarType.NUMBER)
