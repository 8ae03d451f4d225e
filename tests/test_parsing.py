"""Tests for scalar and list parsing."""

from decimal import Decimal
from enum import Enum

import pytest

from envbind.errors import ParseError, SchemaError
from envbind.parsing import (
    _parsers,
    get_parser,
    parse_list,
    parse_scalar,
    register_parser,
    type_name,
)


class Level(str, Enum):
    DEBUG = "debug"
    INFO = "info"


class Opaque:
    """A type pydantic cannot build a validator for."""


class Point:
    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    @classmethod
    def parse(cls, raw: str) -> "Point":
        x, y = raw.split("x")
        return cls(int(x), int(y))


@pytest.fixture
def point_parser():
    """Register a parser for Point and remove it afterwards."""
    register_parser(Point, Point.parse)
    yield
    _parsers.pop(Point, None)


class TestParseScalar:
    """Tests for parse_scalar."""

    def test_str_passthrough(self):
        """Test that strings are returned untouched."""
        assert parse_scalar("NAME", "  spaced  ", str) == "  spaced  "

    def test_int(self):
        """Test integer parsing."""
        assert parse_scalar("PORT", "8080", int) == 8080

    def test_negative_int(self):
        """Test negative integer parsing."""
        assert parse_scalar("OFFSET", "-3", int) == -3

    def test_float(self):
        """Test float parsing."""
        assert parse_scalar("RATIO", "0.75", float) == 0.75

    def test_bool_spellings(self):
        """Test that bool accepts the usual spellings."""
        assert parse_scalar("FLAG", "true", bool) is True
        assert parse_scalar("FLAG", "False", bool) is False
        assert parse_scalar("FLAG", "1", bool) is True
        assert parse_scalar("FLAG", "off", bool) is False

    def test_decimal(self):
        """Test pydantic-backed parsing of Decimal."""
        assert parse_scalar("PRICE", "1.25", Decimal) == Decimal("1.25")

    def test_enum_by_value(self):
        """Test that enums parse from their values."""
        assert parse_scalar("LEVEL", "info", Level) is Level.INFO

    def test_invalid_int_raises(self):
        """Test that an invalid integer raises ParseError."""
        with pytest.raises(ParseError) as exc_info:
            parse_scalar("PORT", "abc", int)

        err = exc_info.value
        assert err.key == "PORT"
        assert err.value == "abc"
        assert err.type_name == "int"
        assert isinstance(err.cause, ValueError)
        assert err.__cause__ is err.cause

    def test_invalid_bool_raises(self):
        """Test that an unknown bool spelling raises ParseError."""
        with pytest.raises(ParseError, match="into bool"):
            parse_scalar("FLAG", "maybe", bool)

    def test_invalid_enum_raises(self):
        """Test that an unknown enum value raises ParseError."""
        with pytest.raises(ParseError) as exc_info:
            parse_scalar("LEVEL", "loud", Level)
        assert exc_info.value.type_name.endswith("Level")

    def test_error_message(self):
        """Test the ParseError message format."""
        with pytest.raises(ParseError) as exc_info:
            parse_scalar("PORT", "80x", int)
        assert str(exc_info.value) == "failed to parse env PORT value `80x` into int"

    def test_registered_parser(self, point_parser):
        """Test that a registered parser is used."""
        point = parse_scalar("SIZE", "3x4", Point)
        assert (point.x, point.y) == (3, 4)

    def test_registered_parser_failure(self, point_parser):
        """Test that parser exceptions become ParseError."""
        with pytest.raises(ParseError, match="SIZE"):
            parse_scalar("SIZE", "3by4", Point)

    def test_registered_lookup_parser_failure(self):
        """Test that a KeyError from a registered parser becomes ParseError."""
        register_parser(Level, lambda raw: Level[raw.upper()])
        try:
            with pytest.raises(ParseError) as exc_info:
                parse_scalar("LEVEL", "loud", Level)
        finally:
            _parsers.pop(Level, None)
        assert isinstance(exc_info.value.cause, KeyError)


class TestGetParser:
    """Tests for parser lookup."""

    def test_builtin_parsers(self):
        """Test that str, int and float use the builtin parsers."""
        assert get_parser(int) is int
        assert get_parser(float) is float

    def test_unsupported_type_raises(self):
        """Test that types without any parser raise SchemaError."""
        with pytest.raises(SchemaError, match="register_parser"):
            get_parser(Opaque)


class TestTypeName:
    """Tests for type descriptors."""

    def test_builtin(self):
        """Test that builtins render without module."""
        assert type_name(int) == "int"
        assert type_name(str) == "str"

    def test_qualified(self):
        """Test that other classes render with their module."""
        assert type_name(Decimal) == "decimal.Decimal"

    def test_generic(self):
        """Test that typing constructs render via repr."""
        assert type_name(list[int]) == "list[int]"


class TestParseList:
    """Tests for parse_list."""

    def test_trims_and_drops_empty_parts(self):
        """Test that items are trimmed and empty items dropped."""
        assert parse_list("FEATURES", "a, b ,,c", str) == ["a", "b", "c"]

    def test_preserves_order_and_duplicates(self):
        """Test that order and duplicates are kept."""
        assert parse_list("TAGS", "b,a,b", str) == ["b", "a", "b"]

    def test_custom_delimiter(self):
        """Test a non-default delimiter."""
        assert parse_list("PORTS", "80; 443;8080", int, ";") == [80, 443, 8080]

    def test_multi_char_delimiter(self):
        """Test a delimiter longer than one character."""
        assert parse_list("HOSTS", "a::b:c", str, "::") == ["a", "b:c"]

    def test_empty_delimiter_returns_empty(self):
        """Test that an empty delimiter never yields the whole string."""
        assert parse_list("FEATURES", "a,b,c", str, "") == []

    def test_blank_input(self):
        """Test that a blank string yields an empty list."""
        assert parse_list("FEATURES", "  ,  ", str) == []

    def test_item_parse_error(self):
        """Test that the first bad item raises ParseError."""
        with pytest.raises(ParseError) as exc_info:
            parse_list("PORTS", "80, x, y", int)
        assert exc_info.value.key == "PORTS"
        assert exc_info.value.value == "x"
