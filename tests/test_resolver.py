"""Tests for field binding resolution."""

import pytest

from envbind.errors import MissingRequiredError, ParseError
from envbind.resolver import resolve_field
from envbind.schema import FieldKind, FieldSpec, Schema
from envbind.source import SourceEnvironment


def scalar(key="PORT", target_type=int, **kwargs):
    kwargs.setdefault("zero", target_type)
    return FieldSpec(
        name=key.lower(),
        kind=FieldKind.SCALAR,
        source_key=key,
        target_type=target_type,
        **kwargs,
    )


def listing(key="ITEMS", target_type=str, container=list, **kwargs):
    kwargs.setdefault("zero", container)
    return FieldSpec(
        name=key.lower(),
        kind=FieldKind.LIST,
        source_key=key,
        target_type=target_type,
        container=container,
        **kwargs,
    )


def no_nested(schema):
    raise AssertionError("nested loader must not be called")


def resolve(spec, store):
    return resolve_field(spec, SourceEnvironment(store), no_nested)


class TestScalarResolution:
    """Tests for scalar fields."""

    def test_value_present(self):
        """Test that a present value is parsed."""
        assert resolve(scalar(), {"PORT": "8080"}) == 8080

    def test_value_beats_default(self):
        """Test that a present value wins over the default."""
        assert resolve(scalar(default="80"), {"PORT": "8080"}) == 8080

    def test_surrounding_whitespace_reaches_parser(self):
        """Test that non-blank values are passed to the parser as is."""
        assert resolve(scalar("NAME", str), {"NAME": " padded "}) == " padded "

    def test_missing_uses_default(self):
        """Test that the default is parsed when the key is missing."""
        assert resolve(scalar(default="80"), {}) == 80

    def test_blank_uses_default(self):
        """Test that whitespace-only values count as missing."""
        assert resolve(scalar(default="80"), {"PORT": "   "}) == 80
        assert resolve(scalar(default="80"), {"PORT": ""}) == 80

    def test_missing_required(self):
        """Test that a required field without default fails."""
        with pytest.raises(MissingRequiredError) as exc_info:
            resolve(scalar(required=True), {})
        assert exc_info.value.key == "PORT"
        assert str(exc_info.value) == "missing required env: PORT"

    def test_blank_required(self):
        """Test that a blank required value fails."""
        with pytest.raises(MissingRequiredError):
            resolve(scalar(required=True), {"PORT": " \t "})

    def test_default_preempts_required(self):
        """Test that a default wins over required when the key is missing."""
        assert resolve(scalar(required=True, default="80"), {}) == 80

    def test_missing_uses_zero_value(self):
        """Test that optional fields fall back to the zero value."""
        assert resolve(scalar(), {}) == 0
        assert resolve(scalar("NAME", str), {}) == ""

    def test_invalid_value(self):
        """Test that an unparsable value fails even with a valid default."""
        with pytest.raises(ParseError) as exc_info:
            resolve(scalar(default="80"), {"PORT": "eighty"})
        assert exc_info.value.value == "eighty"

    def test_invalid_default(self):
        """Test that a malformed default is a ParseError."""
        with pytest.raises(ParseError) as exc_info:
            resolve(scalar(default="not-a-number"), {})
        assert exc_info.value.key == "PORT"
        assert exc_info.value.value == "not-a-number"

    def test_invalid_default_ignored_when_value_present(self):
        """Test that a bad default is ignored when the key is set."""
        assert resolve(scalar(default="bad"), {"PORT": "1"}) == 1


class TestListResolution:
    """Tests for list fields."""

    def test_value_present(self):
        """Test that a present value is split and parsed."""
        assert resolve(listing(), {"ITEMS": "a, b ,,c"}) == ["a", "b", "c"]

    def test_custom_delimiter(self):
        """Test the field delimiter is used."""
        spec = listing("PORTS", int, delimiter=";")
        assert resolve(spec, {"PORTS": "80;443"}) == [80, 443]

    def test_tuple_container(self):
        """Test that tuple fields produce tuples."""
        spec = listing(container=tuple)
        assert resolve(spec, {"ITEMS": "a,b"}) == ("a", "b")

    def test_missing_uses_default(self):
        """Test that the default list is parsed when missing."""
        assert resolve(listing(default="foo,bar"), {}) == ["foo", "bar"]

    def test_missing_is_empty(self):
        """Test that optional lists fall back to an empty list."""
        assert resolve(listing(), {}) == []
        assert resolve(listing(container=tuple), {}) == ()

    def test_missing_required(self):
        """Test that a required list without default fails."""
        with pytest.raises(MissingRequiredError, match="ITEMS"):
            resolve(listing(required=True), {"ITEMS": ""})

    def test_empty_delimiter(self):
        """Test that an empty delimiter yields an empty list."""
        assert resolve(listing(delimiter=""), {"ITEMS": "a,b"}) == []

    def test_invalid_item(self):
        """Test that a bad item is a ParseError."""
        with pytest.raises(ParseError) as exc_info:
            resolve(listing("PORTS", int), {"PORTS": "80,http"})
        assert exc_info.value.value == "http"

    def test_invalid_default_item(self):
        """Test that a bad default item is a ParseError."""
        with pytest.raises(ParseError):
            resolve(listing("PORTS", int, default="80,x"), {})


class TestNestedResolution:
    """Tests for nested fields."""

    def test_delegates_to_nested_loader(self):
        """Test that nested fields are loaded by the nested loader."""
        inner = Schema(target=dict)
        spec = FieldSpec(name="db", kind=FieldKind.NESTED, nested=inner)
        seen = []

        def load_nested(schema):
            seen.append(schema)
            return {"loaded": True}

        result = resolve_field(spec, SourceEnvironment({}), load_nested)

        assert result == {"loaded": True}
        assert seen == [inner]

    def test_nested_errors_propagate_unchanged(self):
        """Test that nested errors are not wrapped."""
        spec = FieldSpec(name="db", kind=FieldKind.NESTED, nested=Schema(target=dict))
        error = MissingRequiredError("DB_URL")

        def load_nested(schema):
            raise error

        with pytest.raises(MissingRequiredError) as exc_info:
            resolve_field(spec, SourceEnvironment({}), load_nested)
        assert exc_info.value is error
