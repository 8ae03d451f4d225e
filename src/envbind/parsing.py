"""Scalar and list parsing of raw env values.

Each target type has one canonical parser:

- ``str``: passthrough
- ``int`` / ``float``: the builtin constructors
- anything else (``bool``, ``Decimal``, ``Path``, enums, ``datetime``,
  ``Literal[...]`` ...): a pydantic ``TypeAdapter`` in lax mode

Parsers can be added or overridden with :func:`register_parser`. Any
``ValueError``, ``TypeError``, ``ArithmeticError`` or ``LookupError`` a
parser raises is reported as a :class:`ParseError`; the parser's own
verdict is never second-guessed.

Example:
    >>> parse_scalar("PORT", "8080", int)
    8080
    >>> parse_list("HOSTS", "a, b ,,c", str)
    ['a', 'b', 'c']
"""

from functools import lru_cache
from typing import Any, Callable, Dict, List, get_origin

from pydantic import PydanticSchemaGenerationError, TypeAdapter

from envbind.errors import ParseError, SchemaError

ParserFn = Callable[[str], Any]

DEFAULT_DELIMITER = ","


def _parse_str(raw: str) -> str:
    return raw


_parsers: Dict[Any, ParserFn] = {
    str: _parse_str,
    int: int,
    float: float,
}


def register_parser(target_type: Any, parser: ParserFn) -> None:
    """Register the parser used for ``target_type``.

    Replaces any existing parser for the same type, including the
    builtin ones.

    Example:
        >>> register_parser(Color, Color.from_hex)
    """
    _parsers[target_type] = parser


@lru_cache(maxsize=None)
def _type_adapter(target_type: Any) -> TypeAdapter:
    return TypeAdapter(target_type)


def get_parser(target_type: Any) -> ParserFn:
    """Return the parser for ``target_type``.

    Raises:
        SchemaError: If no parser is registered and pydantic cannot
            build a validator for the type.
    """
    parser = _parsers.get(target_type)
    if parser is not None:
        return parser
    try:
        return _type_adapter(target_type).validate_python
    except PydanticSchemaGenerationError as e:
        raise SchemaError(
            f"No parser available for type {type_name(target_type)}; "
            f"use register_parser() to add one"
        ) from e


def type_name(target_type: Any) -> str:
    """Render a type for error messages (``int``, ``pathlib.Path``)."""
    if get_origin(target_type) is None and isinstance(target_type, type):
        if target_type.__module__ == "builtins":
            return target_type.__qualname__
        return f"{target_type.__module__}.{target_type.__qualname__}"
    return repr(target_type)


def parse_scalar(key: str, raw: str, target_type: Any) -> Any:
    """Parse ``raw`` into ``target_type``.

    Args:
        key: Source key the value came from (for diagnostics).
        raw: Raw string value.
        target_type: Type to produce.

    Returns:
        The parsed value.

    Raises:
        ParseError: If the type's parser rejects the value.
    """
    parser = get_parser(target_type)
    try:
        return parser(raw)
    except (ValueError, TypeError, ArithmeticError, LookupError) as e:
        raise ParseError(key, raw, type_name(target_type), e) from e


def parse_list(
    key: str,
    raw: str,
    item_type: Any,
    delimiter: str = DEFAULT_DELIMITER,
) -> List[Any]:
    """Split ``raw`` on ``delimiter`` and parse each item.

    Items are trimmed and empty items dropped; order and duplicates are
    preserved. An empty delimiter yields an empty list.

    Raises:
        ParseError: For the first item that fails to parse.
    """
    if not delimiter:
        return []

    items = []
    for part in raw.split(delimiter):
        part = part.strip()
        if not part:
            continue
        items.append(parse_scalar(key, part, item_type))
    return items
