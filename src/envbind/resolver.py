"""Field binding resolution.

Decides, for one :class:`FieldSpec`, where its value comes from:

- nested: load the nested schema (errors propagate unchanged)
- key present and not blank: parse the source value
- key missing or blank, default declared: parse the default
- key missing or blank, required, no default: MissingRequiredError
- otherwise: the type's zero value (empty sequence for lists)

A blank value (empty or whitespace only) counts as missing. A declared
default always pre-empts the required check.
"""

import logging
from typing import Any, Callable

from envbind.errors import MissingRequiredError
from envbind.parsing import parse_list, parse_scalar
from envbind.schema import FieldKind, FieldSpec, Schema
from envbind.source import SourceEnvironment

logger = logging.getLogger(__name__)

NestedLoader = Callable[[Schema], Any]


def resolve_field(
    spec: FieldSpec,
    env: SourceEnvironment,
    load_nested: NestedLoader,
) -> Any:
    """Resolve the value of one field.

    Args:
        spec: The field to bind.
        env: Source environment to read from.
        load_nested: Loads a nested schema with the same sources as the
            enclosing load.

    Returns:
        The bound value.

    Raises:
        MissingRequiredError: Required field with no value and no default.
        ParseError: The source value or the default does not parse.
    """
    if spec.kind == FieldKind.NESTED:
        return load_nested(spec.nested)

    raw = env.lookup(spec.source_key)
    if raw is not None and raw.strip():
        return _parse(spec, raw)

    if spec.default is not None:
        logger.debug(f"{spec.source_key} not set, using declared default")
        return _parse(spec, spec.default)

    if spec.required:
        raise MissingRequiredError(spec.source_key)

    logger.debug(f"{spec.source_key} not set, using zero value")
    return spec.zero()


def _parse(spec: FieldSpec, raw: str) -> Any:
    if spec.kind == FieldKind.LIST:
        items = parse_list(spec.source_key, raw, spec.target_type, spec.delimiter)
        return spec.container(items)
    return parse_scalar(spec.source_key, raw, spec.target_type)
