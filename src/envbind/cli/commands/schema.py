"""Schema command for envbind CLI."""

import sys

from envbind.cli.commands import TargetImportError, import_target
from envbind.errors import SchemaError
from envbind.parsing import type_name
from envbind.schema import FieldKind, Schema, schema_for


def cmd_schema(target: str) -> int:
    """Print the field bindings of a configuration class.

    Returns:
        Exit code (0 on success, 1 for schema errors, 2 if the target
        cannot be imported).
    """
    try:
        cls = import_target(target)
    except TargetImportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        schema = schema_for(cls)
    except SchemaError as e:
        print(f"Schema error: {e}", file=sys.stderr)
        return 1

    print(f"Schema: {schema.name}")
    print("-" * 40)
    _print_schema(schema, indent=2)
    return 0


def _print_schema(schema: Schema, indent: int) -> None:
    pad = " " * indent
    for spec in schema:
        if spec.kind == FieldKind.NESTED:
            print(f"{pad}{spec.name}: nested {spec.nested.name}")
            _print_schema(spec.nested, indent + 2)
            continue

        details = [f"key={spec.source_key}", f"type={type_name(spec.target_type)}"]
        if spec.kind == FieldKind.LIST:
            details.append(f"split={spec.delimiter!r}")
        if spec.default is not None:
            details.append(f"default={spec.default!r}")
        if spec.required:
            details.append("required")
        print(f"{pad}{spec.name}: {spec.kind.value} ({', '.join(details)})")
