"""Check command for envbind CLI."""

import sys
from typing import Any, List

from envbind.cli.commands import TargetImportError, import_target
from envbind.errors import BindError
from envbind.loader import load_iter
from envbind.schema import FieldKind, Schema, schema_for


def cmd_check(target: str, env_files: List[str]) -> int:
    """Load a configuration class and print the resolved values.

    Args:
        target: Configuration class as 'package.module:ClassName'.
        env_files: Env file candidates, highest priority first.

    Returns:
        Exit code (0 on success, 1 on binding errors, 2 if the target
        cannot be imported).
    """
    try:
        cls = import_target(target)
    except TargetImportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"Checking: {target}")
    if env_files:
        print(f"  Env files: {', '.join(env_files)}")

    try:
        schema = schema_for(cls)
        config = load_iter(schema, env_files)
    except BindError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print()
    _print_values(schema, config, indent=2)
    print("\nConfiguration is valid.")
    return 0


def _print_values(schema: Schema, config: Any, indent: int) -> None:
    pad = " " * indent
    for spec in schema:
        value = getattr(config, spec.name)
        if spec.kind == FieldKind.NESTED:
            print(f"{pad}{spec.name}:")
            _print_values(spec.nested, value, indent + 2)
        else:
            print(f"{pad}{spec.name} = {value!r}")
