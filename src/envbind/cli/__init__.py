"""CLI entry point for envbind.

Provides command-line interface for:
- Checking that a configuration class loads against the environment
- Showing the field bindings of a configuration class
- Displaying version information

Usage:
    envbind check myapp.settings:Config
    envbind check myapp.settings:Config -f .env.local -f .env
    envbind schema myapp.settings:Config
    envbind version
"""

import argparse
import logging
import sys
from typing import List, Optional


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="envbind",
        description="Bind environment variables to typed configuration",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Load a configuration class and show the resolved values",
    )
    check_parser.add_argument(
        "target",
        help="Configuration class as 'package.module:ClassName'",
    )
    check_parser.add_argument(
        "-f", "--env-file",
        action="append",
        dest="env_files",
        help="Env file candidate, highest priority first (repeatable, default: .env)",
    )
    check_parser.add_argument(
        "--no-env-file",
        action="store_true",
        help="Read the process environment only",
    )

    # schema command
    schema_parser = subparsers.add_parser(
        "schema",
        help="Show the field bindings of a configuration class",
    )
    schema_parser.add_argument(
        "target",
        help="Configuration class as 'package.module:ClassName'",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(levelname)s] %(name)s: %(message)s",
            stream=sys.stderr,
        )

    # Handle --version flag at top level
    if args.version:
        from envbind.cli.commands.version import cmd_version
        return cmd_version()

    if args.command is None:
        parser.print_help()
        return 0

    # Dispatch to command handlers
    if args.command == "check":
        from envbind.cli.commands.check import cmd_check
        env_files = [] if args.no_env_file else (args.env_files or [".env"])
        return cmd_check(target=args.target, env_files=env_files)

    elif args.command == "schema":
        from envbind.cli.commands.schema import cmd_schema
        return cmd_schema(target=args.target)

    elif args.command == "version":
        from envbind.cli.commands.version import cmd_version
        return cmd_version()

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
