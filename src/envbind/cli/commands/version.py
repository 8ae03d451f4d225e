"""Version command for envbind CLI."""

import sys
from importlib.metadata import version, PackageNotFoundError


def cmd_version() -> int:
    """Display version information.

    Returns:
        Exit code (always 0).
    """
    try:
        eb_version = version("envbind")
    except PackageNotFoundError:
        eb_version = "development"

    print(f"envbind {eb_version}")
    print(f"Python {sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")

    print("\nDependencies:")

    deps = [
        ("pydantic", "Field specs and type parsing"),
        ("python-dotenv", "Env file parsing"),
    ]

    for pkg, desc in deps:
        try:
            status = f"v{version(pkg)}"
        except PackageNotFoundError:
            status = "not installed"
        print(f"  {pkg}: {status} ({desc})")

    return 0
