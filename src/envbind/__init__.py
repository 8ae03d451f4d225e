"""envbind - Bind environment variables to typed configuration objects.

envbind loads dataclass-declared configuration from the process
environment and optional ``.env`` files, with defaults, required keys,
delimited lists and nested sections.

Quick Start:
    >>> from envbind import env, from_env
    >>>
    >>> @from_env
    ... class Other:
    ...     setting: str = env("OTHER_SETTING", default="default_value")
    >>>
    >>> @from_env
    ... class Config:
    ...     db_url: str = env("DB_URL", default="sqlite://test.db")
    ...     app_name: str = env("APP_NAME", required=True)
    ...     features: list[str] = env("FEATURES", default="foo,bar", split=",")
    ...     other: Other
    >>>
    >>> config = Config.load(".env")
    >>> config = Config.load_iter([".env.local", ".env"])

Process environment values always take precedence over env file entries.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("envbind")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"

# =============================================================================
# Declaration and loading
# =============================================================================
from envbind.loader import (
    from_env,
    load,
    load_iter,
    load_schema,
)
from envbind.schema import (
    EnvBinding,
    FieldKind,
    FieldSpec,
    Schema,
    env,
    schema_for,
)

# =============================================================================
# Runtime support
# =============================================================================
from envbind.errors import (
    BindError,
    LoadError,
    MissingRequiredError,
    ParseError,
    SchemaError,
)
from envbind.parsing import parse_list, parse_scalar, register_parser
from envbind.preload import preload_env_file, preload_env_files
from envbind.source import SourceEnvironment, get_env

__all__ = [
    "__version__",
    # Declaration and loading
    "env",
    "from_env",
    "load",
    "load_iter",
    "load_schema",
    "schema_for",
    "EnvBinding",
    "FieldKind",
    "FieldSpec",
    "Schema",
    # Errors
    "BindError",
    "LoadError",
    "MissingRequiredError",
    "ParseError",
    "SchemaError",
    # Runtime support
    "get_env",
    "parse_list",
    "parse_scalar",
    "preload_env_file",
    "preload_env_files",
    "register_parser",
    "SourceEnvironment",
]
