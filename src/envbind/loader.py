"""Schema loading entry points.

A load preloads env files into the source environment, binds every
field in declaration order and assembles the configuration value. The
first failing field aborts the load; no partial value is returned.

Example:
    >>> @from_env
    ... class AppConfig:
    ...     port: int = env("PORT", default="8080")
    ...     app_name: str = env("APP_NAME", required=True)
    ...
    >>> config = AppConfig.load(".env")
    >>> config = AppConfig.load_iter([".env.local", ".env"])
    >>> config = load(AppConfig, None, env={"APP_NAME": "demo"})
"""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, MutableMapping, Optional, Tuple, TypeVar, Union

from envbind.preload import DEFAULT_ENV_FILE, PathLike, preload_env_files
from envbind.resolver import resolve_field
from envbind.schema import Schema, schema_for
from envbind.source import SourceEnvironment, as_source

logger = logging.getLogger(__name__)

T = TypeVar("T")

EnvLike = Optional[Union[SourceEnvironment, MutableMapping[str, str]]]


def load(
    target: Union[type, Schema],
    path: Optional[PathLike] = DEFAULT_ENV_FILE,
    *,
    env: EnvLike = None,
) -> Any:
    """Load a configuration value using a single env file.

    Args:
        target: A dataclass or a prebuilt schema.
        path: Env file to preload. A missing file is ignored; None
            skips preloading.
        env: Source environment (the process environment by default).

    Returns:
        The assembled configuration value.

    Raises:
        LoadError: The env file exists but cannot be read.
        MissingRequiredError: A required field has no value.
        ParseError: A value or default does not parse.
    """
    paths = () if path is None else (path,)
    return load_iter(target, paths, env=env)


def load_iter(
    target: Union[type, Schema],
    paths: Iterable[PathLike],
    *,
    env: EnvLike = None,
) -> Any:
    """Load a configuration value trying several env file locations.

    The first env file that exists is preloaded; missing candidates are
    skipped. If none exists, the source environment is used as is.

    Raises:
        LoadError: Every candidate failed with an I/O error other than
            the file not existing.
        MissingRequiredError: A required field has no value.
        ParseError: A value or default does not parse.
    """
    if isinstance(paths, (str, Path)):
        paths = (paths,)
    schema = target if isinstance(target, Schema) else schema_for(target)
    return load_schema(schema, tuple(paths), as_source(env))


def load_schema(
    schema: Schema,
    paths: Tuple[PathLike, ...],
    env: SourceEnvironment,
) -> Any:
    """Preload ``paths`` into ``env`` and bind ``schema``.

    Nested schemas are loaded with the same ``paths`` and ``env``.
    """
    loaded = preload_env_files(paths, env)
    if paths and loaded is None:
        logger.debug(f"No env file found for {schema.name} among {list(paths)}")

    def load_nested(nested: Schema) -> Any:
        return load_schema(nested, paths, env)

    values = {}
    for spec in schema:
        values[spec.name] = resolve_field(spec, env, load_nested)

    logger.debug(f"Loaded {schema.name} ({len(values)} fields)")
    return schema.build(values)


def from_env(cls: Optional[type] = None, *, frozen: bool = True) -> Any:
    """Class decorator adding ``load`` and ``load_iter`` classmethods.

    Non-dataclasses are turned into keyword-only dataclasses (frozen by
    default). The schema is built eagerly so declaration errors surface
    at import time.

    Example:
        >>> @from_env
        ... class Database:
        ...     url: str = env("DB_URL", default="sqlite://test.db")
        ...
        >>> Database.load(env={}).url
        'sqlite://test.db'

    Raises:
        SchemaError: If a field cannot be bound.
    """

    def wrap(klass: type) -> type:
        if not dataclasses.is_dataclass(klass):
            klass = dataclasses.dataclass(frozen=frozen, kw_only=True)(klass)
        schema_for(klass)
        klass.load = classmethod(_load_classmethod)
        klass.load_iter = classmethod(_load_iter_classmethod)
        return klass

    if cls is None:
        return wrap
    return wrap(cls)


def _load_classmethod(
    cls: Callable[..., T],
    path: Optional[PathLike] = DEFAULT_ENV_FILE,
    *,
    env: EnvLike = None,
) -> T:
    return load(cls, path, env=env)


def _load_iter_classmethod(
    cls: Callable[..., T],
    paths: Iterable[PathLike],
    *,
    env: EnvLike = None,
) -> T:
    return load_iter(cls, paths, env=env)
