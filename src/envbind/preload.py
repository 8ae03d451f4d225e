"""Env file preloading.

Merges ``KEY=value`` files into a :class:`SourceEnvironment` as a
fallback layer: keys that already have a value are never overwritten,
so the process environment always wins over file entries.

File syntax follows python-dotenv (comments, quoting, ``export``
prefixes). Variable interpolation is disabled so a file is read the
same way regardless of the surrounding process environment.

Example:
    >>> env = SourceEnvironment({"PORT": "9000"})
    >>> preload_env_file(".env", env)       # PORT stays "9000"
    >>> preload_env_files([".env.local", ".env"], env)
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from dotenv import dotenv_values

from envbind.errors import LoadError
from envbind.source import SourceEnvironment

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_ENV_FILE = ".env"


def read_env_file(path: PathLike) -> Optional[Dict[str, str]]:
    """Read an env file into a dict.

    Args:
        path: File to read.

    Returns:
        The entries in file order, or None if the file does not exist.
        Entries without a value (a bare ``KEY`` line) are dropped.

    Raises:
        LoadError: If the file exists but cannot be read or decoded.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            values = dotenv_values(stream=f, interpolate=False)
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError("failed to load env file", path=path, cause=e) from e

    return {k: v for k, v in values.items() if v is not None}


def preload_env_file(path: PathLike, env: SourceEnvironment) -> bool:
    """Merge one env file into ``env`` without overriding existing keys.

    A missing file is a no-op.

    Returns:
        True if the file existed and was read.

    Raises:
        LoadError: If the file exists but cannot be read or decoded.
    """
    values = read_env_file(path)
    if values is None:
        logger.debug(f"Env file not found, skipping: {path}")
        return False

    written = 0
    for key, value in values.items():
        if env.set_if_absent(key, value):
            written += 1
    logger.debug(
        f"Preloaded {path}: {written} of {len(values)} keys set "
        f"({len(values) - written} already present)"
    )
    return True


def preload_env_files(
    paths: Iterable[PathLike],
    env: SourceEnvironment,
) -> Optional[Path]:
    """Preload the first readable env file among ``paths``.

    Candidates are tried in order. Missing files are skipped; the first
    file that is read wins and later candidates are left untouched. A
    missing file counts as a successful preload, so an I/O error on one
    candidate only fails the call when every candidate failed that way.

    Args:
        paths: Candidate env file locations, highest priority first.
        env: Source environment to merge into.

    Returns:
        The path that was loaded, or None if no candidate existed.

    Raises:
        LoadError: If every candidate failed with an I/O error other
            than the file not existing. The last such error is raised.
    """
    last_error: Optional[LoadError] = None
    any_missing = False

    for candidate in paths:
        try:
            if preload_env_file(candidate, env):
                return Path(candidate)
            any_missing = True
        except LoadError as e:
            logger.debug(f"Env file candidate failed: {e}")
            last_error = e

    if last_error is not None and not any_missing:
        raise last_error
    return None
