"""Error types raised while binding a schema to its sources.

Every failure surfaces as a subclass of :class:`BindError`, so callers
that only care whether a load succeeded can catch the base class:

    >>> try:
    ...     config = AppConfig.load(".env")
    ... except BindError as e:
    ...     print(f"Configuration error: {e}")

The subclasses carry the details needed for a precise diagnostic
(the offending key, the raw value, the target type, the file path).
"""

from pathlib import Path
from typing import Optional, Union


class BindError(Exception):
    """Base class for all envbind errors."""

    pass


class MissingRequiredError(BindError):
    """A required field has no default and its key is absent or blank.

    Attributes:
        key: The source key that was looked up.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"missing required env: {key}")


class ParseError(BindError):
    """A raw value could not be converted to the field's type.

    The raw value may come from the source or from a declared default;
    defaults are type-checked the same way.

    Attributes:
        key: The source key of the field.
        value: The raw string that failed to parse.
        type_name: Rendered name of the target type (diagnostics only).
        cause: The exception raised by the underlying parser.
    """

    def __init__(
        self,
        key: str,
        value: str,
        type_name: str,
        cause: Optional[BaseException] = None,
    ):
        self.key = key
        self.value = value
        self.type_name = type_name
        self.cause = cause
        super().__init__(
            f"failed to parse env {key} value `{value}` into {type_name}"
        )


class LoadError(BindError):
    """An env file exists but could not be read.

    A missing file is never a LoadError; only hard I/O or decoding
    failures are.

    Attributes:
        path: The file that failed to load, if known.
        cause: The underlying I/O or decoding error.
    """

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        cause: Optional[BaseException] = None,
    ):
        self.path = Path(path) if path is not None else None
        self.cause = cause
        detail = message
        if self.path is not None:
            detail = f"{message} {self.path}"
        if cause is not None:
            detail = f"{detail}: {cause}"
        super().__init__(detail)


class SchemaError(BindError):
    """A schema declaration cannot be bound.

    Raised when a schema is built, never during a load.
    """

    pass
