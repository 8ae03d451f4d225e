"""Command handlers for the envbind CLI."""

import importlib
from typing import Any


class TargetImportError(Exception):
    """The 'module:attribute' target could not be imported."""

    pass


def import_target(target: str) -> Any:
    """Import an object given as ``'package.module:Attribute'``.

    Dotted attribute paths (``module:Outer.Inner``) are followed.

    Raises:
        TargetImportError: If the target is malformed or cannot be found.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise TargetImportError(
            f"Invalid target '{target}', expected 'package.module:ClassName'"
        )

    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise TargetImportError(f"Cannot import module '{module_name}': {e}") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise TargetImportError(
                f"Module '{module_name}' has no attribute '{attr_path}'"
            ) from e
    return obj
