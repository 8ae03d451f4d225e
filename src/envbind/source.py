"""Source environment access.

The source environment is the key/value store that fields are bound
from. By default it is the process environment (``os.environ``), but
any mutable string mapping can be injected so tests stay hermetic:

    >>> env = SourceEnvironment({"PORT": "8080"})
    >>> env.lookup("PORT")
    '8080'
    >>> env.lookup("MISSING") is None
    True
"""

import os
from typing import Iterator, MutableMapping, Optional, Union


class SourceEnvironment:
    """Key/value store that bindings read from and preloads merge into.

    Args:
        store: Backing mapping. Defaults to ``os.environ``.
    """

    def __init__(self, store: Optional[MutableMapping[str, str]] = None):
        self._store = os.environ if store is None else store

    @property
    def store(self) -> MutableMapping[str, str]:
        return self._store

    def lookup(self, key: str) -> Optional[str]:
        """Return the current value for ``key``, or None if unset."""
        return self._store.get(key)

    def set_if_absent(self, key: str, value: str) -> bool:
        """Set ``key`` unless it already has a value.

        Returns:
            True if the value was written.
        """
        if key in self._store:
            return False
        self._store[key] = value
        return True

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        backing = "os.environ" if self._store is os.environ else type(self._store).__name__
        return f"SourceEnvironment({backing}, {len(self._store)} keys)"


def get_env(key: str, env: Optional[SourceEnvironment] = None) -> Optional[str]:
    """Look up ``key`` in ``env`` (the process environment by default)."""
    if env is None:
        env = SourceEnvironment()
    return env.lookup(key)


def as_source(
    env: Optional[Union[SourceEnvironment, MutableMapping[str, str]]],
) -> SourceEnvironment:
    """Coerce a mapping, a SourceEnvironment or None to a SourceEnvironment."""
    if isinstance(env, SourceEnvironment):
        return env
    return SourceEnvironment(env)
