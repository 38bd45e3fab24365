"""Env: immutable, type-indexed dependency carrier (reader side-channel).

Maps a class to exactly one instance of it. `with_` inserts or replaces by
`type(dependency)`; `merge` is right-biased. Nothing mutates in place.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, Callable, TypeVar, cast

from carrier.foundation.errors import InvalidArgument, MissingDependency

T = TypeVar("T")
R = TypeVar("R")

_SCALARS: tuple[type, ...] = (bool, int, float, complex, str, bytes)

EnvView = Mapping[type, Any]

# What Env.resolve raises; *_with_env transforms store these as Err
RESOLVE_ERRORS: tuple[type[Exception], ...] = (MissingDependency, InvalidArgument)


def is_dependency(obj: object) -> bool:
    """True for object instances usable as Env entries (not None, classes, or builtin scalars)."""
    return obj is not None and not isinstance(obj, type) and not isinstance(obj, _SCALARS)


def _describe(obj: object) -> str:
    if isinstance(obj, type):
        return f"class {obj.__qualname__}"
    return type(obj).__name__


def _key_name(key: type) -> str:
    return getattr(key, "__qualname__", repr(key))


class Env:
    """Immutable mapping from a type to one instance of that type.

    Example:
        >>> class Clock: ...
        >>> env = Env.empty().with_(Clock())
        >>> isinstance(env.read(Clock), Clock)
        True
        >>> env.get(int) is None
        True
    """

    __slots__ = ("_items",)

    def __init__(self, items: Mapping[type, object] | None = None) -> None:
        self._items: dict[type, object] = dict(items) if items else {}

    @classmethod
    def empty(cls) -> Env:
        return cls()

    @classmethod
    def of(cls, *dependencies: object) -> Env:
        """Build an Env from instances, keyed by their types."""
        env = cls()
        for dep in dependencies:
            env = env.with_(dep)
        return env

    # ─────────────────────────────────────────────────────────────────
    # Insert / Lookup
    # ─────────────────────────────────────────────────────────────────

    def with_(self, dependency: object) -> Env:
        """Return a new Env with `dependency` inserted or replaced under its type.

        Raises:
            InvalidArgument: If `dependency` is not an object instance
        """
        if not is_dependency(dependency):
            raise InvalidArgument.create(
                "with", f"Env dependencies must be object instances, got {_describe(dependency)}",
            )
        return Env({**self._items, type(dependency): dependency})

    def read(self, key: type[T]) -> T:
        """Strict lookup.

        Raises:
            MissingDependency: If no instance is registered for `key`
        """
        try:
            return cast(T, self._items[key])
        except KeyError:
            raise MissingDependency.create("read", f"Missing required dependency: {_key_name(key)}") from None

    def get(self, key: type[T]) -> T | None:
        """Optional lookup, None when absent."""
        return cast("T | None", self._items.get(key))

    def resolve(self, keys: Iterable[type], operation: str = "resolve") -> EnvView:
        """Read-only view over `keys`, in the order given.

        Raises:
            MissingDependency: Naming the first absent key
            InvalidArgument: If a key is unhashable
        """
        view: dict[type, object] = {}
        for key in keys:
            try:
                present = key in self._items
            except TypeError:
                raise InvalidArgument.create(
                    operation, f"{operation}() expects classes as dependency keys, got {_describe(key)}",
                ) from None
            if not present:
                raise MissingDependency.create(
                    operation, f"{operation}() failed: missing env for dependency {_key_name(key)}",
                )
            view[key] = self._items[key]
        return MappingProxyType(view)

    # ─────────────────────────────────────────────────────────────────
    # Combination
    # ─────────────────────────────────────────────────────────────────

    def merge(self, other: Env) -> Env:
        """Right-biased union: entries in `other` win on collision."""
        if not other._items:
            return self
        if not self._items:
            return other
        return Env({**self._items, **other._items})

    def local(self, fn: Callable[[Env], R], override: object | None = None) -> R:
        """Run `fn` against this Env, optionally with `override` applied for that call only."""
        return fn(self.with_(override) if override is not None else self)

    def all(self) -> dict[type, object]:
        """Snapshot of every entry."""
        return dict(self._items)

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[type]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Env):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Env({', '.join(_key_name(k) for k in self._items)})"
