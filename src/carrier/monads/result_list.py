"""ResultList: ordered aggregate of Results sharing one Env and one Writer.

The aggregate is ok iff every item is ok (an empty list is vacuously ok).
bind/map and their env variants run the Result-level operation item by item;
items that are already Err pass through untouched.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Callable, Generic, TypeVar

from carrier.foundation.errors import EmptyCollection, WrongArity

from .env import RESOLVE_ERRORS, Env, EnvView
from .result import Result, _non_dependencies, _unresolved
from .writer import Writer

T = TypeVar("T")
U = TypeVar("U")


def _all_ok(items: Iterable[Result[Any]]) -> bool:
    return all(item.is_ok() for item in items)


class ResultList(Generic[T]):
    """Immutable list of Results with a shared Env and a combined Writer.

    Writer accounting: the list Writer holds every entry its items carried
    when they were added, plus list-level writes. A transform appends, in
    item order, only the entries each item gained during that transform, so
    no entry is recorded twice.

    Example:
        >>> rl = ResultList.of([1, Result.err("x"), 3])
        >>> rl.is_ok()
        False
        >>> rl.map(lambda v: v * 10).filter_ok().unwrap()
        [10, 30]
    """

    __slots__ = ("_all_ok", "_items", "_env", "_writer")

    def __init__(
        self,
        items: Iterable[Result[T]] = (),
        env: Env | None = None,
        writer: Writer | None = None,
        *,
        all_ok: bool | None = None,
    ) -> None:
        """Private constructor. Use ResultList.empty()/ResultList.of() instead."""
        self._items: tuple[Result[T], ...] = tuple(items)
        self._all_ok: bool = _all_ok(self._items) if all_ok is None else all_ok
        self._env: Env = env if env is not None else Env.empty()
        self._writer: Writer = writer if writer is not None else Writer.empty()

    # ─────────────────────────────────────────────────────────────────
    # Constructors
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def empty(cls, env: Env | None = None, writer: Writer | None = None) -> ResultList[T]:
        return cls((), env, writer, all_ok=True)

    @classmethod
    def of(cls, values: Iterable[T | Result[T]], env: Env | None = None, writer: Writer | None = None) -> ResultList[T]:
        """Build by adding each value in order; plain values are wrapped in Result.ok."""
        out: ResultList[T] = cls.empty(env, writer)
        for value in values:
            out = out.add(value)
        return out

    def add(self, value: T | Result[T]) -> ResultList[T]:
        """Append one item. The list Env is passed down to it and its Writer joins the list Writer."""
        item: Result[T] = value if isinstance(value, Result) else Result.ok(value)
        item = item.with_env(*self._env.all().values())
        return ResultList(
            (*self._items, item),
            self._env,
            self._writer.merge(item.writer()),
            all_ok=self._all_ok and item.is_ok(),
        )

    # ─────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────

    def is_ok(self) -> bool:
        return self._all_ok

    def is_err(self) -> bool:
        return not self._all_ok

    # ─────────────────────────────────────────────────────────────────
    # bind | map and env variants
    # ─────────────────────────────────────────────────────────────────

    def bind(self, fn: Callable[[T], Result[U]]) -> ResultList[U]:
        """Result.bind on every item."""
        return self._each(lambda item: item.bind(fn))

    def map(self, fn: Callable[[T], U]) -> ResultList[U]:
        """Result.map on every item."""
        return self._each(lambda item: item.map(fn))

    def bind_with_env(self, dependencies: Iterable[type], fn: Callable[[T, EnvView], Result[U]]) -> ResultList[U]:
        """bind() with dependencies resolved once from the list Env.

        A missing dependency turns every Ok item into Err(MissingDependency)
        without calling `fn`.
        """
        try:
            view = self._env.resolve(dependencies, "bind_with_env")
        except RESOLVE_ERRORS as e:
            return self._fail_all(_unresolved(e))
        return self._each(lambda item: item.bind(lambda v: fn(v, view)))

    def map_with_env(self, dependencies: Iterable[type], fn: Callable[[T, EnvView], U]) -> ResultList[U]:
        """map() with dependencies resolved once from the list Env."""
        try:
            view = self._env.resolve(dependencies, "map_with_env")
        except RESOLVE_ERRORS as e:
            return self._fail_all(_unresolved(e))
        return self._each(lambda item: item.map(lambda v: fn(v, view)))

    def _each(self, step: Callable[[Result[Any]], Result[Any]]) -> ResultList[Any]:
        items: list[Result[Any]] = []
        writer = self._writer
        for item in self._items:
            out = item if item.is_err() else step(item)
            writer = writer.merge(out.writer().since(item.writer()))
            items.append(out)
        return ResultList(items, self._env, writer)

    def _fail_all(self, error: BaseException) -> ResultList[Any]:
        return ResultList(
            [item.fail(error) if item.is_ok() else item for item in self._items],
            self._env,
            self._writer,
        )

    # ─────────────────────────────────────────────────────────────────
    # Inspection (side-effects only)
    # ─────────────────────────────────────────────────────────────────

    def inspect_ok(self, fn: Callable[[T], object]) -> ResultList[T]:
        for item in self._items:
            item.inspect_ok(fn)
        return self

    def inspect_err(self, fn: Callable[[BaseException], object]) -> ResultList[T]:
        for item in self._items:
            item.inspect_err(fn)
        return self

    # ─────────────────────────────────────────────────────────────────
    # Filter / Unwrap
    # ─────────────────────────────────────────────────────────────────

    def filter_ok(self) -> ResultList[T]:
        """Keep only Ok items. Lossy: errors are dropped, not repaired."""
        return ResultList([item for item in self._items if item.is_ok()], self._env, self._writer, all_ok=True)

    def unwrap(self) -> list[T]:
        """All values in order.

        Raises:
            BaseException: The error of the first Err item by position
        """
        for item in self._items:
            if item.is_err():
                raise item.unwrap_err()
        return [item.unwrap() for item in self._items]

    def collect(self) -> Result[list[T]]:
        """Traverse into one Result: the first Err by position, else Ok of all values.

        The outcome carries the list Env and Writer, whichever branch is taken.
        """
        for item in self._items:
            if item.is_err():
                return Result.err(item.unwrap_err(), self._env, self._writer)
        return Result.ok([item.unwrap() for item in self._items], self._env, self._writer)

    def collect_ok(self) -> Result[list[T]]:
        """Ok of the Ok values only, with the list Env and Writer. Never Err."""
        return Result.ok(self.values(), self._env, self._writer)

    def values(self) -> list[T]:
        """Values of Ok items, skipping Errs."""
        return [item.unwrap() for item in self._items if item.is_ok()]

    def errors(self) -> list[BaseException]:
        """Errors of Err items, in order."""
        return [item.unwrap_err() for item in self._items if item.is_err()]

    def items(self) -> list[Result[T]]:
        return list(self._items)

    def head(self) -> Result[T]:
        """First item as-is.

        Raises:
            EmptyCollection: If the list has no items
        """
        if not self._items:
            raise EmptyCollection.create("head", "head() called on an empty ResultList")
        return self._items[0]

    def only(self) -> Result[T]:
        """The single item.

        Raises:
            WrongArity: Unless the list holds exactly one item
        """
        if len(self._items) != 1:
            raise WrongArity.create("only", f"only() expects exactly one item, got {len(self._items)}")
        return self._items[0]

    # ─────────────────────────────────────────────────────────────────
    # Env
    # ─────────────────────────────────────────────────────────────────

    def env(self) -> Env:
        return self._env

    def with_env(self, *dependencies: object) -> ResultList[T]:
        """Replace the shared Env. A non-instance argument turns every Ok item into Err(InvalidArgument)."""
        if (invalid := _non_dependencies("with_env", dependencies)) is not None:
            return self._fail_all(invalid)
        env = self._env
        for dep in dependencies:
            env = env.with_(dep)
        return ResultList(self._items, env, self._writer, all_ok=self._all_ok)

    # ─────────────────────────────────────────────────────────────────
    # Writer
    # ─────────────────────────────────────────────────────────────────

    def writer(self) -> Writer:
        return self._writer

    def write_to(self, channel: str, value: Any) -> ResultList[T]:
        return ResultList(self._items, self._env, self._writer.write(channel, value), all_ok=self._all_ok)

    def writer_output(self, channel: str) -> list[Any]:
        return self._writer.get(channel)

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __iter__(self) -> Iterator[Result[T]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultList):
            return NotImplemented
        return self._items == other._items and self._env == other._env and self._writer == other._writer

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ResultList([{', '.join(repr(item) for item in self._items)}], ok={self._all_ok})"
