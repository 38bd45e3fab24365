"""Railway: route a Result to one of several handlers by a key read from its Env.

Example:
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Locale:
    ...     code: str
    >>> railway = Railway({
    ...     "nl": lambda r: r.map(lambda v: f"hallo {v}"),
    ...     "en": lambda r: r.map(lambda v: f"hello {v}"),
    ... })
    >>> railway(Result.ok("world").with_env(Locale("nl")), Locale, lambda loc: loc.code).unwrap()
    'hallo world'
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Generic, TypeVar

from carrier.foundation.errors import Fault

from .env import RESOLVE_ERRORS
from .result import Result, _propagated, _unresolved

C = TypeVar("C")

Handler = Callable[[Result[Any]], Result[Any]]


class Railway(Generic[C]):
    """Dispatch table keyed by strings extracted from an Env dependency of type `C`."""

    __slots__ = ("_handlers",)

    def __init__(self, handlers: Mapping[str, Handler]) -> None:
        self._handlers: dict[str, Handler] = dict(handlers)

    def __call__(self, result: Result[Any], context: type[C], extract_key: Callable[[C], str]) -> Result[Any]:
        return self.run(result, context, extract_key)

    def run(self, result: Result[Any], context: type[C], extract_key: Callable[[C], str]) -> Result[Any]:
        """Run the handler selected by `extract_key(env[context])`.

        Err results pass through. A missing `context` dependency yields
        Err(MissingDependency); an unknown key yields an Err carrying a Fault.
        """
        if result.is_err():
            return result
        try:
            view = result.env().resolve([context], "railway")
        except RESOLVE_ERRORS as e:
            return result.fail(_unresolved(e))
        try:
            key = extract_key(view[context])
            if (handler := self._handlers.get(key)) is None:
                return result.fail(Fault.due_to(f"Unsupported key: {key}"))
            return handler(result)
        except Exception as e:
            return result.fail(_propagated("railway", e))

    def keys(self) -> list[str]:
        return list(self._handlers)
