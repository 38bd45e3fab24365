"""Monadic containers with dependency (Env) and log (Writer) side channels.

Provides:
- Result/Ok/Err: error short-circuiting that threads Env and Writer
- ResultList: item-wise Result operations with an aggregate ok flag
- Option/Some/Nothing: lossy variant that degrades failures to Nothing
- Env: immutable type-indexed dependency carrier
- Writer: immutable append-only multi-channel log
- Railway: dispatch a Result by a key read from its Env

Example:
    >>> from carrier.monads import Result, ResultList
    >>>
    >>> result = (
    ...     Result.ok(2)
    ...     .write_to("log", "start")
    ...     .map(lambda v: v * 3)
    ...     .bind(lambda v: Result.ok(v + 1).write_to("log", "bumped"))
    ... )
    >>> assert result.unwrap() == 7
    >>> assert result.writer_output("log") == ["start", "bumped"]
    >>>
    >>> assert ResultList.of([1, Result.err("x"), 3]).filter_ok().unwrap() == [1, 3]
"""

from .env import Env, EnvView, is_dependency
from .option import Nothing, Option, Some
from .railway import Railway
from .result import Err, Ok, Result
from .result_list import ResultList
from .trace import Trace, TraceException, TraceMessage, trace
from .writer import Writer

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "ResultList",
    "Option",
    "Some",
    "Nothing",
    # Side channels
    "Env",
    "EnvView",
    "is_dependency",
    "Writer",
    # Traces
    "Trace",
    "TraceMessage",
    "TraceException",
    "trace",
    # Routing
    "Railway",
]
