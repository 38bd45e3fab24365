"""Tests for the Option monad.

Every failure path must degrade to Nothing while keeping Env and Writer.
"""

from __future__ import annotations

import pytest

from carrier.foundation.errors import FaultError, InvalidState
from carrier.monads import Env, Nothing, Option, Result, Some


class Greeter:
    def greet(self, name: str) -> str:
        return f"hi {name}"


class Absent:
    pass


def test_constructors() -> None:
    assert Option.some(1).is_some()
    assert Option.none().is_none()
    assert Option.of(None).is_none()
    assert Option.of(0).is_some()
    assert Some(1) == Option.some(1)
    assert Nothing() == Option.none()


def test_map_and_bind() -> None:
    assert Option.some(2).map(lambda v: v * 2).unwrap() == 4
    assert Option.some(2).bind(lambda v: Option.some(v + 1)).unwrap() == 3
    assert Option.some(2).bind(lambda v: Option.none()).is_none()
    assert Option.none().map(lambda v: v).is_none()


def test_map_returning_none_is_nothing() -> None:
    assert Option.some({"a": 1}).map(lambda d: d.get("b")).is_none()


@pytest.mark.parametrize(
    "op",
    [
        lambda o: o.map(lambda v: Option.some(v)),
        lambda o: o.bind(lambda v: v),
        lambda o: o.map(lambda v: 1 / 0),
        lambda o: o.bind(lambda v: [][1]),
        lambda o: o.map_with_env([Absent], lambda v, env: v),
        lambda o: o.with_env(42),
    ],
    ids=["map-container", "bind-plain", "map-raises", "bind-raises", "missing-dep", "invalid-dep"],
)
def test_failures_degrade_to_nothing(op) -> None:
    start = Option.some(1).with_env(Greeter()).write_to("log", "a")
    out = op(start)
    assert out.is_none()
    assert out.env() == start.env()
    assert out.writer_output("log") == ["a"]


def test_env_variants() -> None:
    start = Option.some("bob").with_env(Greeter())
    assert start.map_with_env([Greeter], lambda v, env: env[Greeter].greet(v)).unwrap() == "hi bob"
    bound = start.bind_with_env([Greeter], lambda v, env: Option.some(env[Greeter].greet(v)))
    assert bound.unwrap() == "hi bob"
    assert bound.env() == start.env()


def test_bind_merges_writer() -> None:
    out = Option.some(1).write_to("log", "a").bind(lambda v: Option.some(v).write_to("log", "b"))
    assert out.writer_output("log") == ["a", "b"]


def test_unwrap_accessors() -> None:
    with pytest.raises(InvalidState, match="Nothing"):
        Option.none().unwrap()
    assert Option.none().unwrap_or(5) == 5
    assert Option.none().unwrap_or_else(lambda: 6) == 6
    assert Option.some(1).unwrap_or(5) == 1
    assert Option.none().value() is None


def test_inspect_and_fold() -> None:
    seen: list[int] = []
    some = Option.some(3)
    assert some.inspect_some(seen.append) is some
    Option.none().inspect_some(seen.append)
    assert seen == [3]

    env = Env.of(Greeter())
    assert Option.some("x", env).fold(lambda v, e, w: e.read(Greeter).greet(v), lambda _, e, w: "none") == "hi x"
    assert Option.none().fold(lambda v, e, w: v, lambda _, e, w: "none") == "none"


def test_to_result_keeps_side_channels() -> None:
    some = Option.some(1).write_to("log", "a")
    assert some.to_result("missing") == Result.ok(1).write_to("log", "a")

    err = Option.none().write_to("log", "a").to_result("missing")
    assert err.is_err()
    assert isinstance(err.unwrap_err(), FaultError)
    assert err.writer_output("log") == ["a"]


def test_bool_repr_iter() -> None:
    assert bool(Some(0))
    assert not bool(Nothing())
    assert repr(Some(1)) == "Some(1)"
    assert repr(Nothing()) == "Nothing"
    assert list(Some(1)) == [1]
    assert list(Nothing()) == []
