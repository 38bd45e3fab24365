"""Tests for the Env dependency carrier."""

from __future__ import annotations

import pytest

from carrier.foundation.errors import ErrorCode, InvalidArgument, MissingDependency
from carrier.monads import Env, is_dependency


class Clock:
    pass


class Mailer:
    def __init__(self, name: str = "smtp") -> None:
        self.name = name


def test_empty_with_and_all() -> None:
    env = Env.empty()
    assert env.all() == {}

    clock = Clock()
    env2 = env.with_(clock)
    assert env2 is not env
    assert env.all() == {}
    assert env2.all() == {Clock: clock}
    assert env2.get(Clock) is clock


def test_with_replaces_same_type() -> None:
    """At most one dependency per type."""
    first, second = Mailer("a"), Mailer("b")
    env = Env.empty().with_(first).with_(second)
    assert len(env) == 1
    assert env.read(Mailer) is second


def test_read_and_get() -> None:
    clock = Clock()
    env = Env.of(clock)

    assert env.read(Clock) is clock
    assert env.get(Mailer) is None

    with pytest.raises(MissingDependency) as exc_info:
        env.read(Mailer)
    assert exc_info.value.code == ErrorCode.MISSING_DEPENDENCY
    assert "Mailer" in str(exc_info.value)


def test_missing_dependency_is_lookup_error() -> None:
    with pytest.raises(LookupError):
        Env.empty().read(Clock)


@pytest.mark.parametrize("bad", [None, 1, "text", 2.5, True, Clock])
def test_with_rejects_non_instances(bad: object) -> None:
    assert not is_dependency(bad)
    with pytest.raises(InvalidArgument):
        Env.empty().with_(bad)


def test_merge_is_right_biased() -> None:
    left_mailer, right_mailer = Mailer("left"), Mailer("right")
    clock = Clock()
    a = Env.of(left_mailer, clock)
    b = Env.of(right_mailer)

    merged = a.merge(b)
    assert merged.get(Mailer) is right_mailer
    assert merged.get(Clock) is clock
    # receiver untouched
    assert a.get(Mailer) is left_mailer


def test_merge_lookup_property() -> None:
    """a.merge(b).get(k) == b.get(k) if k in b else a.get(k)"""
    a = Env.of(Mailer("a"), Clock())
    b = Env.of(Mailer("b"))
    merged = a.merge(b)
    for key in (Mailer, Clock, int):
        expected = b.get(key) if key in b else a.get(key)
        assert merged.get(key) is expected


def test_local_does_not_persist_override() -> None:
    env = Env.of(Mailer("base"))
    override = Mailer("override")

    seen = env.local(lambda e: e.read(Mailer).name, override)
    assert seen == "override"
    assert env.read(Mailer).name == "base"

    assert env.local(lambda e: e.read(Mailer).name) == "base"


def test_resolve_builds_read_only_view() -> None:
    clock, mailer = Clock(), Mailer()
    env = Env.of(clock, mailer)
    view = env.resolve([Clock])

    assert dict(view) == {Clock: clock}
    with pytest.raises(TypeError):
        view[Mailer] = mailer  # type: ignore[index]

    with pytest.raises(MissingDependency, match="bind_with_env"):
        env.resolve([Clock, int], "bind_with_env")


def test_equality_and_repr() -> None:
    clock = Clock()
    assert Env.of(clock) == Env.empty().with_(clock)
    assert Env.of(clock) != Env.empty()
    assert "Clock" in repr(Env.of(clock))


def test_resolve_rejects_unhashable_key() -> None:
    with pytest.raises(InvalidArgument, match="map_with_env"):
        Env.of(Clock()).resolve([[]], "map_with_env")  # type: ignore[list-item]
