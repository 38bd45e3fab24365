"""Tests for the Writer side channel.

Validates:
- Append order and channel isolation
- Immutability of write/merge
- Monoid laws of merge (associativity, empty identity)
"""

from __future__ import annotations

from carrier.monads import Writer


def test_empty_write_get_and_all() -> None:
    """Writes land in their channel in append order."""
    w = Writer.empty()
    assert w.all() == {}

    w2 = w.write("log", "a").write("log", "b").write("other", 1)
    assert w2 is not w
    assert w.all() == {}

    assert w2.get("log") == ["a", "b"]
    assert w2.get("other") == [1]
    assert w2.get("missing") == []
    assert w2.all() == {"log": ["a", "b"], "other": [1]}


def test_no_deduplication() -> None:
    w = Writer.empty().write("log", "x").write("log", "x")
    assert w.get("log") == ["x", "x"]
    assert len(w) == 2


def test_get_returns_copy() -> None:
    """Mutating a returned list never reaches the Writer."""
    w = Writer.empty().write("log", "a")
    out = w.get("log")
    out.append("b")
    assert w.get("log") == ["a"]


def test_merge_concatenates_per_channel() -> None:
    a = Writer.empty().write("log", "a").write("x", 1)
    b = Writer.empty().write("log", "b").write("y", 2)

    merged = a.merge(b)
    assert merged.get("log") == ["a", "b"]
    assert merged.get("x") == [1]
    assert merged.get("y") == [2]

    # originals unchanged
    assert a.get("log") == ["a"]
    assert b.get("log") == ["b"]


def test_merge_associativity() -> None:
    """(a <> b) <> c == a <> (b <> c)"""
    a = Writer.empty().write("log", 1).write("x", "a")
    b = Writer.empty().write("log", 2)
    c = Writer.empty().write("log", 3).write("x", "c")

    assert a.merge(b).merge(c) == a.merge(b.merge(c))
    assert a.merge(b).merge(c).get("log") == [1, 2, 3]


def test_merge_identity() -> None:
    a = Writer.empty().write("log", "a")
    assert a.merge(Writer.empty()) == a
    assert Writer.empty().merge(a) == a


def test_since_returns_appended_entries() -> None:
    before = Writer.empty().write("log", "a")
    after = before.write("log", "b").write("other", 1)
    assert after.since(before).all() == {"log": ["b"], "other": [1]}
    assert before.since(before) == Writer.empty()


def test_channels_and_contains() -> None:
    w = Writer.empty().write("a", 1).write("b", 2)
    assert w.channels() == ["a", "b"]
    assert "a" in w
    assert "c" not in w
