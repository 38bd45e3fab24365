"""Writer: immutable append-only multi-channel log."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


class Writer:
    """Channel name -> ordered entries. `write` and `merge` return new Writers.

    Example:
        >>> w = Writer.empty().write("log", "a").write("log", "b")
        >>> w.get("log")
        ['a', 'b']
        >>> w.merge(Writer.empty().write("log", "c")).get("log")
        ['a', 'b', 'c']
    """

    __slots__ = ("_channels",)

    def __init__(self, channels: Mapping[str, tuple[Any, ...]] | None = None) -> None:
        self._channels: dict[str, tuple[Any, ...]] = dict(channels) if channels else {}

    @classmethod
    def empty(cls) -> Writer:
        return cls()

    def write(self, channel: str, value: Any) -> Writer:
        """Append `value` to `channel`."""
        return Writer({**self._channels, channel: (*self._channels.get(channel, ()), value)})

    def get(self, channel: str) -> list[Any]:
        """Entries of `channel` in append order; empty if never written."""
        return list(self._channels.get(channel, ()))

    def merge(self, other: Writer) -> Writer:
        """Per-channel concatenation, `other`'s entries after this Writer's."""
        if not other._channels:
            return self
        if not self._channels:
            return other
        merged = dict(self._channels)
        for channel, entries in other._channels.items():
            merged[channel] = (*merged.get(channel, ()), *entries)
        return Writer(merged)

    def since(self, earlier: Writer) -> Writer:
        """Entries appended after `earlier`, assuming `earlier` is a per-channel prefix of this Writer."""
        if not earlier._channels:
            return self
        out: dict[str, tuple[Any, ...]] = {}
        for channel, entries in self._channels.items():
            if tail := entries[len(earlier._channels.get(channel, ())):]:
                out[channel] = tail
        return Writer(out)

    def all(self) -> dict[str, list[Any]]:
        """Snapshot of every channel."""
        return {channel: list(entries) for channel, entries in self._channels.items()}

    def channels(self) -> list[str]:
        return list(self._channels)

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __contains__(self, channel: object) -> bool:
        return channel in self._channels

    def __len__(self) -> int:
        """Total number of entries across channels."""
        return sum(len(entries) for entries in self._channels.values())

    def __iter__(self) -> Iterator[str]:
        return iter(self._channels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Writer):
            return NotImplemented
        # Channels holding no entries never exist, so dict equality is structural
        return self._channels == other._channels

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Writer({self.all()!r})"
