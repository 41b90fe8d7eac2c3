"""Operators that consume one or more sequences and produce one."""
from __future__ import annotations

from collections import deque
from typing import Any, Callable

from .domain_types import ABSENT, EXHAUSTED, Exhausted, Item, Pull
from .seq_core import Pullable, Seq, as_sequence, is_sequence

__all__ = [
    "Map",
    "Filter",
    "Flatten",
    "Take",
    "TakeWhile",
    "Tail",
    "Concat",
    "Interleave",
    "Zip",
    "munj_map",
    "munj_filter",
    "flatten",
    "take",
    "take_while",
    "drop",
    "tail",
    "concat",
    "interleave",
    "munj_zip",
    "zip_with",
]


class Map(Seq[Any]):
    def __init__(self, fn: Callable[[Any], Any], seq: Any) -> None:
        self._fn = fn
        self._upstream = as_sequence(seq, "map")

    def _advance(self) -> Pull[Any]:
        result = self._upstream.pull()
        if isinstance(result, Exhausted):
            return result
        return Item(self._fn(result.value))


class Filter(Seq[Any]):
    def __init__(self, pred: Callable[[Any], Any], seq: Any) -> None:
        self._pred = pred
        self._upstream = as_sequence(seq, "filter")

    def _advance(self) -> Pull[Any]:
        while True:
            result = self._upstream.pull()
            if isinstance(result, Exhausted) or self._pred(result.value):
                return result


def _is_nested(value: Any) -> bool:
    return is_sequence(value) or isinstance(value, (list, tuple))


class Flatten(Seq[Any]):
    """Depth-first flattening driven by an explicit stack of open sources."""

    def __init__(self, seq: Any) -> None:
        self._stack: list[Pullable] = [as_sequence(seq, "flatten")]

    def _advance(self) -> Pull[Any]:
        while self._stack:
            result = self._stack[-1].pull()
            if isinstance(result, Exhausted):
                self._stack.pop()
                continue
            if _is_nested(result.value):
                self._stack.append(as_sequence(result.value, "flatten"))
                continue
            return result
        return EXHAUSTED


class Take(Seq[Any]):
    def __init__(self, n: int, seq: Any) -> None:
        self._remaining = n
        self._upstream = as_sequence(seq, "take")

    def _advance(self) -> Pull[Any]:
        # Checked before pulling so upstream sees at most n pulls.
        if self._remaining <= 0:
            return EXHAUSTED
        self._remaining -= 1
        return self._upstream.pull()


class TakeWhile(Seq[Any]):
    def __init__(self, pred: Callable[[Any], Any], seq: Any) -> None:
        self._pred = pred
        self._upstream = as_sequence(seq, "take_while")

    def _advance(self) -> Pull[Any]:
        result = self._upstream.pull()
        if isinstance(result, Exhausted) or not self._pred(result.value):
            return EXHAUSTED
        return result


class Tail(Seq[Any]):
    """Last ``n`` items of the upstream, held in a ring buffer of size ``n``."""

    def __init__(self, n: int, seq: Any) -> None:
        self._n = max(n, 0)
        self._upstream = as_sequence(seq, "tail")
        self._buffer: deque[Any] | None = None

    def _fill(self) -> deque[Any]:
        buffer: deque[Any] = deque(maxlen=self._n)
        while True:
            result = self._upstream.pull()
            if isinstance(result, Exhausted):
                return buffer
            buffer.append(result.value)

    def _advance(self) -> Pull[Any]:
        if self._buffer is None:
            self._buffer = self._fill()
        if not self._buffer:
            return EXHAUSTED
        return Item(self._buffer.popleft())


class Concat(Seq[Any]):
    def __init__(self, *seqs: Any) -> None:
        self._sources = [as_sequence(s, "concat") for s in seqs]
        self._index = 0

    def _advance(self) -> Pull[Any]:
        while self._index < len(self._sources):
            result = self._sources[self._index].pull()
            if not isinstance(result, Exhausted):
                return result
            self._index += 1
        return EXHAUSTED


class Interleave(Seq[Any]):
    """Round-robin over the sources, dropping each one as it runs dry."""

    def __init__(self, *seqs: Any) -> None:
        self._active = [as_sequence(s, "interleave") for s in seqs]
        self._pos = 0

    def _advance(self) -> Pull[Any]:
        while self._active:
            if self._pos >= len(self._active):
                self._pos = 0
            result = self._active[self._pos].pull()
            if isinstance(result, Exhausted):
                # the next source slides into _pos
                del self._active[self._pos]
                continue
            self._pos += 1
            return result
        return EXHAUSTED


class Zip(Seq[Any]):
    """
    One slot per source per round.

    Unlike the builtin ``zip`` this does not stop at the shortest source:
    an exhausted source keeps contributing ``ABSENT`` until every source is
    exhausted. Callers rely on seeing the longer sources through to the end.
    """

    def __init__(self, *seqs: Any, fn: Callable[..., Any] | None = None) -> None:
        op = "zip" if fn is None else "zip_with"
        self._sources = [as_sequence(s, op) for s in seqs]
        self._done = [False] * len(self._sources)
        self._fn = fn

    def _advance(self) -> Pull[Any]:
        slots: list[Any] = []
        for i, source in enumerate(self._sources):
            if self._done[i]:
                slots.append(ABSENT)
                continue
            result = source.pull()
            if isinstance(result, Exhausted):
                self._done[i] = True
                slots.append(ABSENT)
            else:
                slots.append(result.value)
        if all(self._done):
            return EXHAUSTED
        if self._fn is not None:
            return Item(self._fn(*slots))
        return Item(tuple(slots))


def munj_map(fn: Callable[[Any], Any], seq: Any) -> Map:
    return Map(fn, seq)


def munj_filter(pred: Callable[[Any], Any], seq: Any) -> Filter:
    return Filter(pred, seq)


def flatten(seq: Any) -> Flatten:
    return Flatten(seq)


def take(n: int, seq: Any) -> Take:
    return Take(n, seq)


def take_while(pred: Callable[[Any], Any], seq: Any) -> TakeWhile:
    return TakeWhile(pred, seq)


def drop(n: int, seq: Any) -> Pullable:
    """
    Discard the first ``n`` items and hand back the same, advanced sequence.

    Running out early is fine; the result is then simply exhausted.
    """
    source = as_sequence(seq, "drop")
    for _ in range(n):
        if isinstance(source.pull(), Exhausted):
            break
    return source


def tail(n: int, seq: Any) -> Tail:
    return Tail(n, seq)


def concat(*seqs: Any) -> Concat:
    return Concat(*seqs)


def interleave(*seqs: Any) -> Interleave:
    return Interleave(*seqs)


def munj_zip(*seqs: Any) -> Zip:
    return Zip(*seqs)


def zip_with(fn: Callable[..., Any], *seqs: Any) -> Zip:
    """Like ``munj_zip`` but yields ``fn(*slots)`` for each round."""
    return Zip(*seqs, fn=fn)
