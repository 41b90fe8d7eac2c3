"""Sequences that produce items from no upstream input."""
from __future__ import annotations

from typing import Any, TypeVar

from .domain_types import EXHAUSTED, Item, Pull
from .seq_core import Seq

__all__ = ["Range", "Repeat", "munj_range", "repeat"]

T = TypeVar("T")


class Range(Seq[Any]):
    """
    Half-open numeric range.

    Counts up while ``current < end`` when ``end >= start``, otherwise counts
    down while ``current > end``. A ``step`` whose sign points away from
    ``end`` never terminates; that is the caller's choice to make.
    """

    def __init__(self, start: Any, end: Any, step: Any = 1) -> None:
        self._current = start
        self._end = end
        self._step = step
        self._ascending = end >= start

    def _advance(self) -> Pull[Any]:
        current = self._current
        if self._ascending and not current < self._end:
            return EXHAUSTED
        if not self._ascending and not current > self._end:
            return EXHAUSTED
        self._current = current + self._step
        return Item(current)


class Repeat(Seq[T]):
    def __init__(self, value: T, n: int | None = None) -> None:
        self._value = value
        # None or a negative count means forever
        self._remaining = n if n is not None and n >= 0 else None

    def _advance(self) -> Pull[T]:
        if self._remaining is not None:
            if self._remaining <= 0:
                return EXHAUSTED
            self._remaining -= 1
        return Item(self._value)


def munj_range(start: Any, end: Any, step: Any = 1) -> Range:
    return Range(start, end, step)


def repeat(value: T, n: int | None = None) -> Repeat[T]:
    """Yield the very same ``value`` object ``n`` times, or forever."""
    return Repeat(value, n)
