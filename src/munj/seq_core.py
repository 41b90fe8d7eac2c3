"""Pull-based sequence contract shared by every munj operator."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Iterator, Protocol, Sequence, TypeVar, runtime_checkable

from .domain_types import EXHAUSTED, Exhausted, Item, Pull
from .errors import SequenceArgumentError

__all__ = ["Pullable", "Seq", "ListSeq", "IterSeq", "is_sequence", "as_sequence", "iter_pulled"]

T = TypeVar("T")


@runtime_checkable
class Pullable(Protocol):
    def pull(self) -> Pull[Any]: ...


class Seq(ABC, Generic[T]):
    """
    Base class for single-pass lazy sequences.

    Subclasses implement ``_advance``; ``pull`` latches the first
    ``EXHAUSTED`` so later pulls never reach ``_advance`` again.
    """

    _exhausted = False

    @abstractmethod
    def _advance(self) -> Pull[T]:
        """Compute the next item, or return EXHAUSTED."""

    def pull(self) -> Pull[T]:
        if self._exhausted:
            return EXHAUSTED
        result = self._advance()
        if isinstance(result, Exhausted):
            self._exhausted = True
        return result

    def __iter__(self) -> Iterator[T]:
        return iter_pulled(self)

    def __repr__(self) -> str:
        state = "exhausted" if self._exhausted else "live"
        return f"<{type(self).__name__} {state}>"


class ListSeq(Seq[T]):
    """Sequence over a finite container, in order."""

    def __init__(self, values: Sequence[T]) -> None:
        self._values = values
        self._pos = 0

    def _advance(self) -> Pull[T]:
        if self._pos >= len(self._values):
            return EXHAUSTED
        value = self._values[self._pos]
        self._pos += 1
        return Item(value)


class IterSeq(Seq[T]):
    """Sequence over a Python iterator; StopIteration becomes EXHAUSTED."""

    def __init__(self, iterator: Iterator[T]) -> None:
        self._iterator = iterator

    def _advance(self) -> Pull[T]:
        try:
            return Item(next(self._iterator))
        except StopIteration:
            return EXHAUSTED


def is_sequence(value: Any) -> bool:
    return isinstance(value, Pullable)


def as_sequence(value: Any, op: str) -> Pullable:
    """Return ``value`` as something pullable, or fail with a named error."""
    if is_sequence(value):
        return value
    if isinstance(value, (list, tuple)):
        return ListSeq(value)
    raise SequenceArgumentError(f"{op}(): expected a sequence, got {type(value).__name__}")


def iter_pulled(source: Pullable) -> Iterator[Any]:
    """Plain Python iteration over anything that exposes ``pull``."""
    while True:
        result = source.pull()
        if isinstance(result, Exhausted):
            return
        yield result.value
