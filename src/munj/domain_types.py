from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Item(Generic[T]):
    value: T


class Exhausted:
    """Terminal signal returned by a sequence that has no more items."""

    _instance: Exhausted | None = None

    def __new__(cls) -> Exhausted:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "EXHAUSTED"


class Absent:
    """Slot filler used by zip once a source has run dry."""

    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


EXHAUSTED = Exhausted()
ABSENT = Absent()

Pull = Union[Item[T], Exhausted]
Record = tuple[Any, ...]

DEFAULT_ENCODING = "UTF-8"
