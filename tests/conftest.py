from __future__ import annotations

from typing import Any

import pytest

from munj.domain_types import EXHAUSTED, Item, Pull
from munj.seq_core import Seq


class CountingSeq(Seq[Any]):
    """Finite source that records how many times it was pulled."""

    def __init__(self, values: list[Any]) -> None:
        self.values = list(values)
        self.pulls = 0

    def _advance(self) -> Pull[Any]:
        self.pulls += 1
        if self.pulls > len(self.values):
            return EXHAUSTED
        return Item(self.values[self.pulls - 1])


@pytest.fixture
def counting():
    return CountingSeq
