"""Line <-> record conversion for delimited text."""
from __future__ import annotations

import re
from typing import Any, Pattern, Union

from .domain_types import Record
from .seq_core import as_sequence
from .transformers import Map

__all__ = ["split_records", "join_records"]

Separator = Union[str, Pattern[str]]


def _split(line: str, sep: Separator) -> Record:
    if isinstance(sep, re.Pattern):
        return tuple(sep.split(line))
    return tuple(line.split(sep))


def split_records(lines: Any, sep: Separator = "\t") -> Map:
    """Split each line on ``sep`` (text or a compiled regex) into a record."""
    return Map(lambda line: _split(line, sep), as_sequence(lines, "split_records"))


def join_records(seq: Any, sep: str = "\t") -> Map:
    """Join each record back into one line; other items pass through as-is."""

    def join(value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return sep.join(str(field) for field in value)
        return value

    return Map(join, as_sequence(seq, "join_records"))
