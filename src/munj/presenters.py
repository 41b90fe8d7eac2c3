"""Render pipeline results as text, one chunk at a time."""
from __future__ import annotations

import io
import json
import os
import sys
from pathlib import PurePath
from typing import Any, Iterator, Mapping, TextIO

from .ansi_colors import PLAIN, ColorMode, paint
from .domain_types import Absent, Exhausted
from .seq_core import as_sequence, is_sequence, iter_pulled

__all__ = ["display_name", "render_chunks", "render", "output", "output_lines"]

INDENT = "  "


def _json_default(value: Any) -> Any:
    if isinstance(value, Absent):
        return None
    name = display_name(value)
    if name is not None:
        return name
    return str(value)


def display_name(value: Any) -> str | None:
    """Leaf name of a resource handle, or None if ``value`` is not one."""
    if isinstance(value, PurePath):
        return value.name
    if isinstance(value, io.IOBase):
        name = getattr(value, "name", None)
        if isinstance(name, str):
            return os.path.basename(name)
    return None


def _render_scalar(value: Any, mode: ColorMode) -> str:
    if isinstance(value, Absent) or value is None:
        return paint("null", "literal", mode)
    if isinstance(value, bool):
        return paint(json.dumps(value), "literal", mode)
    if isinstance(value, (int, float)):
        return paint(json.dumps(value), "number", mode)
    return json.dumps(value, default=_json_default)


def _render_sequence(value: Any, mode: ColorMode, depth: int) -> Iterator[str]:
    source = as_sequence(value, "output")
    pulled = source.pull()
    if isinstance(pulled, Exhausted):
        yield "[]"
        return
    pad = INDENT * (depth + 1)
    yield "[\n"
    while True:
        yield pad
        yield from render_chunks(pulled.value, mode, depth + 1)
        # pull the next item only after this one is fully written
        pulled = source.pull()
        if isinstance(pulled, Exhausted):
            break
        yield ",\n"
    yield "\n" + INDENT * depth + "]"


def _render_mapping(value: Mapping[Any, Any], mode: ColorMode, depth: int) -> Iterator[str]:
    if not value:
        yield "{}"
        return
    pad = INDENT * (depth + 1)
    yield "{\n"
    for i, (key, item) in enumerate(value.items()):
        if i:
            yield ",\n"
        yield pad + paint(json.dumps(str(key)), "key", mode) + ": "
        yield from render_chunks(item, mode, depth + 1)
    yield "\n" + INDENT * depth + "}"


def render_chunks(value: Any, mode: ColorMode = PLAIN, depth: int = 0) -> Iterator[str]:
    """
    Yield the rendering of ``value`` as a stream of text fragments.

    Text is quoted as-is, sequences become indented bracketed lists,
    mappings become braced objects, resource handles show their leaf name
    and anything else goes through JSON. Sequences are pulled one item at a
    time, so unbounded sequences stream instead of hanging.
    """
    if isinstance(value, str):
        yield paint(f'"{value}"', "string", mode)
        return
    name = display_name(value)
    if name is not None:
        yield paint(f'"{name}"', "handle", mode)
        return
    if is_sequence(value) or isinstance(value, (list, tuple)):
        yield from _render_sequence(value, mode, depth)
        return
    if isinstance(value, Mapping):
        yield from _render_mapping(value, mode, depth)
        return
    yield _render_scalar(value, mode)


def render(value: Any, mode: ColorMode = PLAIN) -> str:
    return "".join(render_chunks(value, mode))


def output(value: Any, stream: TextIO | None = None, mode: ColorMode = PLAIN) -> None:
    stream = stream if stream is not None else sys.stdout
    for chunk in render_chunks(value, mode):
        stream.write(chunk)
    stream.write("\n")
    stream.flush()


def _leaf_lines(value: Any) -> Iterator[str]:
    if isinstance(value, str):
        yield value
        return
    if is_sequence(value):
        for item in iter_pulled(value):
            yield from _leaf_lines(item)
        return
    name = display_name(value)
    if name is not None:
        yield name
    elif isinstance(value, Absent):
        yield "null"
    else:
        yield json.dumps(value, default=_json_default)


def output_lines(value: Any, stream: TextIO | None = None) -> None:
    """
    Print one line per leaf item: text unquoted, nested sequences expanded,
    everything else as JSON. Lists and tuples stay on one line.
    """
    stream = stream if stream is not None else sys.stdout
    for line in _leaf_lines(value):
        stream.write(line + "\n")
    stream.flush()
