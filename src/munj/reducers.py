"""Operators that drain a sequence into a scalar or a keyed table."""
from __future__ import annotations

import json
import math
import random
from typing import Any, Callable

from .domain_types import Exhausted
from .errors import CloneError, EmptySequenceError
from .seq_core import ListSeq, as_sequence

__all__ = [
    "reduce",
    "munj_sum",
    "product",
    "munj_min",
    "munj_max",
    "length",
    "clone_template",
    "group_reduce",
    "sample",
]


def reduce(fn: Callable[[Any, Any], Any], init: Any, seq: Any) -> Any:
    """Left fold: ``fn(...fn(fn(init, x0), x1)..., xn)`` in pull order."""
    source = as_sequence(seq, "reduce")
    result = init
    while True:
        pulled = source.pull()
        if isinstance(pulled, Exhausted):
            return result
        result = fn(result, pulled.value)


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def munj_sum(seq: Any) -> float:
    """Add up the items as floats. One non-numeric item makes the total nan."""
    return reduce(lambda acc, x: acc + _to_float(x), 0.0, as_sequence(seq, "sum"))


def product(seq: Any) -> float:
    return reduce(lambda acc, x: acc * _to_float(x), 1.0, as_sequence(seq, "product"))


def _seeded_fold(pick: Callable[[Any, Any], Any], seq: Any, op: str) -> Any:
    source = as_sequence(seq, op)
    first = source.pull()
    if isinstance(first, Exhausted):
        raise EmptySequenceError(f"{op}(): sequence is already exhausted")
    return reduce(pick, first.value, source)


def munj_min(seq: Any) -> Any:
    return _seeded_fold(lambda acc, x: x if x < acc else acc, seq, "min")


def munj_max(seq: Any) -> Any:
    return _seeded_fold(lambda acc, x: x if x > acc else acc, seq, "max")


def length(seq: Any) -> int:
    """Count items. Falsy items such as ``0`` or ``""`` count like any other."""
    source = as_sequence(seq, "length")
    count = 0
    while not isinstance(source.pull(), Exhausted):
        count += 1
    return count


def _serialize_template(template: Any) -> str:
    try:
        return json.dumps(template, allow_nan=True)
    except (TypeError, ValueError) as exc:
        raise CloneError(f"group template is not JSON-representable: {exc}") from exc


def clone_template(template: Any) -> Any:
    """
    Return an independent structural copy of ``template``.

    Only JSON-representable values can be cloned: dicts with string keys,
    lists, text, numbers, booleans and None. Tuples come back as lists.
    """
    return json.loads(_serialize_template(template))


def group_reduce(
    group_fn: Callable[[Any], Any],
    reduce_fn: Callable[[Any, Any], Any],
    template: Any,
    seq: Any,
) -> dict[str, Any]:
    """
    Fold each group of items separately.

    Items are keyed by ``str(group_fn(item))``. The first item of a group
    starts from a fresh clone of ``template``, so mutable templates are
    never shared between groups.
    """
    source = as_sequence(seq, "group_reduce")
    # Serialize once up front so a bad template fails before any pulling.
    frozen = _serialize_template(template)
    table: dict[str, Any] = {}
    while True:
        pulled = source.pull()
        if isinstance(pulled, Exhausted):
            return table
        key = str(group_fn(pulled.value))
        if key not in table:
            table[key] = json.loads(frozen)
        table[key] = reduce_fn(table[key], pulled.value)


def sample(k: int, seq: Any, rng: Any = None) -> ListSeq[Any]:
    """
    Uniform random sample of ``k`` items (Algorithm R).

    Every item of an ``n``-item source ends up in the result with
    probability ``k/n``. Results come back in reservoir slot order. ``rng``
    is anything with ``randint``; the ``random`` module by default.
    """
    source = as_sequence(seq, "sample")
    rng = rng if rng is not None else random
    reservoir: list[Any] = []
    t = 0
    while True:
        pulled = source.pull()
        if isinstance(pulled, Exhausted):
            return ListSeq(reservoir)
        if t < k:
            reservoir.append(pulled.value)
        else:
            m = rng.randint(0, t)
            if m < k:
                reservoir[m] = pulled.value
        t += 1
