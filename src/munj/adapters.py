from __future__ import annotations

from typing import Any, Mapping

from .errors import SequenceArgumentError
from .seq_core import IterSeq

__all__ = ["keys", "values", "items"]


def _own_mapping(obj: Any, op: str) -> Mapping[Any, Any]:
    if not isinstance(obj, Mapping):
        raise SequenceArgumentError(f"{op}(): expected a mapping, got {type(obj).__name__}")
    return obj


def keys(obj: Mapping[Any, Any]) -> IterSeq[Any]:
    return IterSeq(iter(_own_mapping(obj, "keys").keys()))


def values(obj: Mapping[Any, Any]) -> IterSeq[Any]:
    return IterSeq(iter(_own_mapping(obj, "values").values()))


def items(obj: Mapping[Any, Any]) -> IterSeq[list[Any]]:
    mapping = _own_mapping(obj, "items")
    return IterSeq([k, v] for k, v in mapping.items())
