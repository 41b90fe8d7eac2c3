from .adapters import items, keys, values
from .domain_types import ABSENT, EXHAUSTED, Absent, Exhausted, Item
from .errors import (
    CloneError,
    EmptySequenceError,
    MunjError,
    ResourceError,
    SequenceArgumentError,
)
from .generators import munj_range, repeat
from .presenters import output, output_lines, render
from .records import join_records, split_records
from .reducers import (
    clone_template,
    group_reduce,
    length,
    munj_max,
    munj_min,
    munj_sum,
    product,
    reduce,
    sample,
)
from .resource_client import Resources
from .seq_core import IterSeq, ListSeq, Pullable, Seq, is_sequence
from .transformers import (
    concat,
    drop,
    flatten,
    interleave,
    munj_filter,
    munj_map,
    munj_zip,
    tail,
    take,
    take_while,
    zip_with,
)

__all__ = [
    "ABSENT",
    "Absent",
    "CloneError",
    "EXHAUSTED",
    "EmptySequenceError",
    "Exhausted",
    "Item",
    "IterSeq",
    "ListSeq",
    "MunjError",
    "Pullable",
    "ResourceError",
    "Resources",
    "Seq",
    "SequenceArgumentError",
    "clone_template",
    "concat",
    "drop",
    "flatten",
    "group_reduce",
    "interleave",
    "is_sequence",
    "items",
    "join_records",
    "keys",
    "length",
    "munj_filter",
    "munj_map",
    "munj_max",
    "munj_min",
    "munj_range",
    "munj_sum",
    "munj_zip",
    "output",
    "output_lines",
    "product",
    "reduce",
    "render",
    "repeat",
    "sample",
    "split_records",
    "tail",
    "take",
    "take_while",
    "values",
    "zip_with",
]
