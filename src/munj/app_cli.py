from __future__ import annotations

import argparse
import logging
import math
import os
import random
import re
import sys
from functools import partial
from typing import Any, Sequence

from .adapters import items, keys, values
from .ansi_colors import detect_color_mode
from .domain_types import ABSENT, DEFAULT_ENCODING
from .errors import MunjError
from .generators import munj_range, repeat
from .http_resource_client import HttpResourceClient
from .local_resources import LocalResourceClient
from .presenters import output, output_lines
from .records import join_records, split_records
from .reducers import group_reduce, length, munj_max, munj_min, munj_sum, product, reduce, sample
from .resource_client import Resources
from .seq_core import is_sequence
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


def _build_resources(encoding: str | None = None) -> Resources:
    raw_timeout = os.getenv("MUNJ_TIMEOUT_SECS", "15.0").strip()
    try:
        timeout = float(raw_timeout)
    except ValueError:
        timeout = 15.0
    default_encoding = encoding or os.getenv("MUNJ_ENCODING", "").strip() or DEFAULT_ENCODING
    return Resources(
        local=LocalResourceClient(),
        http=HttpResourceClient(timeout_secs=timeout),
        encoding=default_encoding,
    )


def _build_rng() -> random.Random:
    raw_seed = os.getenv("MUNJ_SEED", "").strip()
    if not raw_seed:
        return random.Random()
    return random.Random(int(raw_seed) if raw_seed.lstrip("-").isdigit() else raw_seed)


def build_namespace(resources: Resources, rng: random.Random) -> dict[str, Any]:
    """Names visible to a pipeline expression, on top of the builtins."""

    def ila(locator: str, sep: Any = "\t", encoding: str | None = None) -> Any:
        return split_records(resources.open_lines(locator, encoding), sep)

    return {
        "range": munj_range,
        "repeat": repeat,
        "map": munj_map,
        "filter": munj_filter,
        "flatten": flatten,
        "take": take,
        "take_while": take_while,
        "drop": drop,
        "tail": tail,
        "concat": concat,
        "interleave": interleave,
        "zip": munj_zip,
        "zip_with": zip_with,
        "reduce": reduce,
        "sum": munj_sum,
        "product": product,
        "min": munj_min,
        "max": munj_max,
        "length": length,
        "group_reduce": group_reduce,
        "sample": partial(sample, rng=rng),
        "keys": keys,
        "values": values,
        "items": items,
        "is_sequence": is_sequence,
        "split_records": split_records,
        "join_records": join_records,
        "lines": resources.open_lines,
        "ls": partial(resources.list_entries, recursive=False),
        "find": partial(resources.list_entries, recursive=True),
        "ila": ila,
        "oal": join_records,
        "ABSENT": ABSENT,
        "math": math,
        "re": re,
    }


def evaluate(expression: str, namespace: dict[str, Any]) -> Any:
    code = compile(expression, "<expression>", "eval")
    return eval(code, dict(namespace))


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="munj",
        description="Evaluate a lazy sequence pipeline expression and print the result.",
    )
    parser.add_argument("expression", help='e.g. "sum(map(float, take(10, lines(\'data.txt\'))))"')
    parser.add_argument("--lines", action="store_true", help="Print one line per item instead of a bracketed list")
    parser.add_argument("--color", choices=["auto", "always", "never"], default="auto", help="Color mode (default: auto)")
    parser.add_argument("--encoding", default=None, help="Default text encoding for lines() (default: $MUNJ_ENCODING or UTF-8)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log resource access to stderr")

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    namespace = build_namespace(_build_resources(args.encoding), _build_rng())
    try:
        value = evaluate(args.expression, namespace)
        if args.lines:
            output_lines(value)
        else:
            mode = detect_color_mode(args.color)
            if args.color == "auto" and not mode.enabled:
                print("[colors disabled: piped output or NO_COLOR set]", file=sys.stderr, flush=True)
            output(value, mode=mode)
    except (MunjError, SyntaxError) as exc:
        print(f"munj: error: {exc}", file=sys.stderr)
        sys.exit(1)
    except BrokenPipeError:
        # downstream closed early (e.g. `| head`); silence the flush at exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(1)


if __name__ == "__main__":
    main()
