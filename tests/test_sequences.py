from __future__ import annotations

import pytest

from munj.domain_types import ABSENT, EXHAUSTED, Item
from munj.errors import SequenceArgumentError
from munj.generators import munj_range, repeat
from munj.seq_core import IterSeq, ListSeq, is_sequence
from munj.transformers import (
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


def test_exhaustion_is_idempotent() -> None:
    seq = ListSeq([1])
    assert seq.pull() == Item(1)
    for _ in range(3):
        assert seq.pull() is EXHAUSTED


def test_iter_seq_does_not_resume_after_stop() -> None:
    def flaky():
        yield 1

    seq = IterSeq(flaky())
    assert list(seq) == [1]
    assert seq.pull() is EXHAUSTED


def test_range_half_open_both_directions() -> None:
    assert list(munj_range(0, 5)) == [0, 1, 2, 3, 4]
    assert list(munj_range(5, 0, -2)) == [5, 3, 1]
    assert list(munj_range(3, 3)) == []
    assert list(munj_range(0, 1, 0.25)) == [0, 0.25, 0.5, 0.75]


def test_range_with_wrong_step_sign_keeps_going() -> None:
    assert list(take(4, munj_range(0, 1, -1))) == [0, -1, -2, -3]


def test_repeat_shares_the_same_object() -> None:
    box: list[int] = []
    out = list(repeat(box, 3))
    assert len(out) == 3
    assert all(item is box for item in out)


def test_repeat_without_count_is_unbounded() -> None:
    assert list(take(5, repeat("x"))) == ["x"] * 5
    assert list(take(2, repeat("y", -1))) == ["y", "y"]
    assert list(repeat("z", 0)) == []


def test_map_and_filter_are_lazy(counting) -> None:
    source = counting([1, 2, 3, 4])
    evens = munj_map(lambda x: x * 10, munj_filter(lambda x: x % 2 == 0, source))
    assert source.pulls == 0
    assert evens.pull() == Item(20)
    assert source.pulls == 2
    assert list(evens) == [40]


def test_combinators_reject_non_sequences() -> None:
    with pytest.raises(SequenceArgumentError, match="take"):
        take(1, 42)
    with pytest.raises(SequenceArgumentError):
        munj_map(str, "abc")


def test_flatten_nested_lists_and_sequences() -> None:
    assert list(flatten([1, [2, [3, 4]], 5])) == [1, 2, 3, 4, 5]
    assert list(flatten([ListSeq([1, ListSeq([2])]), [], 3])) == [1, 2, 3]


def test_flatten_deep_nesting_does_not_recurse() -> None:
    nested: list = [0]
    for _ in range(5000):
        nested = [nested]
    assert list(flatten(nested)) == [0]


@pytest.mark.parametrize("n", [0, 1, 3, 10])
def test_take_never_over_reads(counting, n) -> None:
    source = counting([1, 2, 3, 4, 5])
    result = list(take(n, source))
    assert result == [1, 2, 3, 4, 5][:n]
    assert source.pulls <= n


def test_take_while_discards_failing_item(counting) -> None:
    source = counting([1, 2, 5, 3])
    assert list(take_while(lambda x: x < 4, source)) == [1, 2]
    assert source.pull() == Item(3)


def test_drop_returns_the_advanced_sequence() -> None:
    seq = ListSeq([1, 2, 3])
    assert drop(2, seq) is seq
    assert list(seq) == [3]


def test_drop_past_the_end_is_not_an_error() -> None:
    assert list(drop(10, ListSeq([1, 2]))) == []


@pytest.mark.parametrize("n", [0, 1, 2, 4, 7])
def test_drop_over_concat(n) -> None:
    a, b = [1, 2, 3], ["x", "y"]
    assert list(drop(n, concat(a, b))) == (a + b)[n:]


def test_tail_keeps_last_items_in_order() -> None:
    assert list(tail(2, [1, 2, 3, 4, 5])) == [4, 5]
    assert list(tail(10, [1, 2, 3])) == [1, 2, 3]
    assert list(tail(0, [1, 2, 3])) == []


def test_tail_waits_for_first_pull(counting) -> None:
    source = counting([1, 2, 3])
    seq = tail(1, source)
    assert source.pulls == 0
    assert list(seq) == [3]


def test_concat_in_argument_order() -> None:
    assert list(concat([1], [], ListSeq([2, 3]), [4])) == [1, 2, 3, 4]
    assert list(concat()) == []


def test_interleave_drops_exhausted_sources() -> None:
    assert list(interleave([1, 2, 3], ["a", "b"])) == [1, "a", 2, "b", 3]
    assert list(interleave([], [1], [2, 3, 4])) == [1, 2, 3, 4]


def test_interleave_does_not_retry_exhausted_source(counting) -> None:
    short = counting([1])
    list(interleave(short, [10, 20, 30]))
    assert short.pulls == 2


def test_zip_fills_absent_until_all_exhausted() -> None:
    rounds = list(munj_zip([1, 2, 3], ["a", "b"]))
    assert rounds == [(1, "a"), (2, "b"), (3, ABSENT)]


def test_zip_with_applies_fn_per_round() -> None:
    sums = zip_with(lambda a, b: a + (0 if b is ABSENT else b), [1, 2, 3], [10, 20])
    assert list(sums) == [11, 22, 3]
    assert list(munj_zip()) == []


def test_is_sequence() -> None:
    assert is_sequence(ListSeq([]))
    assert is_sequence(munj_range(0, 1))
    assert not is_sequence([1, 2])
    assert not is_sequence("text")
