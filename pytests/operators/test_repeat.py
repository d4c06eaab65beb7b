import pullseq.operators as op
from pullseq.errors import InvalidArgumentError
from pullseq.properties import UNBOUNDED
from pullseq.sequences import advance, from_iterable
from pullseq.testing import drain
from pytest import raises


def test_repeat():
    inp = from_iterable([1, 2, 3])
    assert drain(op.repeat(inp, 2)) == [1, 1, 2, 2, 3, 3]


def test_repeat_empty():
    assert drain(op.repeat(from_iterable([]), 3)) == []


def test_repeat_estimate_size():
    repeated = op.repeat(from_iterable([1, 2, 3]), 3)
    assert repeated.estimate_size() == 9
    advance(repeated)
    assert repeated.estimate_size() == 8
    assert repeated.properties().sized


def test_repeat_estimate_size_saturates():
    repeated = op.repeat(from_iterable(range(UNBOUNDED)), 3)
    assert repeated.estimate_size() == UNBOUNDED


def test_repeat_drops_distinct():
    inp = from_iterable([1, 2], distinct=True)
    assert not op.repeat(inp, 2).properties().distinct


def test_repeat_split_before_advance():
    repeated = op.repeat(from_iterable([1, 2, 3, 4]), 2)
    prefix = repeated.try_split()
    assert drain(prefix) == [1, 1, 2, 2]
    assert drain(repeated) == [3, 3, 4, 4]


def test_repeat_raises_on_factor_one():
    with raises(InvalidArgumentError, match="`factor` must be at least 2"):
        op.repeat(from_iterable([1]), 1)


def test_repeat_raises_on_unsized():
    with raises(InvalidArgumentError, match="must be sized"):
        op.repeat(from_iterable(iter([1, 2])), 2)
