import pullseq.operators as op
from pullseq.errors import InvalidArgumentError
from pullseq.sequences import advance, from_iterable
from pullseq.testing import drain
from pytest import raises


def test_filter_all_max(digits):
    assert drain(op.filter_all_max(digits)) == ["4", "4", "4"]


def test_filter_all_max_keeps_encounter_order():
    inp = from_iterable([("b", 2), ("a", 1), ("c", 2), ("d", 2)])

    def by_num(a, b):
        return a[1] - b[1]

    out = drain(op.filter_all_max(inp, by_num))
    assert out == [("b", 2), ("c", 2), ("d", 2)]


def test_filter_all_max_resets_on_new_max():
    inp = from_iterable([3, 3, 1, 5, 2, 5])
    assert drain(op.filter_all_max(inp)) == [5, 5]


def test_filter_all_max_empty():
    assert drain(op.filter_all_max(from_iterable([]))) == []


def test_filter_all_max_drains_on_first_advance():
    inp = from_iterable([1, 3, 2])
    filtered = op.filter_all_max(inp)
    assert advance(filtered) == (3,)
    assert inp.estimate_size() == 0
    assert filtered.estimate_size() == 0


def test_filter_all_max_refuses_split():
    assert op.filter_all_max(from_iterable([1, 2, 3, 4])).try_split() is None


def test_filter_all_max_raises_on_none_comparator():
    with raises(InvalidArgumentError, match="`comparator`"):
        op.filter_all_max(from_iterable([1]), None)
