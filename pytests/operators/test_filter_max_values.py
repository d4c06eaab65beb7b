import pullseq.operators as op
from pullseq._utils import natural_order
from pullseq.adapters.topk import TopKTable
from pullseq.errors import InvalidArgumentError
from pullseq.sequences import from_iterable
from pullseq.testing import drain
from pytest import raises


def test_filter_max_values(digits):
    assert drain(op.filter_max_values(digits, 2)) == ["4", "4", "4", "3", "3"]


def test_filter_max_values_encounter_order_within_key():
    inp = from_iterable([("a", 1), ("b", 2), ("c", 1), ("d", 0), ("e", 2)])

    def by_num(a, b):
        return a[1] - b[1]

    out = drain(op.filter_max_values(inp, 2, by_num))
    assert out == [("b", 2), ("e", 2), ("a", 1), ("c", 1)]


def test_filter_max_values_evicts_ties_with_key():
    inp = from_iterable([1, 1, 1, 2, 3])
    assert drain(op.filter_max_values(inp, 2)) == [3, 2]


def test_filter_max_values_unsorted_input():
    inp = from_iterable([3, 1, 4, 1, 5, 9, 2, 6, 5, 3, 5])
    assert drain(op.filter_max_values(inp, 3)) == [9, 6, 5, 5, 5]


def test_top_k_table_keeps_keys_and_ties_aligned():
    table = TopKTable(2, natural_order, keep_ties=True)
    for x in [1, 1, 2, 3, 2, 0]:
        table.offer(x)
    assert table.keys == [3, 2]
    assert table.ties == [[3], [2, 2]]
    assert list(table.values()) == [3, 2, 2]


def test_top_k_table_without_ties():
    table = TopKTable(3, natural_order, keep_ties=False)
    for x in [5, 5, 4]:
        table.offer(x)
    assert table.keys == [5, 4]
    assert table.ties == [[5], [4]]


def test_filter_max_values_raises_on_none_comparator():
    with raises(InvalidArgumentError):
        op.filter_max_values(from_iterable([1]), 2, None)
