import pullseq.operators as op
from pullseq.errors import InvalidArgumentError
from pullseq.sequences import from_iterable
from pullseq.testing import drain
from pytest import raises

INP = ["1", "o", "o", "2", "3", "o", "4", "5", "6", "o", "7", "8", "9"]


def is_o(x):
    return x == "o"


def test_group_on_split_excluded():
    out = drain(op.group_on_split(from_iterable(INP), is_o, False))
    assert out == [[], ["2", "3"], ["4", "5", "6"], ["7", "8", "9"]]


def test_group_on_split_included():
    out = drain(op.group_on_split(from_iterable(INP), is_o))
    assert out == [
        ["o"],
        ["o", "2", "3"],
        ["o", "4", "5", "6"],
        ["o", "7", "8", "9"],
    ]


def test_group_on_split_trailing_splitter():
    inp = from_iterable(["o", "a", "o"])
    assert drain(op.group_on_split(inp, is_o, False)) == [["a"]]
    inp = from_iterable(["o", "a", "o"])
    assert drain(op.group_on_split(inp, is_o, True)) == [["o", "a"], ["o"]]


def test_group_on_split_no_splitter():
    inp = from_iterable(["a", "b"])
    assert drain(op.group_on_split(inp, is_o)) == []


def test_group_on_split_groups_are_independent():
    groups = op.group_on_split(from_iterable(INP), is_o, False).to_list()
    assert [g.to_list() for g in groups][1:] == [
        ["2", "3"],
        ["4", "5", "6"],
        ["7", "8", "9"],
    ]


def test_group_on_split_raises_on_none_splitter():
    with raises(InvalidArgumentError, match="`splitter`"):
        op.group_on_split(from_iterable(INP), None)
