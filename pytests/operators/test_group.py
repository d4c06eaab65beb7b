import pullseq.operators as op
from pullseq.errors import InvalidArgumentError
from pullseq.sequences import advance, from_iterable
from pullseq.testing import drain
from pytest import raises


def test_group():
    inp = from_iterable([1, 2, 3, 4, 5, 6, 7])
    assert drain(op.group(inp, 3)) == [[1, 2, 3], [4, 5, 6]]


def test_group_chunk_count(length):
    width = 2
    inp = list(range(length))
    out = drain(op.group(from_iterable(inp), width))

    assert len(out) == length // width
    for i, chunk in enumerate(out):
        assert chunk == inp[i * width : (i + 1) * width]


def test_group_exact_multiple():
    inp = from_iterable("abcdef")
    assert drain(op.group(inp, 2)) == [["a", "b"], ["c", "d"], ["e", "f"]]


def test_group_empty():
    assert drain(op.group(from_iterable([]), 2)) == []


def test_group_estimate_size():
    grouped = op.group(from_iterable(range(7)), 3)
    assert grouped.estimate_size() == 2
    advance(grouped)
    assert grouped.estimate_size() == 1


def test_group_raises_on_zero_width():
    with raises(InvalidArgumentError):
        op.group(from_iterable([1]), 0)


def test_group_raises_on_unordered(unordered):
    with raises(InvalidArgumentError):
        op.group(unordered, 2)
