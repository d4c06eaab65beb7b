import pullseq.operators as op
from pullseq.errors import InvalidArgumentError
from pullseq.properties import UNBOUNDED, Properties
from pullseq.sequences import ListSequence, advance, from_iterable
from pullseq.testing import drain
from pytest import raises


def test_roll():
    inp = from_iterable([1, 2, 3, 4, 5])
    assert drain(op.roll(inp, 3)) == [[1, 2, 3], [2, 3, 4], [3, 4, 5]]


def test_roll_window_count(length):
    width = 3
    inp = list(range(length))
    out = drain(op.roll(from_iterable(inp), width))

    assert len(out) == max(length - width + 1, 0)
    for i, window in enumerate(out):
        assert window == inp[i : i + width]


def test_roll_width_equal_to_length():
    assert drain(op.roll(from_iterable("abc"), 3)) == [["a", "b", "c"]]


def test_roll_shorter_than_width():
    assert drain(op.roll(from_iterable([1, 2]), 3)) == []


def test_roll_infinite_source():
    def naturals():
        i = 0
        while True:
            yield i
            i += 1

    out = drain(op.roll(from_iterable(naturals()), 2), limit=3)
    assert out == [[0, 1], [1, 2], [2, 3]]


def test_roll_windows_are_copies():
    rolled = op.roll(from_iterable([1, 2, 3, 4]), 2)
    first = advance(rolled)[0]
    advance(rolled)
    advance(rolled)
    assert first.to_list() == [1, 2]


def test_roll_emits_list_sequences():
    window = advance(op.roll(from_iterable([1, 2]), 2))[0]
    assert isinstance(window, ListSequence)


def test_roll_estimate_size():
    rolled = op.roll(from_iterable([1, 2, 3, 4, 5]), 3)
    assert rolled.estimate_size() == 3
    advance(rolled)
    assert rolled.estimate_size() == 2
    drain(rolled)
    assert rolled.estimate_size() == 0


def test_roll_estimate_size_unbounded():
    rolled = op.roll(from_iterable(iter([1, 2, 3])), 2)
    assert rolled.estimate_size() == UNBOUNDED


def test_roll_drops_sorted_and_distinct():
    inp = from_iterable([1, 2, 3], sorted=True, distinct=True)
    props = op.roll(inp, 2).properties()
    assert props == Properties(ordered=True, sized=True)


def test_roll_split_before_advance():
    rolled = op.roll(from_iterable([1, 2, 3, 4, 5, 6]), 2)
    prefix = rolled.try_split()
    # Windows don't span the split boundary.
    assert drain(prefix) == [[1, 2], [2, 3]]
    assert drain(rolled) == [[4, 5], [5, 6]]


def test_roll_refuses_split_after_advance():
    rolled = op.roll(from_iterable([1, 2, 3, 4, 5, 6]), 2)
    advance(rolled)
    assert rolled.try_split() is None


def test_roll_raises_on_small_width():
    with raises(InvalidArgumentError, match="`width` must be at least 2"):
        op.roll(from_iterable([1, 2]), 1)


def test_roll_raises_on_unordered(unordered):
    with raises(InvalidArgumentError):
        op.roll(unordered, 2)


def test_roll_raises_on_none():
    with raises(InvalidArgumentError):
        op.roll(None, 2)
