import pullseq.operators as op
from pullseq.adapters.window import WindowSummary
from pullseq.errors import InvalidArgumentError
from pullseq.sequences import from_iterable
from pullseq.testing import drain
from pytest import approx, raises


def test_window_reduce():
    inp = from_iterable([1, 2, 3, 4, 5])
    assert drain(op.window_reduce(inp, 3, max)) == [3, 4, 5]


def test_window_reduce_to_list():
    inp = from_iterable("abc")
    assert drain(op.window_reduce(inp, 2, list)) == [["a", "b"], ["b", "c"]]


def test_window_reduce_raises_on_none_reducer():
    with raises(InvalidArgumentError, match="`reducer`"):
        op.window_reduce(from_iterable([1]), 2, None)


def test_shifting_window_average():
    inp = from_iterable([1, 2, 3, 4])
    assert drain(op.shifting_window_average(inp, 2)) == [1.5, 2.5, 3.5]


def test_shifting_window_average_mapper():
    inp = from_iterable([{"px": 1}, {"px": 2}, {"px": 6}])
    out = drain(op.shifting_window_average(inp, 3, lambda x: x["px"]))
    assert out == [3.0]


def test_shifting_window_summarize():
    inp = from_iterable([3, 1, 4, 1, 5])
    out = drain(op.shifting_window_summarize(inp, 3))
    assert out == [
        WindowSummary(count=3, sum=8, min=1, max=4),
        WindowSummary(count=3, sum=6, min=1, max=4),
        WindowSummary(count=3, sum=10, min=1, max=5),
    ]
    assert out[0].average == approx(8 / 3)


def test_window_summary_raises_on_empty():
    with raises(ValueError):
        WindowSummary.of([])


def test_shifting_window_average_raises_on_unordered(unordered):
    with raises(InvalidArgumentError):
        op.shifting_window_average(unordered, 2)
